"""Core library: token lifecycle, service clients, definitions and orchestration.

Modules:
- claims.py: JWT claims decoding, tenant/client extraction, expiry check
- auth.py: Password grant and the token manager used by every service call
- services/: One client class per remote service
- definitions.py: YAML resource definitions and built-in defaults
- orchestrator.py: Process/state/action creation for a workflow definition
- validators.py: Flag and payload validation helpers
"""
