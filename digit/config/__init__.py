from .settings import AuthConfig, CLIConfig, default_config_path
from .contexts import Context, ContextConfig, load_context_config

__all__ = [
    "AuthConfig",
    "CLIConfig",
    "default_config_path",
    "Context",
    "ContextConfig",
    "load_context_config",
]
