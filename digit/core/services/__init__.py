"""DIGIT platform service clients.

This package provides a modular, testable interface to the DIGIT REST services.

Architecture:
- client.py: HTTP client with bearer authentication and tenant/client headers
- account.py: Tenant account provisioning
- users.py: User lifecycle through the identity provider admin API
- roles.py: Realm roles and role assignment
- workflow.py: Workflow processes, states and actions
- templates.py: Notification templates
- idgen.py: ID generation templates
- mdms.py: Master data schemas and records
- registry.py: Registry schemas and records
- boundaries.py: Administrative boundaries
- filestore.py: Document categories
- exceptions.py: Typed exceptions for error handling

Usage:
    from digit.config import CLIConfig
    from digit.core.auth import TokenManager
    from digit.core.services import DigitClient, WorkflowService

    config = CLIConfig.load()
    client = DigitClient(config.server, TokenManager(config))
    WorkflowService(client).search_process_definition("p-123")
"""
from .client import (
    DigitClient,
    parse_body,
    request_timeout,
    DEFAULT_REQUEST_TIMEOUT,
)
from .exceptions import (
    DigitError,
    ConfigError,
    RemoteRequestError,
    TokenError,
    MalformedTokenError,
    NoCredentialsError,
    AuthenticationError,
    WorkflowError,
    InvalidWorkflowDefinitionError,
    ProcessCreationError,
    StateCreationError,
    ActionCreationError,
    UnresolvedStateReferenceError,
    UserNotFoundError,
    RoleNotFoundError,
)
from .account import AccountService
from .users import UserService
from .roles import RoleService
from .workflow import WorkflowService
from .templates import TemplateService
from .idgen import IdGenConfig, IdGenService
from .mdms import MdmsService
from .registry import RegistryService, DEFAULT_REGISTRY_SERVER
from .boundaries import BoundaryService
from .filestore import FilestoreService

__all__ = [
    # Client
    "DigitClient",
    "parse_body",
    "request_timeout",
    "DEFAULT_REQUEST_TIMEOUT",

    # Exceptions
    "DigitError",
    "ConfigError",
    "RemoteRequestError",
    "TokenError",
    "MalformedTokenError",
    "NoCredentialsError",
    "AuthenticationError",
    "WorkflowError",
    "InvalidWorkflowDefinitionError",
    "ProcessCreationError",
    "StateCreationError",
    "ActionCreationError",
    "UnresolvedStateReferenceError",
    "UserNotFoundError",
    "RoleNotFoundError",

    # Services
    "AccountService",
    "UserService",
    "RoleService",
    "WorkflowService",
    "TemplateService",
    "IdGenConfig",
    "IdGenService",
    "MdmsService",
    "RegistryService",
    "DEFAULT_REGISTRY_SERVER",
    "BoundaryService",
    "FilestoreService",
]
