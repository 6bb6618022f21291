"""DIGIT-specific exceptions for error handling."""
from __future__ import annotations

from typing import Dict, List, Optional


class DigitError(Exception):
    """Base exception for all DIGIT operations."""
    pass


class ConfigError(DigitError):
    """Local configuration file is missing, unreadable or malformed."""
    pass


class RemoteRequestError(DigitError):
    """HTTP error from a DIGIT service.

    Attributes:
        status_code: HTTP status code (None when the request never got a response)
        message: Error message or response body
        endpoint: API endpoint that failed
    """

    def __init__(self, status_code: Optional[int], message: str, endpoint: str):
        self.status_code = status_code
        self.message = message
        self.endpoint = endpoint
        status = status_code if status_code is not None else "no response"
        super().__init__(f"[{status}] {endpoint}: {message}")


# ─────────────────────────────────────────────────────────────────────────────
# Token errors
# ─────────────────────────────────────────────────────────────────────────────

class TokenError(DigitError):
    """Base exception for token lifecycle failures."""
    pass


class MalformedTokenError(TokenError):
    """Token is not a decodable JWT or lacks a required claim."""
    pass


class NoCredentialsError(TokenError):
    """No stored credential set is available to obtain a new token."""
    pass


class AuthenticationError(TokenError):
    """Identity provider rejected the password grant.

    Attributes:
        status_code: HTTP status code returned by the token endpoint
        body: Raw response body
    """

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ""):
        self.status_code = status_code
        self.body = body
        super().__init__(message)


# ─────────────────────────────────────────────────────────────────────────────
# Workflow errors
# ─────────────────────────────────────────────────────────────────────────────

class WorkflowError(DigitError):
    """Base exception for workflow orchestration failures.

    Attributes:
        process_id: Identifier of the process created before the failure, if any
        state_ids: Mapping of state code to identifier for states already created
    """

    def __init__(
        self,
        message: str,
        process_id: Optional[str] = None,
        state_ids: Optional[Dict[str, str]] = None,
    ):
        self.process_id = process_id
        self.state_ids = dict(state_ids or {})
        super().__init__(message)


class InvalidWorkflowDefinitionError(WorkflowError):
    """Workflow definition failed validation before any remote call."""

    def __init__(self, problems: List[str]):
        self.problems = list(problems)
        super().__init__("invalid workflow definition: " + "; ".join(self.problems))


class ProcessCreationError(WorkflowError):
    """Process creation failed or returned no identifier."""
    pass


class StateCreationError(WorkflowError):
    """State creation failed or returned no identifier."""

    def __init__(self, message: str, state_code: str, process_id: Optional[str] = None,
                 state_ids: Optional[Dict[str, str]] = None):
        self.state_code = state_code
        super().__init__(message, process_id=process_id, state_ids=state_ids)


class ActionCreationError(WorkflowError):
    """Action creation failed."""

    def __init__(self, message: str, action_name: str, process_id: Optional[str] = None,
                 state_ids: Optional[Dict[str, str]] = None):
        self.action_name = action_name
        super().__init__(message, process_id=process_id, state_ids=state_ids)


class UnresolvedStateReferenceError(WorkflowError):
    """Action references a state code with no created identifier."""

    def __init__(self, code: str, process_id: Optional[str] = None,
                 state_ids: Optional[Dict[str, str]] = None):
        self.code = code
        super().__init__(f"state not found: {code}", process_id=process_id, state_ids=state_ids)


# ─────────────────────────────────────────────────────────────────────────────
# Identity errors
# ─────────────────────────────────────────────────────────────────────────────

class UserNotFoundError(DigitError):
    """User lookup failed - username does not exist."""
    pass


class RoleNotFoundError(DigitError):
    """Role does not exist in realm."""
    pass
