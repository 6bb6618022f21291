"""Workflow service: processes, states and actions."""
from __future__ import annotations
import logging
from typing import Any, List, Optional

from digit.core.validators import require
from .client import DigitClient, parse_body

logger = logging.getLogger(__name__)


class WorkflowService:
    """Thin wrapper over the workflow REST API.

    Every call carries the ``X-Tenant-ID`` header derived from the token.
    Creation calls return the parsed response body; the identifier of the
    created entity is read by the caller from its ``id`` field.
    """

    def __init__(self, client: DigitClient):
        self.client = client

    def create_process(
        self,
        name: str,
        code: str,
        description: str = "",
        version: str = "",
        sla: int = 0,
    ) -> Any:
        payload = {
            "name": require(name, "process name"),
            "code": require(code, "process code"),
            "description": description or "",
            "version": version or "",
            "sla": int(sla),
        }
        resp = self.client.post("/workflow/v1/process", json=payload, headers=self.client.tenant_headers())
        return parse_body(resp)

    def create_state(
        self,
        process_id: str,
        code: str,
        name: str,
        is_initial: bool = False,
        is_parallel: bool = False,
        is_join: bool = False,
        sla: int = 0,
    ) -> Any:
        process_id = require(process_id, "process ID")
        payload = {
            "code": require(code, "state code"),
            "name": name or code,
            "isInitial": bool(is_initial),
            "isParallel": bool(is_parallel),
            "isJoin": bool(is_join),
            "sla": int(sla),
        }
        resp = self.client.post(
            f"/workflow/v1/process/{process_id}/state",
            json=payload,
            headers=self.client.tenant_headers(),
        )
        return parse_body(resp)

    def create_action(
        self,
        state_id: str,
        name: str,
        next_state_id: str,
        roles: Optional[List[str]] = None,
        assignee_check: bool = False,
    ) -> Any:
        """Create a transition out of ``state_id``.

        Args:
            state_id: Identifier of the current state (path parameter)
            name: Action name
            next_state_id: Identifier of the target state
            roles: Roles allowed to perform the action
            assignee_check: Whether the actor must be the assignee
        """
        state_id = require(state_id, "state ID")
        payload = {
            "name": require(name, "action name"),
            "nextState": require(next_state_id, "next state ID"),
            "attributeValidation": {
                "attributes": {"roles": list(roles or [])},
                "assigneeCheck": bool(assignee_check),
            },
        }
        resp = self.client.post(
            f"/workflow/v1/state/{state_id}/action",
            json=payload,
            headers=self.client.tenant_headers(),
        )
        return parse_body(resp)

    def search_process_definition(self, process_id: str) -> Any:
        resp = self.client.get(
            "/workflow/v1/process/definition",
            params={"id": require(process_id, "process ID")},
            headers=self.client.tenant_headers(),
        )
        return parse_body(resp)

    def delete_process(self, code: str) -> Any:
        resp = self.client.delete(
            "/workflow/v1/process",
            params={"code": require(code, "process code")},
            headers=self.client.tenant_headers(),
        )
        logger.info("Deleted workflow process %s (status %s)", code, resp.status_code)
        return parse_body(resp)
