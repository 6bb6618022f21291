"""Workflow orchestration: process, then states, then actions.

Actions reference states by code, but the workflow service only knows
states by the identifiers it assigns on creation. The orchestrator creates
the process and states first, records ``code -> id`` as it goes and then
resolves every action through that map.

Execution is strictly sequential and stops at the first failure. Nothing
already created is rolled back; the raised error carries the process id and
the state ids created so far so an operator can clean up by hand.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from .definitions import WorkflowDefinition
from .services.exceptions import (
    ActionCreationError,
    ProcessCreationError,
    RemoteRequestError,
    StateCreationError,
    UnresolvedStateReferenceError,
)
from .services.workflow import WorkflowService

logger = logging.getLogger(__name__)


def _extract_id(body: Any) -> Optional[str]:
    if isinstance(body, dict) and isinstance(body.get("id"), str) and body["id"]:
        return body["id"]
    return None


@dataclass
class WorkflowResult:
    process_id: str
    states_created: int = 0
    actions_created: int = 0
    state_ids: Dict[str, str] = field(default_factory=dict)


class WorkflowOrchestrator:
    """Creates a complete workflow from a definition.

    Usage:
        orchestrator = WorkflowOrchestrator(WorkflowService(client), on_event=print)
        result = orchestrator.create_workflow(definition)
    """

    def __init__(self, service: WorkflowService, on_event: Optional[Callable[[str], None]] = None):
        """Initialize orchestrator.

        Args:
            service: Workflow service bound to an authenticated client
            on_event: Optional callback receiving one progress line per step
        """
        self.service = service
        self.on_event = on_event

    def _emit(self, message: str) -> None:
        logger.info(message)
        if self.on_event is not None:
            self.on_event(message)

    def create_workflow(self, definition: WorkflowDefinition) -> WorkflowResult:
        """Create the process, its states and its actions in order.

        Returns:
            Process id with the number of states and actions created

        Raises:
            InvalidWorkflowDefinitionError: If the definition is structurally invalid
            UnresolvedStateReferenceError: If an action names an unknown state
            ProcessCreationError: If the process could not be created
            StateCreationError: If a state could not be created
            ActionCreationError: If an action could not be created
        """
        definition.validate()

        process_id = self._create_process(definition)
        result = WorkflowResult(process_id=process_id)

        self._emit("Creating workflow states...")
        for state in definition.states:
            try:
                body = self.service.create_state(
                    process_id,
                    state.code,
                    state.name,
                    is_initial=state.is_initial,
                    is_parallel=state.is_parallel,
                    is_join=state.is_join,
                    sla=state.sla,
                )
            except RemoteRequestError as e:
                raise StateCreationError(
                    f"failed to create state {state.code}: {e}",
                    state_code=state.code,
                    process_id=process_id,
                    state_ids=result.state_ids,
                ) from e
            state_id = _extract_id(body)
            if state_id is None:
                raise StateCreationError(
                    f"failed to extract state ID from response for {state.code}",
                    state_code=state.code,
                    process_id=process_id,
                    state_ids=result.state_ids,
                )
            result.state_ids[state.code] = state_id
            result.states_created += 1
            self._emit(f"✓ State created: {state.name} ({state.code}) - ID: {state_id}")

        self._emit("Creating workflow actions...")
        for action in definition.actions:
            current_id = result.state_ids.get(action.current_state)
            if current_id is None:
                raise UnresolvedStateReferenceError(action.current_state, process_id, result.state_ids)
            next_id = result.state_ids.get(action.next_state)
            if next_id is None:
                raise UnresolvedStateReferenceError(action.next_state, process_id, result.state_ids)
            try:
                self.service.create_action(
                    current_id,
                    action.name,
                    next_id,
                    roles=action.roles,
                    assignee_check=action.assignee_check,
                )
            except RemoteRequestError as e:
                raise ActionCreationError(
                    f"failed to create action {action.name}: {e}",
                    action_name=action.name,
                    process_id=process_id,
                    state_ids=result.state_ids,
                ) from e
            result.actions_created += 1
            self._emit(f"✓ Action created: {action.name} ({action.current_state} → {action.next_state})")

        return result

    def _create_process(self, definition: WorkflowDefinition) -> str:
        process = definition.process
        self._emit("Creating workflow process...")
        try:
            body = self.service.create_process(
                process.name,
                process.code,
                description=process.description,
                version=process.version,
                sla=process.sla,
            )
        except RemoteRequestError as e:
            raise ProcessCreationError(f"failed to create process {process.code}: {e}") from e
        process_id = _extract_id(body)
        if process_id is None:
            raise ProcessCreationError("failed to extract process ID from response")
        self._emit(f"✓ Process created with ID: {process_id}")
        return process_id
