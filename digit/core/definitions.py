"""YAML resource definitions and the built-in default documents.

Each loader accepts a path to a YAML file and returns typed objects. The
``default_*`` helpers load the documents shipped in ``digit/core/defaults``
and substitute the caller's code or identifier.
"""
from __future__ import annotations

import copy
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .services.exceptions import InvalidWorkflowDefinitionError, UnresolvedStateReferenceError
from .services.idgen import IdGenConfig

DEFAULTS_DIR = Path(__file__).resolve().parent / "defaults"


def load_yaml(path: str | Path) -> Any:
    """Read a YAML document.

    Raises:
        ValueError: If the file is missing or not valid YAML
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise ValueError(f"file not found: {file_path}")
    try:
        with file_path.open("r", encoding="utf-8") as handle:
            return yaml.safe_load(handle)
    except yaml.YAMLError as e:
        raise ValueError(f"failed to parse YAML {file_path}: {e}") from e


def _load_default(name: str) -> Dict[str, Any]:
    return load_yaml(DEFAULTS_DIR / name)


def _mapping(value: Any, what: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise ValueError(f"{what} must be a mapping")
    return value


def _int(value: Any, what: str) -> int:
    if value is None or value == "":
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{what} must be an integer")


# ─────────────────────────────────────────────────────────────────────────────
# Workflow
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class ProcessDefinition:
    name: str
    code: str
    description: str = ""
    version: str = ""
    sla: int = 0


@dataclass
class StateDefinition:
    code: str
    name: str = ""
    is_initial: bool = False
    is_parallel: bool = False
    is_join: bool = False
    sla: int = 0


@dataclass
class ActionDefinition:
    name: str
    current_state: str
    next_state: str
    roles: List[str] = field(default_factory=list)
    assignee_check: bool = False


@dataclass
class WorkflowDefinition:
    """A process with its ordered states and actions.

    Actions refer to states by code; identifiers only exist once the states
    have been created remotely.
    """
    process: ProcessDefinition
    states: List[StateDefinition] = field(default_factory=list)
    actions: List[ActionDefinition] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WorkflowDefinition":
        """Build a definition from the parsed ``workflow:`` document.

        Raises:
            ValueError: If the document structure is wrong
        """
        root = _mapping(data, "workflow document")
        workflow = _mapping(root.get("workflow", root), "'workflow'")
        raw_process = _mapping(workflow.get("process"), "'workflow.process'")

        process = ProcessDefinition(
            name=str(raw_process.get("name") or ""),
            code=str(raw_process.get("code") or ""),
            description=str(raw_process.get("description") or ""),
            version=str(raw_process.get("version") or ""),
            sla=_int(raw_process.get("sla"), "process sla"),
        )

        states = []
        for raw in workflow.get("states") or []:
            raw = _mapping(raw, "state entry")
            code = str(raw.get("code") or "")
            states.append(StateDefinition(
                code=code,
                name=str(raw.get("name") or code),
                is_initial=bool(raw.get("isInitial", False)),
                is_parallel=bool(raw.get("isParallel", False)),
                is_join=bool(raw.get("isJoin", False)),
                sla=_int(raw.get("sla"), f"sla of state {code}"),
            ))

        actions = []
        for raw in workflow.get("actions") or []:
            raw = _mapping(raw, "action entry")
            validation = raw.get("attributeValidation") or {}
            attributes = validation.get("attributes") or {}
            roles = attributes.get("roles") or raw.get("roles") or []
            actions.append(ActionDefinition(
                name=str(raw.get("name") or ""),
                current_state=str(raw.get("currentState") or ""),
                next_state=str(raw.get("nextState") or ""),
                roles=[str(role) for role in roles],
                assignee_check=bool(validation.get("assigneeCheck", False)),
            ))

        return cls(process=process, states=states, actions=actions)

    def validate(self) -> None:
        """Check the definition before anything is sent.

        Raises:
            InvalidWorkflowDefinitionError: Listing every structural problem found
            UnresolvedStateReferenceError: If an action names a state code
                that is not part of the definition
        """
        problems = []
        if not self.process.name:
            problems.append("process name is required")
        if not self.process.code:
            problems.append("process code is required")

        seen = set()
        for state in self.states:
            if not state.code:
                problems.append("state code is required")
            elif state.code in seen:
                problems.append(f"duplicate state code: {state.code}")
            seen.add(state.code)

        for action in self.actions:
            if not action.name:
                problems.append("action name is required")

        if problems:
            raise InvalidWorkflowDefinitionError(problems)

        for action in self.actions:
            for ref in (action.current_state, action.next_state):
                if ref not in seen:
                    raise UnresolvedStateReferenceError(ref)


def load_workflow_definition(path: str | Path) -> WorkflowDefinition:
    return WorkflowDefinition.from_dict(load_yaml(path))


def default_workflow_definition(code: str) -> WorkflowDefinition:
    """Return the built-in application-processing workflow under ``code``."""
    if not code:
        raise ValueError("process code is required for the default workflow")
    definition = WorkflowDefinition.from_dict(_load_default("workflow.yaml"))
    definition.process.code = code
    return definition


# ─────────────────────────────────────────────────────────────────────────────
# Notification templates
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class TemplateDefinition:
    template_id: str = ""
    version: str = ""
    template_type: str = ""
    subject: str = ""
    content: str = ""
    content_file: str = ""
    html: bool = False
    server: str = ""
    jwt_token: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TemplateDefinition":
        data = _mapping(data, "template document")
        return cls(
            template_id=str(data.get("template-id") or ""),
            version=str(data.get("version") or ""),
            template_type=str(data.get("type") or ""),
            subject=str(data.get("subject") or ""),
            content=str(data.get("content") or ""),
            content_file=str(data.get("content-file") or ""),
            html=bool(data.get("html", False)),
            server=str(data.get("server") or ""),
            jwt_token=str(data.get("jwt-token") or ""),
        )

    def resolve_content(self, base_dir: Optional[Path] = None) -> str:
        """Return the inline content, or the content file read relative to ``base_dir``."""
        if self.content and self.content_file:
            raise ValueError("content and content-file are mutually exclusive")
        if self.content_file:
            path = Path(self.content_file)
            if not path.is_absolute() and base_dir is not None:
                path = base_dir / path
            try:
                return path.read_text(encoding="utf-8")
            except OSError as e:
                raise ValueError(f"failed to read content file {path}: {e}") from e
        return self.content


def load_template_definition(path: str | Path) -> TemplateDefinition:
    return TemplateDefinition.from_dict(load_yaml(path))


def default_template_definition(template_id: str) -> TemplateDefinition:
    if not template_id:
        raise ValueError("template ID is required for the default template")
    definition = TemplateDefinition.from_dict(_load_default("notification_template.yaml"))
    definition.template_id = template_id
    return definition


# ─────────────────────────────────────────────────────────────────────────────
# ID generation
# ─────────────────────────────────────────────────────────────────────────────

def idgen_config_from_dict(data: Dict[str, Any]) -> IdGenConfig:
    data = _mapping(data, "idgen document")
    defaults = IdGenConfig()
    return IdGenConfig(
        template=str(data.get("template") or defaults.template),
        scope=str(data.get("scope") or defaults.scope),
        start=_int(data.get("start", defaults.start), "start"),
        padding_length=_int(data.get("padding-length", defaults.padding_length), "padding-length"),
        padding_char=str(data.get("padding-char") or defaults.padding_char),
        random_length=_int(data.get("random-length", defaults.random_length), "random-length"),
        random_charset=str(data.get("random-charset") or defaults.random_charset),
    )


def default_idgen_config() -> IdGenConfig:
    return idgen_config_from_dict(_load_default("idgen_template.yaml"))


# ─────────────────────────────────────────────────────────────────────────────
# MDMS
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class MdmsSchemaDefinition:
    code: str
    description: str
    definition: Dict[str, Any]
    is_active: bool = True


def load_mdms_schema(path: str | Path) -> MdmsSchemaDefinition:
    """Parse a ``schema:`` document; code and description are required."""
    data = _mapping(load_yaml(path), "schema document")
    schema = _mapping(data.get("schema"), "'schema'")
    code = str(schema.get("code") or "")
    description = str(schema.get("description") or "")
    if not code:
        raise ValueError("schema code is required in YAML file")
    if not description:
        raise ValueError("schema description is required in YAML file")
    return MdmsSchemaDefinition(
        code=code,
        description=description,
        definition=_mapping(schema.get("definition"), "'schema.definition'"),
        is_active=bool(schema.get("isActive", True)),
    )


def load_mdms_data(path: str | Path) -> List[Dict[str, Any]]:
    """Parse an ``mdms:`` document into the list of records to send."""
    data = _mapping(load_yaml(path), "mdms document")
    records = data.get("mdms")
    if not isinstance(records, list) or not records:
        raise ValueError("at least one MDMS entry is required in YAML file")
    result = []
    for index, record in enumerate(records, start=1):
        record = _mapping(record, f"mdms entry #{index}")
        if not record.get("schemaCode"):
            raise ValueError(f"mdms entry #{index} is missing schemaCode")
        entry = dict(record)
        entry.setdefault("isActive", True)
        result.append(entry)
    return result


# ─────────────────────────────────────────────────────────────────────────────
# Registry
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class RegistrySchemaDefinition:
    schema_code: str
    definition: Dict[str, Any]


@dataclass
class RegistryDataDefinition:
    schema_code: str
    data: Dict[str, Any]


def load_registry_schema(path: str | Path) -> RegistrySchemaDefinition:
    data = _mapping(load_yaml(path), "registry schema document")
    return RegistrySchemaDefinition(
        schema_code=str(data.get("schemaCode") or ""),
        definition=_mapping(data.get("definition"), "'definition'"),
    )


def default_registry_schema(schema_code: Optional[str] = None) -> RegistrySchemaDefinition:
    """Return the built-in license registry schema, optionally renamed."""
    schema = load_registry_schema(DEFAULTS_DIR / "registry_schema.yaml")
    if schema_code:
        schema.schema_code = schema_code
    return schema


def load_registry_data(path: str | Path) -> RegistryDataDefinition:
    data = _mapping(load_yaml(path), "registry data document")
    return RegistryDataDefinition(
        schema_code=str(data.get("schemaCode") or ""),
        data=_mapping(data.get("data"), "'data'"),
    )


# ─────────────────────────────────────────────────────────────────────────────
# Boundaries
# ─────────────────────────────────────────────────────────────────────────────

def load_boundaries(path: str | Path) -> List[Dict[str, Any]]:
    data = _mapping(load_yaml(path), "boundary document")
    boundaries = data.get("boundary")
    if not isinstance(boundaries, list) or not boundaries:
        raise ValueError("at least one boundary is required in YAML file")
    return boundaries


def default_boundaries(code_prefix: str = "DEFAULT") -> List[Dict[str, Any]]:
    """Return the three sample boundaries with codes ``{prefix}_BOUNDARY_00N``."""
    prefix = code_prefix or "DEFAULT"
    boundaries = copy.deepcopy(_load_default("boundaries.yaml")["boundary"])
    for boundary in boundaries:
        boundary["code"] = boundary["code"].replace("DEFAULT_BOUNDARY", f"{prefix}_BOUNDARY", 1)
    return boundaries
