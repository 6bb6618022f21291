"""Multi-environment context files (kubeconfig-style YAML).

Example::

    apiVersion: v1
    kind: Config
    current-context: staging
    contexts:
      - name: staging
        context:
          server: https://staging.example.org
          realm: ACME
          client-id: auth-server
          client-secret: changeme
          username: admin
          password: admin
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

import yaml

from digit.core.services.exceptions import ConfigError
from .settings import AuthConfig


@dataclass
class Context:
    name: str
    server: str = ""
    realm: str = ""
    client_id: str = ""
    client_secret: str = ""
    username: str = ""
    password: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Context":
        detail = data.get("context") or {}
        if not isinstance(detail, dict):
            raise ConfigError(f"context '{data.get('name')}' must be a mapping")
        return cls(
            name=str(data.get("name") or ""),
            server=str(detail.get("server") or ""),
            realm=str(detail.get("realm") or ""),
            client_id=str(detail.get("client-id") or ""),
            client_secret=str(detail.get("client-secret") or ""),
            username=str(detail.get("username") or ""),
            password=str(detail.get("password") or ""),
        )

    def to_auth_config(self) -> AuthConfig:
        return AuthConfig(
            server_url=self.server,
            realm=self.realm,
            client_id=self.client_id,
            client_secret=self.client_secret,
            username=self.username,
            password=self.password,
        )


@dataclass
class ContextConfig:
    api_version: str = ""
    kind: str = ""
    current_context: str = ""
    contexts: List[Context] = field(default_factory=list)

    def get_current_context(self) -> Context:
        if not self.current_context:
            raise ConfigError("no current context set")
        for ctx in self.contexts:
            if ctx.name == self.current_context:
                return ctx
        raise ConfigError(f"current context '{self.current_context}' not found")

    def get_context(self, name: str) -> Context:
        for ctx in self.contexts:
            if ctx.name == name:
                return ctx
        raise ConfigError(f"context '{name}' not found")

    def list_contexts(self) -> List[str]:
        return [ctx.name for ctx in self.contexts]


def load_context_config(path: str | Path) -> ContextConfig:
    """Parse a context file.

    Raises:
        ConfigError: If the file is missing or malformed
    """
    file_path = Path(path)
    if not file_path.exists():
        raise ConfigError(f"config file does not exist: {file_path}")
    try:
        with file_path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"failed to parse config file: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config file {file_path} must contain a mapping")

    raw_contexts = data.get("contexts") or []
    if not isinstance(raw_contexts, list):
        raise ConfigError("'contexts' must be a list")
    return ContextConfig(
        api_version=str(data.get("apiVersion") or ""),
        kind=str(data.get("kind") or ""),
        current_context=str(data.get("current-context") or ""),
        contexts=[Context.from_dict(item) for item in raw_contexts if isinstance(item, dict)],
    )
