"""Local CLI configuration stored as YAML under the user's home directory."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from digit.core.services.exceptions import ConfigError

logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = ".digit"
CONFIG_FILE_NAME = "config.yaml"


def default_config_path() -> Path:
    """Return the config file path (``DIGIT_CONFIG`` overrides ``~/.digit/config.yaml``)."""
    override = os.environ.get("DIGIT_CONFIG", "").strip()
    if override:
        return Path(override).expanduser()
    return Path.home() / CONFIG_DIR_NAME / CONFIG_FILE_NAME


@dataclass
class AuthConfig:
    """Credential set used to obtain fresh tokens without user interaction."""
    server_url: str = ""
    realm: str = ""
    client_id: str = ""
    client_secret: str = ""
    username: str = ""
    password: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AuthConfig":
        return cls(**{key: str(data.get(key) or "") for key in cls.__dataclass_fields__})

    def to_dict(self) -> Dict[str, str]:
        return {key: getattr(self, key) for key in self.__dataclass_fields__}


@dataclass
class CLIConfig:
    """Persisted CLI state: server URL, cached token and credential set.

    The object is passed explicitly to whatever needs it; nothing in the
    package keeps a process-wide copy.
    """
    server: str = ""
    jwt_token: str = ""
    auth_config: Optional[AuthConfig] = None
    path: Path = field(default_factory=default_config_path)

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "CLIConfig":
        """Load the config file, returning an empty config when it does not exist.

        Raises:
            ConfigError: If the file cannot be read or is not a YAML mapping
        """
        config_path = Path(path) if path else default_config_path()
        if not config_path.exists():
            logger.debug("No config file at %s", config_path)
            return cls(path=config_path)
        try:
            with config_path.open("r", encoding="utf-8") as handle:
                data = yaml.safe_load(handle) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"failed to read config file {config_path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"config file {config_path} must contain a mapping")

        auth_data = data.get("auth_config")
        return cls(
            server=str(data.get("server") or ""),
            jwt_token=str(data.get("jwt_token") or ""),
            auth_config=AuthConfig.from_dict(auth_data) if isinstance(auth_data, dict) else None,
            path=config_path,
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"server": self.server, "jwt_token": self.jwt_token}
        if self.auth_config is not None:
            data["auth_config"] = self.auth_config.to_dict()
        return data

    def save(self) -> None:
        """Write the whole config back to disk with owner-only permissions.

        Only a directory created here is restricted to 0700; an existing
        parent directory keeps its mode.
        """
        try:
            directory = self.path.parent
            if not directory.exists():
                directory.mkdir(parents=True)
                directory.chmod(0o700)
            fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                yaml.safe_dump(self.to_dict(), handle, default_flow_style=False, sort_keys=False)
            self.path.chmod(0o600)
        except OSError as e:
            raise ConfigError(f"failed to write config file {self.path}: {e}") from e
        logger.debug("Saved config to %s", self.path)

    @property
    def realm(self) -> str:
        """Realm of the stored credential set, or an empty string."""
        return self.auth_config.realm if self.auth_config else ""
