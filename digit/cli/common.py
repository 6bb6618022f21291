"""Shared helpers for CLI commands: connection flags, sessions and output."""
from __future__ import annotations

import argparse
import json
import sys
from dataclasses import dataclass
from typing import Any, Optional

from digit.config.settings import CLIConfig
from digit.core.auth import TokenManager
from digit.core.services.client import DigitClient
from digit.core.services.exceptions import ConfigError

TOKEN_PREVIEW_LENGTH = 50


def add_connection_args(parser: argparse.ArgumentParser) -> None:
    """Add the ``--server`` / ``--jwt-token`` overrides shared by remote commands."""
    parser.add_argument("--server", "-s", default=None, help="Server URL (overrides config)")
    parser.add_argument("--jwt-token", "-t", default=None, help="JWT token (overrides config, never refreshed)")


def add_file_arg(parser: argparse.ArgumentParser, required: bool = False, help: str = "Path to YAML file") -> None:
    parser.add_argument("--file", "-f", default=None, required=required, help=help)


@dataclass
class Session:
    """Configuration, token manager and HTTP client for one command invocation."""
    config: CLIConfig
    tokens: TokenManager
    client: DigitClient

    @property
    def realm(self) -> str:
        return self.config.realm


def open_session(args: argparse.Namespace, default_server: Optional[str] = None) -> Session:
    """Build a session from the stored config and the command-line overrides.

    Raises:
        ConfigError: If no server URL is available
    """
    config = CLIConfig.load()
    server = getattr(args, "server", None) or config.server or default_server
    if not server:
        raise ConfigError("no server URL configured. Use --server flag or run 'digit config set'")
    tokens = TokenManager(config, pinned_token=getattr(args, "jwt_token", None))
    return Session(config=config, tokens=tokens, client=DigitClient(server, tokens))


def token_preview(token: str) -> str:
    if len(token) <= TOKEN_PREVIEW_LENGTH:
        return token
    return f"{token[:TOKEN_PREVIEW_LENGTH]}..."


def format_body(body: Any) -> str:
    """Pretty-print JSON bodies; return anything else as text."""
    if body is None:
        return ""
    if isinstance(body, str):
        return body
    return json.dumps(body, indent=2, ensure_ascii=False)


def print_response(title: str, body: Any) -> None:
    print(f"{title}:")
    text = format_body(body)
    if text:
        print(text)


def progress(command: str, message: str) -> None:
    print(f"[{command}] {message}", file=sys.stderr)
