"""``digit create-account``."""
from __future__ import annotations

import argparse

from digit.config.settings import CLIConfig
from digit.core.services.account import DEFAULT_CLIENT_ID, AccountService
from digit.core.services.client import DigitClient
from digit.core.services.exceptions import ConfigError
from digit.core.validators import parse_bool
from .common import print_response


def cmd_create_account(args: argparse.Namespace) -> None:
    try:
        active = parse_bool(args.active, "--active")
    except ValueError as e:
        args.command_parser.error(str(e))

    server = args.server or CLIConfig.load().server
    if not server:
        raise ConfigError("no server URL configured. Use --server flag or run 'digit config set'")

    service = AccountService(DigitClient(server))
    body = service.create_account(args.name, args.email, active=active, client_id=args.client_id)
    print_response("Account creation response", body)


def register(sub: argparse._SubParsersAction) -> None:
    sp = sub.add_parser("create-account", help="Create a tenant account")
    sp.add_argument("--name", required=True, help="Account (tenant) name")
    sp.add_argument("--email", required=True, help="Contact email")
    sp.add_argument("--active", default="true", help="Whether the account is active (true/false)")
    sp.add_argument("--client-id", default=DEFAULT_CLIENT_ID, help="Value for the X-Client-Id header")
    sp.add_argument("--server", "-s", default=None, help="Server URL (overrides config)")
    sp.set_defaults(handler=cmd_create_account, command_parser=sp, command_name="create-account")
