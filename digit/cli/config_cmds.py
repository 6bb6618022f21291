"""``digit config`` commands: authenticate, inspect and switch contexts."""
from __future__ import annotations

import argparse

from digit.config.contexts import Context, load_context_config
from digit.config.settings import CLIConfig
from digit.core.auth import get_jwt_token
from digit.core.claims import decode_claims, extract_tenant_id, get_expiry_time, is_expired
from digit.core.services.exceptions import MalformedTokenError
from .common import add_file_arg, progress, token_preview

CREDENTIAL_FLAGS = ("server", "account", "client_id", "client_secret", "username", "password")


def _authenticate_and_store(ctx: Context, command: str) -> CLIConfig:
    progress(command, "Authenticating with Keycloak...")
    token = get_jwt_token(ctx.server, ctx.realm, ctx.client_id, ctx.client_secret, ctx.username, ctx.password)
    progress(command, "✓ Authentication successful!")

    config = CLIConfig.load()
    config.server = ctx.server
    config.jwt_token = token
    config.auth_config = ctx.to_auth_config()
    config.save()

    print(f"Server URL: {ctx.server}")
    print(f"JWT Token: {token_preview(token)}")
    return config


def cmd_set(args: argparse.Namespace) -> None:
    parser = args.command_parser
    given = [flag for flag in CREDENTIAL_FLAGS if getattr(args, flag)]
    if args.file and given:
        parser.error("cannot use --file together with individual credential flags")

    if args.file:
        context_config = load_context_config(args.file)
        ctx = context_config.get_current_context()
        progress("config", f"Using context: {ctx.name}")
    else:
        missing = [f"--{flag.replace('_', '-')}" for flag in CREDENTIAL_FLAGS if not getattr(args, flag)]
        if missing:
            parser.error(f"either --file or all of the credential flags are required (missing: {', '.join(missing)})")
        ctx = Context(
            name="",
            server=args.server,
            realm=args.account,
            client_id=args.client_id,
            client_secret=args.client_secret,
            username=args.username,
            password=args.password,
        )

    _authenticate_and_store(ctx, "config")


def cmd_show(args: argparse.Namespace) -> None:
    config = CLIConfig.load()
    print(f"Config file: {config.path}")
    print(f"Server URL: {config.server or '(not set)'}")
    if not config.jwt_token:
        print("JWT Token: (not set)")
        return
    print(f"JWT Token: {token_preview(config.jwt_token)}")
    try:
        claims = decode_claims(config.jwt_token)
        print(f"Tenant: {extract_tenant_id(config.jwt_token)}")
        if claims.preferred_username:
            print(f"User: {claims.preferred_username}")
        expiry = get_expiry_time(config.jwt_token)
        status = "expired" if is_expired(config.jwt_token) else "valid"
        print(f"Expires: {expiry.isoformat()} ({status})")
    except MalformedTokenError as e:
        print(f"Token details unavailable: {e}")
    if config.auth_config:
        print(f"Stored credentials: {config.auth_config.username}@{config.auth_config.realm}")


def cmd_get_contexts(args: argparse.Namespace) -> None:
    context_config = load_context_config(args.file)
    names = context_config.list_contexts()
    if not names:
        print("No contexts found in config file")
        return
    print(f"Available contexts (current: {context_config.current_context}):")
    for name in names:
        if name == context_config.current_context:
            print(f"* {name} (current)")
        else:
            print(f"  {name}")


def cmd_use_context(args: argparse.Namespace) -> None:
    context_config = load_context_config(args.file)
    ctx = context_config.get_context(args.name)
    progress("config", f"Switching to context: {ctx.name} ({ctx.username}@{ctx.realm} on {ctx.server})")
    _authenticate_and_store(ctx, "config")
    print(f"✓ Switched to context '{ctx.name}' successfully!")


def register(sub: argparse._SubParsersAction) -> None:
    config_parser = sub.add_parser("config", help="Manage CLI configuration and authentication")
    config_sub = config_parser.add_subparsers(dest="config_cmd")
    config_parser.set_defaults(command_parser=config_parser, command_name="config")

    sp = config_sub.add_parser("set", help="Authenticate and store server, token and credentials")
    add_file_arg(sp, help="Context file; the current context is used")
    sp.add_argument("--server", default=None)
    sp.add_argument("--account", default=None, help="Realm (tenant account)")
    sp.add_argument("--client-id", default=None)
    sp.add_argument("--client-secret", default=None)
    sp.add_argument("--username", default=None)
    sp.add_argument("--password", default=None)
    sp.set_defaults(handler=cmd_set, command_parser=sp)

    sp = config_sub.add_parser("show", help="Show the stored server and token")
    sp.set_defaults(handler=cmd_show, command_parser=sp)

    sp = config_sub.add_parser("get-contexts", help="List contexts in a context file")
    add_file_arg(sp, required=True, help="Context file")
    sp.set_defaults(handler=cmd_get_contexts, command_parser=sp)

    sp = config_sub.add_parser("use-context", help="Authenticate with a named context and store it")
    sp.add_argument("name")
    add_file_arg(sp, required=True, help="Context file")
    sp.set_defaults(handler=cmd_use_context, command_parser=sp)
