"""User and role administration commands."""
from __future__ import annotations

import argparse

from digit.core.services.roles import RoleService
from digit.core.services.users import UserService
from digit.core.validators import parse_bool
from .common import Session, add_connection_args, open_session, print_response, progress


def _realm(args: argparse.Namespace, session: Session) -> str:
    """Realm from --account, the stored credentials, or the token issuer."""
    return args.account or session.realm or session.tokens.tenant_id()


def cmd_create_user(args: argparse.Namespace) -> None:
    session = open_session(args)
    realm = _realm(args, session)
    body = UserService(session.client).create_user(realm, args.username, args.password, args.email)
    print_response("User creation response", body)


def cmd_reset_password(args: argparse.Namespace) -> None:
    session = open_session(args)
    realm = _realm(args, session)
    body = UserService(session.client).reset_password(realm, args.username, args.new_password)
    print_response("Password reset response", body)


def cmd_delete_user(args: argparse.Namespace) -> None:
    session = open_session(args)
    realm = _realm(args, session)
    body = UserService(session.client).delete_user(realm, args.username)
    print_response("User deletion response", body)


def cmd_search_user(args: argparse.Namespace) -> None:
    session = open_session(args)
    realm = _realm(args, session)
    users = UserService(session.client).search_users(realm, args.username)
    progress("search-user", f"Found {len(users)} user(s) in '{realm}'")
    print_response("User search response", users)


def cmd_update_user(args: argparse.Namespace) -> None:
    enabled = None
    if args.enabled is not None:
        try:
            enabled = parse_bool(args.enabled, "--enabled")
        except ValueError as e:
            args.command_parser.error(str(e))
    if not any([args.email, args.first_name, args.last_name, enabled is not None]):
        args.command_parser.error(
            "at least one field to update is required (--email, --first-name, --last-name, --enabled)"
        )

    session = open_session(args)
    realm = _realm(args, session)
    body = UserService(session.client).update_user(
        realm,
        args.username,
        email=args.email,
        first_name=args.first_name,
        last_name=args.last_name,
        enabled=enabled,
    )
    print_response("User update response", body)


def cmd_create_role(args: argparse.Namespace) -> None:
    session = open_session(args)
    realm = _realm(args, session)
    body = RoleService(session.client).create_role(realm, args.role_name, args.description)
    print_response("Role creation response", body)


def cmd_assign_role(args: argparse.Namespace) -> None:
    session = open_session(args)
    realm = _realm(args, session)
    body = RoleService(session.client).assign_role(realm, args.username, args.role_name)
    print_response("Role assignment response", body)


def _add_parser(sub, name: str, handler, help: str) -> argparse.ArgumentParser:
    sp = sub.add_parser(name, help=help)
    sp.add_argument("--account", "-a", default=None, help="Realm (defaults to the configured account)")
    add_connection_args(sp)
    sp.set_defaults(handler=handler, command_parser=sp, command_name=name)
    return sp


def register(sub: argparse._SubParsersAction) -> None:
    sp = _add_parser(sub, "create-user", cmd_create_user, "Create a user")
    sp.add_argument("--username", "-u", required=True)
    sp.add_argument("--password", "-p", required=True)
    sp.add_argument("--email", "-e", required=True)

    sp = _add_parser(sub, "reset-password", cmd_reset_password, "Reset a user's password")
    sp.add_argument("--username", "-u", required=True)
    sp.add_argument("--new-password", required=True)

    sp = _add_parser(sub, "delete-user", cmd_delete_user, "Delete a user")
    sp.add_argument("--username", "-u", required=True)

    sp = _add_parser(sub, "search-user", cmd_search_user, "Search users (all users when no username)")
    sp.add_argument("--username", "-u", default=None)

    sp = _add_parser(sub, "update-user", cmd_update_user, "Update user profile fields")
    sp.add_argument("--username", "-u", required=True)
    sp.add_argument("--email", "-e", default=None)
    sp.add_argument("--first-name", "-f", default=None)
    sp.add_argument("--last-name", "-l", default=None)
    sp.add_argument("--enabled", default=None, help="true or false")

    sp = _add_parser(sub, "create-role", cmd_create_role, "Create a realm role")
    sp.add_argument("--role-name", "-n", required=True)
    sp.add_argument("--description", "-d", default="")

    sp = _add_parser(sub, "assign-role", cmd_assign_role, "Assign a realm role to a user")
    sp.add_argument("--username", "-u", required=True)
    sp.add_argument("--role-name", "-n", required=True)
