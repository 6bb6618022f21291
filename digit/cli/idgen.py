"""ID generation template commands."""
from __future__ import annotations

import argparse

from digit.core.definitions import default_idgen_config
from digit.core.services.idgen import IdGenConfig, IdGenService
from digit.core.validators import parse_int
from .common import add_connection_args, open_session, print_response, progress


def _config_from_flags(args: argparse.Namespace) -> IdGenConfig:
    parser = args.command_parser
    if not args.template:
        parser.error("--template flag is required when not using --default")
    try:
        return IdGenConfig(
            template=args.template,
            scope=args.scope,
            start=parse_int(args.start, "--start", minimum=0),
            padding_length=parse_int(args.padding_length, "--padding-length", minimum=0),
            padding_char=args.padding_char,
            random_length=parse_int(args.random_length, "--random-length", minimum=0),
            random_charset=args.random_charset,
        )
    except ValueError as e:
        parser.error(str(e))


def cmd_create_idgen_template(args: argparse.Namespace) -> None:
    if args.default:
        config = default_idgen_config()
        progress("create-idgen-template",
                 f"Using default IdGen configuration with template code: {args.template_code}")
    else:
        config = _config_from_flags(args)

    session = open_session(args)
    body = IdGenService(session.client).create_template(args.template_code, config)
    print_response("IdGen template creation response", body)


def cmd_search_idgen_template(args: argparse.Namespace) -> None:
    session = open_session(args)
    body = IdGenService(session.client).search_template(args.template_code)
    print_response("IdGen template search response", body)


def cmd_delete_idgen_template(args: argparse.Namespace) -> None:
    session = open_session(args)
    body = IdGenService(session.client).delete_template(args.template_code, args.version)
    print_response("IdGen template deletion response", body)


def register(sub: argparse._SubParsersAction) -> None:
    defaults = IdGenConfig()

    sp = sub.add_parser("create-idgen-template", help="Create an ID generation template")
    sp.add_argument("--default", action="store_true", help="Use the built-in template configuration")
    sp.add_argument("--template-code", required=True)
    sp.add_argument("--template", default=None, help="Pattern, e.g. '{ORG}-{DATE:yyyyMMdd}-{SEQ}-{RAND}'")
    sp.add_argument("--scope", default=defaults.scope, help="Sequence scope (daily, monthly, yearly, global)")
    sp.add_argument("--start", default=str(defaults.start))
    sp.add_argument("--padding-length", default=str(defaults.padding_length))
    sp.add_argument("--padding-char", default=defaults.padding_char)
    sp.add_argument("--random-length", default=str(defaults.random_length))
    sp.add_argument("--random-charset", default=defaults.random_charset)
    add_connection_args(sp)
    sp.set_defaults(handler=cmd_create_idgen_template, command_parser=sp, command_name="create-idgen-template")

    sp = sub.add_parser("search-idgen-template", help="Search an ID generation template by code")
    sp.add_argument("--template-code", required=True)
    add_connection_args(sp)
    sp.set_defaults(handler=cmd_search_idgen_template, command_parser=sp, command_name="search-idgen-template")

    sp = sub.add_parser("delete-idgen-template", help="Delete an ID generation template version")
    sp.add_argument("--template-code", required=True)
    sp.add_argument("--version", required=True)
    add_connection_args(sp)
    sp.set_defaults(handler=cmd_delete_idgen_template, command_parser=sp, command_name="delete-idgen-template")
