"""Notification template commands."""
from __future__ import annotations

import argparse
from pathlib import Path

from digit.core.definitions import (
    TemplateDefinition,
    default_template_definition,
    load_template_definition,
)
from digit.core.services.templates import TemplateService
from .common import add_connection_args, add_file_arg, open_session, print_response, progress


def _definition_from_flags(args: argparse.Namespace) -> TemplateDefinition:
    parser = args.command_parser
    for flag, value in (
        ("--template-id", args.template_id),
        ("--version", args.version),
        ("--type", args.type),
        ("--subject", args.subject),
    ):
        if not value:
            parser.error(f"{flag} flag is required")
    if not args.content and not args.content_file:
        parser.error("either --content or --content-file flag is required")
    if args.content and args.content_file:
        parser.error("cannot use both --content and --content-file flags together")
    return TemplateDefinition(
        template_id=args.template_id,
        version=args.version,
        template_type=args.type,
        subject=args.subject,
        content=args.content or "",
        content_file=args.content_file or "",
        html=args.html,
    )


def cmd_create_template(args: argparse.Namespace) -> None:
    parser = args.command_parser
    if args.default and args.file:
        parser.error("cannot use both --file and --default flags together")
    if args.default and not args.template_id:
        parser.error("--template-id flag is required when using --default")

    base_dir = None
    if args.default:
        definition = default_template_definition(args.template_id)
        progress("create-notification-template",
                 f"Using default template configuration with template ID: {args.template_id}")
    elif args.file:
        definition = load_template_definition(args.file)
        base_dir = Path(args.file).resolve().parent
    else:
        definition = _definition_from_flags(args)

    content = definition.resolve_content(base_dir)
    args.server = args.server or definition.server or None
    args.jwt_token = args.jwt_token or definition.jwt_token or None

    session = open_session(args)
    body = TemplateService(session.client).create_template(
        definition.template_id,
        definition.version,
        definition.template_type,
        definition.subject,
        content,
        is_html=definition.html,
    )
    print_response("Template creation response", body)


def cmd_search_template(args: argparse.Namespace) -> None:
    session = open_session(args)
    body = TemplateService(session.client).search_templates(args.template_id)
    print_response("Template search response", body)


def cmd_delete_template(args: argparse.Namespace) -> None:
    session = open_session(args)
    body = TemplateService(session.client).delete_template(args.template_id, args.version)
    print_response("Template deletion response", body)


def register(sub: argparse._SubParsersAction) -> None:
    sp = sub.add_parser("create-notification-template", help="Create a notification template")
    add_file_arg(sp, help="Template YAML (template-id, version, type, subject, content|content-file, html)")
    sp.add_argument("--default", action="store_true", help="Use the built-in welcome email (requires --template-id)")
    sp.add_argument("--template-id", default=None)
    sp.add_argument("--version", default=None)
    sp.add_argument("--type", default=None, help="EMAIL or SMS")
    sp.add_argument("--subject", default=None)
    sp.add_argument("--content", default=None)
    sp.add_argument("--content-file", default=None)
    sp.add_argument("--html", action="store_true", help="Content is HTML")
    add_connection_args(sp)
    sp.set_defaults(handler=cmd_create_template, command_parser=sp, command_name="create-notification-template")

    sp = sub.add_parser("search-notification-template", help="Search notification templates by ID")
    sp.add_argument("--template-id", required=True)
    add_connection_args(sp)
    sp.set_defaults(handler=cmd_search_template, command_parser=sp, command_name="search-notification-template")

    sp = sub.add_parser("delete-notification-template", help="Delete a notification template version")
    sp.add_argument("--template-id", required=True)
    sp.add_argument("--version", required=True)
    add_connection_args(sp)
    sp.set_defaults(handler=cmd_delete_template, command_parser=sp, command_name="delete-notification-template")
