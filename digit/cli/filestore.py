"""``digit create-document-category``."""
from __future__ import annotations

import argparse

from digit.core.services.filestore import FilestoreService
from digit.core.validators import parse_bool, parse_csv, parse_int
from .common import add_connection_args, open_session, print_response


def cmd_create_document_category(args: argparse.Namespace) -> None:
    parser = args.command_parser
    formats = parse_csv(args.allowed_formats)
    if not formats:
        parser.error("--allowed-formats must list at least one format")
    try:
        min_size = parse_int(args.min_size, "--min-size", minimum=0)
        max_size = parse_int(args.max_size, "--max-size", minimum=0)
        sensitive = parse_bool(args.sensitive, "--sensitive")
        active = parse_bool(args.active, "--active")
    except ValueError as e:
        parser.error(str(e))

    session = open_session(args)
    body = FilestoreService(session.client).create_document_category(
        args.type,
        args.code,
        formats,
        min_size=min_size,
        max_size=max_size,
        is_sensitive=sensitive,
        is_active=active,
        description=args.description,
    )
    print_response("Document category creation response", body)


def register(sub: argparse._SubParsersAction) -> None:
    sp = sub.add_parser("create-document-category", help="Create a filestore document category")
    sp.add_argument("--type", required=True, help="Category type (e.g. Identity, Certificate)")
    sp.add_argument("--code", required=True, help="Category code (e.g. BIRTH_CERT)")
    sp.add_argument("--allowed-formats", required=True, help="Comma-separated formats, e.g. 'pdf,jpg'")
    sp.add_argument("--min-size", default="1024", help="Minimum file size in bytes")
    sp.add_argument("--max-size", default="1024000", help="Maximum file size in bytes")
    sp.add_argument("--sensitive", default="false")
    sp.add_argument("--active", default="true")
    sp.add_argument("--description", default="")
    add_connection_args(sp)
    sp.set_defaults(handler=cmd_create_document_category, command_parser=sp, command_name="create-document-category")
