"""MDMS schema and data commands."""
from __future__ import annotations

import argparse

from digit.core.definitions import load_mdms_data, load_mdms_schema
from digit.core.services.mdms import MdmsService
from .common import add_connection_args, add_file_arg, open_session, print_response, progress


def cmd_create_schema(args: argparse.Namespace) -> None:
    schema = load_mdms_schema(args.file)
    session = open_session(args)
    body = MdmsService(session.client).create_schema(
        schema.code, schema.description, schema.definition, is_active=schema.is_active
    )
    print_response("Schema creation response", body)


def cmd_create_mdms_data(args: argparse.Namespace) -> None:
    records = load_mdms_data(args.file)
    progress("create-mdms-data", f"Creating {len(records)} MDMS record(s)")
    session = open_session(args)
    body = MdmsService(session.client).create_data(records)
    print_response("MDMS data creation response", body)


def cmd_search_schema(args: argparse.Namespace) -> None:
    session = open_session(args)
    body = MdmsService(session.client).search_schema(args.code)
    print_response("Schema search response", body)


def cmd_search_mdms_data(args: argparse.Namespace) -> None:
    session = open_session(args)
    body = MdmsService(session.client).search_data(args.code, args.unique_identifiers)
    print_response("MDMS data search response", body)


def register(sub: argparse._SubParsersAction) -> None:
    sp = sub.add_parser("create-schema", help="Create an MDMS schema from YAML")
    add_file_arg(sp, required=True, help="YAML with schema: {code, description, definition, isActive}")
    add_connection_args(sp)
    sp.set_defaults(handler=cmd_create_schema, command_parser=sp, command_name="create-schema")

    sp = sub.add_parser("create-mdms-data", help="Create MDMS records from YAML")
    add_file_arg(sp, required=True, help="YAML with mdms: [{schemaCode, uniqueIdentifier, data, isActive}]")
    add_connection_args(sp)
    sp.set_defaults(handler=cmd_create_mdms_data, command_parser=sp, command_name="create-mdms-data")

    sp = sub.add_parser("search-schema", help="Search an MDMS schema by code")
    sp.add_argument("--code", required=True)
    add_connection_args(sp)
    sp.set_defaults(handler=cmd_search_schema, command_parser=sp, command_name="search-schema")

    sp = sub.add_parser("search-mdms-data", help="Search MDMS records by schema code")
    sp.add_argument("--code", required=True, help="Schema code")
    sp.add_argument("--unique-identifiers", default=None, help="Comma-separated unique identifiers")
    add_connection_args(sp)
    sp.set_defaults(handler=cmd_search_mdms_data, command_parser=sp, command_name="search-mdms-data")
