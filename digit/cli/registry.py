"""Registry schema and data commands."""
from __future__ import annotations

import argparse
import json

from digit.core.definitions import (
    RegistryDataDefinition,
    default_registry_schema,
    load_registry_data,
    load_registry_schema,
)
from digit.core.services.registry import DEFAULT_REGISTRY_SERVER, RegistryService
from .common import add_file_arg, open_session, print_response, progress


def _session(args: argparse.Namespace):
    return open_session(args, default_server=DEFAULT_REGISTRY_SERVER)


def cmd_create_registry_schema(args: argparse.Namespace) -> None:
    parser = args.command_parser
    if args.file and args.default:
        parser.error("cannot use both --file and --default flags together")
    if not args.file and not args.default:
        parser.error("either --file or --default flag is required")

    if args.default:
        schema = default_registry_schema(args.schema_code)
        progress("create-registry-schema", f"Using default registry schema with code: {schema.schema_code}")
    else:
        schema = load_registry_schema(args.file)

    session = _session(args)
    body = RegistryService(session.client).create_schema(schema.schema_code, schema.definition)
    print_response("Registry schema creation response", body)


def cmd_search_registry_schema(args: argparse.Namespace) -> None:
    session = _session(args)
    body = RegistryService(session.client).search_schema(args.schema_code, args.version)
    print_response("Registry schema search response", body)


def cmd_delete_registry_schema(args: argparse.Namespace) -> None:
    session = _session(args)
    body = RegistryService(session.client).delete_schema(args.schema_code)
    print_response("Registry schema deletion response", body)


def cmd_create_registry_data(args: argparse.Namespace) -> None:
    parser = args.command_parser
    if args.file and (args.schema_code or args.data):
        parser.error("cannot use --file together with --schema-code/--data")
    if args.file:
        record = load_registry_data(args.file)
    else:
        if not args.schema_code or not args.data:
            parser.error("either --file or both --schema-code and --data are required")
        try:
            data = json.loads(args.data)
        except ValueError as e:
            parser.error(f"--data must be valid JSON: {e}")
        if not isinstance(data, dict):
            parser.error("--data must be a JSON object")
        record = RegistryDataDefinition(schema_code=args.schema_code, data=data)

    session = _session(args)
    body = RegistryService(session.client).create_data(record.schema_code, record.data)
    print_response("Registry data creation response", body)


def cmd_search_registry_data(args: argparse.Namespace) -> None:
    session = _session(args)
    body = RegistryService(session.client).search_data(args.schema_code, args.registry_id)
    print_response("Registry data search response", body)


def cmd_delete_registry_data(args: argparse.Namespace) -> None:
    session = _session(args)
    body = RegistryService(session.client).delete_data(args.schema_code, args.registry_id)
    print_response("Registry data deletion response", body)


def _add_parser(sub, name: str, handler, help: str) -> argparse.ArgumentParser:
    sp = sub.add_parser(name, help=help)
    sp.add_argument("--server", "-s", default=None,
                    help=f"Server URL (overrides config, default: {DEFAULT_REGISTRY_SERVER})")
    sp.add_argument("--jwt-token", "-t", default=None, help="JWT token (overrides config, never refreshed)")
    sp.set_defaults(handler=handler, command_parser=sp, command_name=name)
    return sp


def register(sub: argparse._SubParsersAction) -> None:
    sp = _add_parser(sub, "create-registry-schema", cmd_create_registry_schema, "Create a registry schema")
    add_file_arg(sp, help="YAML with schemaCode and definition")
    sp.add_argument("--default", action="store_true", help="Use the built-in license registry schema")
    sp.add_argument("--schema-code", default=None, help="Schema code for the built-in schema")

    sp = _add_parser(sub, "search-registry-schema", cmd_search_registry_schema, "Show a registry schema")
    sp.add_argument("--schema-code", required=True)
    sp.add_argument("--version", default=None)

    sp = _add_parser(sub, "delete-registry-schema", cmd_delete_registry_schema, "Delete a registry schema")
    sp.add_argument("--schema-code", required=True)

    sp = _add_parser(sub, "create-registry-data", cmd_create_registry_data, "Create a registry record")
    add_file_arg(sp, help="YAML with schemaCode and data")
    sp.add_argument("--schema-code", default=None)
    sp.add_argument("--data", default=None, help="Record as a JSON object")

    sp = _add_parser(sub, "search-registry-data", cmd_search_registry_data, "Search registry records")
    sp.add_argument("--schema-code", required=True)
    sp.add_argument("--registry-id", default=None)

    sp = _add_parser(sub, "delete-registry-data", cmd_delete_registry_data, "Delete a registry record")
    sp.add_argument("--schema-code", required=True)
    sp.add_argument("--registry-id", required=True)
