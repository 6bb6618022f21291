"""``digit create-boundaries``."""
from __future__ import annotations

import argparse

from digit.core.definitions import default_boundaries, load_boundaries
from digit.core.services.boundaries import BoundaryService
from .common import add_connection_args, add_file_arg, open_session, print_response, progress


def cmd_create_boundaries(args: argparse.Namespace) -> None:
    parser = args.command_parser
    if args.file and args.default:
        parser.error("cannot use both --file and --default flags together")
    if not args.file and not args.default:
        parser.error("either --file or --default flag is required")

    if args.default:
        boundaries = default_boundaries(args.code_prefix)
        progress("create-boundaries", f"Using default boundary configuration with code prefix: {args.code_prefix}")
    else:
        boundaries = load_boundaries(args.file)

    session = open_session(args)
    body = BoundaryService(session.client).create_boundaries(boundaries)
    print_response("Boundary creation response", body)


def register(sub: argparse._SubParsersAction) -> None:
    sp = sub.add_parser("create-boundaries", help="Create boundaries from YAML or the built-in samples")
    add_file_arg(sp, help="YAML with boundary: [{code, geometry, additionalDetails}]")
    sp.add_argument("--default", action="store_true", help="Use the three built-in sample boundaries")
    sp.add_argument("--code-prefix", default="DEFAULT", help="Code prefix for the built-in boundaries")
    add_connection_args(sp)
    sp.set_defaults(handler=cmd_create_boundaries, command_parser=sp, command_name="create-boundaries")
