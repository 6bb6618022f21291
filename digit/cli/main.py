"""``digit`` command-line entry point."""
from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional

from digit import __version__
from digit.core.services.exceptions import DigitError
from . import account, boundaries, config_cmds, filestore, idgen, mdms, registry, templates, users, workflow

COMMAND_MODULES = (
    config_cmds,
    account,
    users,
    workflow,
    templates,
    idgen,
    mdms,
    registry,
    boundaries,
    filestore,
)


def configure_logging(verbose: bool) -> None:
    level_name = "DEBUG" if verbose else os.environ.get("DIGIT_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="digit",
        description="Manage DIGIT platform resources: accounts, users, workflows, templates and more.",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="cmd")

    for module in COMMAND_MODULES:
        module.register(sub)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    handler = getattr(args, "handler", None)
    if handler is None:
        (getattr(args, "command_parser", None) or parser).print_help()
        sys.exit(1)

    command = getattr(args, "command_name", None) or args.cmd
    try:
        handler(args)
    except (DigitError, ValueError) as e:
        print(f"[{command}] Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
