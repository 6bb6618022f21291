"""Workflow commands, including full workflow creation from a definition."""
from __future__ import annotations

import argparse
from functools import partial

from digit.core.definitions import default_workflow_definition, load_workflow_definition
from digit.core.orchestrator import WorkflowOrchestrator
from digit.core.services.exceptions import WorkflowError
from digit.core.services.workflow import WorkflowService
from .common import add_connection_args, add_file_arg, open_session, print_response, progress


def cmd_create_process(args: argparse.Namespace) -> None:
    session = open_session(args)
    body = WorkflowService(session.client).create_process(
        args.name,
        args.code,
        description=args.description,
        version=args.version,
        sla=args.sla,
    )
    print_response("Process creation response", body)


def cmd_search_process_definition(args: argparse.Namespace) -> None:
    session = open_session(args)
    body = WorkflowService(session.client).search_process_definition(args.id)
    print_response("Process definition", body)


def cmd_delete_process(args: argparse.Namespace) -> None:
    session = open_session(args)
    body = WorkflowService(session.client).delete_process(args.code)
    print(f"✓ Process '{args.code}' deleted")
    if body:
        print_response("Process deletion response", body)


def cmd_create_workflow(args: argparse.Namespace) -> None:
    parser = args.command_parser
    if args.file and args.default:
        parser.error("cannot use both --file and --default flags together")
    if not args.file and not args.default:
        parser.error("either --file or --default flag is required")
    if args.default and not args.code:
        parser.error("--code flag is required when using --default")

    if args.default:
        definition = default_workflow_definition(args.code)
        progress("create-workflow", f"Using default workflow configuration with code: {args.code}")
    else:
        definition = load_workflow_definition(args.file)

    session = open_session(args)
    orchestrator = WorkflowOrchestrator(
        WorkflowService(session.client),
        on_event=partial(progress, "create-workflow"),
    )
    try:
        result = orchestrator.create_workflow(definition)
    except WorkflowError as e:
        if e.process_id:
            progress("create-workflow", f"Partially created process {e.process_id}; remove it manually")
            if e.state_ids:
                created = ", ".join(f"{code}={state_id}" for code, state_id in e.state_ids.items())
                progress("create-workflow", f"States already created: {created}")
        raise

    print("🎉 Workflow created successfully!")
    print(f"Process ID: {result.process_id}")
    print(f"States: {result.states_created}")
    print(f"Actions: {result.actions_created}")


def register(sub: argparse._SubParsersAction) -> None:
    sp = sub.add_parser("create-process", help="Create a workflow process")
    sp.add_argument("--name", required=True)
    sp.add_argument("--code", required=True)
    sp.add_argument("--description", default="")
    sp.add_argument("--version", default="1.0")
    sp.add_argument("--sla", type=int, default=0, help="SLA in seconds")
    add_connection_args(sp)
    sp.set_defaults(handler=cmd_create_process, command_parser=sp, command_name="create-process")

    sp = sub.add_parser("search-process-definition", help="Show a process with its states and actions")
    sp.add_argument("--id", required=True, help="Process ID")
    add_connection_args(sp)
    sp.set_defaults(handler=cmd_search_process_definition, command_parser=sp,
                    command_name="search-process-definition")

    sp = sub.add_parser("create-workflow", help="Create process, states and actions from a definition")
    add_file_arg(sp, help="Workflow definition YAML")
    sp.add_argument("--default", action="store_true", help="Use the built-in workflow (requires --code)")
    sp.add_argument("--code", default=None, help="Process code for the built-in workflow")
    add_connection_args(sp)
    sp.set_defaults(handler=cmd_create_workflow, command_parser=sp, command_name="create-workflow")

    sp = sub.add_parser("delete-process", help="Delete a workflow process by code")
    sp.add_argument("--code", required=True)
    add_connection_args(sp)
    sp.set_defaults(handler=cmd_delete_process, command_parser=sp, command_name="delete-process")
