"""Command-line interface for Roster.

Each command drives the same SyncController a graphical front-end would:
it fills the form fields, submits, and prints the refreshed table.

Commands:
    list [--part P]                          Show members of a part
    add --name N --age A --part P            Create a member
    edit ID [--name N] [--age A] [--part P]  Update a member
    delete ID                                Delete a member
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Awaitable, Callable, Dict, Optional

from .core.api_client import RecordsApi
from .core.config import Config
from .core.errors import ConfigError
from .core.models import DEFAULT_PART, Part
from .core.sync_controller import OperationResult, SyncController
from .core.validation import ValidationError, validate_part, validate_record_id
from .core.view import render_table_text, table_view

PART_CHOICES = [p.value for p in Part]


def print_table(controller: SyncController, format_type: str) -> None:
    """Print the cached records of the selected part.

    Args:
        controller: Controller whose cache to print
        format_type: Output format (text, json)
    """
    if format_type == "json":
        print(json.dumps([r.to_dict() for r in controller.cache.records], indent=2, ensure_ascii=False))
    else:
        print(render_table_text(table_view(controller)))


def report_failure(result: OperationResult) -> int:
    """Print why an operation failed. Returns the exit code."""
    failed = result if not result.success else result.refresh
    if failed is None or failed.success:
        return 0
    print(f"Error: {failed.message}", file=sys.stderr)
    return 1


def _view_part(args: argparse.Namespace) -> Part:
    view_part = getattr(args, "view_part", None)
    if view_part:
        return validate_part(view_part, "view-part")
    # For edit, --part is the new value, not where the member is listed now
    part = getattr(args, "part", None)
    if part and args.command != "edit":
        try:
            return validate_part(part)
        except ValidationError:
            return DEFAULT_PART
    return DEFAULT_PART


async def cmd_list(controller: SyncController, args: argparse.Namespace) -> int:
    """List members of one part."""
    result = await controller.refresh()
    if not result.success:
        return report_failure(result)
    print_table(controller, args.format)
    return 0


async def cmd_add(controller: SyncController, args: argparse.Namespace) -> int:
    """Create a member from the given fields."""
    controller.set_field("name", args.name)
    controller.set_field("age", args.age)
    controller.set_field("part", args.part)
    result = await controller.create()
    if not result.success:
        return report_failure(result)
    if args.format != "json":
        print(f"Created member '{args.name}'")
    print_table(controller, args.format)
    return report_failure(result)


async def cmd_edit(controller: SyncController, args: argparse.Namespace) -> int:
    """Load a member into the edit form, change fields, and submit."""
    record_id = validate_record_id(args.record_id)
    fetched = await controller.refresh()
    if not fetched.success:
        return report_failure(fetched)

    selected = controller.select_for_edit(record_id)
    if not selected.success:
        print(
            f"Error: {selected.message} for part '{controller.part.value}'. "
            "Use --view-part to pick the part it belongs to.",
            file=sys.stderr,
        )
        return 1

    for field in ("name", "age", "part"):
        value = getattr(args, field)
        if value is None:
            continue
        typed = controller.set_field(field, value)
        if not typed.success:
            return report_failure(typed)

    result = await controller.update()
    if not result.success:
        return report_failure(result)
    if args.format != "json":
        print(f"Updated member #{record_id}")
    print_table(controller, args.format)
    return report_failure(result)


async def cmd_delete(controller: SyncController, args: argparse.Namespace) -> int:
    """Delete a member by id."""
    record_id = validate_record_id(args.record_id)
    result = await controller.delete(record_id)
    if not result.success:
        return report_failure(result)
    if args.format != "json":
        print(f"Deleted member #{record_id}")
    print_table(controller, args.format)
    return report_failure(result)


COMMANDS: Dict[str, Callable[[SyncController, argparse.Namespace], Awaitable[int]]] = {
    "list": cmd_list,
    "add": cmd_add,
    "edit": cmd_edit,
    "delete": cmd_delete,
}


def add_cli_subparsers(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    """Add the CLI commands to a parser.

    Args:
        subparsers: Subparsers object to add commands to
    """
    format_parent = argparse.ArgumentParser(add_help=False)
    format_parent.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )

    list_parser = subparsers.add_parser(
        "list", parents=[format_parent], help="List members of a part"
    )
    list_parser.add_argument(
        "--part",
        choices=PART_CHOICES,
        default=DEFAULT_PART.value,
        help=f"Part to show (default: {DEFAULT_PART.value})",
    )

    add_parser = subparsers.add_parser("add", parents=[format_parent], help="Create a member")
    add_parser.add_argument("--name", required=True, help="Member name")
    add_parser.add_argument("--age", required=True, help="Member age (positive integer)")
    add_parser.add_argument("--part", required=True, help="Member part")
    add_parser.add_argument("--view-part", help="Part to show afterwards (default: --part)")

    edit_parser = subparsers.add_parser("edit", parents=[format_parent], help="Update a member")
    edit_parser.add_argument("record_id", help="Member ID")
    edit_parser.add_argument("--name", help="New name")
    edit_parser.add_argument("--age", help="New age")
    edit_parser.add_argument("--part", help="New part")
    edit_parser.add_argument(
        "--view-part",
        help=f"Part the member is listed under now (default: {DEFAULT_PART.value})",
    )

    delete_parser = subparsers.add_parser("delete", parents=[format_parent], help="Delete a member")
    delete_parser.add_argument("record_id", help="Member ID")
    delete_parser.add_argument(
        "--view-part", help=f"Part to show afterwards (default: {DEFAULT_PART.value})"
    )


async def _run_command(api: RecordsApi, args: argparse.Namespace) -> int:
    handler = COMMANDS[args.command]
    async with api:
        controller = SyncController(api, part=_view_part(args))
        return await handler(controller, args)


def run(config_dir: Optional[Path], args: argparse.Namespace) -> int:
    """Run CLI with given arguments.

    Args:
        config_dir: Custom configuration directory or None for default
        args: Parsed command-line arguments (should have command attribute)

    Returns:
        Exit code (0 for success, 1 for error)
    """
    if not getattr(args, "command", None):
        print("Error: No command specified. Use --help for available commands.", file=sys.stderr)
        return 1
    if args.command not in COMMANDS:
        print(f"Error: Unknown command '{args.command}'", file=sys.stderr)
        return 1

    try:
        config = Config(config_dir=config_dir)
        base_url = config.get_base_url(getattr(args, "base_url", None))
        api = RecordsApi(base_url, timeout=config.get_timeout())
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        return asyncio.run(_run_command(api, args))
    except ValidationError as e:
        print(f"Error: Invalid {e.field} - {e.message}", file=sys.stderr)
        return 1
