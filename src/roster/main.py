#!/usr/bin/env python3
"""Roster application entry point.

Usage:
    python -m roster.main list --part ios
    python -m roster.main --base-url http://localhost:8080/users add --name Bo --age 30 --part server
    python -m roster.main -d ~/.config/roster-dev edit 3 --age 31
    python -m roster.main delete 3
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, NoReturn, Optional

from .cli import add_cli_subparsers, run as run_cli

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool = False) -> None:
    """Configure root logging for the application."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format=LOG_FORMAT)
    # httpx logs every request at INFO; RecordsApi already does
    logging.getLogger("httpx").setLevel(logging.WARNING)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="roster",
        description="Roster - keep a part-filtered member list in sync with a REST backend",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  roster list --part web
  roster add --name Bo --age 30 --part server
  roster edit 3 --age 31 --view-part server
  roster delete 3 --view-part server
""",
    )

    parser.add_argument(
        "-d", "--config-dir",
        type=Path,
        default=None,
        help="Custom configuration directory (default: ~/.config/roster/)",
    )
    parser.add_argument(
        "--base-url",
        default=None,
        help="Backend collection URL (overrides config file and ROSTER_BASE_URL)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")
    add_cli_subparsers(subparsers)
    return parser


def main(argv: Optional[List[str]] = None) -> NoReturn:
    """Main entry point for Roster."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    configure_logging(args.verbose)
    if args.config_dir:
        logger.info(f"Using custom config directory: {args.config_dir}")

    sys.exit(run_cli(args.config_dir, args))


if __name__ == "__main__":
    main()
