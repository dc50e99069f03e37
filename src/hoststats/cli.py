"""CLI interface for the hoststats report tool."""

from __future__ import annotations

import argparse
import sys

from .commands import cmd_cpu, cmd_report, cmd_version
from .config import settings
from .logging import configure_logging


def build_parser() -> argparse.ArgumentParser:
    """Build argument parser."""
    parser = argparse.ArgumentParser(
        prog="hoststats",
        description="One-shot host statistics report",
    )

    # Global options
    parser.add_argument(
        "--version",
        "-V",
        action="store_true",
        help="Show version and exit",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level for diagnostics on stderr (default: $LOG_LEVEL or WARNING)",
    )

    subparsers = parser.add_subparsers(dest="command")

    def add_output_args(p: argparse.ArgumentParser) -> None:
        p.add_argument(
            "--format",
            "-f",
            choices=["table", "json"],
            default="table",
            help="Output format (default: table)",
        )
        p.add_argument(
            "--output",
            "-o",
            type=str,
            default=None,
            help="Output file, appended to if it exists (default: stdout)",
        )
        p.add_argument(
            "--interval",
            "-i",
            type=float,
            default=None,
            help=f"CPU sampling interval in seconds (default: {settings.cpu_interval_seconds})",
        )

    # report command
    p_report = subparsers.add_parser(
        "report",
        help="Print the full host report",
    )
    add_output_args(p_report)
    p_report.add_argument(
        "--no-processes",
        action="store_true",
        help="Exclude top processes",
    )
    p_report.add_argument(
        "--no-network",
        action="store_true",
        help="Exclude network information",
    )
    p_report.add_argument(
        "--no-disk",
        action="store_true",
        help="Exclude disk information",
    )
    p_report.add_argument(
        "--no-security",
        action="store_true",
        help="Exclude authentication log activity",
    )
    p_report.add_argument(
        "--top",
        "-n",
        type=int,
        default=5,
        help="Processes per top list (default: 5)",
    )
    p_report.add_argument(
        "--color",
        dest="color",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Colorize table output (default: when stdout is a terminal)",
    )
    p_report.set_defaults(func=cmd_report)

    # cpu command
    p_cpu = subparsers.add_parser(
        "cpu",
        help="Sample CPU utilization only",
    )
    add_output_args(p_cpu)
    p_cpu.set_defaults(func=cmd_cpu)

    # version command
    p_version = subparsers.add_parser(
        "version",
        help="Show version",
    )
    p_version.set_defaults(func=cmd_version)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(level=args.log_level)

    if args.version:
        from . import __version__

        sys.stdout.write(f"hoststats version {__version__}\n")
        raise SystemExit(0)

    if not args.command:
        parser.print_help()
        raise SystemExit(0)

    rc = int(args.func(args))
    raise SystemExit(rc)
