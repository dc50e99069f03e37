"""Report command handler."""

from __future__ import annotations

import argparse
import math
import sys

from ..core import collect_report
from ..formatters import get_formatter
from ..utils import output_text


def _use_color(args: argparse.Namespace) -> bool:
    if args.color is not None:
        return bool(args.color)
    return args.format == "table" and not args.output and sys.stdout.isatty()


def cmd_report(args: argparse.Namespace) -> int:
    """Collect and print the full host report."""
    if args.interval is not None and not (math.isfinite(args.interval) and args.interval > 0):
        sys.stderr.write("Error: --interval must be a finite number > 0\n")
        return 2
    if args.top <= 0:
        sys.stderr.write("Error: --top must be > 0\n")
        return 2

    report = collect_report(
        include_processes=not args.no_processes,
        include_network=not args.no_network,
        include_disk=not args.no_disk,
        include_security=not args.no_security,
        top_n=args.top,
        cpu_interval=args.interval,
    )

    formatter = get_formatter(args.format, color=_use_color(args))
    output_text(formatter.format(report), args.output)
    return 0
