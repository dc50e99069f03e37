"""CPU sample command handler."""

from __future__ import annotations

import argparse
import math
import sys
from datetime import UTC, datetime

from ..cpu import CpuSampler
from ..formatters import get_formatter
from ..utils import output_text


def cmd_cpu(args: argparse.Namespace) -> int:
    """Take one CPU utilization sample; exit 1 when it is unavailable."""
    if args.interval is not None and not (math.isfinite(args.interval) and args.interval > 0):
        sys.stderr.write("Error: --interval must be a finite number > 0\n")
        return 2

    sample = CpuSampler(args.interval).sample()
    report = {
        "timestamp": datetime.now(UTC).isoformat(timespec="seconds"),
        "cpu": {"usage": sample.to_dict()},
    }

    formatter = get_formatter(args.format)
    output_text(formatter.format(report), args.output)
    return 0 if sample.available else 1
