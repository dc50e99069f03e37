"""Version command handler."""

from __future__ import annotations

import argparse
import sys


def cmd_version(args: argparse.Namespace) -> int:
    """Show version."""
    from .. import __version__

    sys.stdout.write(f"hoststats version {__version__}\n")
    return 0
