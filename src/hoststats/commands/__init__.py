"""CLI command handlers."""

from __future__ import annotations

from .cpu import cmd_cpu
from .report import cmd_report
from .version import cmd_version

__all__ = ["cmd_cpu", "cmd_report", "cmd_version"]
