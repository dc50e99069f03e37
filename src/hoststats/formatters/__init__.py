"""Output formatters."""

from __future__ import annotations

from .base import BaseFormatter
from .json_fmt import JsonFormatter
from .table import TableFormatter

__all__ = [
    "BaseFormatter",
    "JsonFormatter",
    "TableFormatter",
    "get_formatter",
]


def get_formatter(fmt: str, *, color: bool = False) -> BaseFormatter:
    """Get formatter by name."""
    formatters: dict[str, type[BaseFormatter]] = {
        "json": JsonFormatter,
        "table": TableFormatter,
    }

    if fmt not in formatters:
        raise ValueError(f"Unknown format: {fmt}. Available: {', '.join(formatters.keys())}")

    return formatters[fmt](color=color)
