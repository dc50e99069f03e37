"""Shared utility functions."""

from __future__ import annotations

import os
import sys
from typing import Any


def bytes_to_human(n: int | float | None) -> str:
    """Convert bytes to human-readable string (e.g. 1.00 MB)."""
    if n is None:
        return "N/A"
    value = float(n)
    for unit in ("B", "KB", "MB", "GB", "TB"):
        if abs(value) < 1024.0:
            return f"{value:.2f} {unit}"
        value /= 1024.0
    return f"{value:.2f} PB"


def percent(part: int | float, whole: int | float) -> float:
    """``part`` as a percentage of ``whole``; 0.0 when ``whole`` is zero."""
    if not whole:
        return 0.0
    return round(part * 100.0 / whole, 1)


def na(value: Any, fmt: str = "{}") -> str:
    """Format *value*, or "N/A" when it is unknown."""
    if value is None:
        return "N/A"
    return fmt.format(value)


def truncate(text: str, width: int) -> str:
    return text if len(text) <= width else text[:width]


def output_text(data: str, output_file: str | None = None) -> None:
    """Write *data* to *output_file* (append) or stdout."""
    if output_file:
        mode = "a" if os.path.exists(output_file) else "w"
        with open(output_file, mode) as f:
            f.write(data + "\n")
    else:
        sys.stdout.write(data + "\n")
        sys.stdout.flush()
