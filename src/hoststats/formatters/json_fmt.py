"""JSON formatter."""

from __future__ import annotations

import json
from typing import Any

from .base import BaseFormatter


class JsonFormatter(BaseFormatter):
    """Format report as JSON."""

    def format(self, report: dict[str, Any]) -> str:
        return json.dumps(report, ensure_ascii=False, indent=2, default=str)
