"""Base formatter interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class BaseFormatter(ABC):
    """Abstract base class for report renderers."""

    def __init__(self, *, color: bool = False) -> None:
        self.color = color

    @abstractmethod
    def format(self, report: dict[str, Any]) -> str:
        """Render a report (or a single section dict) to text."""
        ...
