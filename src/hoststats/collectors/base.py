"""Base collector interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class BaseCollector(ABC):
    """Abstract base class for report section collectors.

    ``collect`` should degrade individual values to ``None`` rather than
    raise; anything it does raise is caught by ``collect_report`` and
    recorded as that section's error.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Section key in the report."""
        ...

    @abstractmethod
    def collect(self) -> dict[str, Any]:
        """Collect one report section."""
        ...
