from __future__ import annotations


class StatsError(Exception):
    """A recoverable collection failure.

    Nothing raised from this hierarchy is fatal to a report: callers degrade
    the affected value to "N/A" / unknown and keep going.
    """

    code = "stats_error"

    def __init__(self, message: str, *, source: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.source = source

    def __str__(self) -> str:
        if self.source:
            return f"{self.code} ({self.source}): {self.message}"
        return f"{self.code}: {self.message}"


class UnavailableError(StatsError):
    """The counter source could not be read (absent, permission denied...)."""

    code = "unavailable"


class InconsistentCounters(StatsError):
    """A counter went backwards between two snapshots (reset or wrap)."""

    code = "inconsistent_counters"


class ParseError(StatsError):
    """Utility output did not contain the expected token."""

    code = "parse_error"
