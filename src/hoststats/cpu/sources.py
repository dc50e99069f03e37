"""CPU counter sources.

Two variants share one interface:

- ``ProcStatSource`` reads cumulative counters from ``/proc/stat`` twice and
  derives a full breakdown.
- ``UtilitySummarySource`` runs ``top`` once and extracts an aggregate busy
  percentage from its CPU summary line. Categories stay unknown.

``probe_source`` picks one at startup.
"""

from __future__ import annotations

import logging
import re
import shutil
import subprocess
import time
from abc import ABC, abstractmethod
from pathlib import Path

from ..errors import ParseError, UnavailableError
from .counters import CounterSnapshot, UtilizationSample, compute_utilization, parse_stat_line
from .platforms import Platform, detect_platform

log = logging.getLogger(__name__)

PROC_STAT_PATH = Path("/proc/stat")

# One short-lived `top` invocation per platform, printing a single frame.
SUMMARY_COMMANDS: dict[Platform, list[str]] = {
    Platform.LINUX: ["top", "-bn1"],
    Platform.DARWIN: ["top", "-l", "1", "-s", "0"],
    Platform.BSD: ["top", "-b", "-d", "1"],
}

_NUMBER = r"\d+(?:[.,]\d+)?"

# "95.8 id," (procps), "96.5%id" (old procps), "84.21% idle" (macOS / BSD)
_IDLE_RE = re.compile(rf"(?P<value>{_NUMBER})\s*%?\s*id(?:le)?\b", re.IGNORECASE)

# "busy 42.0%", "busy: 42%", "42.0% busy"
_BUSY_RE = re.compile(
    rf"busy\s*[:=]?\s*(?P<value>{_NUMBER})\s*%|(?P<value_after>{_NUMBER})\s*%\s*busy",
    re.IGNORECASE,
)


def _to_float(token: str) -> float:
    return float(token.replace(",", "."))


def _clamp(value: float) -> float:
    return min(100.0, max(0.0, value))


def parse_summary_line(line: str) -> float:
    """Extract an aggregate busy percentage from a one-line CPU summary."""
    m = _IDLE_RE.search(line)
    if m:
        return _clamp(100.0 - _to_float(m.group("value")))

    m = _BUSY_RE.search(line)
    if m:
        return _clamp(_to_float(m.group("value") or m.group("value_after")))

    raise ParseError(f"no busy/idle token in {line.strip()[:80]!r}", source="summary")


def _sleep_at_least(interval: float) -> None:
    deadline = time.monotonic() + interval
    remaining = interval
    while remaining > 0:
        time.sleep(remaining)
        remaining = deadline - time.monotonic()


class CpuSource(ABC):
    """Abstract base class for CPU utilization sources."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Source name recorded on every sample."""
        ...

    @abstractmethod
    def sample(self, interval: float) -> UtilizationSample:
        """Produce one utilization sample."""
        ...


class ProcStatSource(CpuSource):
    """Primary source: the aggregate ``cpu`` line of ``/proc/stat``."""

    def __init__(self, path: Path | str = PROC_STAT_PATH) -> None:
        self.path = Path(path)

    @property
    def name(self) -> str:
        return "proc_stat"

    def capture(self) -> CounterSnapshot:
        try:
            with open(self.path) as fh:
                line = fh.readline()
        except OSError as exc:
            raise UnavailableError(str(exc), source=str(self.path)) from exc
        return parse_stat_line(line, source=str(self.path))

    def sample(self, interval: float) -> UtilizationSample:
        prev = self.capture()
        _sleep_at_least(interval)
        curr = self.capture()
        return compute_utilization(prev, curr, interval=interval, source=self.name)


class UtilitySummarySource(CpuSource):
    """Fallback source: one ``top`` frame, aggregate percentage only."""

    def __init__(
        self,
        platform: Platform | None = None,
        *,
        command: list[str] | None = None,
        timeout: float = 10.0,
    ) -> None:
        self.platform = platform if platform is not None else detect_platform()
        self.command = command or SUMMARY_COMMANDS.get(self.platform, [])
        self.timeout = timeout

    @property
    def name(self) -> str:
        return self.command[0] if self.command else "summary"

    def is_available(self) -> bool:
        return bool(self.command) and shutil.which(self.command[0]) is not None

    def _run(self) -> str:
        if not self.command:
            raise UnavailableError(f"no summary utility for {self.platform.value}", source="summary")
        try:
            result = subprocess.run(
                self.command,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except FileNotFoundError as exc:
            raise UnavailableError(f"{self.command[0]} not found", source=self.name) from exc
        except subprocess.TimeoutExpired as exc:
            raise UnavailableError(f"{self.command[0]} timed out", source=self.name) from exc
        except OSError as exc:
            raise UnavailableError(str(exc), source=self.name) from exc

        if result.returncode != 0:
            raise UnavailableError(
                f"{self.command[0]} exited with code {result.returncode}", source=self.name
            )
        return result.stdout

    def sample(self, interval: float) -> UtilizationSample:
        lines = self._run().splitlines()
        # CPU summary lines first, then any line carrying a busy/idle token.
        cpu_lines = [line for line in lines if "cpu" in line.lower()]
        for line in cpu_lines + [line for line in lines if "cpu" not in line.lower()]:
            try:
                busy = parse_summary_line(line)
            except ParseError:
                continue
            return UtilizationSample.approximate(busy, interval=0.0, source=self.name)
        raise ParseError("no CPU summary line in utility output", source=self.name)


def probe_source(
    platform: Platform | None = None, *, stat_path: Path | str = PROC_STAT_PATH
) -> CpuSource | None:
    """Single availability probe run once at startup."""
    if platform is None:
        platform = detect_platform()

    if platform is Platform.LINUX:
        primary = ProcStatSource(stat_path)
        try:
            primary.capture()
        except UnavailableError as exc:
            log.warning("primary CPU source unavailable", extra={"source": primary.name, "code": exc.code})
        else:
            log.debug("selected CPU source", extra={"source": primary.name})
            return primary

    fallback = UtilitySummarySource(platform)
    if fallback.is_available():
        log.debug("selected CPU source", extra={"source": fallback.name})
        return fallback

    log.warning("no CPU source available", extra={"source": platform.value})
    return None
