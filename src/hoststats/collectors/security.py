"""Authentication log collector.

Scans the system auth log for recent login / sudo activity and counts
today's events. The log is usually root-only; when it cannot be read the
section reports itself unavailable instead of failing.
"""

from __future__ import annotations

import logging
import os
import re
from collections import deque
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any

from .base import BaseCollector

log = logging.getLogger(__name__)

AUTH_LOG_CANDIDATES = ("/var/log/auth.log", "/var/log/secure")

TAIL_LINES = 20
RECENT_EVENTS = 5

_EVENT_RE = re.compile(r"Failed|Accepted|sudo")

COUNTERS = {
    "failed_logins": "Failed password",
    "successful_logins": "Accepted password",
    "sudo_commands": "sudo:",
}


@dataclass
class AuthSummary:
    """What one pass over the auth log found."""

    path: str
    recent: list[str] = field(default_factory=list)
    counts: dict[str, int] = field(default_factory=lambda: {k: 0 for k in COUNTERS})


def find_auth_log(candidates: tuple[str, ...] = AUTH_LOG_CANDIDATES) -> str | None:
    """First candidate that exists and is readable."""
    for candidate in candidates:
        if os.path.isfile(candidate) and os.access(candidate, os.R_OK):
            return candidate
    return None


def day_prefixes(day: date) -> tuple[str, ...]:
    """Line prefixes a syslog entry written on *day* can start with.

    Classic syslog pads the day with a space ("Oct  8"); some tools zero-pad
    it ("Oct 08"); rsyslog's high-precision format starts with the ISO date.
    """
    month = day.strftime("%b")
    return (
        f"{month} {day.day:2d} ",
        f"{month} {day.day:02d} ",
        day.isoformat(),
    )


def scan_auth_log(lines: Any, *, path: str, today: date) -> AuthSummary:
    """Single pass: tail-filtered recent events and today's counters."""
    summary = AuthSummary(path=path)
    prefixes = day_prefixes(today)
    tail: deque[str] = deque(maxlen=TAIL_LINES)

    for raw in lines:
        line = raw.rstrip("\n")
        tail.append(line)
        if not line.startswith(prefixes):
            continue
        for key, needle in COUNTERS.items():
            if needle in line:
                summary.counts[key] += 1

    matching = [line for line in tail if _EVENT_RE.search(line)]
    summary.recent = matching[-RECENT_EVENTS:]
    return summary


class SecurityCollector(BaseCollector):
    """Collect authentication events from the auth log."""

    def __init__(
        self,
        candidates: tuple[str, ...] = AUTH_LOG_CANDIDATES,
        *,
        today: date | None = None,
    ) -> None:
        self.candidates = candidates
        self.today = today

    @property
    def name(self) -> str:
        return "security"

    def collect(self) -> dict[str, Any]:
        path = find_auth_log(self.candidates)
        unavailable: dict[str, Any] = {
            "available": False,
            "log": None,
            "recent": [],
            **{k: None for k in COUNTERS},
        }
        if path is None:
            return unavailable

        today = self.today or date.today()
        try:
            with open(Path(path), errors="replace") as fh:
                summary = scan_auth_log(fh, path=path, today=today)
        except OSError as exc:
            log.warning("auth log unreadable: %s", exc, extra={"collector": self.name})
            return unavailable

        return {
            "available": True,
            "log": summary.path,
            "recent": summary.recent,
            **summary.counts,
        }
