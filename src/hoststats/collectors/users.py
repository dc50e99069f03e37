"""Logged-in users collector."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

import psutil

from .base import BaseCollector


class UsersCollector(BaseCollector):
    """Collect active login sessions."""

    @property
    def name(self) -> str:
        return "users"

    def collect(self) -> dict[str, Any]:
        sessions = []
        for user in psutil.users():
            sessions.append(
                {
                    "name": user.name,
                    "terminal": user.terminal or "?",
                    "host": user.host or "local",
                    "started": datetime.fromtimestamp(user.started, tz=UTC).isoformat(
                        timespec="minutes"
                    ),
                }
            )

        return {
            "sessions": sessions,
            "session_count": len(sessions),
            "unique_users": len({s["name"] for s in sessions}),
            "root_sessions": sum(1 for s in sessions if s["name"] == "root"),
        }
