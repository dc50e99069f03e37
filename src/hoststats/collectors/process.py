"""Process section collector."""

from __future__ import annotations

import time
from typing import Any

import psutil

from ..utils import truncate
from .base import BaseCollector

COMMAND_WIDTH = 45
USER_WIDTH = 16


def lifetime_cpu_percent(cpu_times: Any, create_time: float, now: float) -> float:
    """CPU time used over the process lifetime, as ``ps`` reports ``%cpu``.

    No second sample is needed, so this never blocks.
    """
    elapsed = now - create_time
    if cpu_times is None or elapsed <= 0:
        return 0.0
    return round((cpu_times.user + cpu_times.system) * 100.0 / elapsed, 1)


class ProcessCollector(BaseCollector):
    """Top processes by CPU and by memory."""

    def __init__(self, top_n: int = 5) -> None:
        self.top_n = top_n

    @property
    def name(self) -> str:
        return "processes"

    def collect(self) -> dict[str, Any]:
        processes: list[dict[str, Any]] = []
        now = time.time()

        for proc in psutil.process_iter(
            ["pid", "name", "username", "cmdline", "cpu_times", "create_time", "memory_percent"]
        ):
            try:
                info = proc.info
                cmdline = info.get("cmdline") or []
                command = " ".join(cmdline) if cmdline else (info.get("name") or "")
                create_time = info.get("create_time")
                if create_time is None:
                    create_time = now
                processes.append(
                    {
                        "pid": info["pid"],
                        "user": truncate(info.get("username") or "?", USER_WIDTH),
                        "cpu_percent": lifetime_cpu_percent(info.get("cpu_times"), create_time, now),
                        "memory_percent": round(info.get("memory_percent") or 0, 1),
                        "command": truncate(command, COMMAND_WIDTH),
                    }
                )
            except (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess):
                continue

        top_by_cpu = sorted(processes, key=lambda x: x["cpu_percent"], reverse=True)[: self.top_n]
        top_by_memory = sorted(processes, key=lambda x: x["memory_percent"], reverse=True)[
            : self.top_n
        ]

        return {
            "total": len(processes),
            "top_by_cpu": top_by_cpu,
            "top_by_memory": top_by_memory,
        }
