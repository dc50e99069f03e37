"""Report assembly."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

from .collectors import (
    CPUCollector,
    DiskCollector,
    MemoryCollector,
    NetworkCollector,
    ProcessCollector,
    SecurityCollector,
    SystemCollector,
    UsersCollector,
)
from .collectors.base import BaseCollector

log = logging.getLogger(__name__)


def run_collectors(collectors: list[BaseCollector]) -> dict[str, Any]:
    """Run *collectors* in order; a failing one only loses its own section."""
    report: dict[str, Any] = {
        "timestamp": datetime.now(UTC).isoformat(timespec="seconds"),
    }

    for collector in collectors:
        try:
            report[collector.name] = collector.collect()
        except Exception as e:
            log.warning("collector failed: %s", e, extra={"collector": collector.name})
            report[collector.name] = {"error": str(e)}

    return report


def collect_report(
    *,
    include_processes: bool = True,
    include_network: bool = True,
    include_disk: bool = True,
    include_security: bool = True,
    top_n: int = 5,
    cpu_interval: float | None = None,
) -> dict[str, Any]:
    """Collect a complete host report.

    Args:
        include_processes: Include top processes
        include_network: Include interfaces and connection counts
        include_disk: Include filesystem usage
        include_security: Include auth log activity
        top_n: Number of processes per top list
        cpu_interval: CPU sampling window in seconds (default from settings)

    Returns:
        Dictionary with a timestamp and one key per section
    """
    collectors: list[BaseCollector] = [
        SystemCollector(),
        CPUCollector(interval=cpu_interval),
        MemoryCollector(),
    ]

    if include_disk:
        collectors.append(DiskCollector())

    if include_processes:
        collectors.append(ProcessCollector(top_n=top_n))

    collectors.append(UsersCollector())

    if include_security:
        collectors.append(SecurityCollector())

    if include_network:
        collectors.append(NetworkCollector())

    return run_collectors(collectors)
