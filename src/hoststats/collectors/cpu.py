"""CPU section collector."""

from __future__ import annotations

import os
import platform
from pathlib import Path
from typing import Any

import psutil

from ..cpu import CpuSampler
from .base import BaseCollector


def read_cpu_model(path: Path | str = "/proc/cpuinfo") -> str | None:
    """First ``model name`` entry of /proc/cpuinfo, else the platform's guess."""
    try:
        with open(path) as fh:
            for line in fh:
                key, sep, value = line.partition(":")
                if sep and key.strip() == "model name":
                    return value.strip() or None
    except OSError:
        pass
    return platform.processor() or None


class CPUCollector(BaseCollector):
    """Utilization sample plus static CPU facts."""

    def __init__(self, sampler: CpuSampler | None = None, *, interval: float | None = None) -> None:
        self.sampler = sampler or CpuSampler(interval)

    @property
    def name(self) -> str:
        return "cpu"

    def collect(self) -> dict[str, Any]:
        usage = self.sampler.sample()

        # Load average (Unix only)
        loadavg = None
        try:
            load = os.getloadavg()
            loadavg = {
                "1m": round(load[0], 2),
                "5m": round(load[1], 2),
                "15m": round(load[2], 2),
            }
        except (AttributeError, OSError):
            pass

        return {
            "usage": usage.to_dict(),
            "count_logical": psutil.cpu_count(logical=True),
            "count_physical": psutil.cpu_count(logical=False),
            "model": read_cpu_model(),
            "loadavg": loadavg,
        }
