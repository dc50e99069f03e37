"""Memory section collector."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import psutil

from ..utils import bytes_to_human, percent
from .base import BaseCollector

log = logging.getLogger(__name__)

MEMINFO_FIELDS = (
    "MemTotal",
    "MemFree",
    "MemAvailable",
    "Buffers",
    "Cached",
    "Shmem",
    "SwapTotal",
    "SwapFree",
)


def read_meminfo(path: Path | str = "/proc/meminfo") -> dict[str, int]:
    """Parse the fields we report from /proc/meminfo, converted to bytes."""
    result: dict[str, int] = {}
    try:
        with open(path) as fh:
            for line in fh:
                parts = line.split(":")
                if len(parts) != 2:
                    continue
                key = parts[0].strip()
                if key not in MEMINFO_FIELDS:
                    continue
                val_parts = parts[1].strip().split()
                try:
                    value_kb = int(val_parts[0])
                except (ValueError, IndexError):
                    continue
                # /proc/meminfo reports in kB
                result[key] = value_kb * 1024
    except OSError:
        pass
    return result


def _from_meminfo(info: dict[str, int]) -> dict[str, Any]:
    total = info["MemTotal"]
    available = info.get("MemAvailable", info.get("MemFree", 0))
    used = total - available
    swap_total = info.get("SwapTotal", 0)
    swap_free = info.get("SwapFree", 0)
    return {
        "total": total,
        "used": used,
        "available": available,
        "buffers": info.get("Buffers"),
        "cached": info.get("Cached"),
        "shared": info.get("Shmem"),
        "swap_total": swap_total,
        "swap_used": swap_total - swap_free,
        "swap_free": swap_free,
    }


def _from_psutil() -> dict[str, Any]:
    vm = psutil.virtual_memory()
    swap = psutil.swap_memory()
    return {
        "total": vm.total,
        "used": vm.total - vm.available,
        "available": vm.available,
        "buffers": getattr(vm, "buffers", None),
        "cached": getattr(vm, "cached", None),
        "shared": getattr(vm, "shared", None),
        "swap_total": swap.total,
        "swap_used": swap.used,
        "swap_free": swap.free,
    }


class MemoryCollector(BaseCollector):
    """Collect memory and swap usage."""

    def __init__(self, meminfo_path: Path | str = "/proc/meminfo") -> None:
        self.meminfo_path = meminfo_path

    @property
    def name(self) -> str:
        return "memory"

    def collect(self) -> dict[str, Any]:
        info = read_meminfo(self.meminfo_path)
        if info.get("MemTotal"):
            data = _from_meminfo(info)
        else:
            log.debug("meminfo unavailable, using psutil", extra={"collector": self.name})
            data = _from_psutil()

        data["used_percent"] = percent(data["used"], data["total"])
        data["available_percent"] = percent(data["available"], data["total"])
        data["swap_percent"] = percent(data["swap_used"], data["swap_total"])

        for key in ("total", "used", "available", "buffers", "cached", "shared"):
            data[f"{key}_human"] = bytes_to_human(data[key])
        for key in ("swap_total", "swap_used", "swap_free"):
            data[f"{key}_human"] = bytes_to_human(data[key])

        return data
