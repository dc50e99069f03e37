"""Disk section collector."""

from __future__ import annotations

import os
from typing import Any

import psutil

from ..utils import bytes_to_human, percent
from .base import BaseCollector


def inode_usage(path: str = "/") -> float | None:
    """Percentage of inodes in use on the filesystem holding *path*."""
    try:
        st = os.statvfs(path)
    except (AttributeError, OSError):
        return None
    if st.f_files == 0:
        return None
    return percent(st.f_files - st.f_ffree, st.f_files)


class DiskCollector(BaseCollector):
    """Collect usage of device-backed filesystems."""

    @property
    def name(self) -> str:
        return "disk"

    def collect(self) -> dict[str, Any]:
        partitions = []

        for part in psutil.disk_partitions(all=False):
            if not part.device.startswith("/dev/"):
                continue
            try:
                usage = psutil.disk_usage(part.mountpoint)
            except (PermissionError, OSError):
                continue
            partitions.append(
                {
                    "device": part.device,
                    "mountpoint": part.mountpoint,
                    "fstype": part.fstype,
                    "total": usage.total,
                    "total_human": bytes_to_human(usage.total),
                    "used": usage.used,
                    "used_human": bytes_to_human(usage.used),
                    "free": usage.free,
                    "free_human": bytes_to_human(usage.free),
                    "percent": round(usage.percent, 1),
                }
            )

        return {
            "partitions": partitions,
            "mounted": len(partitions),
            "root_inode_percent": inode_usage("/"),
        }
