"""System info collector."""

from __future__ import annotations

import platform
import socket
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import psutil

from .base import BaseCollector


def read_os_release(path: Path | str = "/etc/os-release") -> dict[str, str]:
    """Parse KEY="value" pairs from os-release."""
    result: dict[str, str] = {}
    try:
        with open(path) as fh:
            for line in fh:
                line = line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                key, value = line.split("=", 1)
                result[key] = value.strip().strip('"').strip("'")
    except OSError:
        pass
    return result


def primary_ipv4() -> str | None:
    """First non-loopback IPv4 address across interfaces."""
    try:
        addrs = psutil.net_if_addrs()
    except OSError:
        return None
    for iface_addrs in addrs.values():
        for addr in iface_addrs:
            if addr.family == socket.AF_INET and not addr.address.startswith("127."):
                return addr.address
    return None


class SystemCollector(BaseCollector):
    """Collect host identity, OS and uptime."""

    def __init__(self, os_release_path: Path | str = "/etc/os-release") -> None:
        self.os_release_path = os_release_path

    @property
    def name(self) -> str:
        return "system"

    def collect(self) -> dict[str, Any]:
        now = datetime.now(UTC)
        boot_time = datetime.fromtimestamp(psutil.boot_time(), tz=UTC)
        uptime_seconds = (now - boot_time).total_seconds()

        os_release = read_os_release(self.os_release_path)

        return {
            "hostname": socket.gethostname(),
            "fqdn": socket.getfqdn(),
            "ip": primary_ipv4(),
            "os": os_release.get("PRETTY_NAME") or platform.system(),
            "os_version": os_release.get("VERSION"),
            "kernel": platform.release(),
            "architecture": platform.machine(),
            "boot_time": boot_time.isoformat(timespec="seconds"),
            "uptime_seconds": round(uptime_seconds, 0),
            "uptime_human": format_uptime(uptime_seconds),
        }


def format_uptime(seconds: float) -> str:
    """Format uptime in human-readable format."""
    days, remainder = divmod(int(seconds), 86400)
    hours, remainder = divmod(remainder, 3600)
    minutes, secs = divmod(remainder, 60)

    parts = []
    if days > 0:
        parts.append(f"{days}d")
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")
    parts.append(f"{secs}s")

    return " ".join(parts)
