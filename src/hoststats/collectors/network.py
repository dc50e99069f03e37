"""Network section collector."""

from __future__ import annotations

import socket
from typing import Any

import psutil

from .base import BaseCollector

MAX_INTERFACES = 5


class NetworkCollector(BaseCollector):
    """Collect interface addresses and TCP connection counts."""

    @property
    def name(self) -> str:
        return "network"

    def _interfaces(self) -> list[dict[str, Any]]:
        interfaces = []
        addrs = psutil.net_if_addrs()
        stats = psutil.net_if_stats()

        for iface_name, iface_addrs in addrs.items():
            if iface_name == "lo" or iface_name.startswith("lo0"):
                continue

            address = None
            for addr in iface_addrs:
                if addr.family == socket.AF_INET:
                    address = addr.address
                    if addr.netmask:
                        prefix = sum(bin(int(octet)).count("1") for octet in addr.netmask.split("."))
                        address = f"{addr.address}/{prefix}"
                    break

            s = stats.get(iface_name)
            interfaces.append(
                {
                    "name": iface_name,
                    "address": address,
                    "status": "UP" if s is not None and s.isup else "DOWN",
                }
            )
            if len(interfaces) >= MAX_INTERFACES:
                break

        return interfaces

    def collect(self) -> dict[str, Any]:
        established: int | None = None
        listening: int | None = None
        try:
            conns = psutil.net_connections(kind="tcp")
            established = sum(1 for c in conns if c.status == psutil.CONN_ESTABLISHED)
            listening = sum(1 for c in conns if c.status == psutil.CONN_LISTEN)
        except (psutil.AccessDenied, PermissionError):
            pass

        return {
            "interfaces": self._interfaces(),
            "tcp_established": established,
            "tcp_listening": listening,
        }
