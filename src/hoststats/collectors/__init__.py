"""Report section collectors."""

from __future__ import annotations

from .base import BaseCollector
from .cpu import CPUCollector
from .disk import DiskCollector
from .memory import MemoryCollector
from .network import NetworkCollector
from .process import ProcessCollector
from .security import SecurityCollector
from .system import SystemCollector
from .users import UsersCollector

__all__ = [
    "BaseCollector",
    "CPUCollector",
    "DiskCollector",
    "MemoryCollector",
    "NetworkCollector",
    "ProcessCollector",
    "SecurityCollector",
    "SystemCollector",
    "UsersCollector",
]
