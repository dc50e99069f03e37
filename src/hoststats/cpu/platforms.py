"""Host platform detection."""

from __future__ import annotations

import sys
from enum import Enum


class Platform(str, Enum):
    LINUX = "linux"
    DARWIN = "darwin"
    BSD = "bsd"
    OTHER = "other"


def detect_platform(sys_platform: str | None = None) -> Platform:
    """Map ``sys.platform`` onto the capability variants we know about."""
    name = sys_platform if sys_platform is not None else sys.platform
    if name.startswith("linux"):
        return Platform.LINUX
    if name == "darwin":
        return Platform.DARWIN
    if "bsd" in name or name.startswith("dragonfly"):
        return Platform.BSD
    return Platform.OTHER
