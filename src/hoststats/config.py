from __future__ import annotations

import math
import os
from dataclasses import dataclass, field

DEFAULT_CPU_INTERVAL_SECONDS = 1.0


def _get_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _get_positive_float(name: str, default: float) -> float:
    value = _get_float(name, default)
    if not math.isfinite(value) or value <= 0:
        return default
    return value


@dataclass(frozen=True, slots=True)
class Settings:
    # Seconds between the two CPU counter snapshots.
    cpu_interval_seconds: float = field(
        default_factory=lambda: _get_positive_float(
            "HOSTSTATS_CPU_INTERVAL", DEFAULT_CPU_INTERVAL_SECONDS
        )
    )


settings = Settings()
