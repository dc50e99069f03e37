"""CPU utilization sampling."""

from __future__ import annotations

from .counters import (
    CATEGORIES,
    COUNTER_FIELDS,
    CounterSnapshot,
    UtilizationSample,
    compute_utilization,
    parse_stat_line,
)
from .platforms import Platform, detect_platform
from .sampler import CpuSampler, sample_cpu
from .sources import (
    CpuSource,
    ProcStatSource,
    UtilitySummarySource,
    parse_summary_line,
    probe_source,
)

__all__ = [
    "CATEGORIES",
    "COUNTER_FIELDS",
    "CounterSnapshot",
    "CpuSampler",
    "CpuSource",
    "Platform",
    "ProcStatSource",
    "UtilitySummarySource",
    "UtilizationSample",
    "compute_utilization",
    "detect_platform",
    "parse_stat_line",
    "parse_summary_line",
    "probe_source",
    "sample_cpu",
]
