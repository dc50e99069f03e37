"""
hoststats

One-shot host statistics report: CPU utilization, memory, disk, processes,
users, authentication events and network interfaces.
"""

from __future__ import annotations

from .core import collect_report
from .cpu import CpuSampler, UtilizationSample, sample_cpu

__all__ = ["CpuSampler", "UtilizationSample", "__version__", "collect_report", "sample_cpu"]

__version__ = "1.0.0"
