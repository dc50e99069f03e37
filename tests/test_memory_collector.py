"""Tests for the memory collector."""

from __future__ import annotations

from unittest.mock import patch

from hoststats.collectors.memory import MemoryCollector, read_meminfo
from hoststats.utils import bytes_to_human

FAKE_MEMINFO = (
    "MemTotal:       16384000 kB\n"
    "MemFree:         2048000 kB\n"
    "MemAvailable:    8192000 kB\n"
    "Buffers:          512000 kB\n"
    "Cached:          2048000 kB\n"
    "SwapCached:            0 kB\n"
    "Shmem:            128000 kB\n"
    "SwapTotal:       4096000 kB\n"
    "SwapFree:        3072000 kB\n"
    "HugePages_Total:       0\n"
)


def test_bytes_to_human() -> None:
    assert bytes_to_human(0) == "0.00 B"
    assert bytes_to_human(1024) == "1.00 KB"
    assert bytes_to_human(1048576) == "1.00 MB"
    assert bytes_to_human(1073741824) == "1.00 GB"
    assert bytes_to_human(None) == "N/A"


def test_read_meminfo_parses_fields(tmp_path) -> None:
    path = tmp_path / "meminfo"
    path.write_text(FAKE_MEMINFO)

    result = read_meminfo(path)

    assert result["MemTotal"] == 16384000 * 1024
    assert result["Buffers"] == 512000 * 1024
    assert result["Shmem"] == 128000 * 1024
    assert "SwapCached" not in result
    assert "HugePages_Total" not in result


def test_read_meminfo_missing(tmp_path) -> None:
    assert read_meminfo(tmp_path / "nonexistent") == {}


def test_collect_uses_total_minus_available(tmp_path) -> None:
    path = tmp_path / "meminfo"
    path.write_text(FAKE_MEMINFO)

    data = MemoryCollector(path).collect()

    assert data["used"] == (16384000 - 8192000) * 1024
    assert data["used_percent"] == 50.0
    assert data["available_percent"] == 50.0
    assert data["swap_used"] == 1024000 * 1024
    assert data["swap_percent"] == 25.0
    assert data["total_human"] == bytes_to_human(16384000 * 1024)


def test_collect_without_swap(tmp_path) -> None:
    path = tmp_path / "meminfo"
    path.write_text("MemTotal: 1000 kB\nMemAvailable: 250 kB\nSwapTotal: 0 kB\nSwapFree: 0 kB\n")

    data = MemoryCollector(path).collect()

    assert data["swap_percent"] == 0.0
    assert data["used_percent"] == 75.0
    assert data["buffers"] is None
    assert data["buffers_human"] == "N/A"


def test_collect_falls_back_to_psutil(tmp_path) -> None:
    class VM:
        total = 1000
        available = 400
        buffers = 10
        cached = 20
        shared = 5

    class Swap:
        total = 0
        used = 0
        free = 0

    with patch("hoststats.collectors.memory.psutil.virtual_memory", return_value=VM()), patch(
        "hoststats.collectors.memory.psutil.swap_memory", return_value=Swap()
    ):
        data = MemoryCollector(tmp_path / "nonexistent").collect()

    assert data["used"] == 600
    assert data["used_percent"] == 60.0
    assert data["cached"] == 20
