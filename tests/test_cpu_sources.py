"""Tests for CPU counter sources and source selection."""

from __future__ import annotations

import subprocess
import time
from unittest.mock import patch

import pytest

from hoststats.cpu import (
    Platform,
    ProcStatSource,
    UtilitySummarySource,
    detect_platform,
    parse_summary_line,
    probe_source,
)
from hoststats.errors import ParseError, UnavailableError

LINUX_TOP = """\
top - 10:01:02 up 3 days,  2:03,  1 user,  load average: 0.08, 0.03, 0.01
Tasks: 101 total,   1 running, 100 sleeping,   0 stopped,   0 zombie
%Cpu(s):  3.1 us,  1.0 sy,  0.0 ni, 95.8 id,  0.1 wa,  0.0 hi,  0.0 si,  0.0 st
MiB Mem :   7957.6 total,   5432.1 free,   1024.3 used,   1501.2 buff/cache
"""

DARWIN_TOP = """\
Processes: 412 total, 2 running, 410 sleeping, 2012 threads
Load Avg: 1.52, 1.71, 1.80
CPU usage: 5.26% user, 10.52% sys, 84.21% idle
"""


def _completed(stdout: str, returncode: int = 0) -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(args=["top"], returncode=returncode, stdout=stdout, stderr="")


@pytest.mark.parametrize(
    ("sys_platform", "expected"),
    [
        ("linux", Platform.LINUX),
        ("darwin", Platform.DARWIN),
        ("freebsd14", Platform.BSD),
        ("openbsd7", Platform.BSD),
        ("win32", Platform.OTHER),
    ],
)
def test_detect_platform(sys_platform: str, expected: Platform) -> None:
    assert detect_platform(sys_platform) is expected


class TestParseSummaryLine:
    def test_busy_token(self):
        assert parse_summary_line("busy 42.0%") == pytest.approx(42.0)

    def test_busy_token_after_value(self):
        assert parse_summary_line("cpu 17.5% busy") == pytest.approx(17.5)

    def test_procps_idle(self):
        line = "%Cpu(s):  3.1 us,  1.0 sy,  0.0 ni, 95.8 id,  0.1 wa,  0.0 hi,  0.0 si,  0.0 st"
        assert parse_summary_line(line) == pytest.approx(4.2)

    def test_old_procps_idle(self):
        line = "Cpu(s):  2.0%us,  1.0%sy,  0.0%ni, 96.5%id,  0.5%wa,  0.0%hi,  0.0%si,  0.0%st"
        assert parse_summary_line(line) == pytest.approx(3.5)

    def test_darwin_idle(self):
        assert parse_summary_line("CPU usage: 5.26% user, 10.52% sys, 84.21% idle") == pytest.approx(
            15.79
        )

    def test_comma_decimal(self):
        assert parse_summary_line("%Cpu(s):  3,1 us,  1,0 sy, 95,9 id") == pytest.approx(4.1)

    def test_no_token(self):
        with pytest.raises(ParseError):
            parse_summary_line("Tasks: 101 total, 1 running")


class TestProcStatSource:
    def test_capture_reads_first_line(self, tmp_path):
        stat = tmp_path / "stat"
        stat.write_text("cpu  10 0 5 100 1 0 0 0 0 0\ncpu0 10 0 5 100 1 0 0 0 0 0\n")
        snap = ProcStatSource(stat).capture()
        assert snap.user == 10
        assert snap.idle == 100

    def test_capture_missing_file(self, tmp_path):
        with pytest.raises(UnavailableError):
            ProcStatSource(tmp_path / "missing").capture()

    def test_sample_waits_for_interval(self, tmp_path):
        stat = tmp_path / "stat"
        stat.write_text("cpu  10 0 5 100 1 0 0 0 0 0\n")
        interval = 0.05

        start = time.monotonic()
        sample = ProcStatSource(stat).sample(interval)
        elapsed = time.monotonic() - start

        assert elapsed >= interval
        assert elapsed < interval + 1.0
        assert sample.total_delta == 0
        assert sample.busy == 0.0
        assert sample.source == "proc_stat"


class TestUtilitySummarySource:
    def test_linux_output(self):
        source = UtilitySummarySource(Platform.LINUX)
        with patch("hoststats.cpu.sources.subprocess.run", return_value=_completed(LINUX_TOP)) as run:
            sample = source.sample(1.0)

        run.assert_called_once()
        assert run.call_args.args[0] == ["top", "-bn1"]
        assert sample.busy == pytest.approx(4.2)
        assert sample.status == "approximate"
        assert sample.user is None
        assert sample.system is None
        assert sample.iowait is None

    def test_darwin_output(self):
        source = UtilitySummarySource(Platform.DARWIN)
        with patch("hoststats.cpu.sources.subprocess.run", return_value=_completed(DARWIN_TOP)):
            sample = source.sample(1.0)
        assert sample.busy == pytest.approx(15.79)

    def test_busy_summary(self):
        source = UtilitySummarySource(Platform.LINUX)
        with patch("hoststats.cpu.sources.subprocess.run", return_value=_completed("CPU busy 42.0%\n")):
            sample = source.sample(1.0)
        assert sample.busy == pytest.approx(42.0)
        assert sample.to_dict()["user"] is None

    def test_bare_busy_line(self):
        source = UtilitySummarySource(Platform.LINUX)
        with patch("hoststats.cpu.sources.subprocess.run", return_value=_completed("busy 42.0%\n")):
            sample = source.sample(1.0)
        assert sample.busy == pytest.approx(42.0)
        assert sample.status == "approximate"
        assert sample.user is None

    def test_cpu_line_preferred_over_other_lines(self):
        output = "Tasks: 3 total\n  12 root  5.0% busy worker\n%Cpu(s):  3.1 us,  1.0 sy, 95.8 id\n"
        source = UtilitySummarySource(Platform.LINUX)
        with patch("hoststats.cpu.sources.subprocess.run", return_value=_completed(output)):
            sample = source.sample(1.0)
        assert sample.busy == pytest.approx(4.2)

    def test_unparseable_output(self):
        source = UtilitySummarySource(Platform.LINUX)
        with patch("hoststats.cpu.sources.subprocess.run", return_value=_completed("nothing here\n")):
            with pytest.raises(ParseError):
                source.sample(1.0)

    def test_missing_utility(self):
        source = UtilitySummarySource(Platform.LINUX)
        with patch("hoststats.cpu.sources.subprocess.run", side_effect=FileNotFoundError("top")):
            with pytest.raises(UnavailableError):
                source.sample(1.0)

    def test_nonzero_exit(self):
        source = UtilitySummarySource(Platform.LINUX)
        with patch("hoststats.cpu.sources.subprocess.run", return_value=_completed("", returncode=1)):
            with pytest.raises(UnavailableError):
                source.sample(1.0)

    def test_no_command_for_platform(self):
        source = UtilitySummarySource(Platform.OTHER)
        assert source.is_available() is False
        with pytest.raises(UnavailableError):
            source.sample(1.0)


class TestProbeSource:
    def test_linux_prefers_proc_stat(self, tmp_path):
        stat = tmp_path / "stat"
        stat.write_text("cpu  1 2 3 4\n")
        source = probe_source(Platform.LINUX, stat_path=stat)
        assert isinstance(source, ProcStatSource)

    def test_linux_without_proc_stat_uses_top(self, tmp_path):
        with patch("hoststats.cpu.sources.shutil.which", return_value="/usr/bin/top"):
            source = probe_source(Platform.LINUX, stat_path=tmp_path / "missing")
        assert isinstance(source, UtilitySummarySource)

    def test_darwin_uses_top(self):
        with patch("hoststats.cpu.sources.shutil.which", return_value="/usr/bin/top"):
            source = probe_source(Platform.DARWIN)
        assert isinstance(source, UtilitySummarySource)
        assert source.command == ["top", "-l", "1", "-s", "0"]

    def test_nothing_available(self, tmp_path):
        with patch("hoststats.cpu.sources.shutil.which", return_value=None):
            assert probe_source(Platform.LINUX, stat_path=tmp_path / "missing") is None
