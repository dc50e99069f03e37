"""Tests for the sampler's retry and fallback policy."""

from __future__ import annotations

import pytest

from hoststats.cpu import CounterSnapshot, CpuSampler, CpuSource, ProcStatSource, UtilizationSample
from hoststats.errors import ParseError, UnavailableError


class ScriptedStatSource(ProcStatSource):
    """ProcStatSource whose captures come from a list."""

    def __init__(self, captures):
        super().__init__("/nonexistent")
        self.captures = list(captures)

    def capture(self) -> CounterSnapshot:
        item = self.captures.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


class ScriptedSource(CpuSource):
    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.calls = 0

    @property
    def name(self) -> str:
        return "scripted"

    def sample(self, interval: float) -> UtilizationSample:
        self.calls += 1
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


PREV = CounterSnapshot(user=100, system=50, idle=800, iowait=50)
CURR = CounterSnapshot(user=150, system=100, idle=850, iowait=60)
WRAPPED = CounterSnapshot(user=10, system=100, idle=850, iowait=60)


def test_sample_ok() -> None:
    sampler = CpuSampler(0.0, source=ScriptedStatSource([PREV, CURR]))
    sample = sampler.sample()
    assert sample.status == "ok"
    assert sample.busy == pytest.approx(68.75)


def test_inconsistent_counters_retried_once() -> None:
    source = ScriptedStatSource([PREV, WRAPPED, PREV, CURR])
    sample = CpuSampler(0.0, source=source).sample()

    assert source.captures == []
    assert sample.status == "ok"
    assert sample.user == pytest.approx(31.25)


def test_inconsistent_counters_twice_is_unavailable() -> None:
    fallback = ScriptedSource([UtilizationSample.approximate(50.0, interval=0.0, source="top")])
    source = ScriptedStatSource([PREV, WRAPPED, PREV, WRAPPED])
    sample = CpuSampler(0.0, source=source, fallback=fallback).sample()

    assert sample.status == "unavailable"
    assert sample.available is False
    assert sample.busy is None
    assert "went backwards" in (sample.error or "")
    assert fallback.calls == 0


def test_unavailable_primary_uses_fallback() -> None:
    fallback = ScriptedSource([UtilizationSample.approximate(42.0, interval=0.0, source="top")])
    source = ScriptedStatSource([UnavailableError("permission denied")])
    sample = CpuSampler(0.0, source=source, fallback=fallback).sample()

    assert fallback.calls == 1
    assert sample.status == "approximate"
    assert sample.busy == pytest.approx(42.0)
    assert sample.user is None
    assert sample.system is None
    assert sample.iowait is None


def test_fallback_parse_error_is_unknown() -> None:
    fallback = ScriptedSource([ParseError("no token")])
    source = ScriptedStatSource([UnavailableError("gone")])
    sample = CpuSampler(0.0, source=source, fallback=fallback).sample()

    assert sample.status == "unavailable"
    assert sample.busy is None
    assert sample.to_dict()["busy"] is None


def test_summary_source_parse_error_is_unknown() -> None:
    sampler = CpuSampler(0.0, source=ScriptedSource([ParseError("no token")]))
    sample = sampler.sample()
    assert sample.status == "unavailable"


def test_no_source_and_no_fallback(monkeypatch) -> None:
    monkeypatch.setattr("hoststats.cpu.sampler.probe_source", lambda platform: None)
    monkeypatch.setattr("hoststats.cpu.sources.shutil.which", lambda name: None)
    sample = CpuSampler(0.0).sample()
    assert sample.status == "unavailable"
    assert sample.error == "no CPU source available"


def test_negative_interval_rejected() -> None:
    with pytest.raises(ValueError):
        CpuSampler(-1.0, source=ScriptedSource([]))


@pytest.mark.parametrize("interval", [float("inf"), float("nan")])
def test_non_finite_interval_rejected(interval: float) -> None:
    with pytest.raises(ValueError):
        CpuSampler(interval, source=ScriptedSource([]))


def test_default_interval_from_settings() -> None:
    from hoststats.config import settings

    sampler = CpuSampler(source=ScriptedSource([]))
    assert sampler.interval == settings.cpu_interval_seconds
