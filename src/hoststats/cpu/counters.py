"""CPU counter snapshots and the utilization derivation."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any

from ..errors import InconsistentCounters, UnavailableError

# Column order of the aggregate "cpu" line in /proc/stat.
COUNTER_FIELDS = (
    "user",
    "nice",
    "system",
    "idle",
    "iowait",
    "irq",
    "softirq",
    "steal",
    "guest",
    "guest_nice",
)

# guest / guest_nice are already included in user / nice by the kernel,
# so only these eight make up the total.
CATEGORIES = COUNTER_FIELDS[:8]

STATUS_OK = "ok"
STATUS_APPROXIMATE = "approximate"
STATUS_UNAVAILABLE = "unavailable"


@dataclass(frozen=True, slots=True)
class CounterSnapshot:
    """Cumulative CPU time-in-state counters read at one instant."""

    user: int = 0
    nice: int = 0
    system: int = 0
    idle: int = 0
    iowait: int = 0
    irq: int = 0
    softirq: int = 0
    steal: int = 0
    guest: int = 0
    guest_nice: int = 0

    def as_dict(self) -> dict[str, int]:
        return asdict(self)


def parse_stat_line(line: str, *, source: str = "/proc/stat") -> CounterSnapshot:
    """Parse ``cpu  u n s i w x y z g gn`` into a snapshot.

    Absent trailing columns are treated as zero. Anything that is not a
    non-negative integer makes the source unusable.
    """
    parts = line.split()
    if not parts or parts[0] != "cpu":
        raise UnavailableError(f"unexpected counter line: {line.strip()[:60]!r}", source=source)

    values: list[int] = []
    for token in parts[1 : len(COUNTER_FIELDS) + 1]:
        try:
            value = int(token)
        except ValueError:
            raise UnavailableError(f"non-numeric counter {token!r}", source=source) from None
        if value < 0:
            raise UnavailableError(f"negative counter {value}", source=source)
        values.append(value)

    if not values:
        raise UnavailableError("counter line has no columns", source=source)

    return CounterSnapshot(*values)


@dataclass(frozen=True, slots=True)
class UtilizationSample:
    """Percentage breakdown derived from two snapshots.

    Percentages are kept at full precision; ``to_dict`` rounds them to one
    decimal for output. ``None`` means "unknown", which is deliberately
    different from ``0.0``.
    """

    busy: float | None
    user: float | None = None
    nice: float | None = None
    system: float | None = None
    idle: float | None = None
    iowait: float | None = None
    irq: float | None = None
    softirq: float | None = None
    steal: float | None = None
    total_delta: int | None = None
    interval: float = 0.0
    source: str = ""
    status: str = STATUS_OK
    error: str | None = None

    @property
    def available(self) -> bool:
        return self.status != STATUS_UNAVAILABLE

    @classmethod
    def approximate(cls, busy: float, *, interval: float, source: str) -> UtilizationSample:
        return cls(busy=busy, interval=interval, source=source, status=STATUS_APPROXIMATE)

    @classmethod
    def unavailable(
        cls, *, interval: float = 0.0, source: str = "", error: str | None = None
    ) -> UtilizationSample:
        return cls(
            busy=None, interval=interval, source=source, status=STATUS_UNAVAILABLE, error=error
        )

    def category_percentages(self) -> dict[str, float | None]:
        return {name: getattr(self, name) for name in CATEGORIES}

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name == "busy" or f.name in CATEGORIES:
                value = None if value is None else round(value, 1)
            data[f.name] = value
        return data


def compute_utilization(
    prev: CounterSnapshot,
    curr: CounterSnapshot,
    *,
    interval: float = 0.0,
    source: str = "/proc/stat",
) -> UtilizationSample:
    """Derive utilization percentages from a pair of snapshots."""
    for name in COUNTER_FIELDS:
        before = getattr(prev, name)
        after = getattr(curr, name)
        if after < before:
            raise InconsistentCounters(
                f"{name} counter went backwards ({before} -> {after})", source=source
            )

    deltas = {name: getattr(curr, name) - getattr(prev, name) for name in CATEGORIES}
    total = sum(deltas.values())

    if total == 0:
        zeros = {name: 0.0 for name in CATEGORIES}
        return UtilizationSample(
            busy=0.0, total_delta=0, interval=interval, source=source, **zeros
        )

    pct = {name: 100.0 * delta / total for name, delta in deltas.items()}
    return UtilizationSample(
        busy=100.0 - pct["idle"],
        total_delta=total,
        interval=interval,
        source=source,
        **pct,
    )
