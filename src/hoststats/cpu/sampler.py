"""CPU utilization sampler with retry and fallback policy."""

from __future__ import annotations

import logging
import math

from ..config import settings
from ..errors import InconsistentCounters, ParseError, UnavailableError
from .counters import UtilizationSample
from .platforms import Platform, detect_platform
from .sources import CpuSource, UtilitySummarySource, probe_source

log = logging.getLogger(__name__)


class CpuSampler:
    """Produce a point-in-time CPU utilization breakdown.

    The source is chosen once, at construction, by ``probe_source``. Each
    ``sample()`` call then:

    - retries once with a fresh snapshot pair on ``InconsistentCounters``
      and reports unavailable if it happens again;
    - switches to the ``top`` summary when the primary source becomes
      unreadable;
    - never raises: every failure becomes an unavailable sample.

    ``sample()`` blocks for ``interval`` seconds and is not cancellable.
    """

    def __init__(
        self,
        interval: float | None = None,
        *,
        source: CpuSource | None = None,
        fallback: CpuSource | None = None,
        platform: Platform | None = None,
    ) -> None:
        self.interval = settings.cpu_interval_seconds if interval is None else interval
        if not math.isfinite(self.interval) or self.interval < 0:
            raise ValueError("interval must be a finite number >= 0")
        self.platform = platform if platform is not None else detect_platform()
        self.source = source if source is not None else probe_source(self.platform)
        self.fallback = fallback

    def _fallback(self) -> CpuSource | None:
        if self.fallback is not None:
            return self.fallback
        if isinstance(self.source, UtilitySummarySource):
            return None
        candidate = UtilitySummarySource(self.platform)
        return candidate if candidate.is_available() else None

    def _sample_fallback(self, reason: str) -> UtilizationSample:
        fallback = self._fallback()
        if fallback is None:
            return UtilizationSample.unavailable(interval=self.interval, error=reason)

        log.warning("falling back to utility summary", extra={"source": fallback.name})
        try:
            return fallback.sample(self.interval)
        except (UnavailableError, ParseError) as exc:
            log.warning("fallback CPU source failed: %s", exc, extra={"source": fallback.name, "code": exc.code})
            return UtilizationSample.unavailable(
                interval=self.interval, source=fallback.name, error=str(exc)
            )

    def sample(self) -> UtilizationSample:
        if self.source is None:
            return self._sample_fallback("no CPU source available")

        last_error = ""
        for attempt in (1, 2):
            try:
                return self.source.sample(self.interval)
            except InconsistentCounters as exc:
                log.warning(
                    "inconsistent CPU counters: %s",
                    exc,
                    extra={"source": self.source.name, "code": exc.code, "attempt": attempt},
                )
                last_error = str(exc)
            except UnavailableError as exc:
                log.warning(
                    "CPU source unavailable: %s",
                    exc,
                    extra={"source": self.source.name, "code": exc.code},
                )
                if isinstance(self.source, UtilitySummarySource):
                    return UtilizationSample.unavailable(
                        interval=self.interval, source=self.source.name, error=str(exc)
                    )
                return self._sample_fallback(str(exc))
            except ParseError as exc:
                log.warning(
                    "CPU summary unparseable: %s",
                    exc,
                    extra={"source": self.source.name, "code": exc.code},
                )
                return UtilizationSample.unavailable(
                    interval=self.interval, source=self.source.name, error=str(exc)
                )

        return UtilizationSample.unavailable(
            interval=self.interval, source=self.source.name, error=last_error
        )


def sample_cpu(interval: float | None = None) -> UtilizationSample:
    """Probe a source and take one sample."""
    return CpuSampler(interval).sample()
