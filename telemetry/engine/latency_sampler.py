from __future__ import annotations

import asyncio
import logging
import math
import time
from typing import NamedTuple

from telemetry.exceptions import StatsUnavailable
from telemetry.models.latency import LatencyStats

logger = logging.getLogger(__name__)

NS_PER_MS = 1e6


class _Accumulator(NamedTuple):
    """Immutable running totals, in nanoseconds."""

    count: int = 0
    min: int = 0
    max: int = 0
    total: int = 0
    total_sq: int = 0

    def record(self, delay_ns: int) -> _Accumulator:
        if self.count == 0:
            return _Accumulator(1, delay_ns, delay_ns, delay_ns, delay_ns * delay_ns)
        return _Accumulator(
            self.count + 1,
            min(self.min, delay_ns),
            max(self.max, delay_ns),
            self.total + delay_ns,
            self.total_sq + delay_ns * delay_ns,
        )


class LatencySampler:
    """Passive observer of event-loop delay.

    A background task sleeps for ``resolution_ms`` and records how late the
    loop woke it up. Samples accumulate for the sampler's whole lifetime.

    The writer builds a new ``_Accumulator`` per sample and swaps the
    reference; ``stats()`` reads that reference once, so readers on any thread
    see a complete record without taking a lock.
    """

    def __init__(self) -> None:
        self._acc = _Accumulator()
        self._resolution_ms: float | None = None
        self._running = False
        self._task: asyncio.Task | None = None

    # ── lifecycle ────────────────────────────────────────

    def enable(self, resolution_ms: float = 10.0) -> None:
        if self._running:
            logger.warning("LatencySampler already enabled (resolution=%.1fms)", self._resolution_ms)
            return
        if resolution_ms <= 0:
            raise ValueError("resolution_ms must be positive")
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as exc:
            raise StatsUnavailable("no running event loop to instrument") from exc

        self._resolution_ms = resolution_ms
        self._running = True
        self._task = loop.create_task(self._loop(), name="latency-sampler")
        logger.info("LatencySampler started (resolution=%.1fms)", resolution_ms)

    async def disable(self) -> None:
        if not self._running:
            return
        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        logger.info("LatencySampler stopped after %d samples", self._acc.count)

    # ── reading ─────────────────────────────────────────

    def stats(self) -> LatencyStats:
        acc = self._acc
        if acc.count == 0:
            return LatencyStats()

        mean = acc.total / acc.count
        variance = max(0.0, acc.total_sq / acc.count - mean * mean)
        return LatencyStats(
            min=acc.min / NS_PER_MS,
            max=acc.max / NS_PER_MS,
            mean=mean / NS_PER_MS,
            stddev=math.sqrt(variance) / NS_PER_MS,
        )

    def record(self, delay_ns: int) -> None:
        """Add one delay sample; non-positive delays are dropped."""
        if delay_ns > 0:
            self._acc = self._acc.record(delay_ns)

    # ── internals ───────────────────────────────────────

    async def _loop(self) -> None:
        interval_ns = int(self._resolution_ms * NS_PER_MS)
        while self._running:
            due = time.perf_counter_ns() + interval_ns
            await asyncio.sleep(interval_ns / 1e9)
            self.record(time.perf_counter_ns() - due)

    # ── introspection ───────────────────────────────────

    @property
    def count(self) -> int:
        return self._acc.count

    @property
    def enabled(self) -> bool:
        return self._running

    @property
    def resolution_ms(self) -> float | None:
        return self._resolution_ms
