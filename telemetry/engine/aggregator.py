from __future__ import annotations

from telemetry import collectors
from telemetry.engine.latency_sampler import LatencySampler
from telemetry.models import SystemSnapshot


class SystemAggregator:
    """Builds a ``SystemSnapshot`` from every accessor and the sampler.

    Each source is read exactly once; the first failure propagates and the
    snapshot is not returned partially.
    """

    def __init__(self, sampler: LatencySampler) -> None:
        self._sampler = sampler

    def snapshot(self) -> SystemSnapshot:
        return SystemSnapshot(
            health=collectors.health(),
            cpu=collectors.cpu_info(),
            memory=collectors.memory(),
            event_loop=self._sampler.stats(),
            threads=collectors.threads(),
            load_average=collectors.load_average(),
        )
