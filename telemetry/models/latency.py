from __future__ import annotations

from telemetry.models.base import CamelModel


class LatencyStats(CamelModel):
    """Event-loop delay summary, in milliseconds."""

    min: float = 0.0
    max: float = 0.0
    mean: float = 0.0
    stddev: float = 0.0
