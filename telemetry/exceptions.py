from __future__ import annotations


class TelemetryError(Exception):
    """Base for telemetry reads that could not be served."""

    code: str = "telemetry_error"

    def __init__(self, metric: str, detail: str = "") -> None:
        self.metric = metric
        self.detail = detail or f"{metric} is unavailable"
        super().__init__(self.detail)

    def to_dict(self) -> dict:
        return {"detail": self.detail, "code": self.code, "metric": self.metric}


class MetricUnavailable(TelemetryError):
    """A platform read failed or is not supported on this host."""

    code = "metric_unavailable"


class StatsUnavailable(TelemetryError):
    """The event-loop latency sampler could not be initialised."""

    code = "stats_unavailable"

    def __init__(self, detail: str = "") -> None:
        super().__init__("eventLoop", detail or "event-loop delay sampling is unavailable")
