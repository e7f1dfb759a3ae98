from .aggregator import SystemAggregator
from .latency_sampler import LatencySampler

__all__ = [
    "LatencySampler",
    "SystemAggregator",
]
