from .latency import LatencyStats
from .metrics import (
    CpuDescriptor,
    HealthSnapshot,
    MemorySnapshot,
    ProcessMemory,
    SystemSnapshot,
    ThreadSnapshot,
)

__all__ = [
    "CpuDescriptor",
    "HealthSnapshot",
    "LatencyStats",
    "MemorySnapshot",
    "ProcessMemory",
    "SystemSnapshot",
    "ThreadSnapshot",
]
