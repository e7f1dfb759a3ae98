from __future__ import annotations

from typing import Literal

from pydantic import Field

from telemetry.models.base import CamelModel
from telemetry.models.latency import LatencyStats


class HealthSnapshot(CamelModel):
    status: Literal["ok"] = "ok"
    uptime: float = 0.0


class CpuDescriptor(CamelModel):
    """One logical core.

    ``cores`` is always 1 and ``usage`` is always 0: neither socket topology
    nor utilisation sampling is implemented.
    """

    cores: int = 1
    model: str = ""
    speed: int = 0  # MHz
    usage: float = 0.0


class ProcessMemory(CamelModel):
    """Memory held by this process, in bytes."""

    rss: int = 0
    heap_total: int = 0
    heap_used: int = 0
    external: int = 0
    array_buffers: int = 0


class MemorySnapshot(ProcessMemory):
    """Process memory plus host free/total memory, in bytes."""

    free_memory: int = 0
    total_memory: int = 0


class ThreadSnapshot(CamelModel):
    pid: int
    uptime: float
    memory_usage: ProcessMemory
    active_handles: int = 0
    active_requests: int = 0


class SystemSnapshot(CamelModel):
    """Everything the single endpoints report, gathered in one pass."""

    health: HealthSnapshot
    cpu: list[CpuDescriptor] = Field(default_factory=list)
    memory: MemorySnapshot
    event_loop: LatencyStats
    threads: ThreadSnapshot
    load_average: tuple[float, float, float] = (0.0, 0.0, 0.0)
