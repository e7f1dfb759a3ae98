from __future__ import annotations

import os
import time
import tracemalloc

import psutil

from telemetry.collectors.introspection import (
    active_handles,
    active_requests,
    count_or_zero,
)
from telemetry.exceptions import MetricUnavailable
from telemetry.models import HealthSnapshot, ProcessMemory, ThreadSnapshot


def _process_start_offset() -> float:
    """Seconds the process had already been running when this module loaded."""
    try:
        created = psutil.Process().create_time()
    except (psutil.Error, OSError):
        return 0.0
    return max(0.0, time.time() - created)


_START_OFFSET = _process_start_offset()
_MONOTONIC_BASE = time.monotonic()


def uptime() -> float:
    """Process uptime in seconds.

    Anchored to the process creation time once, then advanced with the
    monotonic clock so wall-clock adjustments never make it go backwards.
    """
    return _START_OFFSET + (time.monotonic() - _MONOTONIC_BASE)


def health() -> HealthSnapshot:
    return HealthSnapshot(status="ok", uptime=uptime())


def process_memory(proc: psutil.Process | None = None) -> ProcessMemory:
    proc = proc or psutil.Process()
    try:
        mem = proc.memory_info()
    except (psutil.Error, OSError) as exc:
        raise MetricUnavailable("memory", f"cannot read process memory: {exc}") from exc

    # heap figures come from tracemalloc and stay 0 unless it is tracing
    heap_used, heap_total = (0, 0)
    if tracemalloc.is_tracing():
        heap_used, heap_total = tracemalloc.get_traced_memory()

    return ProcessMemory(
        rss=mem.rss,
        heap_total=heap_total,
        heap_used=heap_used,
        external=getattr(mem, "shared", 0),
        array_buffers=0,
    )


def threads() -> ThreadSnapshot:
    proc = psutil.Process()
    return ThreadSnapshot(
        pid=os.getpid(),
        uptime=uptime(),
        memory_usage=process_memory(proc),
        active_handles=count_or_zero(active_handles(proc)),
        active_requests=count_or_zero(active_requests()),
    )
