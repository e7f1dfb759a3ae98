from __future__ import annotations

import platform
from pathlib import Path

import psutil

from telemetry.collectors.process import process_memory
from telemetry.exceptions import MetricUnavailable
from telemetry.models import CpuDescriptor, MemorySnapshot

CPUINFO_PATH = Path("/proc/cpuinfo")


def cpu_info() -> list[CpuDescriptor]:
    """One descriptor per logical core."""
    try:
        count = psutil.cpu_count(logical=True)
    except (psutil.Error, OSError) as exc:
        raise MetricUnavailable("cpu", f"cannot count CPUs: {exc}") from exc
    if not count:
        raise MetricUnavailable("cpu", "logical CPU count is not reported")

    models = _cpu_models()
    speeds = _cpu_speeds(count)
    fallback_model = platform.processor() or platform.machine()

    return [
        CpuDescriptor(
            cores=1,
            model=models[i] if i < len(models) else fallback_model,
            speed=speeds[i],
            usage=0.0,
        )
        for i in range(count)
    ]


def memory() -> MemorySnapshot:
    proc_mem = process_memory()
    try:
        vm = psutil.virtual_memory()
    except (psutil.Error, OSError) as exc:
        raise MetricUnavailable("memory", f"cannot read host memory: {exc}") from exc
    return MemorySnapshot(
        **proc_mem.model_dump(),
        free_memory=vm.available,
        total_memory=vm.total,
    )


def load_average() -> tuple[float, float, float]:
    try:
        one, five, fifteen = psutil.getloadavg()
    except (psutil.Error, OSError) as exc:
        raise MetricUnavailable("loadAverage", f"cannot read load average: {exc}") from exc
    return (float(one), float(five), float(fifteen))


def _cpu_models() -> list[str]:
    """Per-processor model names from /proc/cpuinfo (Linux only)."""
    try:
        text = CPUINFO_PATH.read_text(errors="replace")
    except OSError:
        return []

    models: list[str] = []
    for line in text.splitlines():
        key, sep, value = line.partition(":")
        if sep and key.strip() == "model name":
            models.append(value.strip())
    return models


def _cpu_speeds(count: int) -> list[int]:
    """Current clock per core in MHz; 0 where the platform reports nothing."""
    try:
        per_cpu = psutil.cpu_freq(percpu=True) or []
    except (psutil.Error, OSError, NotImplementedError):
        per_cpu = []
    if len(per_cpu) == count:
        return [int(f.current) for f in per_cpu]

    try:
        overall = psutil.cpu_freq()
    except (psutil.Error, OSError, NotImplementedError):
        overall = None
    speed = int(overall.current) if overall else 0
    return [speed] * count
