"""Tests for telemetry.collectors — process and host accessors."""

from __future__ import annotations

import os
import time
import tracemalloc
from collections import namedtuple
from unittest.mock import patch

import psutil
import pytest

from telemetry.collectors import host, process
from telemetry.exceptions import MetricUnavailable

freq = namedtuple("freq", ["current", "min", "max"])


# ── health / uptime ────────────────────────────────────


class TestHealth:
    def test_status_ok(self):
        h = process.health()
        assert h.status == "ok"
        assert h.uptime >= 0

    def test_uptime_never_decreases(self):
        readings = [process.uptime() for _ in range(100)]
        assert readings == sorted(readings)

    def test_uptime_includes_time_before_import(self):
        created = psutil.Process().create_time()
        assert process.uptime() == pytest.approx(
            time.time() - created, abs=1.0
        )


# ── cpu ────────────────────────────────────────────────


class TestCpuInfo:
    def test_one_descriptor_per_logical_core(self):
        cpus = host.cpu_info()
        assert len(cpus) == psutil.cpu_count(logical=True)

    def test_cores_and_usage_are_placeholders(self):
        for cpu in host.cpu_info():
            assert cpu.cores == 1
            assert cpu.usage == 0
            assert cpu.speed >= 0

    def test_models_from_cpuinfo(self, tmp_path):
        cpuinfo = tmp_path / "cpuinfo"
        cpuinfo.write_text(
            "processor\t: 0\nmodel name\t: Alpha 9000\n\n"
            "processor\t: 1\nmodel name\t: Alpha 9000\n\n"
        )
        with (
            patch.object(host, "CPUINFO_PATH", cpuinfo),
            patch.object(psutil, "cpu_count", return_value=2),
            patch.object(psutil, "cpu_freq", side_effect=lambda percpu=False: (
                [freq(2400.0, 0, 0), freq(2600.0, 0, 0)] if percpu else freq(2500.0, 0, 0)
            )),
        ):
            cpus = host.cpu_info()

        assert [c.model for c in cpus] == ["Alpha 9000", "Alpha 9000"]
        assert [c.speed for c in cpus] == [2400, 2600]

    def test_model_and_speed_fallbacks(self, tmp_path):
        with (
            patch.object(host, "CPUINFO_PATH", tmp_path / "missing"),
            patch.object(host.platform, "processor", return_value="fallback-cpu"),
            patch.object(psutil, "cpu_count", return_value=3),
            patch.object(psutil, "cpu_freq", side_effect=lambda percpu=False: [] if percpu else None),
        ):
            cpus = host.cpu_info()

        assert len(cpus) == 3
        assert all(c.model == "fallback-cpu" for c in cpus)
        assert all(c.speed == 0 for c in cpus)

    def test_aggregate_speed_when_per_core_missing(self):
        with (
            patch.object(psutil, "cpu_count", return_value=2),
            patch.object(psutil, "cpu_freq", side_effect=lambda percpu=False: [] if percpu else freq(1800.0, 0, 0)),
        ):
            cpus = host.cpu_info()
        assert [c.speed for c in cpus] == [1800, 1800]

    def test_unknown_cpu_count_raises(self):
        with patch.object(psutil, "cpu_count", return_value=None):
            with pytest.raises(MetricUnavailable) as exc_info:
                host.cpu_info()
        assert exc_info.value.metric == "cpu"


# ── memory ─────────────────────────────────────────────


class TestMemory:
    def test_host_memory_bounds(self):
        m = host.memory()
        assert m.rss > 0
        assert 0 <= m.free_memory <= m.total_memory
        assert m.heap_used <= m.heap_total
        assert m.array_buffers == 0

    def test_heap_zero_without_tracing(self):
        if tracemalloc.is_tracing():
            pytest.skip("tracemalloc already active")
        m = process.process_memory()
        assert m.heap_total == 0
        assert m.heap_used == 0

    def test_heap_reported_when_tracing(self):
        already = tracemalloc.is_tracing()
        if not already:
            tracemalloc.start()
        try:
            blob = [bytes(1024) for _ in range(64)]
            m = process.process_memory()
        finally:
            if not already:
                tracemalloc.stop()
        assert len(blob) == 64
        assert 0 < m.heap_used <= m.heap_total

    def test_process_read_failure(self):
        with patch.object(psutil.Process, "memory_info", side_effect=psutil.AccessDenied()):
            with pytest.raises(MetricUnavailable) as exc_info:
                host.memory()
        assert exc_info.value.metric == "memory"

    def test_host_read_failure(self):
        with patch.object(psutil, "virtual_memory", side_effect=OSError("boom")):
            with pytest.raises(MetricUnavailable) as exc_info:
                host.memory()
        assert exc_info.value.metric == "memory"
        assert "boom" in exc_info.value.detail


# ── load average ───────────────────────────────────────


class TestLoadAverage:
    def test_triple_of_floats(self):
        load = host.load_average()
        assert len(load) == 3
        assert all(isinstance(v, float) and v >= 0 for v in load)

    def test_failure_raises(self):
        with patch.object(psutil, "getloadavg", side_effect=OSError("no loadavg")):
            with pytest.raises(MetricUnavailable) as exc_info:
                host.load_average()
        assert exc_info.value.metric == "loadAverage"


# ── threads ────────────────────────────────────────────


class TestThreads:
    def test_snapshot_fields(self):
        t = process.threads()
        assert t.pid == os.getpid()
        assert t.uptime >= 0
        assert t.memory_usage.rss > 0
        assert t.active_handles >= 0
        assert t.active_requests == 0  # no running loop in a sync test

    @pytest.mark.asyncio
    async def test_active_requests_inside_loop(self):
        t = process.threads()
        assert t.active_requests >= 1
