from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from telemetry import collectors
from telemetry.engine import LatencySampler, SystemAggregator
from telemetry.exceptions import StatsUnavailable
from telemetry.models import (
    CpuDescriptor,
    HealthSnapshot,
    LatencyStats,
    MemorySnapshot,
    SystemSnapshot,
    ThreadSnapshot,
)

logger = logging.getLogger(__name__)

router = APIRouter()


# ── dependencies ──────────────────────────────────────


def get_sampler(request: Request) -> LatencySampler:
    """Sampler created during lifespan; missing when it failed to start."""
    sampler = getattr(request.app.state, "sampler", None)
    if sampler is None:
        raise StatsUnavailable("event-loop sampler is not running")
    return sampler


def get_aggregator(sampler: LatencySampler = Depends(get_sampler)) -> SystemAggregator:
    return SystemAggregator(sampler)


# ── REST routes ───────────────────────────────────────


@router.get("/", response_class=PlainTextResponse)
async def hello() -> str:
    return "Hello World!"


@router.get("/health")
async def get_health() -> HealthSnapshot:
    return collectors.health()


@router.get("/cpu")
async def get_cpu() -> list[CpuDescriptor]:
    return collectors.cpu_info()


@router.get("/memory")
async def get_memory() -> MemorySnapshot:
    return collectors.memory()


@router.get("/event-loop")
async def get_event_loop(sampler: LatencySampler = Depends(get_sampler)) -> LatencyStats:
    return sampler.stats()


@router.get("/threads")
async def get_threads() -> ThreadSnapshot:
    return collectors.threads()


@router.get("/system")
async def get_system(aggregator: SystemAggregator = Depends(get_aggregator)) -> SystemSnapshot:
    return aggregator.snapshot()
