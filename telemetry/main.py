from __future__ import annotations

import logging
import tracemalloc
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from telemetry.api.routes import router
from telemetry.config import settings
from telemetry.engine import LatencySampler
from telemetry.exceptions import StatsUnavailable, TelemetryError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # ── startup ───────────────────────────────────────
    if settings.trace_heap and not tracemalloc.is_tracing():
        tracemalloc.start()

    sampler: LatencySampler | None = LatencySampler()
    try:
        sampler.enable(settings.sampler_resolution_ms)
    except StatsUnavailable:
        logger.exception("Event-loop sampler failed to start; /event-loop and /system disabled")
        sampler = None

    app.state.sampler = sampler
    logger.info("%s started", settings.app_name)

    yield

    # ── shutdown ──────────────────────────────────────
    if sampler is not None:
        await sampler.disable()
    app.state.sampler = None
    logger.info("%s shut down", settings.app_name)


app = FastAPI(title=settings.app_name, debug=settings.debug, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET"],
    allow_headers=["*"],
)


@app.exception_handler(TelemetryError)
async def telemetry_error_handler(request: Request, exc: TelemetryError) -> JSONResponse:
    logger.warning("%s %s failed: %s (%s)", request.method, request.url.path, exc.detail, exc.code)
    return JSONResponse(status_code=503, content=exc.to_dict())


app.include_router(router)
