from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # --- app ---
    app_name: str = "Service Telemetry"
    debug: bool = False
    log_level: str = "info"

    # --- sampler ---
    sampler_resolution_ms: float = 10.0  # event-loop probe period
    trace_heap: bool = False  # start tracemalloc so heapTotal/heapUsed are reported

    # --- server ---
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: list[str] = ["*"]

    model_config = {"env_file": ".env", "env_prefix": "TELEMETRY_"}


settings = Settings()
