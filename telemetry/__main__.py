from __future__ import annotations

import uvicorn

from telemetry.config import settings


def main() -> None:
    uvicorn.run(
        "telemetry.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level,
    )


if __name__ == "__main__":
    main()
