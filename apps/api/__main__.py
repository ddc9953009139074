"""Run the API server: ``python -m apps.api``."""

import uvicorn

from core.config import settings

# Time allowed for in-flight requests to drain on shutdown
GRACEFUL_SHUTDOWN_SECONDS = 30


def run() -> None:
    uvicorn.run(
        "apps.api.main:app",
        host="0.0.0.0",
        port=settings.port,
        log_level=settings.log_level.lower(),
        timeout_graceful_shutdown=GRACEFUL_SHUTDOWN_SECONDS,
    )


if __name__ == "__main__":
    run()
