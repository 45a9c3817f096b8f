#!/usr/bin/env python3
"""Run the Predictably Wrong API under uvicorn.

Logfire is configured before uvicorn imports the app so that failures while
building the container are reported too.
"""

import sys

import logfire
import uvicorn

from predictably.config import Settings
from predictably.util.logging import setup_logging
from predictably.util.observability import configure_logfire

APP_FACTORY = "predictably.interface.api.app:create_app"


def main() -> int:
    settings = Settings()
    configure_logfire(settings)
    setup_logging(settings)

    logfire.info(
        "Starting API",
        host=settings.host,
        port=settings.port,
    )
    try:
        uvicorn.run(
            APP_FACTORY,
            factory=True,
            host=settings.host,
            port=settings.port,
            log_level="debug" if settings.debug else "info",
        )
    except Exception:
        logfire.exception("API failed to start")
        raise
    return 0


if __name__ == "__main__":
    sys.exit(main())
