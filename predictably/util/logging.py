"""Stdlib logging for third-party libraries.

Application events go through logfire; this only controls what uvicorn
and the Redis client print.
"""

import logging
import sys

from predictably.config import Settings

# Loggers that are noisy at INFO during normal play
QUIET_LOGGERS = ("redis", "uvicorn.access")


def setup_logging(settings: Settings) -> None:
    """Configure root logging from settings.

    Args:
        settings: Application settings
    """
    level = logging.DEBUG if settings.debug else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger("predictably").setLevel(level)

    logging.getLogger(__name__).info(
        "Logging configured for %s at %s",
        settings.environment,
        logging.getLevelName(level),
    )
