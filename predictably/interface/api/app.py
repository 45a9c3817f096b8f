"""FastAPI application."""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from dishka import AsyncContainer
from fastapi import FastAPI

from predictably.config import Settings
from predictably.interface.api.routes import (
    health,
    jobs,
    predictions,
    questions,
    users,
    votes,
)
from predictably.interface.error import register_error_handlers
from predictably.util.di.container import create_container, setup_di
from predictably.util.observability import instrument_fastapi


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Close the DI container, and with it the Redis pool, on shutdown."""
    yield
    await app.state.dishka_container.close()


def create_app(
    container: Optional[AsyncContainer] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container, production container when omitted
        settings: Settings for the app itself, loaded from the environment when omitted
    """
    app_instance = FastAPI(
        title="Predictably Wrong API",
        description="Backend API for Predictably Wrong - vote on a statement, then predict how the crowd voted",
        version="0.1.0",
        lifespan=lifespan,
    )

    settings = settings or Settings()
    # Request spans carry the caller from the configured identity header
    instrument_fastapi(app_instance, identity_header=settings.identity.header_name)

    setup_di(app_instance, container or create_container())
    register_error_handlers(app_instance)

    app_instance.include_router(health.router)
    app_instance.include_router(votes.router)
    app_instance.include_router(predictions.router)
    app_instance.include_router(users.router)
    app_instance.include_router(questions.router)
    app_instance.include_router(jobs.router)

    return app_instance
