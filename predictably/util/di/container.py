"""Production container and FastAPI wiring."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from predictably.util.di import PROVIDERS


def create_container() -> AsyncContainer:
    """Build the production container: Redis persistence, real config."""
    providers = [base.implementation(use_mock=False)() for base in PROVIDERS]
    # FastapiProvider exposes the current Request to REQUEST-scoped providers
    return make_async_container(*providers, FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach the container to the app; routes resolve through DishkaRoute."""
    setup_dishka(container, app)
