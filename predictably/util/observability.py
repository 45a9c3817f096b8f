"""Logfire setup for the API and its Redis client.

Domain code logs through logfire directly:

    logfire.info("Vote recorded", question_id=question_id, value=value)

    with logfire.span("compute_user_stats", user_id=user_id):
        ...
"""

from typing import Any

import logfire
from fastapi import FastAPI

from predictably.config import ObservabilitySettings, Settings

SERVICE_NAME = "predictably-wrong"


def _should_send(observability: ObservabilitySettings) -> bool:
    """Explicit flag wins, otherwise send only when a token is configured."""
    if observability.send_to_logfire is not None:
        return observability.send_to_logfire
    return bool(observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire once at process start.

    Args:
        settings: Application settings
    """
    observability = settings.observability
    send_to_logfire = _should_send(observability)

    logfire.configure(
        service_name=SERVICE_NAME,
        service_version=settings.git_sha,
        environment=settings.environment,
        token=observability.logfire_token,
        send_to_logfire=send_to_logfire,
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )

    logfire.info(
        "Observability configured",
        service=SERVICE_NAME,
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
    )


def instrument_fastapi(app: FastAPI, identity_header: str = "X-User-Id") -> None:
    """Trace every request except health checks.

    The caller's user id is attached to the request span so a player's
    votes and predictions can be followed across requests.

    Args:
        app: FastAPI application instance
        identity_header: Header carrying the user id
    """

    def _request_attributes(request: Any, attributes: dict[str, Any]) -> dict[str, Any]:
        user_id = request.headers.get(identity_header)
        if user_id:
            return {**attributes, "user_id": user_id.strip()}
        return attributes

    logfire.instrument_fastapi(
        app,
        request_attributes_mapper=_request_attributes,
        excluded_urls="/health",
    )


def instrument_redis() -> None:
    """Trace Redis commands by key; values are never captured."""
    logfire.instrument_redis(capture_statement=False)
