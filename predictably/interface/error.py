"""Interface layer errors and their HTTP mapping."""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from predictably.domain.error import (
    BusinessRuleViolationError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from predictably.persistence.error import PersistenceError, TransactionConflictError


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def _not_found(request: Request, exc: NotFoundError) -> JSONResponse:
    return _error(status.HTTP_404_NOT_FOUND, f"{exc.resource} not found")


async def _validation(request: Request, exc: ValidationError) -> JSONResponse:
    return _error(status.HTTP_400_BAD_REQUEST, str(exc))


async def _business_rule(
    request: Request, exc: BusinessRuleViolationError
) -> JSONResponse:
    return _error(status.HTTP_409_CONFLICT, str(exc))


async def _domain(request: Request, exc: DomainError) -> JSONResponse:
    return _error(status.HTTP_400_BAD_REQUEST, str(exc))


async def _conflict(request: Request, exc: TransactionConflictError) -> JSONResponse:
    logfire.warn("Transaction conflict", path=request.url.path, keys=list(exc.keys))
    return _error(
        status.HTTP_409_CONFLICT, "Concurrent update in progress, please retry"
    )


async def _persistence(request: Request, exc: PersistenceError) -> JSONResponse:
    logfire.error("Storage failure", path=request.url.path, error=str(exc))
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_error_handlers(app: FastAPI) -> None:
    """Map domain and persistence errors to JSON error responses.

    Starlette picks the handler of the most specific class in the
    exception's MRO, so subclasses win over their bases.
    """
    app.add_exception_handler(NotFoundError, _not_found)  # type: ignore[arg-type]
    app.add_exception_handler(ValidationError, _validation)  # type: ignore[arg-type]
    app.add_exception_handler(
        BusinessRuleViolationError, _business_rule  # type: ignore[arg-type]
    )
    app.add_exception_handler(DomainError, _domain)  # type: ignore[arg-type]
    app.add_exception_handler(
        TransactionConflictError, _conflict  # type: ignore[arg-type]
    )
    app.add_exception_handler(PersistenceError, _persistence)  # type: ignore[arg-type]
