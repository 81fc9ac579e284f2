# core/error_handlers.py
"""Exception handlers translating service errors into JSON responses."""
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from core.errors import ServiceError, Unauthenticated, InvalidInput, StoreUnavailable
from core.logging_config import get_logger

logger = get_logger("error_handlers")


def _error_body(exc: ServiceError) -> dict:
    return {"error": exc.code, "message": exc.message}


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """Handler for errors raised by the auth guard and the db managers."""
    logger.info(
        f"{exc.code} on {request.method} {request.url.path}",
        extra={"status_code": exc.status_code, "path": request.url.path},
    )

    headers = None
    if isinstance(exc, Unauthenticated):
        headers = {"WWW-Authenticate": "Bearer"}

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc),
        headers=headers,
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handler for request validation errors (malformed ids, missing fields)."""
    errors = []
    for error in exc.errors():
        errors.append({
            "field": " -> ".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
        })

    logger.warning(f"Validation error on {request.method} {request.url.path}")

    error = InvalidInput()
    body = _error_body(error)
    body["validation_errors"] = errors
    return JSONResponse(status_code=error.status_code, content=body)


async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Any store failure is reported as StoreUnavailable; details stay in the log."""
    logger.error(
        f"Database error on {request.method} {request.url.path}: {type(exc).__name__}",
        exc_info=exc,
    )

    error = StoreUnavailable()
    return JSONResponse(status_code=error.status_code, content=_error_body(error))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_exception_handler)
