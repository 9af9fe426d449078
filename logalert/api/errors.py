"""Exception handlers mapping workflow and connector errors to responses.

Every error response uses the failure envelope
``{"status": "failure", "error": "<text>", "data": {}}``.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from logalert.alerts.errors import (
    AlertError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from logalert.api.schemas.alert_schemas import failure
from logalert.connectors.base import ConnectorError

logger = logging.getLogger(__name__)

# ── Error class → HTTP status mapping ────────────────────────────────────

ERROR_STATUS: dict[type[AlertError], int] = {
    ValidationError: 422,
    NotFoundError: 404,
    ConflictError: 409,
}


def status_for_error(exc: AlertError) -> int:
    """Resolve a workflow error to an HTTP status, defaulting to 500."""
    for error_cls, status in ERROR_STATUS.items():
        if isinstance(exc, error_cls):
            return status
    return 500


async def alert_error_handler(request: Request, exc: AlertError) -> JSONResponse:
    return JSONResponse(status_code=status_for_error(exc), content=failure(str(exc)))


async def connector_error_handler(request: Request, exc: ConnectorError) -> JSONResponse:
    """Remote failures are 500s; the cause text is passed through."""
    logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content=failure(str(exc)))


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=failure(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    messages = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()))
        messages.append(f"{location}: {err.get('msg', 'invalid')}")
    return JSONResponse(status_code=422, content=failure("; ".join(messages)))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AlertError, alert_error_handler)
    app.add_exception_handler(ConnectorError, connector_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
