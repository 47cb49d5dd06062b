"""API error handling: converts domain errors into JSON responses.

Status code mapping:
- ``ValidationError`` and request-body validation failures → 400
- ``NotFoundError`` → 404
- ``ConflictError`` → 409

Every body has the shape ``{"detail": "...", "code": "..."}``. Anything else
propagates and is served as a 500 by the framework.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from event_scheduler.domain.errors import SchedulingError

logger = logging.getLogger(__name__)


async def _handle_scheduling_error(
    request: Request,
    exc: SchedulingError,
) -> JSONResponse:
    logger.info(
        "%s %s rejected (%s): %s",
        request.method,
        request.url.path,
        exc.code,
        exc.message,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "code": exc.code},
    )


async def _handle_request_validation(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Malformed bodies are a client error, reported as 400 rather than 422."""
    messages = [
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
        for err in exc.errors()
    ]
    logger.info("%s %s invalid request: %s", request.method, request.url.path, messages)
    return JSONResponse(
        status_code=400,
        content={"detail": "; ".join(messages), "code": "invalid-request"},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Attach the domain exception handlers to *app*."""
    app.add_exception_handler(SchedulingError, _handle_scheduling_error)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _handle_request_validation)  # type: ignore[arg-type]
