"""
Terminal error handler translating any raised error into an HTTP response.

- ``HttpError``: its own status, body ``{"status": <int>}``
- schema validation errors: 400, body ``{"status": "400 Bad Request"}``
- storage engine errors: 406, body ``{"status": "406 Not accepted"}``
- anything else: 500, body ``{"error": <message>}``

The descriptive message travels in the ``X-Status-Message`` header, never in
the body.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.exc import DBAPIError

from app.errors import HttpError
from app.utils.logger import setup_logger

logger = setup_logger("middleware.error")

STATUS_MESSAGE_HEADER = "X-Status-Message"


def _status_response(status: int, status_message: str, body: dict) -> JSONResponse:
    return JSONResponse(
        status_code=status,
        content=body,
        headers={STATUS_MESSAGE_HEADER: status_message},
    )


async def handle_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"{type(exc).__name__}: {exc}", exc_info=not isinstance(exc, HttpError))

    if isinstance(exc, HttpError):
        return _status_response(exc.status, exc.message, {"status": exc.status})

    if isinstance(exc, (RequestValidationError, ValidationError)):
        return _status_response(400, "Bad Request", {"status": "400 Bad Request"})

    if isinstance(exc, DBAPIError):
        return _status_response(406, "Not accepted", {"status": "406 Not accepted"})

    return JSONResponse(status_code=500, content={"error": str(exc)})


def register_error_handlers(app: FastAPI) -> None:
    for error_kind in (
        HttpError,
        RequestValidationError,
        ValidationError,
        DBAPIError,
        Exception,
    ):
        app.add_exception_handler(error_kind, handle_error)
