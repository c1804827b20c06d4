"""Translate stockroom failures into HTTP responses."""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError

from stockroom.shared.exceptions import ConflictError, OperationCancelled
from stockroom.shared.validation import group_errors

logger = structlog.get_logger(__name__)

# Non-standard, borrowed from nginx: the client closed the request.
CLIENT_CLOSED_REQUEST = 499


def error_messages(exc):
    """The protean-style messages mapping carried by ``exc``.

    Not every protean release sets ``messages`` on ``ObjectNotFoundError``;
    the mapping is then the first constructor argument.
    """
    messages = getattr(exc, "messages", None)
    if messages:
        return messages
    return exc.args[0] if exc.args else str(exc)


def first_message(messages):
    """Pick a human-readable line out of a protean-style messages mapping."""
    if isinstance(messages, dict):
        for value in messages.values():
            if isinstance(value, (list, tuple)) and value:
                return str(value[0])
            if value:
                return str(value)
    return str(messages)


async def validation_failed(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"errors": error_messages(exc)})


async def request_malformed(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"errors": group_errors(exc.errors())})


async def not_found(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": first_message(error_messages(exc))})


async def conflict(request: Request, exc: ConflictError) -> JSONResponse:
    messages = error_messages(exc)
    return JSONResponse(status_code=409, content={"detail": first_message(messages), "errors": messages})


async def cancelled(request: Request, exc: OperationCancelled) -> JSONResponse:
    return JSONResponse(status_code=CLIENT_CLOSED_REQUEST, content={"detail": first_message(error_messages(exc))})


async def unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error", path=request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "An unexpected error occurred"})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, validation_failed)
    app.add_exception_handler(RequestValidationError, request_malformed)
    app.add_exception_handler(ObjectNotFoundError, not_found)
    app.add_exception_handler(ConflictError, conflict)
    app.add_exception_handler(OperationCancelled, cancelled)
    app.add_exception_handler(Exception, unexpected)
