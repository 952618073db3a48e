"""Global exception handlers for FastAPI."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from starlette.responses import JSONResponse

from api.base import error_response, ErrorCodes
from core.exceptions import (
    ConflictError,
    DownstreamError,
    InvalidDataError,
    NotFoundError,
    WebhookInactiveError,
)

logger = logging.getLogger(__name__)


def _error(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=error_response(code, message).model_dump(mode="json"),
    )


def _describe_validation(errors: list[dict]) -> str:
    """'body.items.0.rate_cents: Input should be ...; ...'"""
    parts = []
    for error in errors:
        location = ".".join(str(part) for part in error.get("loc", ()))
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "; ".join(parts)


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers on the app."""

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return _error(404, ErrorCodes.NOT_FOUND, str(exc))

    @app.exception_handler(InvalidDataError)
    async def invalid_data_handler(request: Request, exc: InvalidDataError):
        return _error(400, ErrorCodes.INVALID_REQUEST, str(exc))

    @app.exception_handler(ConflictError)
    async def conflict_handler(request: Request, exc: ConflictError):
        return _error(409, ErrorCodes.CONFLICT, str(exc))

    @app.exception_handler(WebhookInactiveError)
    async def webhook_inactive_handler(request: Request, exc: WebhookInactiveError):
        return _error(403, ErrorCodes.WEBHOOK_INACTIVE, str(exc))

    @app.exception_handler(DownstreamError)
    async def downstream_handler(request: Request, exc: DownstreamError):
        return _error(502, ErrorCodes.DOWNSTREAM_FAILED, str(exc))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return _error(400, ErrorCodes.VALIDATION_ERROR, _describe_validation(exc.errors()))

    @app.exception_handler(ValidationError)
    async def model_validation_handler(request: Request, exc: ValidationError):
        return _error(400, ErrorCodes.VALIDATION_ERROR, _describe_validation(exc.errors()))

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError):
        return _error(400, ErrorCodes.INVALID_REQUEST, str(exc))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception")
        return _error(500, ErrorCodes.INTERNAL_ERROR, str(exc) or "An internal error occurred")
