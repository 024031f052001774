"""Translation of failures into the uniform JSON error envelope.

Every exception escaping a route ends up here: catalog failures keep their
message, anything else is logged in full and answered with a fixed 500
message so internal details never reach the caller.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from movies.core.exceptions import ErrorKind, MovieError
from movies.schemas import ErrorResponse, FieldViolation, ValidationErrorResponse

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An unexpected error occurred on the server."
VALIDATION_ERROR_MESSAGE = "One or more validation errors occurred."

_STATUS_BY_KIND = {
    ErrorKind.ALREADY_EXISTS: HTTPStatus.CONFLICT,
    ErrorKind.NOT_FOUND: HTTPStatus.NOT_FOUND,
}


def translate_exception(exc: BaseException) -> tuple[int, str]:
    """Map a failure to ``(status code, caller-facing message)``."""

    if isinstance(exc, MovieError) and exc.kind in _STATUS_BY_KIND:
        return int(_STATUS_BY_KIND[exc.kind]), exc.message
    return int(HTTPStatus.INTERNAL_SERVER_ERROR), GENERIC_ERROR_MESSAGE


def error_response(
    status_code: int,
    message: str,
    *,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    body = ErrorResponse(status_code=status_code, message=message)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", by_alias=True),
        headers=headers,
    )


def collect_violations(exc: RequestValidationError) -> list[FieldViolation]:
    """Flatten Pydantic errors into one ``{field, message}`` per violation."""

    violations = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "path", "query")]
        violations.append(
            FieldViolation(field=".".join(loc) or "body", message=error.get("msg", "Invalid value"))
        )
    return violations


async def _handle_unexpected(request: Request, call_next: Any):
    try:
        return await call_next(request)
    except Exception as exc:
        logger.exception("An unhandled exception occurred: %s", exc)
        status_code, message = translate_exception(exc)
        return error_response(status_code, message)


async def _handle_validation(_: Request, exc: RequestValidationError) -> JSONResponse:
    violations = collect_violations(exc)
    logger.info("Request validation failed: %s", [v.model_dump() for v in violations])
    body = ValidationErrorResponse(
        status_code=int(HTTPStatus.BAD_REQUEST),
        message=VALIDATION_ERROR_MESSAGE,
        errors=violations,
    )
    return JSONResponse(
        status_code=HTTPStatus.BAD_REQUEST,
        content=body.model_dump(mode="json", by_alias=True),
    )


async def _handle_http(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code >= HTTPStatus.INTERNAL_SERVER_ERROR:
        logger.error("HTTP %s: %s", exc.status_code, exc.detail)
    message = exc.detail if isinstance(exc.detail, str) else HTTPStatus(exc.status_code).phrase
    return error_response(exc.status_code, message, headers=getattr(exc, "headers", None))


def register_error_handlers(app: FastAPI) -> None:
    """Install the error middleware and the framework-level handlers on ``app``."""

    app.middleware("http")(_handle_unexpected)
    app.add_exception_handler(RequestValidationError, _handle_validation)
    app.add_exception_handler(StarletteHTTPException, _handle_http)
