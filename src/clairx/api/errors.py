"""HTTP error type and exception handlers.

Every error leaves the API as ``{"error": ..., "code": ...}`` so the browser
client can show ``error`` verbatim.
"""

import logging
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from clairx.models.errors import ErrorCode
from clairx.models.responses import ErrorResponse

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """An error that maps directly onto an HTTP status."""

    def __init__(self, status_code: int, code: ErrorCode, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.message = message
        self.details = details


def _error_body(message: str, code: ErrorCode, details: Optional[dict] = None) -> dict[str, Any]:
    return ErrorResponse(error=message, code=code, details=details).model_dump(mode="json", exclude_none=True)


def validation_message(exc: RequestValidationError) -> str:
    """Turn the first validation error into a field-specific message."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    fields = [str(part) for part in first.get("loc", ()) if isinstance(part, str) and part != "body"]
    if not fields:
        return "Request body is required"
    field = fields[-1]
    error_type = first.get("type", "")
    if error_type in ("missing", "string_too_short"):
        return f"{field} is required"
    if error_type == "value_error" and first.get("ctx", {}).get("error") is not None:
        return str(first["ctx"]["error"])
    return f"{field}: {first.get('msg', 'invalid value')}"


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=_error_body(exc.message, exc.code, exc.details))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content=_error_body(validation_message(exc), ErrorCode.MISSING_INPUT))


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"❌ [API] Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content=_error_body("Internal server error", ErrorCode.INTERNAL_ERROR))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
