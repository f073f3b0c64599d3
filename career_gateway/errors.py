"""
Error responses for the gateway.

Every error leaving the service has the same JSON shape so the frontend can
render a consistent message:

    {"error": "Bad Request", "message": "Missing required field: title",
     "status": 400, "details": "..."}

`details` is only present when an underlying exception is attached.
"""

import logging
from http import HTTPStatus
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Raised by handlers to produce a structured error response."""

    def __init__(
        self,
        status_code: int,
        message: str,
        details: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.details = details
        self.headers = headers


def status_phrase(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"


def error_body(status_code: int, message: str, details: Optional[Any] = None) -> Dict[str, Any]:
    """Build the stable error payload."""
    body: Dict[str, Any] = {
        "error": status_phrase(status_code),
        "message": message,
        "status": status_code,
    }
    if details is not None:
        body["details"] = details
    return body


def error_response(
    status_code: int,
    message: str,
    details: Optional[Any] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=error_body(status_code, message, details),
        headers=headers,
    )


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    if exc.details is not None:
        logger.error(f"Error: {exc.message} - {exc.details}")
    return error_response(exc.status_code, exc.message, exc.details, exc.headers)


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    if isinstance(exc.detail, str):
        message = exc.detail
    else:
        message = status_phrase(exc.status_code)
    return error_response(exc.status_code, message, headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    message = "Invalid request body"
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"Invalid field {location}: {first.get('msg')}" if location else str(first.get("msg"))
    return error_response(400, message)


def register_error_handlers(app: FastAPI) -> None:
    """Install the structured error handlers on an application."""
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
