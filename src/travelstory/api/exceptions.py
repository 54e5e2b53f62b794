"""Exception handlers for Travel Story API.

Every error leaves the API as ``{"error": true, "message": "..."}``.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from travelstory.core.exceptions import APIError

logger = logging.getLogger(__name__)


def error_body(message: str) -> dict:
    return {"error": True, "message": message}


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle APIError exceptions."""
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.message))


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render framework HTTP errors (404 routes, 405, bearer scheme) in the API shape."""
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle malformed bodies, query strings and path parameters."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg', 'invalid value')}" if location else first.get("msg", "")
    else:
        message = "Invalid request"
    return JSONResponse(status_code=400, content=error_body(message))


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception("Unexpected error", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content=error_body(str(exc) or "Something went wrong"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers."""
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)
