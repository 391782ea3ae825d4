"""
Note Service — Error Translation
=================================

What:  Global exception handlers turning raised errors into JSON responses.
How:   FastAPI's exception_handler hooks intercept errors escaping a route;
       the route itself never writes an error response, so a request gets
       exactly one response.
Who:   Registered on the app by create_app() in main.py.

Status mapping (the only place kind → status is decided):
    AppError(BAD_REQUEST)   → 400
    AppError(NOT_FOUND)     → 404
    AppError(INTERNAL)      → 500
    RequestValidationError  → 400
    HTTPException           → its own status (unknown route, wrong method)
    Exception (fallback)    → 500

Body (every case):
    {"message": "...", "developer_message": "..."}

Internal errors expose only the service-level message; the wrapped cause is
logged server-side with its traceback.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from note_service.exceptions import AppError, ErrorKind
from note_service.middleware.request_id import REQUEST_ID_HEADER, request_id_var

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    ErrorKind.BAD_REQUEST: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INTERNAL: 500,
}


def status_for(exc: AppError) -> int:
    return STATUS_BY_KIND.get(exc.kind, 500)


def error_response(status_code: int, message: str, developer_message: str = "", headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"message": message, "developer_message": developer_message},
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register the handlers described in the module docstring."""

    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError):
        rid = request_id_var.get("")
        status_code = status_for(exc)
        if status_code >= 500:
            logger.error(
                "[%s] %s %s failed: %s",
                rid,
                request.method,
                request.url.path,
                str(exc),
                exc_info=exc.cause,
            )
        else:
            logger.warning("[%s] %s: %s", rid, exc.kind.value, exc.developer_message or exc.message)
        return error_response(status_code, exc.message, exc.developer_message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        return error_response(400, "invalid data", f"{len(exc.errors())} invalid request field(s)")

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return error_response(
            exc.status_code,
            str(exc.detail),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """
        Catch-all for errors that escaped classification.

        The stack trace is logged server-side only.
        """
        # Runs outside the user middleware stack, so RequestIDMiddleware never
        # sees this response; the id is read back from request.state.
        rid = getattr(request.state, "request_id", "") or request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        headers = {REQUEST_ID_HEADER: rid} if rid else None
        return error_response(500, "internal system error", type(exc).__name__, headers=headers)
