"""
Global error handlers registered on the FastAPI application.

Every failure reaches the client in the same shape:

    {
        "error": true,
        "error_code": "MALFORMED_MAP",
        "message": "Group 'person' must be a JSON object.",
        "details": { "path": "person" },
        "request_id": "abc-123"
    }
"""

import logging
import uuid
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from jsontransform.core.exceptions import AppException
from jsontransform.core.logging import get_logger

logger = get_logger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Attach all global exception handlers to the FastAPI app."""

    # ── 1. AppException hierarchy (map / transform / validation) ─────

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        # 4xx here means a bad map, bad input or a strict-mode field error
        level = logging.WARNING if exc.status_code < 500 else logging.ERROR
        logger.log(
            level,
            "Application error",
            extra={
                "error_code": exc.error_code,
                "status_code": exc.status_code,
                "error_message": exc.message,
                "path": str(request.url.path),
                "method": request.method,
            },
        )
        return _error_response(request, exc.status_code, exc.to_dict())

    # ── 2. Request body validation (pydantic) ─────────────────────────

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = [
            {
                "field": " → ".join(str(loc) for loc in err.get("loc", [])),
                "message": err.get("msg", ""),
                "type": err.get("type", ""),
            }
            for err in exc.errors()
        ]

        logger.warning(
            "Request validation failed",
            extra={
                "path": str(request.url.path),
                "method": request.method,
                "validation_errors": errors,
            },
        )
        return _error_response(
            request,
            422,
            _body("VALIDATION_ERROR", "Request validation failed.", {"errors": errors}),
        )

    # ── 3. Starlette / generic HTTP exceptions (404 routes, 405) ──────

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        logger.warning(
            "HTTP error",
            extra={
                "status_code": exc.status_code,
                "detail": exc.detail,
                "path": str(request.url.path),
                "method": request.method,
            },
        )
        return _error_response(
            request, exc.status_code, _body("HTTP_ERROR", str(exc.detail))
        )

    # ── 4. Catch-all ─────────────────────────────────────────────────

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger.critical(
            "Unhandled exception",
            extra={
                "path": str(request.url.path),
                "method": request.method,
                "exception_type": type(exc).__name__,
                "exception_message": str(exc),
            },
            exc_info=True,
        )
        return _error_response(
            request,
            500,
            _body("INTERNAL_ERROR", "An unexpected internal error occurred."),
        )


# ─── Helpers ──────────────────────────────────────────────────────────


def _body(
    error_code: str, message: str, details: dict[str, Any] | None = None
) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "error": True,
        "error_code": error_code,
        "message": message,
    }
    if details:
        payload["details"] = details
    return payload


def _error_response(
    request: Request, status_code: int, body: dict[str, Any]
) -> JSONResponse:
    body["request_id"] = _get_request_id(request)
    return JSONResponse(status_code=status_code, content=body)


def _get_request_id(request: Request) -> str:
    """
    Return the request ID from state (set by middleware) or generate one.
    """
    return getattr(request.state, "request_id", None) or uuid.uuid4().hex
