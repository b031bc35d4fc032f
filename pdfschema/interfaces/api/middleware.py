"""
API Middleware - Request/response processing.

Provides:
- Request ID tracking
- Response latency measurement
- Error handling with taxonomy codes
"""

from __future__ import annotations

import logging
import time
import uuid
from collections.abc import Awaitable, Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from pdfschema.config.errors import ErrorCode, PdfSchemaError

logger = logging.getLogger(__name__)

__all__ = [
    "ErrorHandlerMiddleware",
    "LatencyMiddleware",
    "RequestIDMiddleware",
    "error_code_to_status",
]

_STATUS_BY_CODE: dict[ErrorCode, int] = {
    # 400 Bad Request
    ErrorCode.REQUEST_MISSING_SOURCE: 400,
    ErrorCode.REQUEST_INVALID_SCHEMA: 400,
    ErrorCode.PDF_INVALID: 400,
    ErrorCode.PDF_READ_FAILED: 400,
    # 401 Unauthorized
    ErrorCode.LLM_AUTH_FAILED: 401,
    # 422 Unprocessable document
    ErrorCode.PDF_PARSE_FAILED: 422,
    ErrorCode.PDF_IMAGE_CONVERSION_FAILED: 422,
    ErrorCode.EXTRACTION_VISION_DISABLED: 422,
    # 429 Rate Limited
    ErrorCode.LLM_RATE_LIMITED: 429,
    # 502 Bad Gateway (upstream model misbehaved)
    ErrorCode.EXTRACTION_EMPTY_RESPONSE: 502,
    ErrorCode.EXTRACTION_FAILED: 502,
    # 503 Service Unavailable
    ErrorCode.CONFIG_MISSING_API_KEY: 503,
    ErrorCode.LLM_UNAVAILABLE: 503,
}


def error_code_to_status(code: ErrorCode) -> int:
    """Map error codes to HTTP status codes."""
    return _STATUS_BY_CODE.get(code, 500)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Attach request ID for tracing across logs and responses."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response


class LatencyMiddleware(BaseHTTPMiddleware):
    """Log each request with its latency."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        response.headers["X-Response-Time-Ms"] = f"{elapsed_ms:.2f}"
        logger.info(
            "%s %s status=%d latency_ms=%.2f request_id=%s",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            getattr(request.state, "request_id", "unknown"),
        )
        return response


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Convert PdfSchemaError exceptions to structured JSON responses."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        try:
            return await call_next(request)
        except PdfSchemaError as e:
            request_id = getattr(request.state, "request_id", "unknown")
            status = error_code_to_status(e.code)
            log = logger.error if status >= 500 else logger.warning
            log("%s: %s request_id=%s", e.code.value, e.message, request_id)
            return JSONResponse(
                status_code=status,
                content={"error": e.to_dict(), "request_id": request_id},
            )
        except Exception as e:
            request_id = getattr(request.state, "request_id", "unknown")
            logger.exception("Unhandled error: %s request_id=%s", e, request_id)
            return JSONResponse(
                status_code=500,
                content={
                    "error": {
                        "code": ErrorCode.INTERNAL_ERROR.value,
                        "message": "Internal server error",
                        "details": {},
                    },
                    "request_id": request_id,
                },
            )
