"""
Request plumbing for the diff API.

Every response, error or not, leaves with an ``X-Correlation-ID`` and
headers that keep browsers and proxies from caching the compared texts.
Rejected inputs and unexpected failures share the ``{"error": ...}``
envelope the viewer reads, and each rejection is counted by error code.
"""

from __future__ import annotations

import time
import uuid
from collections.abc import Awaitable, Callable

import structlog
from fastapi import Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from diffvault.core.errors import AppError, ErrorCode
from diffvault.core.metrics import INPUTS_REJECTED

_log = structlog.get_logger(__name__)


class CorrelationIDMiddleware(BaseHTTPMiddleware):
    """
    Tag each diff request with a correlation ID.

    A caller-supplied ``X-Correlation-ID`` is reused, so a viewer can match
    a slow diff to its log lines; otherwise a UUID4 is minted. The ID and
    the request path are bound into structlog contextvars, which puts them
    on the engine's ``diff_computed`` and the route's ``diff_served``
    events. Request bodies are never logged.
    """

    HEADER = "X-Correlation-ID"

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        correlation_id = request.headers.get(self.HEADER) or str(uuid.uuid4())
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            correlation_id=correlation_id,
            method=request.method,
            path=request.url.path,
        )
        request.state.correlation_id = correlation_id

        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = int((time.perf_counter() - start) * 1000)

        response.headers[self.HEADER] = correlation_id
        _log.info(
            "request_completed",
            status_code=response.status_code,
            duration_ms=duration_ms,
        )
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Mark diff responses as uncacheable and not frameable."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        # Diff inputs may contain private documents.
        response.headers["Cache-Control"] = "no-store"
        return response


# ── Exception handlers ────────────────────────────────────────────────── #


def _correlation_headers(request: Request) -> dict[str, str]:
    return {"X-Correlation-ID": getattr(request.state, "correlation_id", "")}


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Send a size, type or decode rejection back in the error envelope."""
    _log.warning(
        "application_error",
        error_code=exc.code.value,
        message=exc.message,
        http_status=exc.http_status,
    )
    INPUTS_REJECTED.labels(code=exc.code.value).inc()
    return JSONResponse(
        status_code=exc.http_status,
        content=exc.to_dict(),
        headers=_correlation_headers(request),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report request body/form validation failures in the AppError envelope."""
    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]
    _log.warning("request_validation_failed", error_count=len(errors))
    INPUTS_REJECTED.labels(code=ErrorCode.VALIDATION_ERROR.value).inc()
    return JSONResponse(
        status_code=422,
        content={
            "error": {
                "code": ErrorCode.VALIDATION_ERROR.value,
                "message": "Request validation failed.",
                "detail": {"errors": jsonable_encoder(errors)},
            }
        },
        headers=_correlation_headers(request),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Answer an engine or route crash with a bare ``GEN_002``.

    The traceback goes to the log only; the response never echoes the
    submitted texts or any internal state.
    """
    _log.exception("unhandled_exception", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": ErrorCode.INTERNAL_ERROR.value,
                "message": "An unexpected internal error occurred.",
                "detail": {},
            }
        },
        headers=_correlation_headers(request),
    )
