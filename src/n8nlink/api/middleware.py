"""HTTP middleware for the n8nlink API."""

from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

MAX_BODY_BYTES = 1024 * 1024

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
}
HSTS_HEADER = "max-age=31536000; includeSubDomains"

CallNext = Callable[[Request], Awaitable[Response]]


def _too_large() -> JSONResponse:
    return JSONResponse(
        status_code=413,
        content={"error": f"Request body exceeds {MAX_BODY_BYTES} bytes"},
    )


def add_http_middleware(app: FastAPI, *, production: bool = False) -> None:
    """Install body limit, security header and access log middleware.

    Registration order matters: the access log wraps everything, so rejected
    requests are logged and carry the security headers too.

    Args:
        app: Application to configure.
        production: Also send Strict-Transport-Security.
    """

    @app.middleware("http")
    async def limit_body_size(request: Request, call_next: CallNext) -> Response:
        content_length = request.headers.get("content-length")
        if content_length is not None:
            if not content_length.isdigit() or int(content_length) > MAX_BODY_BYTES:
                return _too_large()
        elif request.method in ("POST", "PUT", "PATCH"):
            # Chunked upload; the body is cached for the route handler
            if len(await request.body()) > MAX_BODY_BYTES:
                return _too_large()
        return await call_next(request)

    @app.middleware("http")
    async def security_headers(request: Request, call_next: CallNext) -> Response:
        response = await call_next(request)
        response.headers.update(SECURITY_HEADERS)
        if production:
            response.headers["Strict-Transport-Security"] = HSTS_HEADER
        return response

    @app.middleware("http")
    async def access_log(request: Request, call_next: CallNext) -> Response:
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = round((time.perf_counter() - start) * 1000)
        logger.info(
            f"{request.method} {request.url.path} {response.status_code} {duration_ms}ms",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status": response.status_code,
                "duration": duration_ms,
            },
        )
        return response
