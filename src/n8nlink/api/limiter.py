"""Rate limiting for tool invocation."""

from __future__ import annotations

import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

logger = logging.getLogger(__name__)

TOOL_RATE_LIMIT = "120/minute"

# Per client address, in memory
limiter = Limiter(key_func=get_remote_address)


async def rate_limit_exceeded(request: Request, exc: Exception) -> JSONResponse:
    """Answer 429 with a fixed message."""
    limit = exc.detail if isinstance(exc, RateLimitExceeded) else ""
    logger.warning(f"Rate limit exceeded for {get_remote_address(request)} ({limit})")
    return JSONResponse(
        status_code=429,
        content={"error": "Rate limit exceeded - try again later"},
    )
