"""Error taxonomy and message sanitization for the n8n client."""

from __future__ import annotations

from dataclasses import dataclass

MAX_ERROR_LENGTH = 500

_PRODUCTION_MESSAGES = {
    400: "Invalid request parameters",
    401: "Authentication failed - check API key",
    403: "Access denied - insufficient permissions",
    404: "Resource not found",
    429: "Rate limit exceeded - try again later",
}


@dataclass
class N8nError(Exception):
    """Base error for all client failures."""

    message: str
    endpoint: str = ""
    status_code: int = 0  # 0 when no response was received
    retryable: bool = False

    def __str__(self) -> str:
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class N8nApiError(N8nError):
    """Non-2xx response from the n8n API."""


@dataclass
class N8nNetworkError(N8nError):
    """Connection-level failure before any response was received."""

    def __init__(self, message: str, endpoint: str = "") -> None:
        super().__init__(message=message, endpoint=endpoint, retryable=True)


@dataclass
class N8nTimeoutError(N8nError):
    """The per-attempt deadline fired before a response arrived."""

    timeout: int = 0

    def __init__(self, endpoint: str, timeout: int) -> None:
        self.timeout = timeout
        super().__init__(
            message=f"Request to {endpoint} timed out after {timeout}ms",
            endpoint=endpoint,
        )


@dataclass
class N8nResponseError(N8nError):
    """A successful response whose body is not valid JSON."""


def is_retryable_status(status_code: int) -> bool:
    """Rate limiting and server errors are worth another attempt."""
    return status_code == 429 or status_code >= 500


def sanitize_error_message(status_code: int, raw_error: str, production: bool = False) -> str:
    """Build the caller-facing message for a failed response.

    Args:
        status_code: HTTP status code of the response.
        raw_error: Response body text.
        production: Replace upstream detail with a fixed phrase.

    Returns:
        The message to put on the raised error.
    """
    if production:
        if status_code in _PRODUCTION_MESSAGES:
            return _PRODUCTION_MESSAGES[status_code]
        if status_code >= 500:
            return "n8n server error - try again later"
        return "Request failed"

    if len(raw_error) > MAX_ERROR_LENGTH:
        return raw_error[:MAX_ERROR_LENGTH] + "..."
    return raw_error
