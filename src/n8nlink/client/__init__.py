"""Resilient client for the n8n REST API."""

from .base import API_KEY_HEADER, BaseClient, basic_auth_header
from .errors import (
    N8nApiError,
    N8nError,
    N8nNetworkError,
    N8nResponseError,
    N8nTimeoutError,
    is_retryable_status,
    sanitize_error_message,
)
from .n8n import N8nClient
from .retry import AttemptOutcome, OutcomeKind, build_retrying, calculate_backoff

__all__ = [
    "API_KEY_HEADER",
    "AttemptOutcome",
    "BaseClient",
    "N8nApiError",
    "N8nClient",
    "N8nError",
    "N8nNetworkError",
    "N8nResponseError",
    "N8nTimeoutError",
    "OutcomeKind",
    "basic_auth_header",
    "build_retrying",
    "calculate_backoff",
    "is_retryable_status",
    "sanitize_error_message",
]
