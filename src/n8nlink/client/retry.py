"""Attempt outcomes and backoff policy for n8n API requests."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, cast

from tenacity import AsyncRetrying, RetryCallState, retry_if_result, stop_after_attempt
from tenacity.wait import wait_base

from .errors import N8nError

SleepFunc = Callable[[float], Awaitable[None]]


class OutcomeKind(str, Enum):
    """How a single attempt ended."""

    SUCCESS = "success"
    RETRYABLE = "retryable"  # 429, 5xx, network failure
    TERMINAL = "terminal"  # other 4xx, timeout, malformed body


@dataclass(frozen=True)
class AttemptOutcome:
    """Result of one network attempt, inspected by the retry loop."""

    kind: OutcomeKind
    value: Any = None
    error: N8nError | None = None

    @classmethod
    def success(cls, value: Any) -> AttemptOutcome:
        return cls(kind=OutcomeKind.SUCCESS, value=value)

    @classmethod
    def retryable(cls, error: N8nError) -> AttemptOutcome:
        return cls(kind=OutcomeKind.RETRYABLE, error=error)

    @classmethod
    def terminal(cls, error: N8nError) -> AttemptOutcome:
        return cls(kind=OutcomeKind.TERMINAL, error=error)

    @property
    def should_retry(self) -> bool:
        return self.kind == OutcomeKind.RETRYABLE

    def unwrap(self) -> Any:
        """Return the payload, or raise the recorded error."""
        if self.kind == OutcomeKind.SUCCESS:
            return self.value
        if self.error is None:
            raise N8nError(message=f"{self.kind.value} outcome carries no error")
        raise self.error


def calculate_backoff(attempt: int, retry_delay: int) -> float:
    """Calculate the sleep before the next attempt.

    Args:
        attempt: The attempt that just failed (1-indexed).
        retry_delay: Base delay in milliseconds.

    Returns:
        Delay in seconds: retry_delay * 2^(attempt - 1), converted from ms.
    """
    return retry_delay * (2 ** (attempt - 1)) / 1000


class wait_backoff(wait_base):  # noqa: N801 - tenacity naming convention
    """Tenacity wait strategy wrapping calculate_backoff."""

    def __init__(self, retry_delay: int) -> None:
        self.retry_delay = retry_delay

    def __call__(self, retry_state: RetryCallState) -> float:
        return calculate_backoff(retry_state.attempt_number, self.retry_delay)


def build_retrying(
    max_retries: int,
    retry_delay: int,
    sleep: SleepFunc,
    logger: logging.Logger,
) -> AsyncRetrying:
    """Create the attempt loop for one logical request.

    The loop retries while the last outcome is retryable and attempts remain.
    When attempts run out, the final outcome is handed back instead of a
    tenacity RetryError so the caller can raise the recorded error.
    """

    def log_retry(retry_state: RetryCallState) -> None:
        next_action = retry_state.next_action
        delay_ms = round(next_action.sleep * 1000) if next_action else 0
        logger.info(
            f"Retrying after {delay_ms}ms (attempt {retry_state.attempt_number})",
            extra={"delay": delay_ms, "attempt": retry_state.attempt_number},
        )

    def last_outcome(retry_state: RetryCallState) -> AttemptOutcome | None:
        if retry_state.outcome is None:
            return None
        return cast("AttemptOutcome | None", retry_state.outcome.result())

    return AsyncRetrying(
        sleep=sleep,
        stop=stop_after_attempt(max_retries),
        wait=wait_backoff(retry_delay),
        retry=retry_if_result(lambda outcome: outcome is not None and outcome.should_retry),
        before_sleep=log_retry,
        retry_error_callback=last_outcome,
    )
