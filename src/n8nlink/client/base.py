"""Resilient HTTP transport for the n8n REST API."""

from __future__ import annotations

import asyncio
import base64
import json
import logging
from typing import Any
from urllib.parse import quote

import httpx

from n8nlink.models import ClientOptions

from .errors import (
    N8nApiError,
    N8nError,
    N8nNetworkError,
    N8nResponseError,
    N8nTimeoutError,
    is_retryable_status,
    sanitize_error_message,
)
from .retry import AttemptOutcome, OutcomeKind, SleepFunc, build_retrying

API_KEY_HEADER = "X-N8N-API-KEY"


class BaseClient:
    """Performs logical API calls with timeout, retry and error mapping.

    Every call builds its own request and httpx client; the only state shared
    between concurrent calls is the read-only configuration.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        options: ClientOptions | None = None,
        *,
        logger: logging.Logger | None = None,
        sleep: SleepFunc = asyncio.sleep,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: API root, e.g. ``https://n8n.example.com/api/v1``.
            api_key: Value for the API key header.
            options: Timeout and retry policy.
            logger: Logger receiving request events. Defaults to the module logger.
            sleep: Coroutine used for backoff sleeps.
            transport: Optional httpx transport (mainly for tests).
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.options = options or ClientOptions()
        self.logger = logger or logging.getLogger(__name__)
        self._sleep = sleep
        self._transport = transport

    @property
    def timeout_seconds(self) -> float:
        return self.options.timeout / 1000

    @property
    def webhook_base_url(self) -> str:
        return self.base_url.replace("/api/v1", "")

    def build_headers(self, headers: dict[str, str] | None = None) -> dict[str, str]:
        """Merge caller headers with the defaults. The API key always wins."""
        merged = {"Content-Type": "application/json"}
        for name, value in (headers or {}).items():
            if name.lower() == API_KEY_HEADER.lower():
                continue
            merged[name] = value
        merged[API_KEY_HEADER] = self.api_key
        return merged

    async def request(
        self,
        endpoint: str,
        method: str = "GET",
        body: Any = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Perform one logical API call.

        Args:
            endpoint: Path relative to the base URL, including any query string.
            method: HTTP method.
            body: JSON-serializable request body.
            headers: Extra headers.

        Returns:
            Parsed JSON body, or None when the response body is empty.

        Raises:
            N8nApiError: Non-2xx response that was not (or no longer) retried.
            N8nTimeoutError: The per-attempt deadline fired.
            N8nNetworkError: Transport failure after all attempts.
            N8nResponseError: 2xx response with a malformed JSON body.
        """
        url = f"{self.base_url}{endpoint}"
        request_headers = self.build_headers(headers)
        outcome: AttemptOutcome | None = None

        retrying = build_retrying(
            max_retries=self.options.max_retries,
            retry_delay=self.options.retry_delay,
            sleep=self._sleep,
            logger=self.logger,
        )
        async for attempt in retrying:
            with attempt:
                outcome = await self._attempt(
                    method,
                    url,
                    endpoint,
                    body,
                    request_headers,
                    attempt.retry_state.attempt_number,
                )
            if attempt.retry_state.outcome and not attempt.retry_state.outcome.failed:
                attempt.retry_state.set_result(outcome)

        if outcome is None:
            raise N8nError(message=f"No attempt was made for {endpoint}", endpoint=endpoint)
        return outcome.unwrap()

    async def execute_webhook(
        self,
        webhook_path: str,
        data: dict[str, Any],
        auth: tuple[str, str] | None = None,
    ) -> Any:
        """Trigger a workflow through its webhook. Single attempt, never retried.

        Args:
            webhook_path: Path configured on the webhook node.
            data: JSON payload to POST.
            auth: Optional (username, password) for HTTP Basic auth.

        Returns:
            Parsed JSON body, or None when the response body is empty.
        """
        endpoint = f"/webhook/{webhook_path}"
        url = f"{self.webhook_base_url}/webhook/{quote(webhook_path, safe='')}"
        headers = {"Content-Type": "application/json"}
        if auth:
            headers["Authorization"] = basic_auth_header(*auth)

        outcome = await self._attempt("POST", url, endpoint, data, headers, attempt=1)
        return outcome.unwrap()

    async def _attempt(
        self,
        method: str,
        url: str,
        endpoint: str,
        body: Any,
        headers: dict[str, str],
        attempt: int,
    ) -> AttemptOutcome:
        """Run a single network attempt and classify how it ended."""
        self.logger.debug(
            f"Making API request {method} {endpoint} (attempt {attempt})",
            extra={"endpoint": endpoint, "method": method, "attempt": attempt},
        )

        try:
            response = await self._send(method, url, body, headers)
        except (TimeoutError, httpx.TimeoutException):
            self.logger.error(
                f"Request to {endpoint} timed out after {self.options.timeout}ms",
                extra={"endpoint": endpoint, "timeout": self.options.timeout},
            )
            return AttemptOutcome.terminal(N8nTimeoutError(endpoint, self.options.timeout))
        except httpx.RequestError as e:
            message = str(e) or type(e).__name__
            self.logger.error(
                f"Request error on {endpoint}: {message}",
                extra={"endpoint": endpoint, "error": message, "attempt": attempt},
            )
            return AttemptOutcome.retryable(N8nNetworkError(message, endpoint))

        if not response.is_success:
            retryable = is_retryable_status(response.status_code)
            self.logger.warning(
                f"API request {method} {endpoint} failed with HTTP {response.status_code}",
                extra={
                    "endpoint": endpoint,
                    "status": response.status_code,
                    "attempt": attempt,
                    "retryable": retryable,
                },
            )
            error = N8nApiError(
                message=sanitize_error_message(
                    response.status_code, response.text, self.options.production
                ),
                endpoint=endpoint,
                status_code=response.status_code,
                retryable=retryable,
            )
            if retryable:
                return AttemptOutcome.retryable(error)
            return AttemptOutcome.terminal(error)

        outcome = self._decode(response, endpoint)
        if outcome.kind == OutcomeKind.SUCCESS:
            self.logger.debug(
                f"API request {method} {endpoint} successful",
                extra={"endpoint": endpoint, "method": method},
            )
        return outcome

    async def _send(
        self,
        method: str,
        url: str,
        body: Any,
        headers: dict[str, str],
    ) -> httpx.Response:
        # wait_for bounds the whole exchange, including redirects and reading the body
        async with httpx.AsyncClient(
            timeout=self.timeout_seconds,
            follow_redirects=True,
            transport=self._transport,
        ) as http:
            return await asyncio.wait_for(
                http.request(
                    method,
                    url,
                    headers=headers,
                    json=body,
                ),
                timeout=self.timeout_seconds,
            )

    def _decode(self, response: httpx.Response, endpoint: str) -> AttemptOutcome:
        """Parse a 2xx body. An empty body is a valid, empty result."""
        text = response.text
        if not text:
            return AttemptOutcome.success(None)
        try:
            return AttemptOutcome.success(json.loads(text))
        except ValueError:
            snippet = sanitize_error_message(response.status_code, text, production=False)
            return AttemptOutcome.terminal(
                N8nResponseError(
                    message=(
                        f"Malformed JSON response from {endpoint}"
                        if self.options.production
                        else f"Malformed JSON response from {endpoint}: {snippet}"
                    ),
                    endpoint=endpoint,
                    status_code=response.status_code,
                )
            )


def basic_auth_header(username: str, password: str) -> str:
    """Build an HTTP Basic Authorization header value."""
    credentials = base64.b64encode(f"{username}:{password}".encode()).decode()
    return f"Basic {credentials}"
