"""Tests for the resilient n8n client."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Callable

import httpx
import pytest
from pytest_httpx import HTTPXMock

from n8nlink.client import (
    N8nApiError,
    N8nClient,
    N8nNetworkError,
    N8nResponseError,
    N8nTimeoutError,
)
from n8nlink.models import ClientOptions

from .conftest import API_KEY, BASE_URL


class HangingTransport(httpx.AsyncBaseTransport):
    """Transport that never answers within any reasonable timeout."""

    def __init__(self) -> None:
        self.calls = 0

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        self.calls += 1
        await asyncio.sleep(10)
        return httpx.Response(200, json={})


class TestRequestRetries:
    """Tests for the retry loop."""

    @pytest.mark.asyncio
    async def test_recovers_after_server_errors(
        self, client: N8nClient, httpx_mock: HTTPXMock, sleeps: list[float]
    ) -> None:
        """Two 503s then a 200: three attempts, delays of 100ms and 200ms."""
        url = f"{BASE_URL}/workflows/42"
        httpx_mock.add_response(url=url, status_code=503, text="unavailable")
        httpx_mock.add_response(url=url, status_code=503, text="unavailable")
        httpx_mock.add_response(url=url, json={"id": "42"})

        result = await client.get_workflow("42")

        assert result == {"id": "42"}
        assert len(httpx_mock.get_requests()) == 3
        assert sleeps == [0.1, 0.2]

    @pytest.mark.asyncio
    async def test_raises_after_max_retries(
        self, client: N8nClient, httpx_mock: HTTPXMock, sleeps: list[float]
    ) -> None:
        url = f"{BASE_URL}/tags"
        for _ in range(3):
            httpx_mock.add_response(url=url, status_code=502, text="bad gateway")

        with pytest.raises(N8nApiError) as exc_info:
            await client.list_tags()

        assert exc_info.value.status_code == 502
        assert exc_info.value.retryable is True
        assert exc_info.value.endpoint == "/tags"
        assert len(httpx_mock.get_requests()) == 3
        assert sleeps == [0.1, 0.2]

    @pytest.mark.asyncio
    async def test_rate_limit_is_retried(
        self, client: N8nClient, httpx_mock: HTTPXMock, sleeps: list[float]
    ) -> None:
        url = f"{BASE_URL}/variables"
        httpx_mock.add_response(url=url, status_code=429, text="slow down")
        httpx_mock.add_response(url=url, json={"data": []})

        assert await client.list_variables() == {"data": []}
        assert sleeps == [0.1]

    @pytest.mark.asyncio
    async def test_backoff_grows_exponentially(
        self,
        make_client: Callable[..., N8nClient],
        httpx_mock: HTTPXMock,
        sleeps: list[float],
    ) -> None:
        client = make_client(max_retries=4, retry_delay=1000)
        url = f"{BASE_URL}/credentials"
        for _ in range(4):
            httpx_mock.add_response(url=url, status_code=500)

        with pytest.raises(N8nApiError):
            await client.list_credentials()

        assert sleeps == [1.0, 2.0, 4.0]

    @pytest.mark.asyncio
    async def test_not_found_is_not_retried(
        self,
        make_client: Callable[..., N8nClient],
        httpx_mock: HTTPXMock,
        sleeps: list[float],
    ) -> None:
        client = make_client(max_retries=5, production=True)
        httpx_mock.add_response(
            url=f"{BASE_URL}/workflows/missing", status_code=404, text="not found"
        )

        with pytest.raises(N8nApiError) as exc_info:
            await client.get_workflow("missing")

        error = exc_info.value
        assert error.message == "Resource not found"
        assert error.status_code == 404
        assert error.retryable is False
        assert len(httpx_mock.get_requests()) == 1
        assert sleeps == []

    @pytest.mark.asyncio
    async def test_development_mode_surfaces_upstream_text(
        self, client: N8nClient, httpx_mock: HTTPXMock
    ) -> None:
        httpx_mock.add_response(
            url=f"{BASE_URL}/workflows", method="POST", status_code=400, text="name is required"
        )

        with pytest.raises(N8nApiError, match="name is required"):
            await client.create_workflow({"nodes": []})

    @pytest.mark.asyncio
    async def test_network_error_is_retried(
        self, client: N8nClient, httpx_mock: HTTPXMock, sleeps: list[float]
    ) -> None:
        url = f"{BASE_URL}/tags"
        httpx_mock.add_exception(httpx.ConnectError("connection refused"), url=url)
        httpx_mock.add_response(url=url, json={"data": [{"id": "1", "name": "prod"}]})

        result = await client.list_tags()

        assert result["data"][0]["name"] == "prod"
        assert sleeps == [0.1]

    @pytest.mark.asyncio
    async def test_network_error_raised_when_exhausted(
        self, client: N8nClient, httpx_mock: HTTPXMock, sleeps: list[float]
    ) -> None:
        url = f"{BASE_URL}/tags"
        for _ in range(3):
            httpx_mock.add_exception(httpx.ConnectError("connection refused"), url=url)

        with pytest.raises(N8nNetworkError, match="connection refused"):
            await client.list_tags()

        assert len(httpx_mock.get_requests()) == 3
        assert sleeps == [0.1, 0.2]


class TestRequestTimeouts:
    """Tests for per-attempt timeouts."""

    @pytest.mark.asyncio
    async def test_httpx_timeout_is_terminal(
        self,
        make_client: Callable[..., N8nClient],
        httpx_mock: HTTPXMock,
        sleeps: list[float],
    ) -> None:
        client = make_client(timeout=5000)
        httpx_mock.add_exception(httpx.ReadTimeout("timed out"), url=f"{BASE_URL}/workflows")

        with pytest.raises(N8nTimeoutError) as exc_info:
            await client.list_workflows()

        assert exc_info.value.endpoint == "/workflows"
        assert exc_info.value.timeout == 5000
        assert "5000ms" in str(exc_info.value)
        assert len(httpx_mock.get_requests()) == 1
        assert sleeps == []

    @pytest.mark.asyncio
    async def test_deadline_cancels_hanging_call(self) -> None:
        transport = HangingTransport()
        client = N8nClient(
            BASE_URL, API_KEY, ClientOptions(timeout=50, max_retries=3), transport=transport
        )

        with pytest.raises(N8nTimeoutError) as exc_info:
            await client.get_execution("7")

        assert exc_info.value.endpoint == "/executions/7"
        assert transport.calls == 1


class TestResponses:
    """Tests for response handling."""

    @pytest.mark.asyncio
    async def test_empty_body_is_success(self, client: N8nClient, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(url=f"{BASE_URL}/workflows/9", method="DELETE", status_code=204)

        assert await client.delete_workflow("9") is None

    @pytest.mark.asyncio
    async def test_empty_200_returns_none(self, client: N8nClient, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(url=f"{BASE_URL}/workflows/9", text="")

        assert await client.request("/workflows/9") is None

    @pytest.mark.asyncio
    async def test_redirect_is_followed(
        self,
        make_client: Callable[..., N8nClient],
        httpx_mock: HTTPXMock,
        sleeps: list[float],
    ) -> None:
        """An http->https redirect on the base URL lands on the real endpoint."""
        client = make_client()
        client.base_url = "http://n8n.example.com/api/v1"
        httpx_mock.add_response(
            url="http://n8n.example.com/api/v1/tags",
            status_code=301,
            headers={"Location": f"{BASE_URL}/tags"},
        )
        httpx_mock.add_response(url=f"{BASE_URL}/tags", json={"data": [{"id": "1"}]})

        result = await client.list_tags()

        assert result == {"data": [{"id": "1"}]}
        requests = httpx_mock.get_requests()
        assert len(requests) == 2
        assert requests[1].headers["X-N8N-API-KEY"] == API_KEY
        assert sleeps == []

    @pytest.mark.asyncio
    async def test_malformed_json_is_terminal(
        self, client: N8nClient, httpx_mock: HTTPXMock, sleeps: list[float]
    ) -> None:
        httpx_mock.add_response(url=f"{BASE_URL}/audit", method="POST", text="<html>oops")

        with pytest.raises(N8nResponseError) as exc_info:
            await client.run_audit()

        assert exc_info.value.status_code == 200
        assert exc_info.value.endpoint == "/audit"
        assert len(httpx_mock.get_requests()) == 1
        assert sleeps == []


class TestRequestShape:
    """Tests for the requests the client sends."""

    @pytest.mark.asyncio
    async def test_default_headers(self, client: N8nClient, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(url=f"{BASE_URL}/tags", json={"data": []})

        await client.list_tags()

        request = httpx_mock.get_request()
        assert request is not None
        assert request.headers["X-N8N-API-KEY"] == API_KEY
        assert request.headers["Content-Type"] == "application/json"

    @pytest.mark.asyncio
    async def test_api_key_header_cannot_be_overridden(
        self, client: N8nClient, httpx_mock: HTTPXMock
    ) -> None:
        httpx_mock.add_response(url=f"{BASE_URL}/tags", json={"data": []})

        await client.request(
            "/tags", headers={"x-n8n-api-key": "someone-else", "X-Trace-Id": "abc"}
        )

        request = httpx_mock.get_request()
        assert request is not None
        assert request.headers.get_list("X-N8N-API-KEY") == [API_KEY]
        assert request.headers["X-Trace-Id"] == "abc"

    @pytest.mark.asyncio
    async def test_list_workflows_query(self, client: N8nClient, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(
            url=f"{BASE_URL}/workflows?active=true&tags=prod%2Cops&limit=50",
            json={"data": [], "nextCursor": None},
        )

        await client.list_workflows(active=True, tags="prod,ops", limit=50)

        request = httpx_mock.get_request()
        assert request is not None
        assert request.url.params["active"] == "true"
        assert request.url.params["tags"] == "prod,ops"

    @pytest.mark.asyncio
    async def test_list_executions_query(self, client: N8nClient, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(
            url=f"{BASE_URL}/executions?workflowId=12&status=error&cursor=abc",
            json={"data": []},
        )

        await client.list_executions(workflow_id="12", status="error", cursor="abc")

        assert len(httpx_mock.get_requests()) == 1

    @pytest.mark.asyncio
    async def test_ids_are_url_encoded(self, client: N8nClient, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(url=f"{BASE_URL}/credentials/schema/a%2Fb", json={})

        await client.get_credential_schema("a/b")

        request = httpx_mock.get_request()
        assert request is not None
        assert request.url.raw_path == b"/api/v1/credentials/schema/a%2Fb"

    @pytest.mark.asyncio
    async def test_retry_execution_body(self, client: N8nClient, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(
            url=f"{BASE_URL}/executions/5/retry",
            method="POST",
            json={"id": "6", "status": "running"},
        )

        result = await client.retry_execution("5", load_workflow=True)

        request = httpx_mock.get_request()
        assert request is not None
        assert json.loads(request.content) == {"loadWorkflow": True}
        assert result["id"] == "6"

    @pytest.mark.asyncio
    async def test_activate_and_create_tag(
        self, client: N8nClient, httpx_mock: HTTPXMock
    ) -> None:
        httpx_mock.add_response(
            url=f"{BASE_URL}/workflows/3/activate", method="POST", json={"id": "3", "active": True}
        )
        httpx_mock.add_response(
            url=f"{BASE_URL}/tags", method="POST", json={"id": "t1", "name": "ops"}
        )

        assert (await client.activate_workflow("3"))["active"] is True
        assert (await client.create_tag("ops"))["name"] == "ops"

        tag_request = httpx_mock.get_requests()[-1]
        assert json.loads(tag_request.content) == {"name": "ops"}


class TestLogging:
    """Tests for emitted log events."""

    @pytest.mark.asyncio
    async def test_events_go_to_injected_logger(
        self, httpx_mock: HTTPXMock, caplog: pytest.LogCaptureFixture
    ) -> None:
        async def no_sleep(seconds: float) -> None:
            return None

        custom = logging.getLogger("tests.n8n.instance")
        client = N8nClient(
            BASE_URL,
            API_KEY,
            ClientOptions(retry_delay=10),
            logger=custom,
            sleep=no_sleep,
        )
        httpx_mock.add_response(url=f"{BASE_URL}/tags", status_code=503)
        httpx_mock.add_response(url=f"{BASE_URL}/tags", json={"data": []})

        with caplog.at_level(logging.DEBUG, logger="tests.n8n.instance"):
            await client.list_tags()

        records = [r for r in caplog.records if r.name == "tests.n8n.instance"]
        warnings = [r for r in records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert warnings[0].status == 503
        assert warnings[0].retryable is True
        assert warnings[0].attempt == 1
        assert any(r.levelno == logging.INFO and r.delay == 10 for r in records)
        assert any("successful" in r.getMessage() for r in records)
