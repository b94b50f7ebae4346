"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any
from unittest.mock import MagicMock

import pytest

from n8nlink.client import N8nClient
from n8nlink.models import ClientOptions

BASE_URL = "https://n8n.example.com/api/v1"
API_KEY = "test-api-key"


@pytest.fixture
def sleeps() -> list[float]:
    """Backoff delays (in seconds) requested by the client."""
    return []


@pytest.fixture
def make_client(sleeps: list[float]) -> Callable[..., N8nClient]:
    """Factory for clients whose backoff sleeps are recorded instead of awaited."""

    async def fake_sleep(seconds: float) -> None:
        sleeps.append(seconds)

    def factory(**options: Any) -> N8nClient:
        return N8nClient(BASE_URL, API_KEY, ClientOptions(**options), sleep=fake_sleep)

    return factory


@pytest.fixture
def client(make_client: Callable[..., N8nClient]) -> N8nClient:
    """Client with a short retry delay."""
    return make_client(retry_delay=100)


@pytest.fixture
def mock_client() -> MagicMock:
    """Client double; its async methods are AsyncMocks."""
    return MagicMock(spec=N8nClient)
