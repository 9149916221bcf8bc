# ABOUTME: Shared test fixtures for the weather lookup test suite.
# ABOUTME: Provides a test config and mock httpx clients that route responses by endpoint.

from unittest.mock import AsyncMock

import httpx
import pytest

from weather_lookup.config import WeatherConfig


def _response(payload, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code=status_code, json=payload, request=httpx.Request("GET", "https://test"))


def _routed_client(routes: dict) -> AsyncMock:
    """Create a mock httpx.AsyncClient whose get() answers by URL suffix.

    Route values may be a JSON payload, an httpx.Response, or an exception to raise.
    Requests to an unrouted endpoint fail the test.
    """
    mock = AsyncMock(spec=httpx.AsyncClient)

    async def get(url, params=None, **kwargs):
        for suffix, outcome in routes.items():
            if url.endswith(suffix):
                if isinstance(outcome, Exception):
                    raise outcome
                if isinstance(outcome, httpx.Response):
                    return outcome
                return _response(outcome)
        raise AssertionError(f"Unexpected request to {url}")

    mock.get.side_effect = get
    return mock


@pytest.fixture
def config() -> WeatherConfig:
    return WeatherConfig(api_key="test-key", geo_url="https://geo.test", data_url="https://data.test")


@pytest.fixture
def make_response():
    return _response


@pytest.fixture
def make_client():
    return _routed_client


def called_urls(client: AsyncMock) -> list[str]:
    return [call.args[0] for call in client.get.call_args_list]


@pytest.fixture
def urls_of():
    return called_urls
