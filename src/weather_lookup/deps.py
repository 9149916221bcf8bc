# ABOUTME: HTTP client factories and dependency container for the weather lookup service.
# ABOUTME: Geocoding uses a single-attempt client; weather data uses a tenacity-retrying transport.

import httpx
from pydantic import BaseModel, ConfigDict
from pydantic_ai.retries import AsyncTenacityTransport, RetryConfig, wait_retry_after
from tenacity import retry_if_exception, stop_after_attempt

from weather_lookup.config import WeatherConfig


class WeatherDeps(BaseModel):
    """Configuration and HTTP clients shared by the service for the process lifetime."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    config: WeatherConfig
    geocoding_client: httpx.AsyncClient
    weather_client: httpx.AsyncClient

    async def aclose(self) -> None:
        await self.geocoding_client.aclose()
        await self.weather_client.aclose()


def is_transient_error(exc: BaseException) -> bool:
    """True for connection failures, read timeouts and 429/5xx responses."""
    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        return status == 429 or status >= 500
    return isinstance(exc, (httpx.ConnectError, httpx.ReadTimeout))


def create_geocoding_client(config: WeatherConfig) -> httpx.AsyncClient:
    """Create an httpx client for geocoding calls, each attempted exactly once."""
    return httpx.AsyncClient(timeout=config.timeout)


def create_weather_client(config: WeatherConfig) -> httpx.AsyncClient:
    """Create an httpx client with tenacity retry on transient HTTP errors.

    Retries connection errors, read timeouts, and 429/5xx responses, honouring
    Retry-After, up to ``config.retry_attempts`` attempts in total.
    """
    transport = AsyncTenacityTransport(
        RetryConfig(
            retry=retry_if_exception(is_transient_error),
            wait=wait_retry_after(max_wait=30),
            stop=stop_after_attempt(config.retry_attempts),
            reraise=True,
        ),
        validate_response=lambda r: r.raise_for_status(),
    )
    return httpx.AsyncClient(transport=transport, timeout=config.timeout)


def create_deps(config: WeatherConfig) -> WeatherDeps:
    return WeatherDeps(
        config=config,
        geocoding_client=create_geocoding_client(config),
        weather_client=create_weather_client(config),
    )
