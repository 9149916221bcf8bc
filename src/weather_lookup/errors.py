# ABOUTME: Error taxonomy for location resolution and upstream weather API failures.
# ABOUTME: Translates httpx errors into the domain exceptions callers map to HTTP statuses.

import httpx


class WeatherLookupError(Exception):
    """Base class for every error raised by weather_lookup."""


class InvalidInputError(WeatherLookupError):
    """The caller supplied an unusable query (empty text, bad coordinates)."""


class ConfigurationError(WeatherLookupError):
    """Required configuration is missing or malformed."""


class NotFoundError(WeatherLookupError):
    """No location could be resolved for the query.

    ``attempted`` lists the lookup strategies that were tried, in order.
    """

    def __init__(self, message: str, attempted: tuple[str, ...] = ()):
        super().__init__(message)
        self.attempted = attempted


class UpstreamError(WeatherLookupError):
    """The upstream weather provider failed in an unexpected way."""


class UpstreamAuthError(UpstreamError):
    """The upstream provider rejected the API key."""


class UpstreamRateLimitError(UpstreamError):
    """The upstream provider is throttling requests."""


class UpstreamUnavailableError(UpstreamError):
    """No response was received from the upstream provider (network error or timeout)."""


def map_http_error(exc: httpx.HTTPError) -> WeatherLookupError:
    """Translate an httpx error into the matching domain error."""
    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        if status == 401:
            return UpstreamAuthError("Weather provider rejected the API key.")
        if status == 429:
            return UpstreamRateLimitError("Weather provider rate limit exceeded.")
        if 400 <= status < 500:
            return NotFoundError("Location query failed or was not found by the weather provider.")
        return UpstreamError(f"Weather provider returned HTTP {status}.")
    if isinstance(exc, httpx.TransportError):
        return UpstreamUnavailableError(f"Weather provider unreachable: {exc}")
    return UpstreamError(f"Weather provider request failed: {exc}")
