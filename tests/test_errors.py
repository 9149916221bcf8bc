# ABOUTME: Contract tests for the error taxonomy and httpx error translation.
# ABOUTME: Validates status-code and transport-failure mapping to domain exceptions.

import httpx
import pytest

from weather_lookup.errors import (
    NotFoundError,
    UpstreamAuthError,
    UpstreamError,
    UpstreamRateLimitError,
    UpstreamUnavailableError,
    WeatherLookupError,
    map_http_error,
)

_REQUEST = httpx.Request("GET", "https://test")


def _status_error(status: int) -> httpx.HTTPStatusError:
    response = httpx.Response(status, request=_REQUEST)
    return httpx.HTTPStatusError("error", request=_REQUEST, response=response)


@pytest.mark.parametrize(
    "status,expected",
    [
        (401, UpstreamAuthError),
        (429, UpstreamRateLimitError),
        (400, NotFoundError),
        (404, NotFoundError),
        (500, UpstreamError),
        (503, UpstreamError),
    ],
)
def test_status_mapping(status, expected):
    """Each provider status code maps to exactly one domain error type.

    Implementation: Builds HTTPStatusError objects for representative codes.
    Passing implies: Callers can branch on error type instead of status codes.
    """
    assert type(map_http_error(_status_error(status))) is expected


@pytest.mark.parametrize(
    "error",
    [
        httpx.ConnectError("refused", request=_REQUEST),
        httpx.ReadTimeout("slow", request=_REQUEST),
        httpx.ConnectTimeout("slow", request=_REQUEST),
    ],
)
def test_transport_failures_map_to_unavailable(error):
    assert isinstance(map_http_error(error), UpstreamUnavailableError)


def test_other_http_errors_map_to_generic_upstream():
    error = httpx.TooManyRedirects("loop", request=_REQUEST)
    assert type(map_http_error(error)) is UpstreamError


def test_taxonomy_shares_base_class():
    """All upstream errors are UpstreamError, and everything is a WeatherLookupError.

    Implementation: Checks subclass relationships.
    Passing implies: One except clause can catch the whole family.
    """
    for cls in (UpstreamAuthError, UpstreamRateLimitError, UpstreamUnavailableError):
        assert issubclass(cls, UpstreamError)
    assert issubclass(UpstreamError, WeatherLookupError)
    assert issubclass(NotFoundError, WeatherLookupError)
    assert not issubclass(NotFoundError, UpstreamError)
