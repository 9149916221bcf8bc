# ABOUTME: Weather lookup backend: location resolution, forecast aggregation and an HTTP API.
# ABOUTME: Re-exports the resolver, aggregator and error taxonomy for library use.

from weather_lookup.aggregator import aggregate
from weather_lookup.errors import (
    ConfigurationError,
    InvalidInputError,
    NotFoundError,
    UpstreamAuthError,
    UpstreamError,
    UpstreamRateLimitError,
    UpstreamUnavailableError,
    WeatherLookupError,
)
from weather_lookup.resolver import LocationResolver, is_postal_like

__all__ = [
    "ConfigurationError",
    "InvalidInputError",
    "LocationResolver",
    "NotFoundError",
    "UpstreamAuthError",
    "UpstreamError",
    "UpstreamRateLimitError",
    "UpstreamUnavailableError",
    "WeatherLookupError",
    "aggregate",
    "is_postal_like",
]
