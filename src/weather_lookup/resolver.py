# ABOUTME: Resolves free-form location text (city name or postal code) to coordinates.
# ABOUTME: Tries the provider's zip endpoint for postal-like input, then falls back to direct search.

import logging
import re

import httpx

from weather_lookup.config import WeatherConfig
from weather_lookup.errors import InvalidInputError, NotFoundError
from weather_lookup.models import LocationQuery, ResolvedLocation
from weather_lookup.provider import direct_search, zip_lookup

logger = logging.getLogger(__name__)

# Letters and digits for formats like Canada/UK, optionally split by single spaces or hyphens.
_POSTAL_PATTERN = re.compile(r"^[A-Za-z0-9]+(?:[ -][A-Za-z0-9]+)*$")

UNKNOWN_COUNTRY = "Unknown"


def is_postal_like(text: str) -> bool:
    """Heuristic: does the text look like a postal/zip code rather than a place name?

    Short alphabetic strings ("Paris") also match; the direct-search fallback covers them.
    """
    return bool(_POSTAL_PATTERN.match(text))


def _coordinates(data: dict) -> tuple[float, float] | None:
    """Extract (lat, lon) if both are numbers within range, else None."""
    lat, lon = data.get("lat"), data.get("lon")
    for value in (lat, lon):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
    if not (-90 <= lat <= 90 and -180 <= lon <= 180):
        return None
    return float(lat), float(lon)


class LocationResolver:
    """Turns a location query into a ResolvedLocation via the provider's geocoding endpoints."""

    def __init__(self, client: httpx.AsyncClient, config: WeatherConfig):
        self._client = client
        self._config = config

    async def resolve(self, text: str | None, country_hint: str | None = None) -> ResolvedLocation:
        """Resolve ``text`` (and optional country hint) to coordinates.

        Raises InvalidInputError for empty text, ConfigurationError when the API key
        is missing, NotFoundError when no strategy yields coordinates, and an
        UpstreamError subclass when the provider itself fails.
        """
        query = LocationQuery(text=text or "", country_hint=country_hint)
        if not query.text:
            raise InvalidInputError("Location input cannot be empty.")
        self._config.require_api_key()

        postal = is_postal_like(query.text)
        logger.info("Resolving %r (country hint: %s, postal-like: %s)", query.text, query.country_hint, postal)

        if postal:
            location = await self._resolve_postal(query)
            if location is not None:
                return location

        location = await self._resolve_direct(query)
        if location is not None:
            return location

        if postal:
            where = f" in {query.country_hint}" if query.country_hint else ""
            raise NotFoundError(
                f'Location "{query.text}"{where} not found via postal or direct search.',
                attempted=("postal", "direct"),
            )
        raise NotFoundError(f'Location "{query.qualified}" not found via direct search.', attempted=("direct",))

    async def _resolve_postal(self, query: LocationQuery) -> ResolvedLocation | None:
        try:
            data = await zip_lookup(self._client, self._config, query.qualified)
        except NotFoundError:
            logger.info("Zip lookup for %r found nothing, trying direct search", query.qualified)
            return None

        coords = _coordinates(data)
        if coords is None:
            logger.info("Zip lookup for %r returned no usable coordinates: %r", query.qualified, data)
            return None
        lat, lon = coords
        return ResolvedLocation(
            lat=lat,
            lon=lon,
            name=data.get("name") or query.text,
            country=data.get("country") or query.country_hint or UNKNOWN_COUNTRY,
        )

    async def _resolve_direct(self, query: LocationQuery) -> ResolvedLocation | None:
        try:
            results = await direct_search(self._client, self._config, query.qualified, limit=1)
        except NotFoundError:
            logger.info("Direct search for %r was rejected by the provider", query.qualified)
            return None
        if not results or not isinstance(results[0], dict):
            logger.info("Direct search for %r returned no results", query.qualified)
            return None

        first = results[0]
        coords = _coordinates(first)
        if coords is None:
            logger.info("Direct search for %r returned no usable coordinates: %r", query.qualified, first)
            return None
        lat, lon = coords
        return ResolvedLocation(lat=lat, lon=lon, name=first.get("name") or "", country=first.get("country") or "")
