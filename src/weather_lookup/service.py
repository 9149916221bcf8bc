# ABOUTME: Orchestrates location resolution, weather data retrieval and forecast aggregation.
# ABOUTME: Backs the current/forecast/snapshot lookups and the map/video integration links.

import asyncio
import logging
from datetime import datetime, timezone
from urllib.parse import quote

from weather_lookup.aggregator import aggregate
from weather_lookup.deps import WeatherDeps
from weather_lookup.errors import InvalidInputError, NotFoundError, UpstreamError
from weather_lookup.models import (
    CurrentWeatherReport,
    ForecastReport,
    LinkResult,
    ResolvedLocation,
    WeatherSnapshot,
)
from weather_lookup.provider import get_current_weather, get_forecast_samples, reverse_geocode
from weather_lookup.resolver import LocationResolver

logger = logging.getLogger(__name__)

UNKNOWN_COORDS_NAME = "Unknown (via coords)"

MAPS_SEARCH_URL = "https://www.google.com/maps/search/?api=1&query="
YOUTUBE_SEARCH_URL = "https://www.youtube.com/results?search_query="


def parse_coordinates(lat: str | float | None, lon: str | float | None) -> tuple[float, float] | None:
    """Parse an optional lat/lon pair from request input.

    Returns None when neither is given. Raises InvalidInputError when only one is
    given, or when either is not a number within range.
    """
    if lat in (None, "") and lon in (None, ""):
        return None
    if lat in (None, "") or lon in (None, ""):
        raise InvalidInputError("Both latitude and longitude are required.")
    try:
        lat_f, lon_f = float(lat), float(lon)
    except (TypeError, ValueError) as e:
        raise InvalidInputError("Invalid coordinate format or range.") from e
    if not (-90 <= lat_f <= 90 and -180 <= lon_f <= 180):
        raise InvalidInputError("Invalid coordinate format or range.")
    return lat_f, lon_f


class WeatherService:
    """Combines the resolver, the provider client and the aggregator for the API layer."""

    def __init__(self, deps: WeatherDeps):
        self.deps = deps
        self.resolver = LocationResolver(deps.geocoding_client, deps.config)

    async def locate(
        self,
        location: str | None = None,
        country: str | None = None,
        lat: str | float | None = None,
        lon: str | float | None = None,
    ) -> ResolvedLocation:
        """Resolve either a coordinate pair or a location query, coordinates first."""
        coords = parse_coordinates(lat, lon)
        if coords is not None:
            return await self._describe_coordinates(*coords)
        if not location or not location.strip():
            raise InvalidInputError("Location or coordinates are required.")
        return await self.resolver.resolve(location, country)

    async def _describe_coordinates(self, lat: float, lon: float) -> ResolvedLocation:
        """Attach a place name to known coordinates via reverse geocoding, best effort."""
        try:
            results = await reverse_geocode(self.deps.geocoding_client, self.deps.config, lat, lon)
        except (NotFoundError, UpstreamError) as e:
            logger.warning("Reverse geocode failed for %s,%s, using defaults: %s", lat, lon, e)
            results = []

        if results and isinstance(results[0], dict):
            first = results[0]
            return ResolvedLocation(
                lat=lat, lon=lon, name=first.get("name") or UNKNOWN_COORDS_NAME, country=first.get("country") or ""
            )
        logger.info("Reverse geocode returned no results for %s,%s", lat, lon)
        return ResolvedLocation(lat=lat, lon=lon, name=UNKNOWN_COORDS_NAME, country="")

    async def current(self, location=None, country=None, lat=None, lon=None) -> CurrentWeatherReport:
        resolved = await self.locate(location, country, lat, lon)
        current = await get_current_weather(self.deps.weather_client, self.deps.config, resolved.lat, resolved.lon)
        return CurrentWeatherReport(location=resolved, current=current)

    async def forecast(self, location=None, country=None, lat=None, lon=None) -> ForecastReport:
        resolved = await self.locate(location, country, lat, lon)
        samples = await get_forecast_samples(self.deps.weather_client, self.deps.config, resolved.lat, resolved.lon)
        return ForecastReport(location=resolved, forecast=aggregate(samples))

    async def snapshot(self, location: str | None, country: str | None = None) -> WeatherSnapshot:
        """Resolve a query and capture current weather plus the daily forecast in one record."""
        resolved = await self.resolver.resolve(location, country)
        client, config = self.deps.weather_client, self.deps.config
        current, samples = await asyncio.gather(
            get_current_weather(client, config, resolved.lat, resolved.lon),
            get_forecast_samples(client, config, resolved.lat, resolved.lon),
        )
        return WeatherSnapshot(
            query=location.strip(),
            country_query=country.strip().upper() if country and country.strip() else None,
            location=resolved,
            current=current,
            forecast=aggregate(samples),
            searched_at=datetime.now(timezone.utc),
        )

    async def map_link(self, location: str | None) -> LinkResult:
        """Google Maps search link for a location, falling back to the raw query."""
        resolved = await self._resolve_for_link(location)
        if resolved is None:
            return LinkResult(url=MAPS_SEARCH_URL + quote(location.strip(), safe=""), location_name=location.strip())
        target = f"{resolved.name}, {resolved.country}"
        return LinkResult(url=MAPS_SEARCH_URL + quote(target, safe=""), location_name=resolved.name)

    async def youtube_link(self, location: str | None) -> LinkResult:
        """YouTube travel-video search link for a location, falling back to the raw query."""
        resolved = await self._resolve_for_link(location)
        if resolved is not None and resolved.name and resolved.country:
            search = f"{resolved.name} {resolved.country}"
        else:
            search = location.strip()
        url = YOUTUBE_SEARCH_URL + quote(f"{search} travel vlog OR tourism", safe="")
        return LinkResult(url=url, location_name=search)

    async def _resolve_for_link(self, location: str | None) -> ResolvedLocation | None:
        if not location or not location.strip():
            raise InvalidInputError("Location query is required.")
        try:
            return await self.resolver.resolve(location)
        except (NotFoundError, UpstreamError) as e:
            logger.warning("Using raw query %r for link, geocoding failed: %s", location, e)
            return None
