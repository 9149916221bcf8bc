# ABOUTME: Client functions for the OpenWeatherMap geocoding and weather data APIs.
# ABOUTME: Handles zip/direct/reverse geocoding, current weather and forecast retrieval and parsing.

import logging

import httpx

from weather_lookup.config import WeatherConfig
from weather_lookup.errors import UpstreamError, map_http_error
from weather_lookup.models import CurrentWeather, ForecastSample

logger = logging.getLogger(__name__)


async def _get_json(client: httpx.AsyncClient, url: str, params: dict):
    """GET a provider endpoint and decode JSON, translating httpx failures into domain errors."""
    try:
        resp = await client.get(url, params=params)
        resp.raise_for_status()
    except httpx.HTTPError as e:
        error = map_http_error(e)
        logger.warning("Request to %s failed: %s", url, error)
        raise error from e
    try:
        return resp.json()
    except ValueError as e:
        raise UpstreamError(f"Weather provider returned a non-JSON body from {url}.") from e


async def zip_lookup(client: httpx.AsyncClient, config: WeatherConfig, zip_query: str) -> dict:
    """Look up a postal code ("<zip>" or "<zip>,<country>") on the provider's zip endpoint."""
    data = await _get_json(
        client,
        f"{config.geo_url}/zip",
        {"zip": zip_query, "appid": config.require_api_key()},
    )
    return data if isinstance(data, dict) else {}


async def direct_search(client: httpx.AsyncClient, config: WeatherConfig, query: str, limit: int = 1) -> list:
    """Search place names on the provider's direct geocoding endpoint."""
    data = await _get_json(
        client,
        f"{config.geo_url}/direct",
        {"q": query, "limit": limit, "appid": config.require_api_key()},
    )
    return data if isinstance(data, list) else []


async def reverse_geocode(
    client: httpx.AsyncClient, config: WeatherConfig, lat: float, lon: float, limit: int = 1
) -> list:
    """Find place names near a coordinate pair."""
    data = await _get_json(
        client,
        f"{config.geo_url}/reverse",
        {"lat": lat, "lon": lon, "limit": limit, "appid": config.require_api_key()},
    )
    return data if isinstance(data, list) else []


async def get_current_weather(
    client: httpx.AsyncClient, config: WeatherConfig, lat: float, lon: float
) -> CurrentWeather:
    """Fetch current conditions for a coordinate pair."""
    data = await _get_json(
        client,
        f"{config.data_url}/weather",
        {"lat": lat, "lon": lon, "appid": config.require_api_key(), "units": config.units},
    )
    return parse_current_weather(data if isinstance(data, dict) else {})


async def get_forecast_samples(
    client: httpx.AsyncClient, config: WeatherConfig, lat: float, lon: float
) -> list[ForecastSample]:
    """Fetch the 5-day / 3-hour forecast feed for a coordinate pair."""
    data = await _get_json(
        client,
        f"{config.data_url}/forecast",
        {"lat": lat, "lon": lon, "appid": config.require_api_key(), "units": config.units},
    )
    return parse_forecast_samples(data.get("list", []) if isinstance(data, dict) else [])


def parse_current_weather(raw: dict) -> CurrentWeather:
    """Flatten a provider current-weather payload into CurrentWeather.

    Fields of the wrong type are reported as missing.
    """
    main = _dict_or_empty(raw.get("main"))
    wind = _dict_or_empty(raw.get("wind"))
    weather = _first_condition(raw)
    return CurrentWeather(
        timestamp=_int_or_none(raw.get("dt")) or 0,
        temp=_number_or_none(main.get("temp")),
        feels_like=_number_or_none(main.get("feels_like")),
        humidity=_int_or_none(main.get("humidity")),
        pressure=_int_or_none(main.get("pressure")),
        wind_speed=_number_or_none(wind.get("speed")),
        description=_str_or_none(weather.get("description")),
        icon=_str_or_none(weather.get("icon")),
    )


def parse_forecast_samples(items: list) -> list[ForecastSample]:
    """Convert raw forecast list items into ForecastSample rows.

    Items without a timestamp cannot be placed on a calendar day and are dropped.
    Missing or mistyped fields are kept as None so the aggregator can skip the sample.
    """
    result = []
    for item in items:
        if not isinstance(item, dict) or _int_or_none(item.get("dt")) is None:
            logger.warning("Dropping forecast item without a timestamp: %r", item)
            continue
        main = _dict_or_empty(item.get("main"))
        weather = _first_condition(item)
        result.append(
            ForecastSample(
                timestamp=item["dt"],
                temperature=_number_or_none(main.get("temp")),
                humidity=_int_or_none(main.get("humidity")),
                description=_str_or_none(weather.get("description")),
                icon=_str_or_none(weather.get("icon")),
            )
        )
    return result


def _first_condition(raw: dict) -> dict:
    """Return the first entry of a payload's "weather" array, or an empty dict."""
    conditions = raw.get("weather")
    if isinstance(conditions, list) and conditions and isinstance(conditions[0], dict):
        return conditions[0]
    return {}


def _dict_or_empty(value) -> dict:
    return value if isinstance(value, dict) else {}


def _number_or_none(value):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def _int_or_none(value):
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def _str_or_none(value):
    return value if isinstance(value, str) else None
