# ABOUTME: Pydantic BaseModels for location queries, resolved locations and forecast data.
# ABOUTME: Defines the structured types exchanged between resolver, aggregator, service and API.

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LocationQuery(BaseModel):
    """A user-supplied location query with an optional two-letter country hint."""

    model_config = ConfigDict(frozen=True)

    text: str
    country_hint: str | None = None

    @field_validator("text")
    @classmethod
    def _strip_text(cls, value: str) -> str:
        return value.strip()

    @field_validator("country_hint")
    @classmethod
    def _normalize_hint(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip().upper() or None

    @property
    def qualified(self) -> str:
        """Query string with the country hint appended, as the provider expects it."""
        if self.country_hint:
            return f"{self.text},{self.country_hint}"
        return self.text


class ResolvedLocation(BaseModel):
    """Coordinates and display metadata for a resolved location."""

    model_config = ConfigDict(frozen=True)

    lat: float = Field(ge=-90, le=90)
    lon: float = Field(ge=-180, le=180)
    name: str
    country: str


class ForecastSample(BaseModel):
    """One 3-hour reading from the upstream forecast feed.

    Fields other than the timestamp may be missing when the upstream item is malformed.
    """

    model_config = ConfigDict(frozen=True)

    timestamp: int
    temperature: float | None = None
    humidity: int | None = None
    description: str | None = None
    icon: str | None = None

    @property
    def date_key(self) -> str:
        """UTC calendar date of the sample, as YYYY-MM-DD."""
        return datetime.fromtimestamp(self.timestamp, tz=timezone.utc).date().isoformat()

    @property
    def is_complete(self) -> bool:
        return self.temperature is not None and bool(self.description) and bool(self.icon)


class DailyForecastSummary(BaseModel):
    """Aggregated forecast for one calendar day."""

    model_config = ConfigDict(frozen=True)

    dt: int
    date: str
    temp_min: float
    temp_max: float
    description: str
    icon: str


class CurrentWeather(BaseModel):
    """Current conditions at a location, as reported by the provider."""

    model_config = ConfigDict(frozen=True)

    timestamp: int
    temp: float | None = None
    feels_like: float | None = None
    humidity: int | None = None
    pressure: int | None = None
    wind_speed: float | None = None
    description: str | None = None
    icon: str | None = None


class CurrentWeatherReport(BaseModel):
    location: ResolvedLocation
    current: CurrentWeather


class ForecastReport(BaseModel):
    location: ResolvedLocation
    forecast: list[DailyForecastSummary] = []


class WeatherSnapshot(BaseModel):
    """Combined lookup result, the record a search-history store persists."""

    query: str
    country_query: str | None = None
    location: ResolvedLocation
    current: CurrentWeather
    forecast: list[DailyForecastSummary] = []
    searched_at: datetime


class LinkResult(BaseModel):
    """External link built for a location (map or video search)."""

    url: str
    location_name: str
