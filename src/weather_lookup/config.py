# ABOUTME: Immutable runtime configuration for the weather lookup service.
# ABOUTME: Loads the OpenWeatherMap credential and endpoints from .env / environment and sets up logging.

import logging
import os
from collections.abc import Mapping

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, ValidationError

from weather_lookup.errors import ConfigurationError

DEFAULT_GEO_URL = "https://api.openweathermap.org/geo/1.0"
DEFAULT_DATA_URL = "https://api.openweathermap.org/data/2.5"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class WeatherConfig(BaseModel):
    """Credential, endpoints and HTTP behaviour for the upstream weather provider.

    Built once at process start and never mutated. An empty ``api_key`` is
    representable so that callers fail uniformly with ConfigurationError on use.
    """

    model_config = ConfigDict(frozen=True)

    api_key: str
    geo_url: str = DEFAULT_GEO_URL
    data_url: str = DEFAULT_DATA_URL
    timeout: float = 5.0
    retry_attempts: int = 3
    units: str = "metric"
    frontend_url: str = "*"
    log_level: str = "INFO"

    def require_api_key(self) -> str:
        """Return the API key, raising ConfigurationError if it is missing."""
        if not self.api_key.strip():
            raise ConfigurationError("Server configuration error: missing OpenWeatherMap API key.")
        return self.api_key


def load_config(environ: Mapping[str, str] | None = None) -> WeatherConfig:
    """Build a validated WeatherConfig from the environment.

    Reads a local .env file first when ``environ`` is not given. Raises
    ConfigurationError when the API key is absent or a numeric setting is malformed.
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    values = {
        "api_key": environ.get("OPENWEATHERMAP_API_KEY", ""),
        "geo_url": environ.get("OPENWEATHERMAP_GEO_URL", DEFAULT_GEO_URL),
        "data_url": environ.get("OPENWEATHERMAP_DATA_URL", DEFAULT_DATA_URL),
        "timeout": environ.get("WEATHER_HTTP_TIMEOUT", 5.0),
        "retry_attempts": environ.get("WEATHER_RETRY_ATTEMPTS", 3),
        "units": environ.get("WEATHER_UNITS", "metric"),
        "frontend_url": environ.get("FRONTEND_URL", "*"),
        "log_level": environ.get("LOG_LEVEL", "INFO"),
    }
    try:
        config = WeatherConfig(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid weather configuration: {e}") from e

    config.require_api_key()
    return config


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for the service process."""
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
