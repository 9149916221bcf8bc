# ABOUTME: ASGI web entry point for the weather lookup API.
# ABOUTME: Starlette routes for current weather, forecast, snapshot and integration links, with error mapping.

import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse
from starlette.routing import Route

from weather_lookup.config import configure_logging, load_config
from weather_lookup.deps import create_deps
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
from weather_lookup.service import WeatherService

logger = logging.getLogger(__name__)

# Most specific first; the first matching class wins.
ERROR_STATUS: list[tuple[type[WeatherLookupError], int]] = [
    (InvalidInputError, 400),
    (NotFoundError, 404),
    (UpstreamRateLimitError, 503),
    (UpstreamUnavailableError, 504),
    (UpstreamAuthError, 502),
    (UpstreamError, 502),
    (ConfigurationError, 500),
]


def status_for(exc: WeatherLookupError) -> int:
    for error_type, status in ERROR_STATUS:
        if isinstance(exc, error_type):
            return status
    return 500


async def handle_lookup_error(request: Request, exc: WeatherLookupError) -> JSONResponse:
    status = status_for(exc)
    if status >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc, exc_info=exc)
    else:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc)
    return JSONResponse({"message": str(exc)}, status_code=status)


def _service(request: Request) -> WeatherService:
    return request.app.state.service


def _location_params(request: Request) -> dict:
    params = request.query_params
    return {
        "location": params.get("location"),
        "country": params.get("country"),
        "lat": params.get("lat"),
        "lon": params.get("lon"),
    }


async def root(request: Request) -> PlainTextResponse:
    return PlainTextResponse("Weather lookup backend running")


async def current_weather(request: Request) -> JSONResponse:
    report = await _service(request).current(**_location_params(request))
    return JSONResponse(report.model_dump(mode="json"))


async def forecast(request: Request) -> JSONResponse:
    report = await _service(request).forecast(**_location_params(request))
    return JSONResponse(report.model_dump(mode="json"))


async def snapshot(request: Request) -> JSONResponse:
    params = request.query_params
    record = await _service(request).snapshot(params.get("location"), params.get("country"))
    return JSONResponse(record.model_dump(mode="json"))


async def map_link(request: Request) -> JSONResponse:
    link = await _service(request).map_link(request.query_params.get("location"))
    return JSONResponse({"mapUrl": link.url, "locationName": link.location_name})


async def youtube_link(request: Request) -> JSONResponse:
    link = await _service(request).youtube_link(request.query_params.get("location"))
    return JSONResponse({"youtubeUrl": link.url, "locationName": link.location_name})


routes = [
    Route("/", root),
    Route("/api/weather/current", current_weather),
    Route("/api/weather/forecast", forecast),
    Route("/api/weather/snapshot", snapshot),
    Route("/api/integrations/map", map_link),
    Route("/api/integrations/youtube", youtube_link),
]


def create_app(service: WeatherService | None = None, frontend_url: str = "*") -> Starlette:
    """Build the ASGI app.

    With no injected service, configuration is loaded at startup (failing fast on a
    missing API key) and the HTTP clients live for the lifetime of the app.
    """

    @asynccontextmanager
    async def lifespan(app: Starlette):
        if service is not None:
            yield
            return

        config = load_config()
        configure_logging(config.log_level)
        deps = create_deps(config)
        app.state.service = WeatherService(deps)
        logger.info("Weather lookup API started (geo: %s, data: %s)", config.geo_url, config.data_url)
        try:
            yield
        finally:
            await deps.aclose()

    app = Starlette(
        routes=routes,
        middleware=[Middleware(CORSMiddleware, allow_origins=[frontend_url], allow_methods=["GET"])],
        exception_handlers={WeatherLookupError: handle_lookup_error},
        lifespan=lifespan,
    )
    if service is not None:
        app.state.service = service
    return app


load_dotenv()

app = create_app(frontend_url=os.environ.get("FRONTEND_URL", "*"))
