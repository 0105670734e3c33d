"""Resolver pipeline: geocode, fetch weather, convert."""

from __future__ import annotations

import logging
import time

import httpx

from app.schemas import WeatherResult
from models.records import PostalCode
from services.conversion import build_weather_result
from services.errors import BadRequestError
from services.upstream import GeocodingClient, WeatherClient
from settings import Settings
from tracing import Tracing

logger = logging.getLogger(__name__)


def parse_path_code(path: str) -> PostalCode:
    """Extract the single segment that follows ``/weather/``."""
    segments = path.split("/")
    if len(segments) != 1 or not segments[0]:
        raise BadRequestError("invalid request path")
    return PostalCode(digits=segments[0])


class ResolverService:
    """Turns a normalized postal code into a ``WeatherResult``."""

    def __init__(
        self,
        geocoding: GeocodingClient,
        weather: WeatherClient,
        tracing: Tracing,
    ) -> None:
        self.geocoding = geocoding
        self.weather = weather
        self.tracing = tracing

    async def resolve(self, code: PostalCode) -> WeatherResult:
        start_time = time.perf_counter()

        with self.tracing.span("get-location") as span:
            span.set_attribute("cep", code.digits)
            locality = await self.geocoding.locate(code)

        with self.tracing.span("get-weather") as span:
            span.set_attribute("city", locality.city)
            reading = await self.weather.current(locality)

        result = build_weather_result(locality, reading)
        logger.info(
            "Resolved weather",
            extra={
                "cep": code.digits,
                "city": result.city,
                "elapsed_ms": int((time.perf_counter() - start_time) * 1000),
            },
        )
        return result


def build_resolver_service(
    settings: Settings,
    tracing: Tracing,
    client: httpx.AsyncClient,
) -> ResolverService:
    """Wire the resolver with clients for the configured third-party APIs."""
    geocoding = GeocodingClient(
        client=client,
        base_url=settings.geocoding_base_url,
        timeout=settings.upstream_timeout,
    )
    weather = WeatherClient(
        client=client,
        base_url=settings.weather_api_base_url,
        api_key=settings.weather_api_key,
        timeout=settings.upstream_timeout,
    )
    return ResolverService(geocoding=geocoding, weather=weather, tracing=tracing)
