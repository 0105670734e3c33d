"""Clients for the third-party geocoding and weather APIs."""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from app.schemas import GeocodingPayload, WeatherPayload
from models.records import Locality, PostalCode, WeatherReading
from services.errors import NotFoundError, UpstreamError

logger = logging.getLogger(__name__)

POSTAL_CODE_NOT_FOUND = "can not find zipcode"
WEATHER_UNAVAILABLE = "error getting weather data"


class GeocodingClient:
    """Resolves a postal code to its locality through ``/ws/<code>/json/``."""

    def __init__(self, client: httpx.AsyncClient, base_url: str, timeout: float) -> None:
        self._client = client
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    async def locate(self, code: PostalCode) -> Locality:
        url = f"{self.base_url}/ws/{code.digits}/json/"
        try:
            response = await self._client.get(url, timeout=self.timeout)
            payload = GeocodingPayload.model_validate_json(response.content)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            self._log_miss(code, f"transport: {type(exc).__name__}")
            raise NotFoundError(POSTAL_CODE_NOT_FOUND) from exc
        except ValidationError as exc:
            self._log_miss(code, f"undecodable body (status {response.status_code})")
            raise NotFoundError(POSTAL_CODE_NOT_FOUND) from exc

        locality = Locality(city=payload.localidade, region=payload.uf, not_found=payload.erro)
        if locality.not_found:
            self._log_miss(code, "flagged as unknown")
            raise NotFoundError(POSTAL_CODE_NOT_FOUND)
        return locality

    @staticmethod
    def _log_miss(code: PostalCode, reason: str) -> None:
        # every miss is a 404 to the caller; keep the cause visible here
        logger.warning(
            "Postal code lookup failed",
            extra={"cep": code.digits, "upstream": "geocoding", "reason": reason},
        )


class WeatherClient:
    """Fetches the current temperature for a city from ``/v1/current.json``."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: str,
        api_key: str,
        timeout: float,
    ) -> None:
        self._client = client
        self.base_url = base_url.rstrip("/")
        self._api_key = api_key
        self.timeout = timeout

    async def current(self, locality: Locality) -> WeatherReading:
        try:
            response = await self._client.get(
                f"{self.base_url}/v1/current.json",
                params={"key": self._api_key, "q": locality.city},
                timeout=self.timeout,
            )
            response.raise_for_status()
            payload = WeatherPayload.model_validate_json(response.content)
        except (httpx.HTTPError, httpx.InvalidURL, ValidationError) as exc:
            logger.error(
                "Weather lookup failed",
                extra={
                    "city": locality.city,
                    "upstream": "weather",
                    "reason": type(exc).__name__,
                },
            )
            raise UpstreamError(WEATHER_UNAVAILABLE) from exc
        return WeatherReading(temp_c=payload.current.temp_c)
