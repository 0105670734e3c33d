from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


_ZIPKIN_ENDPOINT_ENV = "OTEL_EXPORTER_ZIPKIN_ENDPOINT"
_RESOLVER_BASE_URL_ENV = "RESOLVER_BASE_URL"
_WEATHER_API_KEY_ENV = "WEATHER_API_KEY"
_GEOCODING_BASE_URL_ENV = "GEOCODING_BASE_URL"
_WEATHER_API_BASE_URL_ENV = "WEATHER_API_BASE_URL"
_GATEWAY_TIMEOUT_ENV = "GATEWAY_TIMEOUT_SECONDS"
_UPSTREAM_TIMEOUT_ENV = "UPSTREAM_TIMEOUT_SECONDS"
_GATEWAY_PORT_ENV = "GATEWAY_PORT"
_RESOLVER_PORT_ENV = "RESOLVER_PORT"
_LOG_LEVEL_ENV = "LOG_LEVEL"

DEFAULT_ZIPKIN_ENDPOINT = "http://localhost:9411/api/v2/spans"


@dataclass(frozen=True)
class Settings:
    zipkin_endpoint: str
    resolver_base_url: str
    weather_api_key: str
    geocoding_base_url: str
    weather_api_base_url: str
    gateway_timeout: float
    upstream_timeout: float
    gateway_port: int
    resolver_port: int
    log_level: str


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_url_env(name: str, default: str) -> str:
    return _read_str_env(name, default).rstrip("/")


def _read_secret_env(name: str) -> str:
    value = os.getenv(name)
    if value is None:
        return ""
    return value.strip()


def _read_positive_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = float(candidate)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _read_port(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = int(candidate)
    except ValueError:
        return default
    return parsed if 0 < parsed < 65536 else default


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        zipkin_endpoint=_read_str_env(_ZIPKIN_ENDPOINT_ENV, DEFAULT_ZIPKIN_ENDPOINT),
        resolver_base_url=_read_url_env(_RESOLVER_BASE_URL_ENV, "http://localhost:8081"),
        weather_api_key=_read_secret_env(_WEATHER_API_KEY_ENV),
        geocoding_base_url=_read_url_env(_GEOCODING_BASE_URL_ENV, "https://viacep.com.br"),
        weather_api_base_url=_read_url_env(
            _WEATHER_API_BASE_URL_ENV, "https://api.weatherapi.com"
        ),
        gateway_timeout=_read_positive_float(_GATEWAY_TIMEOUT_ENV, 10.0),
        upstream_timeout=_read_positive_float(_UPSTREAM_TIMEOUT_ENV, 5.0),
        gateway_port=_read_port(_GATEWAY_PORT_ENV, 8080),
        resolver_port=_read_port(_RESOLVER_PORT_ENV, 8081),
        log_level=_read_log_level("INFO"),
    )
