"""Shared fixtures: settings, stubbed third-party APIs and span recording."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional

import httpx
import pytest
from opentelemetry.sdk.trace import ReadableSpan, SpanProcessor, TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from settings import Settings
from tracing import Tracing

GEOCODING_HOST = "geo.test"
WEATHER_HOST = "weather.test"
RESOLVER_HOST = "resolver.test"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        zipkin_endpoint="http://zipkin.test:9411/api/v2/spans",
        resolver_base_url=f"http://{RESOLVER_HOST}",
        weather_api_key="test-key",
        geocoding_base_url=f"https://{GEOCODING_HOST}",
        weather_api_base_url=f"https://{WEATHER_HOST}",
        gateway_timeout=10.0,
        upstream_timeout=5.0,
        gateway_port=8080,
        resolver_port=8081,
        log_level="INFO",
    )


class CountingSpanProcessor(SpanProcessor):
    """Collector double that records every span start and end."""

    def __init__(self) -> None:
        self.started: List[str] = []
        self.ended: List[str] = []

    def on_start(self, span, parent_context=None) -> None:
        self.started.append(span.name)

    def on_end(self, span: ReadableSpan) -> None:
        self.ended.append(span.name)


@dataclass
class SpanRecorder:
    provider: TracerProvider
    exporter: InMemorySpanExporter
    counter: CountingSpanProcessor

    def tracing(self, service_name: str) -> Tracing:
        return Tracing(service_name, self.provider)

    def finished(self) -> dict[str, ReadableSpan]:
        return {span.name: span for span in self.exporter.get_finished_spans()}

    def assert_balanced(self) -> None:
        assert self.counter.started, "no spans were opened"
        assert sorted(self.counter.started) == sorted(self.counter.ended)


@pytest.fixture
def span_recorder() -> SpanRecorder:
    provider = TracerProvider()
    exporter = InMemorySpanExporter()
    counter = CountingSpanProcessor()
    provider.add_span_processor(counter)
    provider.add_span_processor(SimpleSpanProcessor(exporter))
    return SpanRecorder(provider=provider, exporter=exporter, counter=counter)


# A reply is a JSON-able payload, an ``httpx.Response``, a callable taking the
# request, or an exception to raise.
Reply = Any


def _reply(reply: Reply, request: httpx.Request) -> httpx.Response:
    if isinstance(reply, Exception):
        raise reply
    if isinstance(reply, httpx.Response):
        return reply
    if callable(reply):
        return reply(request)
    return httpx.Response(200, json=reply)


@dataclass
class StubUpstream:
    """In-process stand-in for the geocoding and weather APIs."""

    geocode: Reply = field(
        default_factory=lambda: {"localidade": "São Paulo", "uf": "SP", "erro": False}
    )
    weather: Reply = field(default_factory=lambda: {"current": {"temp_c": 25.0}})
    requests: List[httpx.Request] = field(default_factory=list)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == GEOCODING_HOST:
            return _reply(self.geocode, request)
        if request.url.host == WEATHER_HOST:
            return _reply(self.weather, request)
        return httpx.Response(404, text="unknown host")

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def calls_to(self, host: str) -> List[httpx.Request]:
        return [request for request in self.requests if request.url.host == host]


@dataclass
class StubResolver:
    """Stand-in for the resolver as seen by the gateway."""

    reply: Reply = field(
        default_factory=lambda: {
            "city": "São Paulo",
            "temp_C": 25.0,
            "temp_F": 77.0,
            "temp_K": 298.15,
        }
    )
    requests: List[httpx.Request] = field(default_factory=list)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return _reply(self.reply, request)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


def json_error(status_code: int, message: Optional[str] = None, **extra: Any) -> httpx.Response:
    body = dict(extra)
    if message is not None:
        body["message"] = message
    return httpx.Response(status_code, json=body)
