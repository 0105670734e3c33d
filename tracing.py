"""Explicit tracing handle shared by the gateway and the resolver.

Each service builds one ``Tracing`` at startup and hands it to the components
that need it; no process-wide tracer provider is installed.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Mapping, MutableMapping, Optional

import httpx
from opentelemetry import trace
from opentelemetry.exporter.zipkin.json import ZipkinExporter
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator

from settings import Settings, get_settings

logger = logging.getLogger(__name__)


class TracingInitError(RuntimeError):
    """Raised when the span exporter cannot be configured."""


class Tracing:
    """Creates spans and moves trace context across HTTP hops."""

    def __init__(self, service_name: str, provider: trace.TracerProvider) -> None:
        self.service_name = service_name
        self.provider = provider
        self._tracer = provider.get_tracer(service_name)
        self._propagator = TraceContextTextMapPropagator()

    @classmethod
    def noop(cls, service_name: str) -> "Tracing":
        return cls(service_name, trace.NoOpTracerProvider())

    @contextmanager
    def span(
        self,
        name: str,
        carrier: Optional[Mapping[str, str]] = None,
    ) -> Iterator[trace.Span]:
        """Open a span that ends exactly once, whatever happens inside it.

        With a ``carrier`` the span continues the trace found in the inbound
        headers; without one it nests under the current span.
        """
        context = self._propagator.extract(carrier) if carrier is not None else None
        with self._tracer.start_as_current_span(name, context=context) as span:
            yield span

    def inject(self, headers: MutableMapping[str, str]) -> MutableMapping[str, str]:
        self._propagator.inject(headers)
        return headers

    def shutdown(self) -> None:
        """Flush pending spans and release the exporter."""
        shutdown = getattr(self.provider, "shutdown", None)
        if shutdown is None:
            return
        logger.info("Flushing pending spans", extra={"service": self.service_name})
        shutdown()


def _validate_endpoint(endpoint: str) -> str:
    try:
        url = httpx.URL(endpoint)
    except httpx.InvalidURL as exc:
        raise TracingInitError(f"Invalid trace collector endpoint {endpoint!r}.") from exc
    if url.scheme not in {"http", "https"} or not url.host:
        raise TracingInitError(f"Invalid trace collector endpoint {endpoint!r}.")
    return str(url)


def build_tracing(service_name: str, settings: Optional[Settings] = None) -> Tracing:
    """Build a tracing handle exporting batched spans to the Zipkin collector."""
    settings = settings or get_settings()
    endpoint = _validate_endpoint(settings.zipkin_endpoint)
    # the app lifespan owns shutdown; no second flush from atexit
    provider = TracerProvider(
        resource=Resource.create({SERVICE_NAME: service_name}),
        shutdown_on_exit=False,
    )
    provider.add_span_processor(BatchSpanProcessor(ZipkinExporter(endpoint=endpoint)))
    logger.info(
        "Exporting spans to %s",
        endpoint,
        extra={"service": service_name},
    )
    return Tracing(service_name, provider)
