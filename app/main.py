from __future__ import annotations

import logging
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from typing import AsyncIterator, Callable, Optional

import httpx
from fastapi import FastAPI

from app.errors import install_error_handlers
from app.gateway_api import router as gateway_router
from app.resolver_api import router as resolver_router
from logging_config import configure_logging
from services.gateway import build_gateway_service
from services.resolver import build_resolver_service
from settings import Settings, get_settings
from tracing import Tracing, build_tracing

GATEWAY_SERVICE_NAME = "cep-gateway"
RESOLVER_SERVICE_NAME = "weather-resolver"

logger = logging.getLogger(__name__)


def _lifespan(
    client: httpx.AsyncClient, tracing: Tracing
) -> Callable[[FastAPI], AbstractAsyncContextManager[None]]:
    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        logger.info("Service started", extra={"service": tracing.service_name})
        try:
            yield
        finally:
            await client.aclose()
            tracing.shutdown()

    return lifespan


def create_gateway_app(
    settings: Optional[Settings] = None,
    tracing: Optional[Tracing] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """Build the front gateway; ``transport`` replaces the network in tests."""
    configure_logging()
    settings = settings or get_settings()
    tracing = tracing or build_tracing(GATEWAY_SERVICE_NAME, settings)
    client = httpx.AsyncClient(transport=transport, timeout=settings.gateway_timeout)

    app = FastAPI(
        title="CEP Weather Gateway",
        description="Validates postal codes and relays them to the weather resolver.",
        version="0.1.0",
        lifespan=_lifespan(client, tracing),
    )
    app.state.tracing = tracing
    app.state.gateway = build_gateway_service(settings, tracing, client)
    install_error_handlers(app)
    app.include_router(gateway_router)
    return app


def create_resolver_app(
    settings: Optional[Settings] = None,
    tracing: Optional[Tracing] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """Build the resolver; ``transport`` replaces the third-party APIs in tests."""
    configure_logging()
    settings = settings or get_settings()
    tracing = tracing or build_tracing(RESOLVER_SERVICE_NAME, settings)
    client = httpx.AsyncClient(transport=transport, timeout=settings.upstream_timeout)

    app = FastAPI(
        title="CEP Weather Resolver",
        description="Geocodes postal codes and reports the current temperature.",
        version="0.1.0",
        lifespan=_lifespan(client, tracing),
    )
    app.state.tracing = tracing
    app.state.resolver = build_resolver_service(settings, tracing, client)
    install_error_handlers(app)
    app.include_router(resolver_router)
    return app
