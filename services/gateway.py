"""Front gateway: validate the inbound postal code and forward it."""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from app.schemas import PostalCodeRequest, WeatherResult
from models.records import PostalCode
from services.errors import BadRequestError, InternalError, RelayedError
from services.postal_code import validate_postal_code
from settings import Settings
from tracing import Tracing

logger = logging.getLogger(__name__)


def parse_request(body: bytes) -> PostalCodeRequest:
    try:
        return PostalCodeRequest.model_validate_json(body)
    except ValidationError as exc:
        raise BadRequestError("invalid request body") from exc


def extract_error_message(response: httpx.Response) -> str:
    """Prefer the resolver's ``message`` field, fall back to the raw body."""
    try:
        data = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict):
        message = data.get("message")
        if isinstance(message, str) and message:
            return message
    return response.text.strip()


class GatewayService:
    """Relays validated postal codes to the resolver over HTTP."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        resolver_base_url: str,
        timeout: float,
        tracing: Tracing,
    ) -> None:
        self._client = client
        self.resolver_base_url = resolver_base_url.rstrip("/")
        self.timeout = timeout
        self.tracing = tracing

    async def lookup(self, body: bytes) -> WeatherResult:
        request = parse_request(body)
        code = validate_postal_code(request.cep)
        return await self.forward(code)

    async def forward(self, code: PostalCode) -> WeatherResult:
        url = f"{self.resolver_base_url}/weather/{code.digits}"
        with self.tracing.span("call-resolver") as span:
            span.set_attribute("cep", code.digits)
            headers = self.tracing.inject({})
            try:
                response = await self._client.get(url, headers=headers, timeout=self.timeout)
            except (httpx.HTTPError, httpx.InvalidURL) as exc:
                logger.error(
                    "Resolver call failed",
                    extra={"cep": code.digits, "upstream": "resolver", "reason": type(exc).__name__},
                )
                raise InternalError("error calling weather resolver") from exc
            span.set_attribute("http.status_code", response.status_code)

        if not response.is_success:
            message = extract_error_message(response)
            logger.info(
                "Relaying resolver error",
                extra={"cep": code.digits, "status": response.status_code, "reason": message},
            )
            raise RelayedError(response.status_code, message)

        try:
            return WeatherResult.model_validate_json(response.content)
        except ValidationError as exc:
            logger.error(
                "Resolver returned an unexpected payload",
                extra={"cep": code.digits, "upstream": "resolver"},
            )
            raise InternalError("error parsing response") from exc


def build_gateway_service(
    settings: Settings,
    tracing: Tracing,
    client: httpx.AsyncClient,
) -> GatewayService:
    return GatewayService(
        client=client,
        resolver_base_url=settings.resolver_base_url,
        timeout=settings.gateway_timeout,
        tracing=tracing,
    )
