"""HTTP routes served by the front gateway."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, status

from app.cancellation import run_while_connected
from app.schemas import ErrorResponse, WeatherResult
from services.gateway import GatewayService
from tracing import Tracing

router = APIRouter()


def get_gateway(request: Request) -> GatewayService:
    return request.app.state.gateway


def get_tracing(request: Request) -> Tracing:
    return request.app.state.tracing


@router.post(
    "/cep",
    response_model=WeatherResult,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Resolve a postal code to its city and current temperature.",
)
async def lookup_postal_code(
    request: Request,
    gateway: GatewayService = Depends(get_gateway),
    tracing: Tracing = Depends(get_tracing),
) -> WeatherResult:
    with tracing.span("handle-cep-request", carrier=request.headers):
        body = await request.body()
        return await run_while_connected(request, gateway.lookup(body))


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck(tracing: Tracing = Depends(get_tracing)) -> dict[str, str]:
    return {"status": "ok", "service": tracing.service_name}
