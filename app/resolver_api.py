"""HTTP routes served by the weather resolver."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, status

from app.cancellation import run_while_connected
from app.schemas import ErrorResponse, WeatherResult
from services.resolver import ResolverService, parse_path_code
from tracing import Tracing

router = APIRouter()


def get_resolver(request: Request) -> ResolverService:
    return request.app.state.resolver


def get_tracing(request: Request) -> Tracing:
    return request.app.state.tracing


@router.get(
    "/weather/{path:path}",
    response_model=WeatherResult,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Current temperature for a normalized postal code.",
)
async def weather_for_postal_code(
    path: str,
    request: Request,
    resolver: ResolverService = Depends(get_resolver),
    tracing: Tracing = Depends(get_tracing),
) -> WeatherResult:
    with tracing.span("handle-weather-request", carrier=request.headers):
        code = parse_path_code(path)
        return await run_while_connected(request, resolver.resolve(code))


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck(tracing: Tracing = Depends(get_tracing)) -> dict[str, str]:
    return {"status": "ok", "service": tracing.service_name}
