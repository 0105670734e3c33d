"""Translate pipeline and framework errors into ``{"message": ...}`` bodies."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.schemas import ErrorResponse
from services.errors import ClientDisconnectedError, PipelineError

logger = logging.getLogger(__name__)

_FRAMEWORK_MESSAGES = {
    404: "not found",
    405: "method not allowed",
}


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(message=message).model_dump(),
    )


async def pipeline_error_handler(request: Request, exc: PipelineError) -> JSONResponse:
    if isinstance(exc, ClientDisconnectedError):
        logger.info("Caller disconnected; downstream work aborted", extra={"status": exc.status_code})
    return _error_response(exc.status_code, exc.message)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = _FRAMEWORK_MESSAGES.get(exc.status_code, str(exc.detail))
    response = _error_response(exc.status_code, message)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PipelineError, pipeline_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
