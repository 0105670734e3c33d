"""Log lines carrying pipeline context and the ids of the active trace."""

from __future__ import annotations

import logging
from logging.config import dictConfig
from typing import Iterable, Sequence

from opentelemetry import trace

from settings import get_settings

PIPELINE_KEYS = ("service", "cep", "city", "status", "upstream", "reason", "elapsed_ms")
TRACE_KEYS = ("trace_id", "span_id")

_configured = False


class TraceContextFilter(logging.Filter):
    """Stamps ``trace_id``/``span_id`` of the current span on each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        span_context = trace.get_current_span().get_span_context()
        if span_context.is_valid:
            record.trace_id = format(span_context.trace_id, "032x")
            record.span_id = format(span_context.span_id, "016x")
        return True


class ContextualFormatter(logging.Formatter):
    """Appends ``key=value`` pairs for whichever known keys a record holds."""

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        style: str = "%",
        extra_keys: Iterable[str] | None = None,
    ) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt, style=style)
        self._extra_keys: Sequence[str] = tuple(extra_keys or PIPELINE_KEYS + TRACE_KEYS)

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        pairs = [
            f"{key}={getattr(record, key)}"
            for key in self._extra_keys
            if getattr(record, key, None) is not None
        ]
        return f"{message} | {' '.join(pairs)}" if pairs else message


def configure_logging(level: str | int | None = None) -> None:
    """Install the contextual stream handler once per process."""
    global _configured
    if _configured:
        return

    log_level = level if level is not None else get_settings().log_level

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "filters": {"trace_context": {"()": "logging_config.TraceContextFilter"}},
            "formatters": {
                "contextual": {
                    "()": "logging_config.ContextualFormatter",
                    "fmt": "%(asctime)sZ | %(levelname)s | %(name)s | %(message)s",
                    "datefmt": "%Y-%m-%dT%H:%M:%S",
                    "extra_keys": list(PIPELINE_KEYS + TRACE_KEYS),
                }
            },
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "level": log_level,
                    "formatter": "contextual",
                    "filters": ["trace_context"],
                }
            },
            "root": {"handlers": ["default"], "level": log_level},
        }
    )

    _configured = True
