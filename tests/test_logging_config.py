from __future__ import annotations

import logging

from conftest import SpanRecorder
from logging_config import ContextualFormatter, TraceContextFilter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="services.resolver",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Resolved weather",
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_known_extra_keys_are_appended() -> None:
    formatter = ContextualFormatter(fmt="%(message)s")

    line = formatter.format(_record(cep="01310100", city="São Paulo", ignored="x"))

    assert line == "Resolved weather | cep=01310100 city=São Paulo"


def test_filter_stamps_ids_of_active_span(span_recorder: SpanRecorder) -> None:
    formatter = ContextualFormatter(fmt="%(message)s")
    tracing = span_recorder.tracing("weather-resolver")
    record = _record()

    with tracing.span("get-weather") as span:
        assert TraceContextFilter().filter(record) is True

    context = span.get_span_context()
    trace_id = format(context.trace_id, "032x")
    span_id = format(context.span_id, "016x")
    assert formatter.format(record) == f"Resolved weather | trace_id={trace_id} span_id={span_id}"


def test_no_ids_outside_a_span() -> None:
    formatter = ContextualFormatter(fmt="%(message)s")
    record = _record()

    assert TraceContextFilter().filter(record) is True
    assert not hasattr(record, "trace_id")
    assert formatter.format(record) == "Resolved weather"
