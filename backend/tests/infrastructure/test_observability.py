"""Tests for structured log formatting and correlation stamping."""

import json
import logging

from app.infrastructure.correlation import bind_correlation_id, reset_correlation_id
from app.infrastructure.observability import CorrelationIdFilter, JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("app.test", logging.WARNING, __file__, 1, "hello %s", ("world",), None)
    record.__dict__.update(extra)
    return record


def test_json_formatter_includes_extras():
    line = JSONFormatter().format(_record(error_code="CONFLICT", status_code=409))
    body = json.loads(line)
    assert body["level"] == "WARNING"
    assert body["logger"] == "app.test"
    assert body["message"] == "hello world"
    assert body["error_code"] == "CONFLICT"
    assert body["status_code"] == 409
    assert "path" not in body


def test_filter_stamps_current_correlation_id():
    token = bind_correlation_id("trace-log")
    try:
        record = _record()
        assert CorrelationIdFilter().filter(record)
    finally:
        reset_correlation_id(token)
    assert record.correlation_id == "trace-log"


def test_setup_logging_is_idempotent():
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        setup_logging("DEBUG", "text")
        setup_logging("DEBUG", "text")
        assert len(root.handlers) == 1
        assert root.level == logging.DEBUG
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)


def test_filter_outside_request_leaves_none():
    record = _record()
    CorrelationIdFilter().filter(record)
    assert record.correlation_id is None
