"""
Unit tests for structured logging utilities.
"""

import json
import logging
from io import StringIO

import pytest

from jitc.utils.logging import (
    JSONFormatter,
    get_logger,
    log_error_with_context,
    log_transform_stats,
)


def capture(logger, level=logging.DEBUG):
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(JSONFormatter())
    logger.logger.addHandler(handler)
    logger.logger.setLevel(level)
    return stream, handler


def test_json_formatter():
    """Test JSON formatter produces valid JSON output."""
    logger = logging.getLogger("test_json_formatter")
    logger.setLevel(logging.INFO)

    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(JSONFormatter())
    logger.addHandler(handler)

    logger.info("Test message", extra={"file": "src/App.jsx", "phase": "parse"})

    log_data = json.loads(stream.getvalue())

    assert "timestamp" in log_data
    assert log_data["level"] == "INFO"
    assert log_data["logger"] == "test_json_formatter"
    assert log_data["message"] == "Test message"
    assert log_data["file"] == "src/App.jsx"
    assert log_data["phase"] == "parse"
    assert "context" not in log_data
    assert "source" in log_data


def test_get_logger_with_context():
    logger = get_logger("test_module", file="src/App.jsx")

    assert logger.extra["file"] == "src/App.jsx"


def test_with_context_does_not_mutate_original():
    logger = get_logger("test_module", file="src/App.jsx")

    child = logger.with_context(phase="print")

    assert child.extra == {"file": "src/App.jsx", "phase": "print"}
    assert "phase" not in logger.extra


def test_log_transform_stats():
    logger = get_logger("test_stats")
    stream, handler = capture(logger, logging.INFO)

    log_transform_stats(logger, file="src/App.jsx", duration_ms=12.345, total_ms=40.0)
    logger.logger.removeHandler(handler)

    lines = [json.loads(line) for line in stream.getvalue().splitlines()]
    assert lines[0]["message"] == "transform src/App.jsx spends 12.35 ms"
    assert lines[0]["file"] == "src/App.jsx"
    assert lines[0]["context"]["duration_ms"] == 12.35
    assert lines[1]["message"] == "jitc loader works total time: 40.00 ms"


def test_log_error_with_context():
    logger = get_logger("test_errors")
    stream, handler = capture(logger, logging.ERROR)

    try:
        raise ValueError("bad input")
    except ValueError as e:
        log_error_with_context(logger, "transform failed", e, phase="parse")
    logger.logger.removeHandler(handler)

    log_data = json.loads(stream.getvalue())
    assert log_data["level"] == "ERROR"
    assert log_data["phase"] == "parse"
    assert log_data["error"]["type"] == "ValueError"
    assert "bad input" in log_data["error"]["stack_trace"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
