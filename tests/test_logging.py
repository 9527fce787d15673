"""Tests for structured logging."""

import io
import json

import pytest

from svfsm.utils.logging import (
    configure_logging,
    get_logger,
    log_generation_result,
    set_request_context,
)


@pytest.fixture
def stream():
    buffer = io.StringIO()
    configure_logging(level="debug", format_type="json", stream=buffer)
    yield buffer
    configure_logging(level="warning")


def _events(buffer):
    return [json.loads(line) for line in buffer.getvalue().splitlines()]


class TestLogging:
    def test_json_lines_carry_request_context(self, stream):
        request_id = set_request_context(mode="fast")
        get_logger("tests").info("something_happened", states=3)

        (event,) = _events(stream)
        assert event["event"] == "something_happened"
        assert event["level"] == "info"
        assert event["logger_name"] == "tests"
        assert event["request_id"] == request_id
        assert event["mode"] == "fast"
        assert "timestamp" in event

    def test_module_loggers_follow_reconfiguration(self, stream):
        logger = get_logger("early")
        configure_logging(level="error", stream=stream)
        logger.info("dropped")
        logger.error("kept")
        assert [e["event"] for e in _events(stream)] == ["kept"]

    def test_generation_summary(self, stream):
        log_generation_result(mode="advanced", state_count=3, transition_count=4, warnings=1)
        (event,) = _events(stream)
        assert event["event"] == "generation_completed"
        assert event["transitions"] == 4
