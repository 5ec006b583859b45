"""Tests for logging setup and the HTTP log sink."""
import logging
import sys
from unittest.mock import Mock, patch

import pytest
import requests
from logging_setup import HttpLogHandler, log_event, setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def _record(**extra):
    record = logging.LogRecord("test", logging.ERROR, __file__, 1, "lookup failed for %s", ("Paris",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_build_payload_includes_event_fields():
    handler = HttpLogHandler("https://logs.example.com", "tok")

    payload = handler.build_payload(_record(event="request.fallback", request_id="abc", city="Paris", error="boom"))

    assert payload["event"] == "request.fallback"
    assert payload["requestId"] == "abc"
    assert payload["city"] == "Paris"
    assert payload["error"] == "boom"
    assert payload["level"] == "ERROR"
    assert payload["message"] == "lookup failed for Paris"
    assert payload["timestamp"].endswith("+00:00")


def test_build_payload_defaults_event():
    payload = HttpLogHandler("https://logs.example.com", "tok").build_payload(_record())

    assert payload["event"] == "log"
    assert "requestId" not in payload


def test_emit_posts_with_bearer_token():
    handler = HttpLogHandler("https://logs.example.com", "tok", timeout=2)

    with patch("logging_setup.requests.post") as mock_post:
        mock_post.return_value = Mock()
        handler.emit(_record(event="request.received"))

    args, kwargs = mock_post.call_args
    assert args == ("https://logs.example.com",)
    assert kwargs["headers"] == {"Authorization": "Bearer tok"}
    assert kwargs["json"]["event"] == "request.received"
    assert kwargs["timeout"] == 2


def test_emit_failure_is_handled():
    handler = HttpLogHandler("https://logs.example.com", "tok")
    handler.handleError = Mock()

    with patch("logging_setup.requests.post", side_effect=requests.exceptions.ConnectionError("down")):
        handler.emit(_record())

    handler.handleError.assert_called_once()


def test_setup_logging_without_sink(tmp_path):
    log_file = tmp_path / "server.log"

    listener = setup_logging("WARNING", log_file=str(log_file))

    assert listener is None
    root = logging.getLogger()
    assert root.level == logging.WARNING
    assert any(isinstance(h, logging.FileHandler) for h in root.handlers)
    stream_handlers = [h for h in root.handlers if type(h) is logging.StreamHandler]
    assert stream_handlers and all(h.stream is sys.stderr for h in stream_handlers)


def test_setup_logging_with_sink_starts_listener():
    with patch("logging_setup.requests.post") as mock_post:
        mock_post.return_value = Mock()
        listener = setup_logging("INFO", sink_token="tok", sink_url="https://logs.example.com")
        try:
            log_event(logging.INFO, "request.received", "Weather request received", request_id="r1")
        finally:
            listener.stop()

    payload = mock_post.call_args.kwargs["json"]
    assert payload["event"] == "request.received"
    assert payload["requestId"] == "r1"


def test_log_event_attaches_fields(caplog):
    with caplog.at_level(logging.INFO):
        log_event(logging.INFO, "mode.selected", "Mode: mock", request_id="r2", city="Oslo", error=None)

    record = caplog.records[-1]
    assert record.event == "mode.selected"
    assert record.request_id == "r2"
    assert record.city == "Oslo"
    assert not hasattr(record, "error")
