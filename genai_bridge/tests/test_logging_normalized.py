import logging

import httpx
import pytest

from genai_bridge import RequestError
from genai_bridge.base.logging import (
    REQUIRED_NORMALIZED_KEYS,
    LogContext,
    get_logger,
    log_event,
    normalized_log_event,
)


def test_get_logger_prefixes_names():
    assert get_logger("client").name == "genai_bridge.client"
    assert get_logger("genai_bridge.x").name == "genai_bridge.x"


def test_normalized_event_always_has_required_keys(log_events):
    logger = get_logger("test")
    normalized_log_event(logger, "unit.event", LogContext(provider="openai", model="m"), phase="start")
    event = log_events[-1]
    for key in REQUIRED_NORMALIZED_KEYS:
        assert key in event  # nosec B101
    assert event["provider"] == "openai"
    assert "error_code" not in event


def test_extra_fields_never_override_normalized_ones(log_events):
    logger = get_logger("test")
    normalized_log_event(logger, "unit.event", phase="start", attempt=2, error_code="timeout", note="n")
    event = log_events[-1]
    assert event["attempt"] == 2
    assert event["error_code"] == "timeout"
    assert event["note"] == "n"


def test_log_event_drops_none_unless_asked(log_events):
    logger = get_logger("test")
    log_event(logger, "a", x=None, y=1)
    log_event(logger, "b", keep_none=True, x=None)
    assert log_events[-2] == {"event": "a", "y": 1}
    assert log_events[-1] == {"event": "b", "x": None}


def test_disabled_level_emits_nothing(log_events):
    logger = get_logger("test")
    logger.setLevel(logging.ERROR)
    try:
        log_event(logger, "quiet", level=logging.INFO)
    finally:
        logger.setLevel(logging.NOTSET)
    assert not [e for e in log_events if e.get("event") == "quiet"]


def test_client_events_carry_no_credentials(make_client, log_events):
    client, _, _ = make_client(
        "openai",
        [httpx.ReadTimeout("timeout sk-test-456"), httpx.Response(401, text="bad key sk-test-456")],
    )
    with pytest.raises(RequestError):
        client.generate("x")
    names = [e["event"] for e in log_events]
    assert "client.init" in names
    assert "retry.attempt" in names
    assert "generate.error" in names
    for event in log_events:
        assert "sk-test-456" not in str(event)
    retry_events = [e for e in log_events if e["event"] == "retry.attempt"]
    assert retry_events[0]["error_code"] == "timeout"
    assert retry_events[0]["will_retry"] is True


def test_stream_end_reports_metrics(make_client, log_events):
    body = b'data: {"choices": [{"delta": {"content": "a"}}]}\n\ndata: [DONE]\n\n'
    client, _, _ = make_client("openai", [httpx.Response(200, content=body)])
    assert list(client.stream("x")) == ["a"]
    end = [e for e in log_events if e["event"] == "stream.end"][-1]
    assert end["emitted"] == 1
    assert end["metrics"]["emitted_count"] == 1
    assert end["metrics"]["time_to_first_token_ms"] is not None
