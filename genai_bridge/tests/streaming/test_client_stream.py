"""Streaming calls: callback delivery, laziness, retry boundary, cancellation."""
from __future__ import annotations

import json
import unicodedata

import httpx
import pytest

from genai_bridge import (
    CancellationToken,
    CancelledError,
    ErrorCode,
    RequestError,
    StreamBufferOverflowError,
    TransientNetworkError,
)


def _frames(*payloads) -> bytes:
    return "".join(
        f"data: {p if isinstance(p, str) else json.dumps(p)}\n\n" for p in payloads
    ).encode("utf-8")


def _openai_chunk(text: str) -> dict:
    return {"choices": [{"delta": {"content": text}}]}


def _sse_response(*fragments: bytes) -> httpx.Response:
    return httpx.Response(
        200, headers={"content-type": "text/event-stream"}, content=iter(fragments)
    )


def _failing_stream(*fragments: bytes, error: Exception):
    def gen():
        yield from fragments
        raise error

    return httpx.Response(200, headers={"content-type": "text/event-stream"}, content=gen())


def test_on_chunk_receives_deltas_in_order_and_returns_none(make_client):
    body = _frames(_openai_chunk("Hel"), _openai_chunk("lo"), "[DONE]")
    client, rec, _ = make_client("openai", [_sse_response(body[:7], body[7:30], body[30:])], stream=True)
    chunks = []
    assert client.generate("x", on_chunk=chunks.append) is None
    assert "".join(chunks) == "Hello"
    assert chunks == ["Hel", "lo"]
    sent = rec.bodies()[0]
    assert sent["stream"] is True
    assert rec.requests[0].headers["Accept"] == "text/event-stream"


def test_stream_is_lazy(make_client):
    client, rec, _ = make_client("openai", [])
    deltas = client.stream("x")
    assert rec.requests == []
    deltas.close()


def test_google_stream_uses_sse_endpoint(make_client):
    payload = {"candidates": [{"content": {"parts": [{"text": "g"}]}}]}
    client, rec, _ = make_client("google", [_sse_response(_frames(payload, payload))])
    assert list(client.stream("x")) == ["g", "g"]
    url = rec.requests[0].url
    assert url.path.endswith(":streamGenerateContent")
    assert url.params["alt"] == "sse"


def test_anthropic_stream_filters_event_types(make_client):
    events = [
        {"type": "message_start", "message": {"id": "m"}},
        {"type": "content_block_start", "index": 0},
        {"type": "content_block_delta", "delta": {"type": "text_delta", "text": "Bon"}},
        {"type": "ping"},
        {"type": "content_block_delta", "delta": {"type": "text_delta", "text": "jour"}},
        {"type": "message_stop"},
    ]
    client, _, _ = make_client("claude", [_sse_response(_frames(*events))])
    assert list(client.stream("x")) == ["Bon", "jour"]


def test_malformed_payload_is_skipped(make_client):
    body = _frames("{broken", _openai_chunk("ok"), "[DONE]")
    client, _, _ = make_client("openai", [_sse_response(body)])
    assert list(client.stream("x")) == ["ok"]


def test_deltas_are_nfc_normalized(make_client):
    decomposed = unicodedata.normalize("NFD", "café")
    client, _, _ = make_client("openai", [_sse_response(_frames(_openai_chunk(decomposed)))])
    assert list(client.stream("x")) == ["café"]


def test_split_multibyte_character_survives_fragmentation(make_client):
    body = ('data: {"choices": [{"delta": {"content": "ü"}}]}\n\n').encode("utf-8")
    cut = body.index("ü".encode("utf-8")) + 1
    client, _, _ = make_client("openai", [_sse_response(body[:cut], body[cut:])])
    assert list(client.stream("x")) == ["ü"]


def test_failure_before_first_delta_is_retried(make_client):
    first = _failing_stream(_frames({"choices": [{"delta": {"role": "assistant"}}]}), error=httpx.ReadError("reset"))
    second = _sse_response(_frames(_openai_chunk("fine")))
    client, rec, sleeps = make_client("openai", [first, second])
    assert list(client.stream("x")) == ["fine"]
    assert len(rec.requests) == 2
    assert len(sleeps) == 1
    assert rec.requests[0].headers["Idempotency-Key"] != rec.requests[1].headers["Idempotency-Key"]


def test_rate_limit_on_stream_open_is_retried(make_client):
    client, rec, sleeps = make_client(
        "openai",
        [httpx.Response(429, headers={"Retry-After": "1"}), _sse_response(_frames(_openai_chunk("a")))],
    )
    assert list(client.stream("x")) == ["a"]
    assert sleeps == [1.0]


def test_failure_after_first_delta_propagates_without_retry(make_client):
    broken = _failing_stream(_frames(_openai_chunk("partial")), error=httpx.ReadError("reset"))
    client, rec, sleeps = make_client("openai", [broken])
    received = []
    with pytest.raises(TransientNetworkError) as ei:
        for delta in client.stream("x"):
            received.append(delta)
    assert received == ["partial"]
    assert ei.value.code is ErrorCode.TRANSIENT
    assert len(rec.requests) == 1
    assert sleeps == []


def test_error_status_on_stream_open_is_terminal(make_client):
    client, rec, _ = make_client("openai", [httpx.Response(400, text="bad sk-test-456")])
    with pytest.raises(RequestError) as ei:
        list(client.stream("x"))
    assert ei.value.status_code == 400
    assert "sk-test-456" not in ei.value.body
    assert len(rec.requests) == 1


def test_unterminated_frame_overflows(make_client):
    huge = b"data: " + b"x" * 200
    client, rec, _ = make_client("openai", [_sse_response(huge)], max_stream_buffer_bytes=64)
    with pytest.raises(StreamBufferOverflowError) as ei:
        list(client.stream("x"))
    assert ei.value.limit == 64
    assert len(rec.requests) == 1


def test_cancellation_between_fragments(make_client):
    token = CancellationToken()
    fragments = [_frames(_openai_chunk("one")), _frames(_openai_chunk("two"))]
    client, _, _ = make_client("openai", [_sse_response(*fragments)], stream=True)
    seen = []

    def on_chunk(delta):
        seen.append(delta)
        token.cancel("enough")

    with pytest.raises(CancelledError, match="enough"):
        client.generate("x", on_chunk=on_chunk, cancel_token=token)
    assert seen == ["one"]


def test_cancelled_token_prevents_any_request(make_client):
    token = CancellationToken()
    token.cancel()
    client, rec, _ = make_client("openai", [])
    with pytest.raises(CancelledError):
        list(client.stream("x", cancel_token=token))
    assert rec.requests == []


def test_crlf_framed_stream_delivers_deltas(make_client):
    payload = json.dumps({"candidates": [{"content": {"parts": [{"text": "hi"}]}}]})
    body = f"data: {payload}\r\n\r\n".encode("utf-8")
    client, _, _ = make_client("google", [_sse_response(body)], stream=True)
    chunks = []
    assert client.generate("x", on_chunk=chunks.append) is None
    assert chunks == ["hi"]
