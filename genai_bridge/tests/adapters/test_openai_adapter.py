from __future__ import annotations

import json

import pytest

from genai_bridge.base.models import GenerationRequest
from genai_bridge.openai.adapter import OpenAIAdapter

BASE = "https://api.openai.com/v1"


def _build(req: GenerationRequest, stream: bool = False, adapter=None):
    adapter = adapter or OpenAIAdapter()
    return adapter.build_request(req, api_key="sk-test", base_url=BASE, stream=stream)


def test_prompt_only_request():
    spec = _build(GenerationRequest(prompt="Hello", model="gpt-x"))
    assert spec.url == f"{BASE}/chat/completions"
    assert spec.headers["Authorization"] == "Bearer sk-test"
    assert spec.body == {
        "model": "gpt-x",
        "messages": [{"role": "user", "content": "Hello"}],
        "max_tokens": 1200,
    }
    assert spec.params == {}


def test_single_system_message_precedes_user():
    spec = _build(GenerationRequest(prompt="Q", model="m", system_instruction="S"))
    roles = [m["role"] for m in spec.body["messages"]]
    assert roles == ["system", "user"]
    assert spec.body["messages"][0]["content"] == "S"


def test_generation_config_merges_and_max_tokens_can_be_overridden():
    spec = _build(
        GenerationRequest(prompt="Q", model="m", generation_config={"temperature": 0.1, "max_tokens": 50})
    )
    assert spec.body["temperature"] == pytest.approx(0.1)
    assert spec.body["max_tokens"] == 50


def test_stream_flag_and_accept_header():
    spec = _build(GenerationRequest(prompt="Q", model="m"), stream=True)
    assert spec.body["stream"] is True
    assert spec.headers["Accept"] == "text/event-stream"


def test_each_build_gets_a_fresh_idempotency_key():
    adapter = OpenAIAdapter()
    req = GenerationRequest(prompt="Q", model="m", system_instruction="S")
    first = _build(req, adapter=adapter)
    second = _build(req, adapter=adapter)
    assert first.headers["Idempotency-Key"] != second.headers["Idempotency-Key"]
    # rebuilding never accumulates messages
    assert len(second.body["messages"]) == 2


def test_extract_text():
    adapter = OpenAIAdapter()
    assert adapter.extract_text({"choices": [{"message": {"content": "Hi"}}]}) == "Hi"
    assert adapter.extract_text({"choices": [{"message": {"content": None}}]}) == ""
    assert adapter.extract_text({"choices": []}) == ""
    assert adapter.extract_text({}) == ""


def test_extract_delta_handles_done_sentinel_and_empty_deltas():
    adapter = OpenAIAdapter()
    chunk = {"choices": [{"delta": {"content": "tok"}}]}
    assert adapter.extract_delta(json.dumps(chunk)) == "tok"
    assert adapter.extract_delta("[DONE]") is None
    assert adapter.extract_delta(json.dumps({"choices": [{"delta": {"role": "assistant"}}]})) is None
    assert adapter.extract_delta(json.dumps({"choices": []})) is None
    assert adapter.extract_delta("garbage{") is None
