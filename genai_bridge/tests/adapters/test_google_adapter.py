from __future__ import annotations

import json

from genai_bridge.base.models import GenerationRequest
from genai_bridge.google.adapter import GoogleAdapter

BASE = "https://generativelanguage.googleapis.com/v1beta/models"


def _build(req: GenerationRequest, stream: bool = False):
    return GoogleAdapter().build_request(req, api_key="g-key", base_url=BASE, stream=stream)


def test_prompt_only_body_has_no_optional_keys():
    spec = _build(GenerationRequest(prompt="Hello", model="gemini-2.0-flash"))
    assert spec.method == "POST"
    assert spec.url == f"{BASE}/gemini-2.0-flash:generateContent"
    assert spec.params == {"key": "g-key"}
    assert spec.body == {"contents": [{"parts": [{"text": "Hello"}]}]}
    assert spec.headers["Accept"] == "application/json"


def test_system_and_generation_config_are_included():
    spec = _build(
        GenerationRequest(
            prompt="Hi",
            model="m",
            system_instruction="Be brief",
            generation_config={"temperature": 0.2},
        )
    )
    assert spec.body["systemInstruction"] == {"parts": [{"text": "Be brief"}]}
    assert spec.body["generationConfig"] == {"temperature": 0.2}


def test_streaming_endpoint_requests_sse():
    spec = _build(GenerationRequest(prompt="Hi", model="m"), stream=True)
    assert spec.url.endswith("/m:streamGenerateContent")
    assert spec.params == {"key": "g-key", "alt": "sse"}
    assert spec.headers["Accept"] == "text/event-stream"


def test_prompt_is_whitespace_normalized():
    spec = _build(GenerationRequest(prompt="  a \n\t b  ", model="m"))
    assert spec.body["contents"][0]["parts"][0]["text"] == "a b"


def test_extract_text_joins_parts_and_tolerates_missing_fields():
    adapter = GoogleAdapter()
    body = {"candidates": [{"content": {"parts": [{"text": "Hel"}, {"text": "lo"}]}}]}
    assert adapter.extract_text(body) == "Hello"
    assert adapter.extract_text({}) == ""
    assert adapter.extract_text({"candidates": []}) == ""
    assert adapter.extract_text({"candidates": [{"finishReason": "SAFETY"}]}) == ""
    assert adapter.extract_text(["not", "a", "mapping"]) == ""


def test_extract_delta():
    adapter = GoogleAdapter()
    payload = json.dumps({"candidates": [{"content": {"parts": [{"text": "chunk"}]}}]})
    assert adapter.extract_delta(payload) == "chunk"
    assert adapter.extract_delta(json.dumps({"usageMetadata": {}})) is None
    assert adapter.extract_delta("{not json") is None
