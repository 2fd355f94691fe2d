"""Google Generative Language adapter.

Wire contract:
    - ``POST {base}/{model}:generateContent`` or, streaming,
      ``{base}/{model}:streamGenerateContent?alt=sse``.
    - Credential in the ``key`` query parameter.
    - Body ``{contents: [{parts: [{text}]}], systemInstruction?, generationConfig?}``.
    - Text lives under ``candidates[0].content.parts[].text`` both in full
      responses and in each streamed payload.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from ..base.interfaces import VendorAdapter, default_headers, first, join_text
from ..base.models import GenerationRequest, HttpRequestSpec
from ..base.provider import Provider
from ..base.utils.text import normalize_prompt


class GoogleAdapter(VendorAdapter):
    provider = Provider.GOOGLE

    def build_request(
        self,
        request: GenerationRequest,
        *,
        api_key: str,
        base_url: str,
        stream: bool,
    ) -> HttpRequestSpec:
        body: Dict[str, Any] = {
            "contents": [{"parts": [{"text": normalize_prompt(request.prompt)}]}]
        }
        if request.system_instruction:
            body["systemInstruction"] = {"parts": [{"text": request.system_instruction}]}
        if request.generation_config:
            body["generationConfig"] = dict(request.generation_config)

        method = "streamGenerateContent" if stream else "generateContent"
        params = {"key": api_key}
        if stream:
            params["alt"] = "sse"
        return HttpRequestSpec(
            method="POST",
            url=f"{base_url.rstrip('/')}/{request.model}:{method}",
            headers=default_headers(stream=stream),
            params=params,
            body=body,
        )

    def extract_text(self, body: Any) -> str:
        return _candidate_text(body)

    def extract_delta(self, payload: str) -> Optional[str]:
        data = self.decode_payload(payload)
        if data is None:
            return None
        return _candidate_text(data) or None


def _candidate_text(body: Any) -> str:
    if not isinstance(body, Mapping):
        return ""
    candidate = first(body.get("candidates"))
    content = candidate.get("content") if candidate else None
    if not isinstance(content, Mapping):
        return ""
    return join_text(content.get("parts"))


__all__ = ["GoogleAdapter"]
