"""OpenAI Chat Completions adapter.

Wire contract:
    - ``POST {base}/chat/completions`` with ``Authorization: Bearer <key>``.
    - Body ``{model, messages, ...generation_config, stream?, max_tokens}``;
      ``max_tokens`` defaults to 1200 unless the generation config sets it.
    - Each attempt carries a fresh ``Idempotency-Key`` (UUID4) so a retried
      POST is never silently deduplicated by the vendor.
    - Full responses: ``choices[0].message.content``. Streamed payloads:
      ``choices[0].delta.content``, terminated by the literal ``[DONE]``.
"""

from __future__ import annotations

import uuid
from typing import Any, Dict, List, Mapping, Optional

from ..base.interfaces import VendorAdapter, default_headers, first
from ..base.models import GenerationRequest, HttpRequestSpec
from ..base.provider import Provider
from ..base.utils.text import normalize_prompt
from ..config.defaults import OPENAI_DEFAULT_MAX_TOKENS, OPENAI_STREAM_DONE


class OpenAIAdapter(VendorAdapter):
    provider = Provider.OPENAI

    def build_request(
        self,
        request: GenerationRequest,
        *,
        api_key: str,
        base_url: str,
        stream: bool,
    ) -> HttpRequestSpec:
        messages: List[Dict[str, str]] = []
        if request.system_instruction:
            messages.append({"role": "system", "content": request.system_instruction})
        messages.append({"role": "user", "content": normalize_prompt(request.prompt)})

        config = dict(request.generation_config or {})
        body: Dict[str, Any] = {"model": request.model, "messages": messages}
        body.update(config)
        if stream:
            body["stream"] = True
        body["max_tokens"] = config.get("max_tokens") or OPENAI_DEFAULT_MAX_TOKENS

        headers = default_headers(stream=stream)
        headers["Authorization"] = f"Bearer {api_key}"
        headers["Idempotency-Key"] = str(uuid.uuid4())
        return HttpRequestSpec(
            method="POST",
            url=f"{base_url.rstrip('/')}/chat/completions",
            headers=headers,
            body=body,
        )

    def extract_text(self, body: Any) -> str:
        if not isinstance(body, Mapping):
            return ""
        choice = first(body.get("choices"))
        message = choice.get("message") if choice else None
        if not isinstance(message, Mapping):
            return ""
        return str(message.get("content") or "")

    def extract_delta(self, payload: str) -> Optional[str]:
        if payload.strip() == OPENAI_STREAM_DONE:
            return None
        data = self.decode_payload(payload)
        if data is None:
            return None
        choice = first(data.get("choices"))
        delta = choice.get("delta") if choice else None
        if not isinstance(delta, Mapping):
            return None
        content = delta.get("content")
        return content if isinstance(content, str) and content else None


__all__ = ["OpenAIAdapter"]
