"""Anthropic Messages adapter.

Wire contract:
    - ``POST {base}/messages`` with ``x-api-key`` and
      ``anthropic-version: 2023-06-01`` headers.
    - Body ``{model, messages: [{role: user, content}], max_tokens, system?,
      ...generation_config, stream?}``; ``max_tokens`` defaults to 1000 and the
      generation config may override it.
    - Full responses join the ``text`` of every content block. Streamed
      payloads carry text only in ``content_block_delta`` events whose
      ``delta.type`` is ``text_delta``.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from ..base.interfaces import VendorAdapter, default_headers, join_text
from ..base.models import GenerationRequest, HttpRequestSpec
from ..base.provider import Provider
from ..base.utils.text import normalize_prompt
from ..config.defaults import ANTHROPIC_API_VERSION, CLAUDE_DEFAULT_MAX_TOKENS


class AnthropicAdapter(VendorAdapter):
    provider = Provider.CLAUDE

    def build_request(
        self,
        request: GenerationRequest,
        *,
        api_key: str,
        base_url: str,
        stream: bool,
    ) -> HttpRequestSpec:
        body: Dict[str, Any] = {
            "model": request.model,
            "messages": [{"role": "user", "content": normalize_prompt(request.prompt)}],
            "max_tokens": CLAUDE_DEFAULT_MAX_TOKENS,
        }
        if request.system_instruction:
            body["system"] = request.system_instruction
        if request.generation_config:
            body.update(request.generation_config)
        if stream:
            body["stream"] = True

        headers = default_headers(stream=stream)
        headers["x-api-key"] = api_key
        headers["anthropic-version"] = ANTHROPIC_API_VERSION
        return HttpRequestSpec(
            method="POST",
            url=f"{base_url.rstrip('/')}/messages",
            headers=headers,
            body=body,
        )

    def extract_text(self, body: Any) -> str:
        if not isinstance(body, Mapping):
            return ""
        return join_text(body.get("content"))

    def extract_delta(self, payload: str) -> Optional[str]:
        data = self.decode_payload(payload)
        if data is None or data.get("type") != "content_block_delta":
            return None
        delta = data.get("delta")
        if not isinstance(delta, Mapping) or delta.get("type") != "text_delta":
            return None
        text = delta.get("text")
        return text if isinstance(text, str) and text else None


__all__ = ["AnthropicAdapter"]
