"""Vendor adapter interface.

Every supported vendor implements the same three operations:

- ``build_request``: normalized inputs to URL, headers, query and JSON body
  for one attempt. Called again on every retry so per-attempt values are
  fresh.
- ``extract_text``: full JSON response body to generated text.
- ``extract_delta``: one SSE ``data:`` payload to a text delta, or ``None``.

Malformed stream payloads are never fatal: ``decode_payload`` logs them at
debug level and the adapter reports "no delta for this frame".
"""
from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional

from .logging import LogContext, get_logger, normalized_log_event
from .models import GenerationRequest, HttpRequestSpec
from .provider import Provider


JSON_CONTENT_TYPE = "application/json"
EVENT_STREAM_CONTENT_TYPE = "text/event-stream"


def default_headers(*, stream: bool) -> Dict[str, str]:
    """Headers sent with every request; streaming asks for SSE."""
    return {
        "Content-Type": JSON_CONTENT_TYPE,
        "Accept": EVENT_STREAM_CONTENT_TYPE if stream else JSON_CONTENT_TYPE,
        "Accept-Encoding": "gzip",
    }


class VendorAdapter(ABC):
    """Capability interface shared by the Google, OpenAI and Anthropic adapters."""

    provider: Provider

    def __init__(self) -> None:
        self._logger = get_logger(f"adapters.{self.provider.value}")

    @abstractmethod
    def build_request(
        self,
        request: GenerationRequest,
        *,
        api_key: str,
        base_url: str,
        stream: bool,
    ) -> HttpRequestSpec:
        """Return the HTTP request for one attempt."""

    @abstractmethod
    def extract_text(self, body: Any) -> str:
        """Return the generated text of a full response body ("" if absent)."""

    @abstractmethod
    def extract_delta(self, payload: str) -> Optional[str]:
        """Return the text delta carried by one stream payload, if any."""

    def decode_payload(self, payload: str) -> Optional[Dict[str, Any]]:
        """Parse one stream payload as a JSON object; ``None`` when malformed."""
        try:
            data = json.loads(payload)
        except ValueError as e:
            normalized_log_event(
                self._logger,
                "stream.decode_error",
                LogContext(provider=self.provider.value),
                phase="mid_stream",
                level=logging.DEBUG,
                error=str(e),
                payload_len=len(payload),
            )
            return None
        return data if isinstance(data, dict) else None


def first(items: Any) -> Optional[Mapping[str, Any]]:
    """Return the first element of a list when it is a mapping."""
    if isinstance(items, list) and items and isinstance(items[0], Mapping):
        return items[0]
    return None


def join_text(items: Any) -> str:
    """Concatenate the ``text`` fields of a list of mappings."""
    if not isinstance(items, list):
        return ""
    return "".join(
        str(item.get("text") or "") for item in items if isinstance(item, Mapping)
    )


__all__ = [
    "VendorAdapter",
    "default_headers",
    "first",
    "join_text",
    "JSON_CONTENT_TYPE",
    "EVENT_STREAM_CONTENT_TYPE",
]
