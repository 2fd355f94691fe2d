"""Per-call data shapes shared by the client and the adapters.

Both types are transient: built for one call (``GenerationRequest``) or one
attempt (``HttpRequestSpec``) and never stored on the client.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional


@dataclass(frozen=True)
class GenerationRequest:
    """Normalized generation inputs.

    Attributes:
        prompt: User prompt text (required).
        model: Effective model identifier (override or provider default).
        system_instruction: Optional system text.
        generation_config: Opaque provider-specific tuning parameters; passed
            through without validation.
    """

    prompt: str
    model: str
    system_instruction: Optional[str] = None
    generation_config: Optional[Mapping[str, Any]] = None


@dataclass
class HttpRequestSpec:
    """Everything needed to send one HTTP attempt.

    ``params`` may hold the credential (Google), so instances must not be
    logged.
    """

    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    params: Dict[str, str] = field(default_factory=dict)
    body: Dict[str, Any] = field(default_factory=dict)


__all__ = ["GenerationRequest", "HttpRequestSpec"]
