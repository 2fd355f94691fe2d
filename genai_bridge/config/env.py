"""genai_bridge.config.env
=======================

Provider → credential environment variable mapping.

Design Notes
------------
- ``ENV_ALIASES`` lists, per provider, the acceptable variable names in
  priority order; the first non-empty value wins.
- The environment is an injected mapping (defaulting to ``os.environ``) so the
  client resolves credentials once, at construction, from an explicit source.

Failure Modes
-------------
- Functions return ``None`` when a provider is unknown or no value is present.
  The client decides how to fail (``ConfigurationError``).
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, Mapping, Optional, Tuple

# Provider → ordered tuple of acceptable env var names (canonical first)
ENV_ALIASES: Dict[str, Tuple[str, ...]] = {
    "google": ("GOOGLE_API_KEY", "GOOGLE_GENAI_API_KEY"),
    "openai": ("OPENAI_API_KEY",),
    "claude": ("CLAUDE_API_KEY", "ANTHROPIC_API_KEY"),
}

# Provider → prefix for non-secret overrides (<PREFIX>_MODEL, <PREFIX>_BASE_URL)
ENV_PREFIX: Dict[str, str] = {
    "google": "GOOGLE",
    "openai": "OPENAI",
    "claude": "CLAUDE",
}


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the provided string looks like a placeholder/test value.

    Heuristics: contains 'placeholder', 'changeme', 'example', or starts with
    'test_'. Case-insensitive, resilient to surrounding spaces.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return (
        "placeholder" in v
        or "changeme" in v
        or "example" in v
        or v.startswith("test_")
    )


def get_env_var_candidates(provider: str) -> Iterable[str]:
    """Yield acceptable environment variable names for a provider, in priority order."""
    yield from ENV_ALIASES.get((provider or "").lower(), ())


def resolve_provider_key(
    provider: str, environ: Optional[Mapping[str, str]] = None
) -> Tuple[Optional[str], Optional[str]]:
    """Resolve an API key for a provider from an environment mapping.

    Parameters
    ----------
    provider: str
        Provider identifier (case-insensitive).
    environ: Mapping[str, str] | None
        Source to read; ``os.environ`` when omitted.

    Returns
    -------
    Tuple[Optional[str], Optional[str]]
        (value, env_var_used) for the first non-empty candidate, or
        (None, None) when nothing is set.
    """
    source = os.environ if environ is None else environ
    for name in get_env_var_candidates(provider):
        if val := (source.get(name) or "").strip():
            return val, name
    return None, None


__all__ = [
    "ENV_ALIASES",
    "ENV_PREFIX",
    "is_placeholder",
    "get_env_var_candidates",
    "resolve_provider_key",
]
