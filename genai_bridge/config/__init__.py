"""Layered configuration for providers.

Goals
-----
* Centralize defaults (base URLs, default models).
* Merge sources in a predictable order (later wins):
    1. Built-in defaults
    2. Optional config file (YAML or JSON) named by ``GENAI_CONFIG_FILE``
    3. Environment variables ``<PREFIX>_MODEL`` and ``<PREFIX>_BASE_URL``
       (``GOOGLE_``, ``OPENAI_``, ``CLAUDE_``)
    4. In-code overrides passed to the helper
* Read the environment only when asked; the client calls this once, at
  construction, with its injected environment mapping.

Credentials are not part of this merge; see :mod:`genai_bridge.config.env`.

Config file example
-------------------
```
openai:
  model: gpt-4o-mini
claude:
  base_url: https://proxy.internal/anthropic/v1
```
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .defaults import (
    CLAUDE_DEFAULT_BASE_URL,
    CLAUDE_DEFAULT_MODEL,
    CONFIG_FILE_ENV,
    GOOGLE_DEFAULT_BASE_URL,
    GOOGLE_DEFAULT_MODEL,
    OPENAI_DEFAULT_BASE_URL,
    OPENAI_DEFAULT_MODEL,
)
from .env import ENV_PREFIX


DEFAULTS: Dict[str, Dict[str, Any]] = {
    "google": {"model": GOOGLE_DEFAULT_MODEL, "base_url": GOOGLE_DEFAULT_BASE_URL},
    "openai": {"model": OPENAI_DEFAULT_MODEL, "base_url": OPENAI_DEFAULT_BASE_URL},
    "claude": {"model": CLAUDE_DEFAULT_MODEL, "base_url": CLAUDE_DEFAULT_BASE_URL},
}

ENV_FIELD_MAP = {
    "model": "MODEL",
    "base_url": "BASE_URL",
}


def load_config_file(path: Optional[str]) -> Dict[str, Any]:
    """Load the optional provider config file.

    YAML is a superset of JSON, so both formats go through ``yaml.safe_load``.
    A missing path, missing file or non-mapping document yields ``{}``; a
    syntactically broken file raises ``yaml.YAMLError``.
    """
    if not path:
        return {}
    p = Path(path).expanduser()
    if not p.is_file():
        return {}
    data = yaml.safe_load(p.read_text(encoding="utf-8"))
    return data if isinstance(data, dict) else {}


def _env_overrides(provider: str, environ: Mapping[str, str]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    prefix = ENV_PREFIX.get(provider, provider.upper())
    for field, suffix in ENV_FIELD_MAP.items():
        val = environ.get(f"{prefix}_{suffix}")
        if val:
            out[field] = val
    return out


def get_provider_config(
    provider: str,
    overrides: Optional[Mapping[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Dict[str, Any]:
    """Return merged configuration for a provider.

    Merge order (later wins): defaults -> config file -> env vars -> overrides.
    ``None`` override values are ignored.
    """
    source = os.environ if environ is None else environ
    name = (provider or "").lower().strip()
    cfg: Dict[str, Any] = {}

    cfg |= DEFAULTS.get(name, {})

    file_cfg = load_config_file(source.get(CONFIG_FILE_ENV)).get(name)
    if isinstance(file_cfg, dict):
        cfg |= {k: v for k, v in file_cfg.items() if k in ENV_FIELD_MAP and v}

    cfg |= _env_overrides(name, source)

    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}

    return cfg


__all__ = [
    "DEFAULTS",
    "get_provider_config",
    "load_config_file",
]
