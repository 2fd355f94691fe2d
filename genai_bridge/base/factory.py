"""Adapter factory.

Purpose
-------
Map each :class:`Provider` member to its adapter class. Adapters are imported
lazily using ``importlib`` so that importing the base layer stays light and
free of provider modules.

The provider set is closed: ``_ADAPTERS`` must name every ``Provider`` member
and nothing else. ``_check_exhaustive`` enforces this at import time, so adding
a provider without an adapter fails immediately instead of at call time.
"""

from __future__ import annotations

from importlib import import_module
from typing import Dict, Tuple, Union

from .errors import ConfigurationError
from .interfaces import VendorAdapter
from .provider import Provider


_ADAPTERS: Dict[Provider, Tuple[str, str]] = {
    Provider.GOOGLE: ("genai_bridge.google.adapter", "GoogleAdapter"),
    Provider.OPENAI: ("genai_bridge.openai.adapter", "OpenAIAdapter"),
    Provider.CLAUDE: ("genai_bridge.anthropic.adapter", "AnthropicAdapter"),
}


def _check_exhaustive() -> None:
    missing = set(Provider) - set(_ADAPTERS)
    extra = set(_ADAPTERS) - set(Provider)
    if missing or extra:
        raise RuntimeError(
            f"adapter registry out of sync with Provider: missing={sorted(missing)} extra={sorted(extra)}"
        )


_check_exhaustive()


def create_adapter(provider: Union[Provider, str]) -> VendorAdapter:
    """Return a new adapter instance for ``provider``.

    Raises
    ------
    ConfigurationError
        If the provider is unknown or its adapter cannot be loaded.
    """
    member = Provider.parse(provider)
    module_path, class_name = _ADAPTERS[member]
    try:
        klass = getattr(import_module(module_path), class_name)
    except (ImportError, AttributeError) as exc:
        raise ConfigurationError(
            message=f"Failed to load adapter '{class_name}' from '{module_path}': {exc}",
            provider=member.value,
        ) from exc
    return klass()


def supported() -> Tuple[str, ...]:
    """Return the supported provider identifiers in declaration order."""
    return tuple(p.value for p in Provider)


__all__ = ["create_adapter", "supported"]
