"""Provider selector.

The closed set of supported vendors. A client is bound to exactly one member
for its lifetime.
"""
from __future__ import annotations

from enum import Enum
from typing import Union

from .errors import ConfigurationError


class Provider(str, Enum):
    """Supported vendor backends."""

    GOOGLE = "google"
    OPENAI = "openai"
    CLAUDE = "claude"

    @classmethod
    def parse(cls, value: Union["Provider", str]) -> "Provider":
        """Return the member for ``value`` (case-insensitive).

        Raises:
            ConfigurationError: when ``value`` names no supported provider.
        """
        if isinstance(value, cls):
            return value
        name = str(value or "").strip().lower()
        try:
            return cls(name)
        except ValueError:
            raise ConfigurationError(
                message=f"Unsupported provider: {value!r}",
                provider=name or "unknown",
            ) from None


__all__ = ["Provider"]
