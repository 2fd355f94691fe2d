"""Cancellation error type.

Defines the public ``CancelledError`` raised when a generation call observes a
cancellation request.
"""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when an operation is cancelled cooperatively.

    Distinct from :class:`~genai_bridge.base.errors.ProviderError` so the retry
    policy never treats it as a failed attempt.
    """

__all__ = ["CancelledError"]
