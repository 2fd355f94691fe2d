"""Cooperative cancellation primitives (public API facade).

``CancellationToken`` lets a caller stop a ``generate``/``stream`` call at the
connect/read boundary or between retry attempts; ``CancelledError`` is raised
by the call that observes the request.
"""

from .cancellation_parts.cancelled_error import CancelledError
from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken", "CancelledError"]
