"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `genai_bridge.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .provider_error import (
    ConfigurationError,
    ProviderError,
    RequestError,
    ResponseParseError,
    StreamBufferOverflowError,
    TransientNetworkError,
)
from .classification import (
    TRANSIENT_CODES,
    classify_exception,
    error_from_response,
    parse_retry_after,
    status_to_code,
    wrap_transport_error,
)

__all__ = [
    "ErrorCode",
    "ProviderError",
    "ConfigurationError",
    "RequestError",
    "TransientNetworkError",
    "ResponseParseError",
    "StreamBufferOverflowError",
    "TRANSIENT_CODES",
    "classify_exception",
    "error_from_response",
    "parse_retry_after",
    "status_to_code",
    "wrap_transport_error",
]
