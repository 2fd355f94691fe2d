"""Unified error taxonomy public surface.

This module re-exports the implementations under
``genai_bridge.base.errors_parts`` to keep a stable import path.
"""

from .errors_parts import (
    TRANSIENT_CODES,
    ConfigurationError,
    ErrorCode,
    ProviderError,
    RequestError,
    ResponseParseError,
    StreamBufferOverflowError,
    TransientNetworkError,
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
