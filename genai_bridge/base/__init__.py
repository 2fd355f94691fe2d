"""
genai_bridge base package

Provider-agnostic building blocks used by the adapters and the client:

- Provider selector and per-call models
- Vendor adapter interface and lazy adapter factory
- Error taxonomy, retry policy, timeouts and cooperative cancellation
- SSE frame decoding and httpx send helpers
- Structured logging
"""

from .cancellation import CancellationToken, CancelledError
from .dto import ClientConfig
from .errors import (
    ConfigurationError,
    ErrorCode,
    ProviderError,
    RequestError,
    ResponseParseError,
    StreamBufferOverflowError,
    TransientNetworkError,
)
from .factory import create_adapter, supported
from .interfaces import VendorAdapter
from .models import GenerationRequest, HttpRequestSpec
from .provider import Provider
from .resilience import RetryConfig, RetryPolicy
from .streaming import SSEDecoder
from .timeouts import TimeoutConfig, operation_timeout

__all__ = [
    "CancellationToken",
    "CancelledError",
    "ClientConfig",
    "ConfigurationError",
    "ErrorCode",
    "ProviderError",
    "RequestError",
    "ResponseParseError",
    "StreamBufferOverflowError",
    "TransientNetworkError",
    "create_adapter",
    "supported",
    "VendorAdapter",
    "GenerationRequest",
    "HttpRequestSpec",
    "Provider",
    "RetryConfig",
    "RetryPolicy",
    "SSEDecoder",
    "TimeoutConfig",
    "operation_timeout",
]
