"""
Structured exception types raised by the client.

All errors share the `ProviderError` base so callers can catch one type and
branch on ``code``. Subclasses narrow the failure to the phase it happened in:
construction (`ConfigurationError`), the HTTP exchange (`RequestError` and its
retryable flavour `TransientNetworkError`), decoding a full response body
(`ResponseParseError`) or buffering a stream (`StreamBufferOverflowError`).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass(eq=False, kw_only=True)
class ProviderError(Exception):
    """Represents a structured error with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging.
        provider: Provider key where the error originated (e.g., ``"openai"``).
        model: Optional model name associated with the failure.
        retryable: Whether the retry policy may attempt the call again.
        raw: Optional original exception for diagnostics.
    """

    code: ErrorCode
    message: str
    provider: str
    model: Optional[str] = None
    retryable: bool = False
    raw: Optional[BaseException] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.provider}:{self.model or '-'} {self.code.value}: {self.message}"


@dataclass(eq=False, kw_only=True)
class ConfigurationError(ProviderError):
    """Raised at client construction (unknown provider, missing credential)."""

    code: ErrorCode = ErrorCode.CONFIGURATION


@dataclass(eq=False, kw_only=True)
class RequestError(ProviderError):
    """Non-2xx HTTP status or a failed network exchange.

    ``status_code`` and ``body`` are kept for diagnostics; both are ``None``
    when the failure happened below HTTP (timeouts, resets).
    """

    code: ErrorCode = ErrorCode.UNKNOWN
    status_code: Optional[int] = None
    body: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        base = super().__str__()
        return f"{base} (status={self.status_code})" if self.status_code is not None else base


@dataclass(eq=False, kw_only=True)
class TransientNetworkError(RequestError):
    """Timeout, connection reset or HTTP 429; eligible for retry.

    When retries are exhausted this error propagates unchanged, so callers
    still see a :class:`RequestError`.
    """

    code: ErrorCode = ErrorCode.TRANSIENT
    retryable: bool = True
    retry_after: Optional[float] = None


@dataclass(eq=False, kw_only=True)
class ResponseParseError(ProviderError):
    """A full (non-streamed) response body could not be decoded as JSON."""

    code: ErrorCode = ErrorCode.PARSE
    body: Optional[str] = None


@dataclass(eq=False, kw_only=True)
class StreamBufferOverflowError(ProviderError):
    """The stream buffer grew past its cap without a frame terminator."""

    code: ErrorCode = ErrorCode.OVERFLOW
    limit: int = 0


__all__ = [
    "ProviderError",
    "ConfigurationError",
    "RequestError",
    "TransientNetworkError",
    "ResponseParseError",
    "StreamBufferOverflowError",
]
