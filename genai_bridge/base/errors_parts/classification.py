"""
Error classification helpers mapping exceptions and HTTP responses to the
normalized error taxonomy.

Only a small allowlist is considered transient: timeouts (connect, read,
write, pool and the wall-clock attempt guard), connection resets and HTTP 429.
Everything else surfaces immediately.
"""
from __future__ import annotations

import asyncio
import time
from datetime import timezone
from email.utils import parsedate_to_datetime
from typing import Dict, Optional

import httpx

from .error_code import ErrorCode
from .provider_error import ProviderError, RequestError, TransientNetworkError


_HTTP_STATUS_MAP: Dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION,
    401: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    422: ErrorCode.VALIDATION,
    429: ErrorCode.RATE_LIMIT,
}

# Connection reset surfaces differently depending on where the socket died.
_RESET_EXCEPTIONS = (
    httpx.ReadError,
    httpx.WriteError,
    httpx.RemoteProtocolError,
    ConnectionResetError,
)

TRANSIENT_CODES = (ErrorCode.TRANSIENT, ErrorCode.RATE_LIMIT, ErrorCode.TIMEOUT)


def _extract_status(exc: BaseException) -> Optional[int]:
    """Attempt to extract an HTTP status code from an exception.

    Checks ``status_code``, ``status`` and ``response.status_code`` in order.
    Returns ``None`` if no valid status can be found.
    """
    for attr in ("status_code", "status"):
        val = getattr(exc, attr, None)
        if isinstance(val, int) and 100 <= val < 600:
            return val
    resp = getattr(exc, "response", None)
    if resp is not None:
        sc = getattr(resp, "status_code", None)
        if isinstance(sc, int) and 100 <= sc < 600:
            return sc
    return None


def status_to_code(status: int) -> ErrorCode:
    """Map an HTTP status code to an :class:`ErrorCode`."""
    if status in _HTTP_STATUS_MAP:
        return _HTTP_STATUS_MAP[status]
    if status >= 500:
        return ErrorCode.SERVER_ERROR
    if 400 <= status < 500:
        return ErrorCode.VALIDATION
    return ErrorCode.UNKNOWN


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. ProviderError passthrough.
        2. Timeout exceptions (httpx, builtin, asyncio).
        3. Connection resets.
        4. HTTP status mapping.
        5. ``UNKNOWN`` fallback.
    """
    if isinstance(exc, ProviderError):
        return exc.code
    if isinstance(exc, (httpx.TimeoutException, TimeoutError, asyncio.TimeoutError)):
        return ErrorCode.TIMEOUT
    if isinstance(exc, _RESET_EXCEPTIONS):
        return ErrorCode.TRANSIENT
    status = _extract_status(exc)
    if status is not None:
        return status_to_code(status)
    return ErrorCode.UNKNOWN


def parse_retry_after(value: Optional[str], *, now: Optional[float] = None) -> Optional[float]:
    """Parse a ``Retry-After`` header into seconds.

    Accepts delta-seconds or an HTTP-date. Returns ``None`` for missing or
    unparseable values; negative results clamp to ``0.0``.
    """
    if value is None:
        return None
    raw = value.strip()
    if not raw:
        return None
    try:
        return max(0.0, float(raw))
    except ValueError:
        pass
    try:
        when = parsedate_to_datetime(raw)
    except (TypeError, ValueError):
        return None
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    current = now if now is not None else time.time()
    return max(0.0, when.timestamp() - current)


def wrap_transport_error(
    exc: BaseException,
    *,
    provider: str,
    model: Optional[str],
    message: Optional[str] = None,
) -> RequestError:
    """Wrap a transport-level exception into the taxonomy.

    Transient classes become :class:`TransientNetworkError`; anything else is
    a non-retryable :class:`RequestError`.
    """
    code = classify_exception(exc)
    text = message if message is not None else (str(exc) or type(exc).__name__)
    if code in TRANSIENT_CODES:
        return TransientNetworkError(code=code, message=text, provider=provider, model=model, raw=exc)
    return RequestError(code=code, message=text, provider=provider, model=model, raw=exc)


def error_from_response(
    response: httpx.Response,
    *,
    provider: str,
    model: Optional[str],
    body: Optional[str] = None,
) -> RequestError:
    """Build the error for a non-2xx response.

    HTTP 429 yields a :class:`TransientNetworkError` carrying the parsed
    ``Retry-After`` value; every other status is terminal.
    """
    status = response.status_code
    text = body if body is not None else response.text
    code = status_to_code(status)
    message = f"Request failed: {status}"
    if status == 429:
        return TransientNetworkError(
            code=code,
            message=message,
            provider=provider,
            model=model,
            status_code=status,
            body=text,
            retry_after=parse_retry_after(response.headers.get("retry-after")),
        )
    return RequestError(
        code=code,
        message=message,
        provider=provider,
        model=model,
        status_code=status,
        body=text,
    )


__all__ = [
    "TRANSIENT_CODES",
    "classify_exception",
    "status_to_code",
    "parse_retry_after",
    "wrap_transport_error",
    "error_from_response",
    "_extract_status",
    "_HTTP_STATUS_MAP",
]
