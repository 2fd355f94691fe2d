"""
Normalized error codes (taxonomy).

Defines the `ErrorCode` enumeration used by the adapters, the retry policy and
structured logging. Values are lowercase snake_case and are considered a
stable public contract for logs.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    CONFIGURATION = "configuration"
    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    TIMEOUT = "timeout"
    CANCELLED = "cancelled"
    TRANSIENT = "transient"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    SERVER_ERROR = "server_error"
    PARSE = "parse"
    OVERFLOW = "overflow"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]
