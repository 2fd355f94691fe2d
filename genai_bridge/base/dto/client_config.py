"""Typed client configuration.

Purpose
-------
Capture the construction-time settings of a client in one immutable,
validated object: timeouts, retry/backoff numbers, the streaming flag and
optional endpoint/model overrides.

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` for validation, immutability (``frozen``) and
  ``model_copy(update=...)`` for derived configs.

Notes
-----
- Credentials are deliberately not part of this model so a config can be
  printed or logged safely.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ...config.defaults import (
    DEFAULT_BACKOFF_BASE,
    DEFAULT_JITTER_SECONDS,
    DEFAULT_MAX_BACKOFF_SECONDS,
    DEFAULT_MAX_RETRY_AFTER_SECONDS,
    DEFAULT_MAX_STREAM_BUFFER_BYTES,
    DEFAULT_RETRIES,
    DEFAULT_TIMEOUT_SECONDS,
)
from ..resilience.retry import RetryConfig
from ..timeouts import TimeoutConfig


class ClientConfig(BaseModel):
    """Read-only client settings.

    Attributes
    ----------
    timeout:
        Per-operation timeout (seconds) for connect, read, write and pool
        phases unless narrowed below.
    connect_timeout / read_timeout:
        Optional per-phase overrides.
    overall_timeout:
        Optional wall-clock cap applied to each attempt (for streams, to the
        start phase up to response headers).
    retries:
        Maximum number of retries after the first attempt.
    stream:
        Whether ``generate(on_chunk=...)`` streams.
    backoff_base / max_backoff_seconds / jitter_seconds:
        Exponential backoff ``min(base ** attempt + jitter, max)``.
    max_retry_after_seconds:
        Cap applied to a server supplied ``Retry-After``.
    max_stream_buffer_bytes:
        Largest unterminated SSE frame the decoder will buffer.
    model / base_url:
        Optional overrides of the provider default model and endpoint.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    timeout: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)
    connect_timeout: Optional[float] = Field(default=None, gt=0)
    read_timeout: Optional[float] = Field(default=None, gt=0)
    overall_timeout: Optional[float] = Field(default=None, gt=0)
    retries: int = Field(default=DEFAULT_RETRIES, ge=0)
    stream: bool = False
    backoff_base: float = Field(default=DEFAULT_BACKOFF_BASE, ge=1.0)
    max_backoff_seconds: float = Field(default=DEFAULT_MAX_BACKOFF_SECONDS, ge=0)
    jitter_seconds: float = Field(default=DEFAULT_JITTER_SECONDS, ge=0)
    max_retry_after_seconds: float = Field(default=DEFAULT_MAX_RETRY_AFTER_SECONDS, ge=0)
    max_stream_buffer_bytes: int = Field(default=DEFAULT_MAX_STREAM_BUFFER_BYTES, gt=0)
    model: Optional[str] = None
    base_url: Optional[str] = None

    def timeout_config(self) -> TimeoutConfig:
        """Return the equivalent :class:`TimeoutConfig`."""
        return TimeoutConfig(
            timeout=self.timeout,
            connect=self.connect_timeout,
            read=self.read_timeout,
            overall=self.overall_timeout,
        )

    def retry_config(self, **kwargs) -> RetryConfig:
        """Return a :class:`RetryConfig` built from the backoff fields.

        Keyword arguments (e.g. ``attempt_logger``) are forwarded.
        """
        return RetryConfig(
            max_retries=self.retries,
            backoff_base=self.backoff_base,
            max_backoff_seconds=self.max_backoff_seconds,
            jitter_seconds=self.jitter_seconds,
            max_retry_after_seconds=self.max_retry_after_seconds,
            **kwargs,
        )


__all__ = ["ClientConfig"]
