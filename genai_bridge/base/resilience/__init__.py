"""Resilience helpers (retry policy)."""

from .retry import DEFAULT_RETRY_CONFIG, RetryConfig, RetryPolicy

__all__ = ["DEFAULT_RETRY_CONFIG", "RetryConfig", "RetryPolicy"]
