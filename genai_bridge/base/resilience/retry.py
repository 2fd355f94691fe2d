"""Bounded retry with exponential backoff, jitter and ``Retry-After`` support.

Policy
------
- The attempt counter starts at 1 and lives in the call, never on the policy,
  so one policy can serve concurrent calls.
- Errors that are not retryable ``ProviderError`` instances (or whose code is
  outside ``retryable_codes``) propagate immediately.
- Once ``attempt > max_retries`` the last error propagates unchanged.
- Otherwise the policy waits and the caller rebuilds the request from
  scratch: per-attempt values (idempotency keys) are regenerated.

Wait rule
---------
``min(backoff_base ** attempt + random() * jitter_seconds, max_backoff_seconds)``.
For a rate-limit error carrying ``retry_after`` the server value, capped at
``max_retry_after_seconds``, replaces the exponential wait. The two never
stack. A zero or past ``Retry-After`` counts as absent.
"""
from __future__ import annotations

import random
import time
from dataclasses import dataclass
from typing import Callable, Optional, Protocol, TypeVar

from ..cancellation import CancellationToken
from ..errors import TRANSIENT_CODES, ErrorCode, ProviderError, TransientNetworkError

T = TypeVar("T")


class AttemptLogger(Protocol):  # pragma: no cover - structural protocol
    def __call__(
        self,
        *,
        attempt: int,
        max_attempts: int,
        delay: float | None,
        error: ProviderError | None,
    ) -> None: ...


@dataclass(frozen=True)
class RetryConfig:
    max_retries: int = 3
    backoff_base: float = 1.8
    max_backoff_seconds: float = 20.0
    jitter_seconds: float = 0.25
    max_retry_after_seconds: float = 60.0
    retryable_codes: tuple[ErrorCode, ...] = TRANSIENT_CODES
    attempt_logger: AttemptLogger | None = None

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1

    def backoff(self, attempt: int, rand: Callable[[], float] = random.random) -> float:
        """Exponential wait for ``attempt`` (1-based) including jitter."""
        return min(self.backoff_base**attempt + rand() * self.jitter_seconds, self.max_backoff_seconds)


DEFAULT_RETRY_CONFIG = RetryConfig()


class RetryPolicy:
    """Apply a :class:`RetryConfig` to attempts.

    ``sleep`` and ``rand`` are injectable for tests. When ``sleep`` is left as
    ``None`` waits go through the cancellation token (if any) so a cancel
    interrupts them.
    """

    def __init__(
        self,
        config: RetryConfig = DEFAULT_RETRY_CONFIG,
        *,
        sleep: Optional[Callable[[float], None]] = None,
        rand: Callable[[], float] = random.random,
    ) -> None:
        self.config = config
        self._sleep = sleep
        self._rand = rand

    def is_retryable(self, error: BaseException) -> bool:
        return (
            isinstance(error, ProviderError)
            and error.retryable
            and error.code in self.config.retryable_codes
        )

    def delay_for(self, error: ProviderError, attempt: int) -> float:
        """Return the wait before the next attempt, or re-raise ``error``.

        Raises ``error`` itself when it is not retryable or the attempt budget
        is spent.
        """
        if not self.is_retryable(error) or attempt > self.config.max_retries:
            self._log(attempt, None, error)
            raise error
        retry_after = getattr(error, "retry_after", None) if isinstance(error, TransientNetworkError) else None
        if error.code is ErrorCode.RATE_LIMIT and (retry_after or 0) > 0:
            delay = min(retry_after, self.config.max_retry_after_seconds)
        else:
            delay = self.config.backoff(attempt, self._rand)
        self._log(attempt, delay, error)
        return delay

    def pause(self, delay: float, cancel_token: Optional[CancellationToken] = None) -> None:
        """Wait ``delay`` seconds, honoring cancellation."""
        if self._sleep is not None:
            self._sleep(delay)
        elif cancel_token is not None:
            cancel_token.wait(delay)
        else:
            time.sleep(delay)
        if cancel_token is not None:
            cancel_token.raise_if_cancelled()

    def record_success(self, attempt: int) -> None:
        self._log(attempt, None, None)

    def run(
        self,
        func: Callable[[int], T],
        *,
        cancel_token: Optional[CancellationToken] = None,
    ) -> T:
        """Call ``func(attempt)`` until it succeeds or the policy gives up."""
        attempt = 1
        while True:
            if cancel_token is not None:
                cancel_token.raise_if_cancelled()
            try:
                result = func(attempt)
            except ProviderError as e:
                delay = self.delay_for(e, attempt)
                self.pause(delay, cancel_token)
                attempt += 1
                continue
            self.record_success(attempt)
            return result

    def _log(self, attempt: int, delay: float | None, error: ProviderError | None) -> None:
        if self.config.attempt_logger:
            self.config.attempt_logger(
                attempt=attempt,
                max_attempts=self.config.max_attempts,
                delay=delay,
                error=error,
            )


__all__ = [
    "AttemptLogger",
    "RetryConfig",
    "RetryPolicy",
    "DEFAULT_RETRY_CONFIG",
]
