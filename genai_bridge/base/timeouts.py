"""Timeout configuration and wall-clock guard.

Key Components
--------------
TimeoutConfig
    Normalized per-client timeout values. ``timeout`` is the per-operation
    default applied to connect, read, write and pool phases; ``connect`` and
    ``read`` narrow individual phases; ``overall`` is an optional wall-clock
    cap applied to each attempt.

operation_timeout(seconds)
    Context manager providing a timeout guard using SIGALRM where available
    (Unix main thread) and a threading.Timer fallback otherwise. It nests
    safely, restoring any preexisting alarm configuration.

Failure Modes
-------------
TimeoutError raised within the guarded context if the deadline elapses.
The fallback timer mode triggers the exception only after the context body
finishes (cooperative).
"""
from __future__ import annotations

from contextlib import contextmanager, suppress
from dataclasses import dataclass
import signal
import threading
import time
from typing import Iterator, Optional, Tuple

import httpx


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        timeout: Default for every HTTP phase.
        connect: Connect (open) timeout; falls back to ``timeout``.
        read: Read timeout between received bytes; falls back to ``timeout``.
        overall: Optional wall-clock cap for one attempt. ``None`` disables it.
    """

    timeout: float = 300.0
    connect: float | None = None
    read: float | None = None
    overall: float | None = None

    def to_httpx(self) -> httpx.Timeout:
        """Return the equivalent ``httpx.Timeout``."""
        return httpx.Timeout(
            self.timeout,
            connect=self.connect if self.connect is not None else self.timeout,
            read=self.read if self.read is not None else self.timeout,
        )


def _setup_signal_timeout(seconds: float):
    """Attempt to install a SIGALRM-based timeout.

    Returns tuple (use_signal, old_handler, old_itimer, start_monotonic).
    Falls back (False, None, None, None) if unsupported or setup fails.
    """
    if not (
        hasattr(signal, "setitimer")
        and threading.current_thread() is threading.main_thread()
    ):
        return False, None, None, None

    def _raise_timeout(signum=None, frame=None):  # noqa: ARG001
        raise TimeoutError(f"operation exceeded {seconds}s")

    try:  # pragma: no cover - platform specific
        old_handler = signal.getsignal(signal.SIGALRM)
        signal.signal(signal.SIGALRM, _raise_timeout)  # type: ignore[arg-type]
        old_itimer = signal.setitimer(signal.ITIMER_REAL, seconds)  # type: ignore[arg-type]
        return True, old_handler, old_itimer, time.monotonic()
    except (OSError, ValueError):  # pragma: no cover
        return False, None, None, None


def _restore_signal_timeout(
    old_handler, old_itimer: Optional[Tuple[float, float]], start_monotonic: Optional[float]
):
    """Restore any prior alarm + handler (supports nesting)."""
    with suppress(OSError, ValueError):  # pragma: no cover
        signal.setitimer(signal.ITIMER_REAL, 0)
        if old_handler is not None:
            signal.signal(signal.SIGALRM, old_handler)  # type: ignore[arg-type]
        if old_itimer and old_itimer[0] > 0:
            remaining = old_itimer[0]
            if start_monotonic is not None:
                elapsed = time.monotonic() - start_monotonic
                remaining = max(0.0, remaining - elapsed)
            if remaining > 0:
                signal.setitimer(signal.ITIMER_REAL, remaining, old_itimer[1])  # type: ignore[arg-type]


@contextmanager
def operation_timeout(seconds: float | None) -> Iterator[None]:
    """Context manager enforcing a wall-clock timeout.

    If ``seconds`` is ``None`` or <= 0 the guard is inert.
    """
    if seconds is None or seconds <= 0:
        yield
        return

    use_signal, old_handler, old_itimer, start_monotonic = _setup_signal_timeout(seconds)
    expired = False
    timer = None

    if not use_signal:
        def _expire():  # pragma: no cover - timing sensitive
            nonlocal expired
            expired = True

        timer = threading.Timer(seconds, _expire)
        timer.daemon = True
        timer.start()

    try:
        yield
        if not use_signal and expired:
            raise TimeoutError(f"operation exceeded {seconds}s (fallback)")
    finally:
        if use_signal:
            _restore_signal_timeout(old_handler, old_itimer, start_monotonic)
        elif timer is not None:
            timer.cancel()


__all__ = [
    "TimeoutConfig",
    "operation_timeout",
]
