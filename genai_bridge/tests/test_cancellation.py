import threading
import time

import pytest

from genai_bridge.base.cancellation import CancellationToken, CancelledError


def test_cancel_sets_reason_and_raises():
    token = CancellationToken()
    assert not token.cancelled
    token.raise_if_cancelled()
    token.cancel("stop")
    assert token.cancelled
    assert token.reason == "stop"
    with pytest.raises(CancelledError, match="stop"):
        token.raise_if_cancelled()


def test_second_cancel_keeps_first_reason():
    token = CancellationToken()
    token.cancel("first")
    token.cancel("second")
    assert token.reason == "first"


def test_parent_cancellation_cascades_to_children():
    parent = CancellationToken()
    child = parent.child()
    grandchild = child.child()
    parent.cancel("shutdown")
    assert child.cancelled and grandchild.cancelled
    assert grandchild.reason == "shutdown"


def test_linking_to_cancelled_parent_cancels_immediately():
    parent = CancellationToken()
    parent.cancel()
    assert parent.child().cancelled


def test_wait_wakes_on_cancel_from_another_thread():
    token = CancellationToken()
    threading.Timer(0.05, token.cancel).start()
    t0 = time.monotonic()
    assert token.wait(5.0) is True
    assert time.monotonic() - t0 < 2.0


def test_wait_times_out_when_not_cancelled():
    assert CancellationToken().wait(0.01) is False
