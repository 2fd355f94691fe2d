import time

import httpx
import pytest

from genai_bridge.base.timeouts import TimeoutConfig, operation_timeout


def test_timeout_config_maps_to_httpx():
    t = TimeoutConfig(timeout=30.0, connect=5.0).to_httpx()
    assert isinstance(t, httpx.Timeout)
    assert t.connect == 5.0
    assert t.read == 30.0
    assert t.write == 30.0


@pytest.mark.parametrize("seconds", [None, 0, -1])
def test_inert_guard(seconds):
    with operation_timeout(seconds):
        pass


def test_guard_raises_timeout_error():
    with pytest.raises(TimeoutError):
        with operation_timeout(0.05):
            time.sleep(0.5)
