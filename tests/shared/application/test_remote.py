import time

import pytest
from shared.errors import RemoteCallTimeout
from shared.utils.remote import call_with_timeout


def test_returns_result():
    assert call_with_timeout("add", lambda a, b: a + b, 2, 3, timeout=1.0) == 5


def test_exceptions_propagate():
    def fail():
        raise KeyError("missing")

    with pytest.raises(KeyError):
        call_with_timeout("fail", fail, timeout=1.0)


def test_overrun_raises_timeout():
    with pytest.raises(RemoteCallTimeout) as exc_info:
        call_with_timeout("slow", time.sleep, 0.3, timeout=0.05)

    assert exc_info.value.operation == "slow"
    assert "slow timed out" in str(exc_info.value)
