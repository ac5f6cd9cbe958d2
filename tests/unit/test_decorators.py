"""Tests for the retry and tracing decorators."""

from unittest.mock import MagicMock

import pytest

from workforce_rotation.common.exceptions import ErrorCode, RotationError
from workforce_rotation.utils.decorators import retry_with_backoff, traced


@pytest.fixture
def sleeps(monkeypatch):
    recorded = []
    monkeypatch.setattr("workforce_rotation.utils.decorators.time.sleep", recorded.append)
    return recorded


def _flaky(failures, exc_factory):
    state = {"calls": 0}

    def call():
        state["calls"] += 1
        if state["calls"] <= failures:
            raise exc_factory()
        return "ok"

    return call, state


class TestRetryWithBackoff:

    def test_retries_then_succeeds(self, sleeps):
        call, state = _flaky(2, lambda: ConnectionError("down"))
        wrapped = retry_with_backoff(max_retries=3, initial_delay=1.0)(call)

        assert wrapped() == "ok"
        assert state["calls"] == 3
        assert sleeps == [1.0, 2.0]

    def test_delay_is_capped(self, sleeps):
        call, _ = _flaky(3, lambda: ConnectionError("down"))
        retry_with_backoff(max_retries=3, initial_delay=4.0, max_delay=5.0)(call)()
        assert sleeps == [4.0, 5.0, 5.0]

    def test_gives_up_after_max_retries(self, sleeps):
        call, state = _flaky(10, lambda: ConnectionError("down"))
        with pytest.raises(ConnectionError):
            retry_with_backoff(max_retries=2, initial_delay=0.1)(call)()
        assert state["calls"] == 3

    def test_retry_condition(self, sleeps):
        def non_retryable():
            return RotationError("auth", ErrorCode.AUTH_ERROR)

        call, state = _flaky(1, non_retryable)
        with pytest.raises(RotationError):
            retry_with_backoff(
                max_retries=3,
                retry_condition=lambda exc: getattr(exc, "is_retryable", False),
            )(call)()
        assert state["calls"] == 1
        assert sleeps == []

    def test_every_exception_retried_without_condition(self, sleeps):
        call, state = _flaky(1, lambda: KeyError("k"))
        assert retry_with_backoff(max_retries=1, initial_delay=0.5)(call)() == "ok"
        assert state["calls"] == 2
        assert sleeps == [0.5]


class TestTraced:

    def test_sync_passthrough(self):
        @traced("test.sync")
        def add(a, b):
            return a + b

        assert add(2, 3) == 5
        assert add.__name__ == "add"

    def test_attribute_getter_receives_call_arguments(self, monkeypatch):
        span = MagicMock()
        tracer = MagicMock()
        tracer.start_as_current_span.return_value.__enter__.return_value = span
        monkeypatch.setattr("workforce_rotation.utils.decorators.get_tracer", lambda name: tracer)
        seen = []

        def attributes(year, month=None):
            seen.append((year, month))
            return {"rotation.year": year, "rotation.month": month}

        @traced("test.attributes", attribute_getter=attributes)
        def compute(year, month=None):
            return year

        assert compute(2025) == 2025
        assert seen == [(2025, None)]
        tracer.start_as_current_span.assert_called_once_with("test.attributes")
        span.set_attribute.assert_called_once_with("rotation.year", 2025)

    @pytest.mark.asyncio
    async def test_async_errors_are_recorded_and_reraised(self, monkeypatch):
        span = MagicMock()
        tracer = MagicMock()
        tracer.start_as_current_span.return_value.__enter__.return_value = span
        monkeypatch.setattr("workforce_rotation.utils.decorators.get_tracer", lambda name: tracer)

        @traced(attribute_getter=lambda: {"component": "test"})
        async def boom():
            raise ValueError("nope")

        with pytest.raises(ValueError):
            await boom()

        span.set_attribute.assert_called_once_with("component", "test")
        span.record_exception.assert_called_once()
        (span_name,), _ = tracer.start_as_current_span.call_args
        assert span_name.endswith("<locals>.boom")
