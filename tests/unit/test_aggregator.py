"""Tests for the concurrent annual aggregator."""

import asyncio
from datetime import date

import pytest

from workforce_rotation.common.exceptions import ErrorCode, RotationError, authentication_error
from workforce_rotation.monitoring.metrics import RotationMetricsCollector
from workforce_rotation.rotation.aggregator import AnnualRotationAggregator, build_annual_indicators
from workforce_rotation.settings.rotation import RotationSettings
from workforce_rotation.sources.memory import InMemorySnapshotFetcher
from workforce_rotation.types.indicators import MonthlyRotationIndicators
from workforce_rotation.types.records import RotationFilter


@pytest.fixture
def workforce(record_factory):
    """A stays all year; B leaves on 2025-03-15."""
    return [
        record_factory("A"),
        record_factory("B", end=date(2025, 3, 15), company="2000"),
    ]


class _TrackingFetcher:
    """Fetcher that records concurrency and cancellation."""

    def __init__(self, records, delay=0.01, slow_after=None):
        self.records = records
        self.delay = delay
        self.slow_after = slow_after
        self.in_flight = 0
        self.max_in_flight = 0
        self.cancelled = 0

    async def fetch(self, reference_date, rotation_filter=None):
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        delay = self.delay
        if self.slow_after is not None and reference_date > self.slow_after:
            delay = 30
        try:
            await asyncio.sleep(delay)
        except asyncio.CancelledError:
            self.cancelled += 1
            raise
        finally:
            self.in_flight -= 1
        return list(self.records)


class TestComputeAnnual:
    """Twelve months, degraded rather than missing."""

    @pytest.mark.asyncio
    async def test_full_year(self, rotation_settings, workforce):
        fetcher = InMemorySnapshotFetcher(default=workforce)
        annual = await AnnualRotationAggregator(fetcher, rotation_settings).compute_annual(2025)

        assert list(annual.months) == list(range(1, 13))
        assert annual.total_retired == 1
        assert annual.months[3].retired_count == 1
        assert annual.average_workers_per_month == 1.21
        assert annual.annual_rotation_percentage == 82.64
        assert annual.degraded_months == []
        assert not annual.is_partial
        # two fetches per month
        assert len(fetcher.calls) == 24

    @pytest.mark.asyncio
    async def test_failing_month_is_degraded(self, rotation_settings, workforce):
        fetcher = InMemorySnapshotFetcher(
            default=workforce,
            failures={date(2025, 6, 1): ConnectionError("source unreachable")},
        )
        metrics = RotationMetricsCollector()
        aggregator = AnnualRotationAggregator(fetcher, rotation_settings, metrics=metrics)
        annual = await aggregator.compute_annual(2025)

        assert len(annual.months) == 12
        june = annual.months[6]
        assert june.is_degraded
        assert "source unreachable" in june.error
        assert june.retired_count == 0
        assert june.start_count == 0
        assert june.retired_workers == []
        assert june.month_name == "Junio"
        assert annual.degraded_months == [6]
        assert annual.is_partial
        assert annual.total_retired == 1
        assert annual.average_workers_per_month == 1.13
        assert annual.annual_rotation_percentage == 88.5
        assert metrics.get_metrics_summary()["months_degraded"] == 1

    @pytest.mark.asyncio
    async def test_timeout_is_degraded(self, workforce):
        settings = RotationSettings(fetch_timeout_seconds=0.05)
        fetcher = InMemorySnapshotFetcher(default=workforce, delays={date(2025, 2, 1): 5})
        annual = await AnnualRotationAggregator(fetcher, settings).compute_annual(2025)

        assert annual.degraded_months == [2]
        assert "timed out" in annual.months[2].error

    @pytest.mark.asyncio
    async def test_result_independent_of_completion_order(self, rotation_settings, workforce):
        delays = {date(2025, month, 1): (13 - month) * 0.005 for month in range(1, 13)}
        slow = InMemorySnapshotFetcher(default=workforce, delays=delays)
        fast = InMemorySnapshotFetcher(default=workforce)

        slow_result = await AnnualRotationAggregator(slow, rotation_settings).compute_annual(2025)
        fast_result = await AnnualRotationAggregator(fast, rotation_settings).compute_annual(2025)

        assert slow_result == fast_result
        assert all(indicators.month == month for month, indicators in slow_result.months.items())

    @pytest.mark.asyncio
    async def test_concurrency_is_bounded(self, workforce):
        settings = RotationSettings(max_concurrency=2)
        fetcher = _TrackingFetcher(workforce)
        await AnnualRotationAggregator(fetcher, settings).compute_annual(2025)
        assert 1 <= fetcher.max_in_flight <= 2

    @pytest.mark.asyncio
    async def test_filter_is_applied(self, rotation_settings, workforce):
        fetcher = InMemorySnapshotFetcher(default=workforce)
        annual = await AnnualRotationAggregator(fetcher, rotation_settings).compute_annual(
                2025, RotationFilter(company_codes=["1000"])
            )
        assert annual.total_retired == 0
        assert annual.filter.company_codes == ("1000",)

    @pytest.mark.asyncio
    async def test_invalid_year_fails_before_fetching(self, rotation_settings, workforce):
        fetcher = InMemorySnapshotFetcher(default=workforce)
        with pytest.raises(RotationError) as exc_info:
            await AnnualRotationAggregator(fetcher, rotation_settings).compute_annual(2019)
        assert exc_info.value.error_code == ErrorCode.INVALID_ARGUMENT
        assert fetcher.calls == []

    @pytest.mark.asyncio
    async def test_cancellation_cancels_in_flight_fetches(self, rotation_settings, workforce):
        fetcher = _TrackingFetcher(workforce, delay=30)

        task = asyncio.ensure_future(
            AnnualRotationAggregator(fetcher, rotation_settings).compute_annual(2025)
        )
        await asyncio.sleep(0.05)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert fetcher.cancelled == rotation_settings.max_concurrency
        assert fetcher.in_flight == 0


class TestComputeMonthly:
    """Single-month requests propagate fetch failures."""

    @pytest.mark.asyncio
    async def test_success(self, rotation_settings, workforce):
        fetcher = InMemorySnapshotFetcher(default=workforce)
        result = await AnnualRotationAggregator(fetcher, rotation_settings).compute_monthly(2025, 3)
        assert result.retired_count == 1
        assert fetcher.calls == [date(2025, 3, 1), date(2025, 2, 28)]

    @pytest.mark.asyncio
    async def test_fetch_failure_is_raised(self, rotation_settings, workforce):
        cause = ConnectionError("down")
        fetcher = InMemorySnapshotFetcher(default=workforce, failures={date(2025, 3, 1): cause})
        with pytest.raises(RotationError) as exc_info:
            await AnnualRotationAggregator(fetcher, rotation_settings).compute_monthly(2025, 3)
        assert exc_info.value.error_code == ErrorCode.SNAPSHOT_FETCH_ERROR
        assert exc_info.value.cause is cause

    @pytest.mark.asyncio
    async def test_timeout_is_raised(self, workforce):
        settings = RotationSettings(fetch_timeout_seconds=0.05)
        fetcher = InMemorySnapshotFetcher(default=workforce, delays={date(2025, 2, 28): 5})
        with pytest.raises(RotationError) as exc_info:
            await AnnualRotationAggregator(fetcher, settings).compute_monthly(2025, 3)
        assert exc_info.value.error_code == ErrorCode.TIMEOUT_ERROR
        assert exc_info.value.is_retryable

    @pytest.mark.asyncio
    async def test_source_errors_pass_through(self, rotation_settings, workforce):
        error = authentication_error("rejected", status_code=401)
        fetcher = InMemorySnapshotFetcher(default=workforce, failures={date(2025, 3, 1): error})
        with pytest.raises(RotationError) as exc_info:
            await AnnualRotationAggregator(fetcher, rotation_settings).compute_monthly(2025, 3)
        assert exc_info.value is error

    @pytest.mark.asyncio
    async def test_invalid_month_fails_before_fetching(self, rotation_settings, workforce):
        fetcher = InMemorySnapshotFetcher(default=workforce)
        with pytest.raises(RotationError):
            await AnnualRotationAggregator(fetcher, rotation_settings).compute_monthly(2025, 13)
        assert fetcher.calls == []


class TestIterMonths:
    """Partial results as months complete."""

    @pytest.mark.asyncio
    async def test_yields_every_month(self, rotation_settings, workforce):
        fetcher = InMemorySnapshotFetcher(default=workforce)

        aggregator = AnnualRotationAggregator(fetcher, rotation_settings)
        items = [item async for item in aggregator.iter_months(2025)]
        assert sorted(month for month, _ in items) == list(range(1, 13))
        assert all(month == indicators.month for month, indicators in items)

    @pytest.mark.asyncio
    async def test_closing_early_cancels_remaining_months(self, workforce):
        settings = RotationSettings(max_concurrency=12)
        fetcher = _TrackingFetcher(workforce, slow_after=date(2025, 1, 1))

        months = AnnualRotationAggregator(fetcher, settings).iter_months(2025)
        month, indicators = await months.__anext__()
        await months.aclose()

        assert month == 1
        assert not indicators.is_degraded
        assert fetcher.cancelled == 11
        assert fetcher.in_flight == 0


def test_build_annual_indicators_sorts_months():
    months = [
        MonthlyRotationIndicators(year=2025, month=m, month_name=str(m), retired_count=1, average_workforce=12.0)
        for m in (12, 1, 6, 2, 3, 4, 5, 7, 8, 9, 10, 11)
    ]
    annual = build_annual_indicators(2025, months)
    assert list(annual.months) == list(range(1, 13))
    assert annual.total_retired == 12
    assert annual.average_workers_per_month == 12.0
    assert annual.annual_rotation_percentage == 100.0
