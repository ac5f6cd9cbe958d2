"""Annual rotation indicators computed as twelve concurrent month units.

Each month unit fetches its two snapshots and runs the calculator. Units
share nothing but the fetcher, so they run concurrently under a
semaphore sized by ``RotationSettings.max_concurrency``. Every fetch is
bounded by ``RotationSettings.fetch_timeout_seconds``.

Failure policy:
    - Single month (``compute_monthly``): fetch failures are raised.
    - Annual (``compute_annual``): a failing month becomes a degraded
      record; its siblings are unaffected.
    - Cancelling ``compute_annual`` cancels every in-flight fetch and
      discards finished months. Callers that want partial results
      consume ``iter_months`` instead.
"""

import asyncio
import time
from datetime import date
from typing import AsyncIterator, Dict, Iterable, List, Optional, Tuple

from workforce_rotation.common.exceptions import RotationError, fetch_error, timeout_error
from workforce_rotation.constants.rotation import MONTHS_PER_YEAR
from workforce_rotation.logging import get_logger
from workforce_rotation.monitoring.metrics import FetchMetrics, RotationMetricsCollector
from workforce_rotation.observability.context import sanitize_extras
from workforce_rotation.protocols.providers import SnapshotFetcher
from workforce_rotation.settings.rotation import RotationSettings
from workforce_rotation.types.indicators import (
    AnnualRotationIndicators,
    MonthlyRotationIndicators,
    RotationPeriod,
)
from workforce_rotation.types.records import EmployeeSnapshotRecord, RotationFilter
from workforce_rotation.utils.decorators import traced
from workforce_rotation.utils.numbers import round_half_up, safe_percentage
from .calculator import RotationMetricsCalculator

logger = get_logger(__name__)


def _is_filtered(rotation_filter: Optional[RotationFilter]) -> bool:
    return rotation_filter is not None and not rotation_filter.is_empty


def _monthly_span_attributes(_aggregator, year, month, rotation_filter=None) -> Dict[str, object]:
    return {"rotation.year": year, "rotation.month": month, "rotation.filtered": _is_filtered(rotation_filter)}


def _annual_span_attributes(_aggregator, year, rotation_filter=None) -> Dict[str, object]:
    return {"rotation.year": year, "rotation.filtered": _is_filtered(rotation_filter)}


def build_annual_indicators(
    year: int,
    months: Iterable[MonthlyRotationIndicators],
    rotation_filter: Optional[RotationFilter] = None,
) -> AnnualRotationIndicators:
    """Roll twelve monthly records up into the annual result.

    Degraded months carry zero counts, so they add nothing to the sums
    but still count as one of the twelve months in the average.

    Args:
        year: Calendar year
        months: One record per month, in any order
        rotation_filter: Filter the months were computed with

    Returns:
        AnnualRotationIndicators keyed by month number
    """
    by_month: Dict[int, MonthlyRotationIndicators] = {
        indicators.month: indicators for indicators in sorted(months, key=lambda m: m.month)
    }
    total_retired = sum(indicators.retired_count for indicators in by_month.values())
    average_workers = round_half_up(
        sum(indicators.average_workforce for indicators in by_month.values()) / MONTHS_PER_YEAR
    )
    return AnnualRotationIndicators(
        year=year,
        filter=rotation_filter or RotationFilter(),
        months=by_month,
        total_retired=total_retired,
        average_workers_per_month=average_workers,
        annual_rotation_percentage=safe_percentage(total_retired, average_workers),
    )


class AnnualRotationAggregator:
    """Fetches snapshots and computes monthly and annual indicators.

    Attributes:
        fetcher: Snapshot source
        settings: Concurrency, timeout and calculator settings
        calculator: Pure monthly calculator
        metrics: Fetch and month metrics collector
    """

    def __init__(
        self,
        fetcher: SnapshotFetcher,
        settings: Optional[RotationSettings] = None,
        calculator: Optional[RotationMetricsCalculator] = None,
        metrics: Optional[RotationMetricsCollector] = None,
    ):
        """Initialize the aggregator.

        Args:
            fetcher: Any object satisfying the SnapshotFetcher protocol
            settings: Rotation settings; read from the environment when omitted
            calculator: Calculator to use; built from ``settings`` when omitted
            metrics: Metrics collector; a fresh one when omitted
        """
        self.fetcher = fetcher
        self.settings = settings or RotationSettings()
        self.calculator = calculator or RotationMetricsCalculator(self.settings)
        self.metrics = metrics or RotationMetricsCollector()

    async def _fetch(
        self,
        reference_date: date,
        rotation_filter: Optional[RotationFilter],
    ) -> List[EmployeeSnapshotRecord]:
        timeout = self.settings.fetch_timeout_seconds
        started = time.perf_counter()
        try:
            records = await asyncio.wait_for(
                self.fetcher.fetch(reference_date, rotation_filter),
                timeout=timeout,
            )
        except asyncio.TimeoutError as exc:
            self._record_fetch(reference_date, started, error=exc)
            raise timeout_error(
                f"Snapshot fetch for {reference_date.isoformat()} timed out after {timeout}s",
                timeout_seconds=timeout,
                details={"reference_date": reference_date.isoformat()},
                cause=exc,
            ) from exc
        except RotationError as exc:
            self._record_fetch(reference_date, started, error=exc)
            raise
        except Exception as exc:
            self._record_fetch(reference_date, started, error=exc)
            raise fetch_error(
                f"Snapshot fetch for {reference_date.isoformat()} failed: {exc}",
                reference_date=reference_date.isoformat(),
                cause=exc,
            ) from exc

        records = list(records)
        self._record_fetch(reference_date, started, record_count=len(records))
        return records

    def _record_fetch(
        self,
        reference_date: date,
        started: float,
        record_count: int = 0,
        error: Optional[BaseException] = None,
    ) -> None:
        self.metrics.record_fetch(
            FetchMetrics(
                reference_date=reference_date,
                duration_seconds=time.perf_counter() - started,
                success=error is None,
                record_count=record_count,
                error_type=type(error).__name__ if error is not None else None,
            )
        )

    async def _compute_month(
        self,
        year: int,
        month: int,
        rotation_filter: Optional[RotationFilter],
    ) -> MonthlyRotationIndicators:
        period = RotationPeriod.for_month(year, month)
        # Sequential: the semaphore budgets month units, not individual fetches
        current = await self._fetch(period.month_start, rotation_filter)
        previous = await self._fetch(period.prev_month_end, rotation_filter)
        return self.calculator.compute_monthly(current, previous, year, month)

    @traced("workforce_rotation.compute_monthly", attribute_getter=_monthly_span_attributes)
    async def compute_monthly(
        self,
        year: int,
        month: int,
        rotation_filter: Optional[RotationFilter] = None,
    ) -> MonthlyRotationIndicators:
        """Compute one month's indicators.

        Args:
            year: Calendar year
            month: 1-based month
            rotation_filter: Optional restriction of both snapshots

        Returns:
            MonthlyRotationIndicators for the month

        Raises:
            RotationError: INVALID_ARGUMENT before any fetch for a bad
                year or month; TIMEOUT_ERROR, SNAPSHOT_FETCH_ERROR or the
                fetcher's own RotationError when a snapshot cannot be read
        """
        self.calculator.validate_period(year, month)
        indicators = await self._compute_month(year, month, rotation_filter)
        self.metrics.record_month(year, month, degraded=False)
        return indicators

    async def _month_unit(
        self,
        year: int,
        month: int,
        rotation_filter: Optional[RotationFilter],
        semaphore: asyncio.Semaphore,
    ) -> Tuple[int, MonthlyRotationIndicators]:
        async with semaphore:
            try:
                indicators = await self._compute_month(year, month, rotation_filter)
            except Exception as exc:
                logger.warning(
                    "rotation.month.degraded",
                    extra=sanitize_extras(
                        {
                            "year": year,
                            "month": month,
                            "error": str(exc),
                            "error_type": type(exc).__name__,
                        }
                    ),
                    exc_info=True,
                )
                indicators = MonthlyRotationIndicators.degraded(
                    year, month, self.calculator.month_name(month), str(exc)
                )
        self.metrics.record_month(year, month, degraded=indicators.is_degraded)
        return month, indicators

    @traced("workforce_rotation.compute_annual", attribute_getter=_annual_span_attributes)
    async def compute_annual(
        self,
        year: int,
        rotation_filter: Optional[RotationFilter] = None,
    ) -> AnnualRotationIndicators:
        """Compute all twelve months of a year and roll them up.

        Args:
            year: Calendar year
            rotation_filter: Optional restriction applied to every snapshot

        Returns:
            AnnualRotationIndicators with exactly twelve month entries;
            months that failed are degraded rather than missing

        Raises:
            RotationError: INVALID_ARGUMENT before any fetch for a bad year
            asyncio.CancelledError: If the caller cancels the computation

        Example:
            >>> aggregator = AnnualRotationAggregator(fetcher, RotationSettings())
            >>> annual = await aggregator.compute_annual(2025)
            >>> annual.degraded_months
            []
        """
        self.calculator.validate_year(year)
        semaphore = asyncio.Semaphore(self.settings.max_concurrency)

        logger.info(
            "rotation.annual.start",
            extra=sanitize_extras(
                {
                    "year": year,
                    "max_concurrency": self.settings.max_concurrency,
                    "filtered": _is_filtered(rotation_filter),
                }
            ),
        )

        try:
            results = await asyncio.gather(
                *(
                    self._month_unit(year, month, rotation_filter, semaphore)
                    for month in range(1, MONTHS_PER_YEAR + 1)
                )
            )
        except asyncio.CancelledError:
            logger.info("rotation.annual.cancelled", extra=sanitize_extras({"year": year}))
            raise

        annual = build_annual_indicators(
            year, (indicators for _, indicators in results), rotation_filter
        )
        logger.info(
            "rotation.annual.complete",
            extra=sanitize_extras(
                {
                    "year": year,
                    "total_retired": annual.total_retired,
                    "degraded_months": annual.degraded_months,
                }
            ),
        )
        return annual

    async def iter_months(
        self,
        year: int,
        rotation_filter: Optional[RotationFilter] = None,
    ) -> AsyncIterator[Tuple[int, MonthlyRotationIndicators]]:
        """Yield ``(month, indicators)`` pairs as month units finish.

        Months arrive in completion order. Failing months are yielded as
        degraded records. Closing the iterator early (``break`` inside
        ``async for`` followed by ``aclose``, or cancelling the consumer)
        cancels the months still running.

        Raises:
            RotationError: INVALID_ARGUMENT for a bad year, on first iteration
        """
        self.calculator.validate_year(year)
        semaphore = asyncio.Semaphore(self.settings.max_concurrency)
        tasks = [
            asyncio.ensure_future(self._month_unit(year, month, rotation_filter, semaphore))
            for month in range(1, MONTHS_PER_YEAR + 1)
        ]
        try:
            for next_done in asyncio.as_completed(tasks):
                yield await next_done
        finally:
            pending = [task for task in tasks if not task.done()]
            for task in pending:
                task.cancel()
            if pending:
                await asyncio.gather(*pending, return_exceptions=True)
                logger.info(
                    "rotation.annual.iteration_closed",
                    extra=sanitize_extras({"year": year, "cancelled_months": len(pending)}),
                )
