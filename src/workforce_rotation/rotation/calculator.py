"""Monthly rotation indicators from two workforce snapshots.

The calculator is pure: it never fetches. Callers hand it the snapshot
taken on the first day of the month (``current``) and the one taken on
the last day of the previous month (``previous``).

Classification (``period`` is ``RotationPeriod.for_month(year, month)``):

    retired          concrete end in [retire_window_start, retire_window_end]
    start of period  start <= prev_month_end and end open or > prev_month_end
                     (previous snapshot; current one if previous is empty)
    active at end    start <= month_end and end open or >= month_end
    same-day exit    concrete end == month_end

An unusable end date is read like an open-ended one. Records without a
concrete start date never count as present.
"""

from typing import List, Optional, Sequence

from workforce_rotation.common.exceptions import validation_error
from workforce_rotation.constants.rotation import EndOfPeriodPolicy, MONTHS_PER_YEAR
from workforce_rotation.logging import get_logger
from workforce_rotation.observability.context import sanitize_extras
from workforce_rotation.settings.rotation import RotationSettings
from workforce_rotation.types.indicators import MonthlyRotationIndicators, RotationPeriod
from workforce_rotation.types.records import EmployeeSnapshotRecord
from workforce_rotation.utils.numbers import round_half_up, safe_percentage

logger = get_logger(__name__)


def is_retired(
    record: EmployeeSnapshotRecord,
    period: RotationPeriod,
    include_month_end: bool = False,
) -> bool:
    end = record.contract_end
    if not end.is_concrete:
        return False
    if end.value == period.month_end and not include_month_end:
        return False
    return period.retire_window_start <= end.value <= period.retire_window_end


def is_active_at_start(record: EmployeeSnapshotRecord, period: RotationPeriod) -> bool:
    start, end = record.contract_start, record.contract_end
    if not start.is_concrete or start.value > period.prev_month_end:
        return False
    return not end.is_concrete or end.value > period.prev_month_end


def is_active_at_month_end(record: EmployeeSnapshotRecord, period: RotationPeriod) -> bool:
    start, end = record.contract_start, record.contract_end
    if not start.is_concrete or start.value > period.month_end:
        return False
    return not end.is_concrete or end.value >= period.month_end


def is_same_day_exit(record: EmployeeSnapshotRecord, period: RotationPeriod) -> bool:
    end = record.contract_end
    return end.is_concrete and end.value == period.month_end


class RotationMetricsCalculator:
    """Computes MonthlyRotationIndicators from a pair of snapshots.

    Attributes:
        settings: Year bounds, end-of-period policy and month names
    """

    def __init__(self, settings: Optional[RotationSettings] = None):
        """Initialize the calculator.

        Args:
            settings: Rotation settings; defaults are read from the
                environment when omitted
        """
        self.settings = settings or RotationSettings()

    def validate_year(self, year: int) -> None:
        """Reject years outside the configured range.

        Raises:
            RotationError: INVALID_ARGUMENT
        """
        if isinstance(year, bool) or not isinstance(year, int):
            raise validation_error("Year must be an integer", field="year", value=year)
        if not self.settings.min_year <= year <= self.settings.max_year:
            raise validation_error(
                f"Year must be between {self.settings.min_year} and {self.settings.max_year}",
                field="year",
                value=year,
            )

    def validate_month(self, month: int) -> None:
        """Reject months outside 1..12.

        Raises:
            RotationError: INVALID_ARGUMENT
        """
        if isinstance(month, bool) or not isinstance(month, int) or not 1 <= month <= MONTHS_PER_YEAR:
            raise validation_error("Month must be between 1 and 12", field="month", value=month)

    def validate_period(self, year: int, month: Optional[int] = None) -> None:
        """Validate year and, when given, month."""
        self.validate_year(year)
        if month is not None:
            self.validate_month(month)

    def month_name(self, month: int) -> str:
        return self.settings.month_name(month)

    def compute_monthly(
        self,
        current_snapshot: Sequence[EmployeeSnapshotRecord],
        previous_snapshot: Sequence[EmployeeSnapshotRecord],
        year: int,
        month: int,
    ) -> MonthlyRotationIndicators:
        """Classify both snapshots and derive the month's indicators.

        Args:
            current_snapshot: Records as of the first day of the month
            previous_snapshot: Records as of the last day of the prior month;
                when empty, the current snapshot is used for the start count
            year: Calendar year
            month: 1-based month

        Returns:
            MonthlyRotationIndicators for the month

        Raises:
            RotationError: INVALID_ARGUMENT for an out-of-range year or month

        Example:
            >>> calc = RotationMetricsCalculator(RotationSettings())
            >>> result = calc.compute_monthly(current, previous, 2025, 9)
            >>> result.rotation_percentage
            20.0
        """
        self.validate_period(year, month)
        period = RotationPeriod.for_month(year, month)

        current = list(current_snapshot)
        previous = list(previous_snapshot)
        start_source = previous or current

        retired: List[EmployeeSnapshotRecord] = [
            record for record in current
            if is_retired(record, period, self.settings.count_month_end_exits_as_retired)
        ]
        start_workers = [record for record in start_source if is_active_at_start(record, period)]
        active_at_end = sum(1 for record in current if is_active_at_month_end(record, period))
        same_day_exits = sum(1 for record in current if is_same_day_exit(record, period))

        if self.settings.end_of_period_policy == EndOfPeriodPolicy.ADDITIVE:
            end_count = active_at_end + same_day_exits
        else:
            end_count = active_at_end

        start_count = len(start_workers)
        indicators = MonthlyRotationIndicators(
            year=year,
            month=month,
            month_name=self.month_name(month),
            retired_count=len(retired),
            retired_workers=retired,
            start_count=start_count,
            start_workers=start_workers,
            active_at_month_end_count=active_at_end,
            same_day_exit_count=same_day_exits,
            end_count=end_count,
            average_workforce=round_half_up((start_count + end_count) / 2),
            rotation_percentage=safe_percentage(len(retired), start_count),
            period=period,
        )

        logger.debug(
            "rotation.month.computed",
            extra=sanitize_extras(
                {
                    "year": year,
                    "month": month,
                    "current_records": len(current),
                    "previous_records": len(previous),
                    "start_fallback": not previous,
                    "retired": indicators.retired_count,
                    "start": start_count,
                    "end": end_count,
                }
            ),
        )
        return indicators
