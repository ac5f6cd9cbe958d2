"""Result types of the rotation computations."""

from datetime import date
from typing import Dict, List, Optional

from pydantic import Field, computed_field

from .base import RotationBaseModel
from .records import CodedValue, EmployeeSnapshotRecord, RotationFilter


class RotationPeriod(RotationBaseModel):
    """The reference dates used to classify one calendar month.

    The retirement window runs from day 2 of the month through day 1 of the
    following month, both inclusive, so exits recorded against either
    boundary day are captured.
    """

    month_start: date
    prev_month_end: date
    month_end: date
    retire_window_start: date
    retire_window_end: date

    @classmethod
    def for_month(cls, year: int, month: int) -> "RotationPeriod":
        """Reference dates of a 1-based month.

        Example:
            >>> RotationPeriod.for_month(2025, 1).prev_month_end
            datetime.date(2024, 12, 31)
        """
        # Lazy import: utils.dates depends on this package
        from workforce_rotation.utils.dates import month_end, next_month, previous_month

        return cls(
            month_start=date(year, month, 1),
            prev_month_end=month_end(*previous_month(year, month)),
            month_end=month_end(year, month),
            retire_window_start=date(year, month, 2),
            retire_window_end=date(*next_month(year, month), 1),
        )


class MonthlyRotationIndicators(RotationBaseModel):
    """Rotation indicators of one calendar month.

    ``end_count`` is the end-of-period headcount. ``same_day_exit_count``
    is reported for transparency; whether it is added on top of
    ``active_at_month_end_count`` depends on the end-of-period policy the
    calculator ran with.

    A degraded record (the month could not be computed) has every count at
    zero, empty worker lists, no period and ``error`` set.
    """

    year: int
    month: int = Field(ge=1, le=12)
    month_name: str
    retired_count: int = 0
    retired_workers: List[EmployeeSnapshotRecord] = Field(default_factory=list)
    start_count: int = 0
    start_workers: List[EmployeeSnapshotRecord] = Field(default_factory=list)
    active_at_month_end_count: int = 0
    same_day_exit_count: int = 0
    end_count: int = 0
    average_workforce: float = 0.0
    rotation_percentage: float = 0.0
    period: Optional[RotationPeriod] = None
    error: Optional[str] = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_degraded(self) -> bool:
        return self.error is not None

    @classmethod
    def degraded(cls, year: int, month: int, month_name: str, error: str) -> "MonthlyRotationIndicators":
        """Zero-valued record for a month whose computation failed."""
        return cls(year=year, month=month, month_name=month_name, error=error)


class AnnualRotationIndicators(RotationBaseModel):
    """Rotation indicators of a calendar year.

    ``months`` always holds twelve entries keyed 1..12, degraded or not.
    Degraded months contribute zero to every roll-up.
    """

    year: int
    filter: RotationFilter = Field(default_factory=RotationFilter)
    months: Dict[int, MonthlyRotationIndicators]
    total_retired: int = 0
    average_workers_per_month: float = 0.0
    annual_rotation_percentage: float = 0.0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def degraded_months(self) -> List[int]:
        return sorted(month for month, indicators in self.months.items() if indicators.is_degraded)

    @property
    def is_partial(self) -> bool:
        return bool(self.degraded_months)


class FilterOptions(RotationBaseModel):
    """Distinct dimension values present in a snapshot, for filter UIs."""

    companies: List[str] = Field(default_factory=list)
    personnel_areas: List[CodedValue] = Field(default_factory=list)
    cost_centers: List[CodedValue] = Field(default_factory=list)
    jobs: List[CodedValue] = Field(default_factory=list)
