"""Tests for the monthly rotation calculator."""

from datetime import date

import pytest

from workforce_rotation.common.exceptions import ErrorCode, RotationError
from workforce_rotation.constants.rotation import EndOfPeriodPolicy
from workforce_rotation.rotation.calculator import RotationMetricsCalculator
from workforce_rotation.settings.rotation import RotationSettings
from workforce_rotation.types.indicators import RotationPeriod


class TestRotationPeriod:
    """Reference dates derived from (year, month)."""

    def test_september(self):
        period = RotationPeriod.for_month(2025, 9)
        assert period.month_start == date(2025, 9, 1)
        assert period.prev_month_end == date(2025, 8, 31)
        assert period.month_end == date(2025, 9, 30)
        assert period.retire_window_start == date(2025, 9, 2)
        assert period.retire_window_end == date(2025, 10, 1)

    def test_january_and_december_cross_years(self):
        assert RotationPeriod.for_month(2025, 1).prev_month_end == date(2024, 12, 31)
        assert RotationPeriod.for_month(2025, 12).retire_window_end == date(2026, 1, 1)

    def test_leap_february(self):
        assert RotationPeriod.for_month(2024, 2).month_end == date(2024, 2, 29)
        assert RotationPeriod.for_month(2024, 3).prev_month_end == date(2024, 2, 29)
        assert RotationPeriod.for_month(2024, 2).retire_window_end == date(2024, 3, 1)


class TestClassificationScenario:
    """Five workers classified for September 2025."""

    def test_retired_and_same_day_exits(self, rotation_settings, september_snapshot):
        calculator = RotationMetricsCalculator(rotation_settings)
        result = calculator.compute_monthly(september_snapshot, [], 2025, 9)

        assert result.retired_count == 2
        assert sorted(r.employee_id for r in result.retired_workers) == ["A", "B"]
        assert result.same_day_exit_count == 1

    def test_end_of_period_counts_each_worker_once(self, rotation_settings, september_snapshot):
        result = RotationMetricsCalculator(rotation_settings).compute_monthly(
            september_snapshot, [], 2025, 9
        )
        # B (Oct 1), C (open) and E (Sep 30) are present at month end
        assert result.active_at_month_end_count == 3
        assert result.end_count == 3

    def test_additive_policy_adds_same_day_exits(self, september_snapshot):
        settings = RotationSettings(end_of_period_policy=EndOfPeriodPolicy.ADDITIVE)
        result = RotationMetricsCalculator(settings).compute_monthly(september_snapshot, [], 2025, 9)
        assert result.end_count == 4

    def test_month_end_exits_can_count_as_retired(self, september_snapshot):
        settings = RotationSettings(count_month_end_exits_as_retired=True)
        result = RotationMetricsCalculator(settings).compute_monthly(september_snapshot, [], 2025, 9)
        assert result.retired_count == 3

    def test_empty_previous_snapshot_falls_back_to_current(self, rotation_settings, september_snapshot):
        result = RotationMetricsCalculator(rotation_settings).compute_monthly(
            september_snapshot, [], 2025, 9
        )
        # D left in August and is not part of the starting workforce
        assert result.start_count == 4
        assert "D" not in {r.employee_id for r in result.start_workers}
        assert result.average_workforce == 3.5
        assert result.rotation_percentage == 50.0

    def test_period_and_month_name(self, rotation_settings, september_snapshot):
        result = RotationMetricsCalculator(rotation_settings).compute_monthly(
            september_snapshot, [], 2025, 9
        )
        assert result.month_name == "Septiembre"
        assert result.period == RotationPeriod.for_month(2025, 9)
        assert not result.is_degraded


class TestAverageAndPercentage:
    """Roll-up arithmetic of one month."""

    def test_average_and_percentage(self, rotation_settings, record_factory):
        previous = [record_factory(f"W{i}") for i in range(10)]
        current = [record_factory(f"W{i}") for i in range(8)] + [
            record_factory("W8", end=date(2025, 9, 15)),
            record_factory("W9", end="20250920"),
        ]
        result = RotationMetricsCalculator(rotation_settings).compute_monthly(current, previous, 2025, 9)

        assert result.start_count == 10
        assert result.end_count == 8
        assert result.retired_count == 2
        assert result.average_workforce == 9.0
        assert result.rotation_percentage == 20.0

    def test_zero_start_count_gives_zero_percentage(self, rotation_settings):
        result = RotationMetricsCalculator(rotation_settings).compute_monthly([], [], 2025, 9)
        assert result.start_count == 0
        assert result.rotation_percentage == 0.0
        assert result.average_workforce == 0.0

    def test_percentage_rounds_half_up(self, rotation_settings, record_factory):
        previous = [record_factory(f"W{i}") for i in range(3)]
        current = [record_factory("W0", end=date(2025, 9, 10)), record_factory("W1"), record_factory("W2")]
        result = RotationMetricsCalculator(rotation_settings).compute_monthly(current, previous, 2025, 9)
        assert result.rotation_percentage == 33.33


class TestEdgeRecords:
    """Records with unusable or missing dates."""

    def test_unusable_end_is_read_as_open(self, rotation_settings, record_factory):
        record = record_factory("X", end="00000000")
        result = RotationMetricsCalculator(rotation_settings).compute_monthly([record], [record], 2025, 9)
        assert result.retired_count == 0
        assert result.start_count == 1
        assert result.active_at_month_end_count == 1

    def test_missing_start_is_never_present(self, rotation_settings, record_factory):
        record = record_factory("X", start=None)
        result = RotationMetricsCalculator(rotation_settings).compute_monthly([record], [record], 2025, 9)
        assert result.start_count == 0
        assert result.active_at_month_end_count == 0

    def test_hire_during_month_is_active_at_end_only(self, rotation_settings, record_factory):
        record = record_factory("N", start=date(2025, 9, 10))
        result = RotationMetricsCalculator(rotation_settings).compute_monthly([record], [], 2025, 9)
        assert result.start_count == 0
        assert result.active_at_month_end_count == 1


class TestValidation:
    """Out-of-range parameters are rejected."""

    @pytest.mark.parametrize("month", [0, 13, -1])
    def test_invalid_month(self, rotation_settings, month):
        with pytest.raises(RotationError) as exc_info:
            RotationMetricsCalculator(rotation_settings).compute_monthly([], [], 2025, month)
        assert exc_info.value.error_code == ErrorCode.INVALID_ARGUMENT
        assert exc_info.value.details["field"] == "month"

    @pytest.mark.parametrize("year", [2019, 2031])
    def test_year_outside_range(self, rotation_settings, year):
        with pytest.raises(RotationError) as exc_info:
            RotationMetricsCalculator(rotation_settings).compute_monthly([], [], year, 1)
        assert exc_info.value.error_code == ErrorCode.INVALID_ARGUMENT

    def test_custom_year_range(self):
        calculator = RotationMetricsCalculator(RotationSettings(min_year=2000, max_year=2040))
        calculator.validate_period(2035, 6)
