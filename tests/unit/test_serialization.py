"""Tests for RotationBaseModel serialization of the result types."""

from datetime import date

import pytest
from pydantic import ValidationError

from workforce_rotation.rotation.aggregator import build_annual_indicators
from workforce_rotation.types.base import RotationBaseModel
from workforce_rotation.types.indicators import MonthlyRotationIndicators, RotationPeriod
from workforce_rotation.types.records import RotationFilter


class TestRotationBaseModel:
    """Test RotationBaseModel serialization functionality."""

    def test_simple_model_to_dict(self):
        class SimpleModel(RotationBaseModel):
            name: str
            value: int

        result = SimpleModel(name="test", value=42).to_dict()
        assert result == {"name": "test", "value": 42}

    def test_nested_model_to_dict(self):
        class InnerModel(RotationBaseModel):
            inner_value: str

        class OuterModel(RotationBaseModel):
            outer_value: int
            inner: InnerModel

        result = OuterModel(outer_value=10, inner=InnerModel(inner_value="nested")).to_dict()
        assert result["inner"] == {"inner_value": "nested"}

    def test_dates_and_tuples_are_json_ready(self):
        class Dated(RotationBaseModel):
            when: date
            codes: tuple

        result = Dated(when=date(2025, 9, 1), codes=("a", "b")).to_dict()
        assert result == {"when": "2025-09-01", "codes": ["a", "b"]}

    def test_models_are_frozen(self):
        period = RotationPeriod.for_month(2025, 9)
        with pytest.raises(ValidationError, match="frozen"):
            period.month_end = date(2025, 9, 29)


class TestIndicatorSerialization:
    """Result types serialize for the presentation layer."""

    def test_monthly_indicators(self, record_factory):
        retired = record_factory("A", end=date(2025, 9, 2))
        indicators = MonthlyRotationIndicators(
            year=2025,
            month=9,
            month_name="Septiembre",
            retired_count=1,
            retired_workers=[retired],
            start_count=4,
            end_count=3,
            average_workforce=3.5,
            rotation_percentage=25.0,
            period=RotationPeriod.for_month(2025, 9),
        )

        result = indicators.to_dict()

        assert result["month_name"] == "Septiembre"
        assert result["is_degraded"] is False
        assert "error" not in result
        assert result["period"]["retire_window_end"] == "2025-10-01"
        worker = result["retired_workers"][0]
        assert worker["employee_id"] == "A"
        assert worker["contract_end"]["value"] == "2025-09-02"

    def test_degraded_month(self):
        result = MonthlyRotationIndicators.degraded(2025, 6, "Junio", "timed out").to_dict()
        assert result["is_degraded"] is True
        assert result["error"] == "timed out"
        assert result["retired_count"] == 0
        assert "period" not in result

    def test_annual_indicators(self):
        months = [
            MonthlyRotationIndicators.degraded(2025, month, f"M{month}", "down")
            for month in range(1, 13)
        ]
        annual = build_annual_indicators(2025, months, RotationFilter(company_codes="1000,2000"))

        result = annual.to_dict()

        assert result["filter"]["company_codes"] == ["1000", "2000"]
        assert result["degraded_months"] == list(range(1, 13))
        assert sorted(result["months"]) == list(range(1, 13))
        assert result["annual_rotation_percentage"] == 0.0
