"""Shared fixtures for the rotation engine tests."""

from datetime import date
from typing import Any, Optional

import pytest

from workforce_rotation.settings.rotation import RotationSettings
from workforce_rotation.types.records import CodedValue, EmployeeSnapshotRecord


def make_record(
    employee_id: str,
    start: Any = "20200101",
    end: Any = None,
    *,
    company: Optional[str] = "1000",
    area: Optional[str] = "PA01",
    area_description: Optional[str] = "Bogota",
    cost_center: Optional[str] = "CC01",
    cost_center_description: Optional[str] = "Nursing",
    job: Optional[str] = "J1",
    job_description: Optional[str] = "Nurse",
) -> EmployeeSnapshotRecord:
    """Build a snapshot record; dates accept any wire format."""
    return EmployeeSnapshotRecord(
        employee_id=employee_id,
        name=f"Employee {employee_id}",
        company_code=company,
        personnel_area=CodedValue(code=area, description=area_description),
        cost_center=CodedValue(code=cost_center, description=cost_center_description),
        job=CodedValue(code=job, description=job_description),
        contracted_hours=40,
        contract_start=start,
        contract_end=end,
    )


@pytest.fixture
def record_factory():
    return make_record


@pytest.fixture
def rotation_settings() -> RotationSettings:
    return RotationSettings(
        min_year=2020,
        max_year=2030,
        max_concurrency=4,
        fetch_timeout_seconds=5,
    )


@pytest.fixture
def september_snapshot():
    """Five workers around September 2025.

    A leaves on day 2, B on the first day of October, C has no end date,
    D left in August and E leaves on the last day of September.
    """
    return [
        make_record("A", end=date(2025, 9, 2)),
        make_record("B", end=date(2025, 10, 1)),
        make_record("C", end="99991231"),
        make_record("D", end=date(2025, 8, 15)),
        make_record("E", end=date(2025, 9, 30)),
    ]
