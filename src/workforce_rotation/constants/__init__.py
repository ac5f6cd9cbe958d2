"""Constants module for the workforce rotation engine.

This module contains all constant values and enumerations used throughout
the package. It has no dependencies on other package modules.

Organization:
    - dates: Sentinel encodings of the open-ended contract date
    - rotation: Rotation policies, report types and month names
    - odata: Field names of the SAP OData employee entity
"""

from workforce_rotation.constants.dates import (
    SENTINEL_YYYYMMDD,
    SENTINEL_YYYYMMDD_STR,
    SENTINEL_EPOCH_MILLIS,
    SENTINEL_DATE,
    DATE_VALUE_KEYS,
    SAP_DATE_FORMAT,
)
from workforce_rotation.constants.rotation import (
    EndOfPeriodPolicy,
    ReportType,
    MONTHS_PER_YEAR,
    DEFAULT_MONTH_NAMES,
)

__all__ = [
    # Dates
    "SENTINEL_YYYYMMDD",
    "SENTINEL_YYYYMMDD_STR",
    "SENTINEL_EPOCH_MILLIS",
    "SENTINEL_DATE",
    "DATE_VALUE_KEYS",
    "SAP_DATE_FORMAT",
    # Rotation
    "EndOfPeriodPolicy",
    "ReportType",
    "MONTHS_PER_YEAR",
    "DEFAULT_MONTH_NAMES",
]
