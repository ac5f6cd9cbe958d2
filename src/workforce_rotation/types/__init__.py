"""Type definitions for the workforce rotation engine.

This module provides the immutable value types that flow through the
engine: the tagged contract date, snapshot records, filters and the
monthly/annual indicator results.
"""

from .base import RotationBaseModel
from .dates import DateKind, DateValue
from .records import CodedValue, EmployeeSnapshotRecord, RotationFilter
from .indicators import (
    RotationPeriod,
    MonthlyRotationIndicators,
    AnnualRotationIndicators,
    FilterOptions,
)

__all__ = [
    # Base model
    'RotationBaseModel',
    # Dates
    'DateKind',
    'DateValue',
    # Records
    'CodedValue',
    'EmployeeSnapshotRecord',
    'RotationFilter',
    # Indicators
    'RotationPeriod',
    'MonthlyRotationIndicators',
    'AnnualRotationIndicators',
    'FilterOptions',
]
