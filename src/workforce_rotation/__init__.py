from workforce_rotation.__version__ import __version__

from workforce_rotation.api import (
    check_connection,
    compute_annual_indicators,
    compute_monthly_indicators,
    get_filter_options,
)
from workforce_rotation.common.exceptions import ErrorCode, RotationError
from workforce_rotation.constants.rotation import EndOfPeriodPolicy, ReportType
from workforce_rotation.rotation import (
    AnnualRotationAggregator,
    RotationMetricsCalculator,
    extract_filter_options,
)
from workforce_rotation.settings import (
    RotationSettings,
    Settings,
    SnapshotSourceSettings,
    load_settings,
)
from workforce_rotation.sources import InMemorySnapshotFetcher, ODataSnapshotFetcher
from workforce_rotation.types import (
    AnnualRotationIndicators,
    DateKind,
    DateValue,
    EmployeeSnapshotRecord,
    FilterOptions,
    MonthlyRotationIndicators,
    RotationFilter,
)

# Utils (public API)
from workforce_rotation.utils import normalize_date


__all__ = [
    "__version__",

    # Engine
    "AnnualRotationAggregator",
    "RotationMetricsCalculator",
    "extract_filter_options",

    # Sources
    "InMemorySnapshotFetcher",
    "ODataSnapshotFetcher",

    # Types
    "AnnualRotationIndicators",
    "DateKind",
    "DateValue",
    "EmployeeSnapshotRecord",
    "FilterOptions",
    "MonthlyRotationIndicators",
    "RotationFilter",

    # Settings
    "RotationSettings",
    "Settings",
    "SnapshotSourceSettings",
    "load_settings",
    "EndOfPeriodPolicy",
    "ReportType",

    # Exceptions (public API)
    "RotationError",
    "ErrorCode",

    # Utilities (public API)
    "normalize_date",

    #api
    "compute_monthly_indicators",
    "compute_annual_indicators",
    "get_filter_options",
    "check_connection",
]
