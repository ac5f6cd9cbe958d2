from .rotation import (
    compute_annual_indicators,
    compute_monthly_indicators,
    get_filter_options,
    check_connection,
)

__all__ = [
    "compute_annual_indicators",
    "compute_monthly_indicators",
    "get_filter_options",
    "check_connection",
]
