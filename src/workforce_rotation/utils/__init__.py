"""Utility functions and helpers for the workforce rotation engine."""

from workforce_rotation.utils.dates import (
    format_sap_date,
    month_end,
    next_month,
    normalize_contract_end,
    normalize_contract_start,
    normalize_date,
    previous_month,
)
from workforce_rotation.utils.decorators import (
    retry_with_backoff,
    traced,
)
from workforce_rotation.utils.numbers import round_half_up, safe_percentage

__all__ = [
    # Dates
    "normalize_date",
    "normalize_contract_start",
    "normalize_contract_end",
    "format_sap_date",
    "month_end",
    "previous_month",
    "next_month",
    # Numbers
    "round_half_up",
    "safe_percentage",
    # Decorators
    "retry_with_backoff",
    "traced",
]
