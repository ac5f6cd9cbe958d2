"""Numeric helpers for indicator arithmetic."""

from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float, places: int = 2) -> float:
    """Round half away from zero, as the reports display percentages.

    Python's ``round`` uses banker's rounding and binary floats, which
    turns 12.345 into 12.34; indicators are rounded on the decimal value.

    Example:
        >>> round_half_up(12.345)
        12.35
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def safe_percentage(numerator: float, denominator: float, places: int = 2) -> float:
    """``numerator / denominator * 100`` rounded, or 0.0 for a zero denominator."""
    if not denominator:
        return 0.0
    return round_half_up(numerator / denominator * 100, places)
