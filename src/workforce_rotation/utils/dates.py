"""Date normalization and calendar helpers.

The HR source encodes contract dates in at least six shapes depending on
the endpoint and export path:

    - ``datetime.date`` / ``datetime.datetime`` objects
    - OData v2 wrapped epochs: ``/Date(1700000000000)/``
    - The integer or string sentinel ``99991231``
    - ``YYYYMMDD`` integers or digit strings: ``20250913``
    - ISO-8601 strings: ``2025-09-13`` or ``2025-09-13T00:00:00Z``
    - Nested objects carrying the date under a ``value``-like key

``normalize_date`` folds all of them into a ``DateValue`` and never raises.
"""

import re
from calendar import monthrange
from datetime import date, datetime, timedelta, timezone
from typing import Any, Mapping, Tuple

from workforce_rotation.constants.dates import (
    DATE_VALUE_KEYS,
    SAP_DATE_FORMAT,
    SENTINEL_DATE,
    SENTINEL_EPOCH_MILLIS,
    SENTINEL_YYYYMMDD,
    SENTINEL_YYYYMMDD_STR,
)
from workforce_rotation.types.dates import DateValue

_WRAPPED_EPOCH = re.compile(r"^/Date\((-?\d+)(?:[+-]\d{4})?\)/$")
_EIGHT_DIGITS = re.compile(r"^\d{8}$")

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _from_calendar_date(value: date) -> DateValue:
    if value == SENTINEL_DATE:
        return DateValue.open_ended()
    return DateValue.of(value)


def _from_epoch_millis(millis: int) -> DateValue:
    if millis == SENTINEL_EPOCH_MILLIS:
        return DateValue.open_ended()
    try:
        moment = _EPOCH + timedelta(milliseconds=millis)
    except OverflowError:
        return DateValue.unusable()
    return _from_calendar_date(moment.date())


def _from_yyyymmdd(digits: str) -> DateValue:
    try:
        parsed = datetime.strptime(digits, SAP_DATE_FORMAT).date()
    except ValueError:
        # SAP's initial date 00000000 lands here too
        return DateValue.unusable()
    return _from_calendar_date(parsed)


def _from_iso(text: str) -> DateValue:
    try:
        return _from_calendar_date(date.fromisoformat(text))
    except ValueError:
        pass
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return DateValue.unusable()
    return _from_calendar_date(parsed.date())


def _normalize(raw: Any, allow_nested: bool) -> DateValue:
    if isinstance(raw, DateValue):
        return raw

    if isinstance(raw, datetime):
        return _from_calendar_date(raw.date())
    if isinstance(raw, date):
        return _from_calendar_date(raw)

    # bool is an int subclass; True is not a date
    if isinstance(raw, bool):
        return DateValue.open_ended()

    if isinstance(raw, str):
        text = raw.strip()
        match = _WRAPPED_EPOCH.match(text)
        if match:
            return _from_epoch_millis(int(match.group(1)))
        if text == SENTINEL_YYYYMMDD_STR:
            return DateValue.open_ended()
        if _EIGHT_DIGITS.match(text):
            return _from_yyyymmdd(text)
        if "-" in text or "T" in text:
            return _from_iso(text)
        return DateValue.open_ended()

    if isinstance(raw, int):
        if raw == SENTINEL_YYYYMMDD:
            return DateValue.open_ended()
        if 10_000_000 <= raw <= 99_999_999:
            return _from_yyyymmdd(str(raw))
        return DateValue.open_ended()

    if allow_nested and isinstance(raw, Mapping):
        for key in DATE_VALUE_KEYS:
            if key in raw:
                return _normalize(raw[key], allow_nested=False)

    return DateValue.open_ended()


def normalize_date(raw: Any) -> DateValue:
    """Normalize any supported wire representation of a date.

    Total function: every input yields a DateValue. Missing values and
    unrecognized shapes become ``OPEN_ENDED`` (business rules read "no end
    date" as "still employed"); recognized shapes that fail to parse become
    ``UNUSABLE``.

    Args:
        raw: Value as received from the source

    Returns:
        DateValue tagged CONCRETE, OPEN_ENDED or UNUSABLE

    Example:
        >>> normalize_date("/Date(253402214400000)/").is_open_ended
        True
        >>> normalize_date("20250913").value
        datetime.date(2025, 9, 13)
    """
    try:
        return _normalize(raw, allow_nested=True)
    except Exception:
        # Guarantees totality for exotic objects (broken __eq__, etc.)
        return DateValue.unusable()


def normalize_contract_start(raw: Any) -> DateValue:
    """Normalize a contract start date.

    A start date is required to place a worker in any cohort, so anything
    that is not a concrete date is reported as ``UNUSABLE``.
    """
    value = normalize_date(raw)
    if value.is_concrete:
        return value
    return DateValue.unusable()


def normalize_contract_end(raw: Any) -> DateValue:
    """Normalize a contract end date; open-ended values are kept as such."""
    return normalize_date(raw)


def format_sap_date(value: date) -> str:
    """Render a date in the ``YYYYMMDD`` wire form."""
    return value.strftime(SAP_DATE_FORMAT)


def month_end(year: int, month: int) -> date:
    """Last day of the given month."""
    return date(year, month, monthrange(year, month)[1])


def previous_month(year: int, month: int) -> Tuple[int, int]:
    """(year, month) of the month before the given one."""
    if month == 1:
        return year - 1, 12
    return year, month - 1


def next_month(year: int, month: int) -> Tuple[int, int]:
    """(year, month) of the month after the given one."""
    if month == 12:
        return year + 1, 1
    return year, month + 1
