"""Tagged contract date value.

A contract date coming from the HR source is either a real calendar date,
the "no termination scheduled" marker, or something that could not be
read at all. Classification code branches on the tag, never on the wire
format the value arrived in.
"""

from datetime import date
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import model_validator

from .base import RotationBaseModel


class DateKind(str, Enum):
    """Tag of a DateValue.

    Values:
        CONCRETE: A real calendar date
        OPEN_ENDED: No end date; the contract is still running
        UNUSABLE: A value was supplied but could not be read as a date
    """
    CONCRETE = "concrete"
    OPEN_ENDED = "open_ended"
    UNUSABLE = "unusable"


class DateValue(RotationBaseModel):
    """A calendar date, the open-ended marker, or an unusable value.

    Only ``CONCRETE`` values carry a ``value``; months are 1-based.

    Example:
        >>> DateValue.of(date(2025, 9, 13)).is_concrete
        True
        >>> DateValue.open_ended() == DateValue.open_ended()
        True
    """

    kind: DateKind
    value: Optional[date] = None

    @model_validator(mode="after")
    def _check_value_matches_kind(self) -> "DateValue":
        if self.kind == DateKind.CONCRETE and self.value is None:
            raise ValueError("A concrete DateValue requires a date")
        if self.kind != DateKind.CONCRETE and self.value is not None:
            raise ValueError(f"A {self.kind.value} DateValue cannot carry a date")
        return self

    @classmethod
    def of(cls, value: date) -> "DateValue":
        return cls(kind=DateKind.CONCRETE, value=value)

    @classmethod
    def open_ended(cls) -> "DateValue":
        return cls(kind=DateKind.OPEN_ENDED)

    @classmethod
    def unusable(cls) -> "DateValue":
        return cls(kind=DateKind.UNUSABLE)

    @property
    def is_concrete(self) -> bool:
        return self.kind == DateKind.CONCRETE

    @property
    def is_open_ended(self) -> bool:
        return self.kind == DateKind.OPEN_ENDED

    @property
    def is_unusable(self) -> bool:
        return self.kind == DateKind.UNUSABLE

    def to_dict(self) -> Dict[str, Any]:
        if self.value is None:
            return {"kind": self.kind.value}
        return {"kind": self.kind.value, "value": self.value.isoformat()}

    def __str__(self) -> str:
        return self.value.isoformat() if self.value is not None else self.kind.value
