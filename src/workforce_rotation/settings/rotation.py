from typing import List

from pydantic import Field, field_validator, model_validator
from pydantic_settings import SettingsConfigDict

from workforce_rotation.constants.rotation import (
    DEFAULT_MONTH_NAMES,
    MONTHS_PER_YEAR,
    EndOfPeriodPolicy,
)
from .base import RotationBaseSettings


class RotationSettings(RotationBaseSettings):
    """Behavior of the rotation calculator and the annual fan-out."""

    model_config = SettingsConfigDict(
        env_prefix="ROTATION_",
        case_sensitive=False
    )

    min_year: int = Field(
        default=2020,
        ge=1900,
        description="Earliest year indicators may be requested for"
    )
    max_year: int = Field(
        default=2030,
        le=9998,
        description="Latest year indicators may be requested for"
    )
    max_concurrency: int = Field(
        default=4,
        ge=1,
        le=12,
        description="Maximum number of months computed concurrently"
    )
    fetch_timeout_seconds: float = Field(
        default=150.0,
        gt=0,
        le=3600,
        description="Timeout applied to every snapshot fetch"
    )
    end_of_period_policy: EndOfPeriodPolicy = Field(
        default=EndOfPeriodPolicy.COUNT_ONCE,
        description="Whether same-day exits are added on top of the active-at-month-end count"
    )
    count_month_end_exits_as_retired: bool = Field(
        default=False,
        description="Count workers whose contract ends on the last day of the month as retired"
    )
    month_names: List[str] = Field(
        default_factory=lambda: list(DEFAULT_MONTH_NAMES),
        description="Display names of the twelve months, January first"
    )

    @field_validator("month_names")
    @classmethod
    def validate_month_names(cls, v: List[str]) -> List[str]:
        if len(v) != MONTHS_PER_YEAR:
            raise ValueError(f"month_names must have {MONTHS_PER_YEAR} entries, got {len(v)}")
        return [name.strip() for name in v]

    @model_validator(mode="after")
    def validate_year_range(self) -> "RotationSettings":
        if self.min_year > self.max_year:
            raise ValueError(
                f"min_year ({self.min_year}) must be <= max_year ({self.max_year})"
            )
        return self

    def month_name(self, month: int) -> str:
        """Display name of a 1-based month."""
        return self.month_names[month - 1]
