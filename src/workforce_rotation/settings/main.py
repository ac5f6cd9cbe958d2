from pydantic import Field, field_validator, model_validator
from pydantic_settings import SettingsConfigDict

from .base import RotationBaseSettings
from .rotation import RotationSettings
from .source import SnapshotSourceSettings

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(RotationBaseSettings):

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__"
    )

    log_level: str = Field(
        default="INFO",
        description="Root log level passed to setup_logging"
    )
    source: SnapshotSourceSettings = Field(
        default_factory=SnapshotSourceSettings,
        description="SAP OData snapshot source configuration"
    )
    rotation: RotationSettings = Field(
        default_factory=RotationSettings,
        description="Rotation calculator and fan-out configuration"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}. Use one of {', '.join(_LOG_LEVELS)}")
        return level

    @model_validator(mode="after")
    def validate_fetch_timeout(self) -> "Settings":
        """The fetch timeout must cover one request with all of its retries."""
        budget = self.source.retry_budget_seconds
        if self.rotation.fetch_timeout_seconds < budget:
            raise ValueError(
                f"rotation.fetch_timeout_seconds ({self.rotation.fetch_timeout_seconds}) is shorter "
                f"than the source retry budget ({budget}s = timeout x attempts + backoff)"
            )
        return self


def load_settings(**overrides) -> Settings:
    """Build a settings object from the environment.

    Every call reads the environment (and ``.env``) again and returns a new
    object; nothing is cached at module level, so callers that need a
    single configuration pass it around explicitly.

    Args:
        **overrides: Field values that take precedence over the environment

    Returns:
        Settings: A freshly validated settings instance

    Raises:
        pydantic.ValidationError: If any value fails validation

    Example:
        ```python
        settings = load_settings(log_level="DEBUG")
        aggregator = AnnualRotationAggregator(fetcher, settings.rotation)
        ```
    """
    return Settings(**overrides)
