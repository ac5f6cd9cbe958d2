from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RotationBaseSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__"
    )

    max_retries: int = Field(
        default=3,
        ge=0,
        le=10,
        description="Maximum number of retry attempts for operations"
    )
    retry_delay_seconds: float = Field(
        default=1.0,
        ge=0.1,
        le=60.0,
        description="Delay between retry attempts in seconds"
    )

    @classmethod
    def get_env_prefix(cls) -> str:
        """Get the environment variable prefix for this settings class.

        Subclasses declare their prefix through ``model_config['env_prefix']``;
        this accessor exposes it for diagnostics and documentation.

        Returns:
            str: Environment variable prefix (empty string for base class)

        Example:
            ```python
            SnapshotSourceSettings.get_env_prefix()  # "SAP_"
            ```
        """
        return cls.model_config.get("env_prefix", "") or ""

    def model_post_init(self, __context: Any) -> None:
        """Post initialization hook for additional setup.

        This method is called after Pydantic has initialized and validated
        all fields. Subclasses should override this method and call super()
        to add custom initialization logic.

        Args:
            __context: Pydantic context object (internal use)
        """
        super().model_post_init(__context)
