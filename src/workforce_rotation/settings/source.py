"""Snapshot source (SAP OData) configuration settings.

Credentials are read from the environment only as a fallback for
service-style deployments; interactive callers hand the fetcher a
CredentialProvider of their own.
"""

from typing import Dict, Optional, Tuple

from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import SettingsConfigDict

from workforce_rotation.constants.odata import (
    DEFAULT_ENTITY_SET,
    DEFAULT_SERVICE_URLS,
    REFERENCE_DATE,
    RETRY_BACKOFF_BASE,
    RETRY_MAX_DELAY_SECONDS,
)
from workforce_rotation.constants.rotation import ReportType
from .base import RotationBaseSettings


class SnapshotSourceSettings(RotationBaseSettings):
    """Configuration for the SAP OData snapshot source.

    Each report type is served by its own OData service. Report types
    without a configured URL fall back to the default report's service.

    Environment Variables:
        SAP_URLS: JSON object of report type to service URL
        SAP_DEFAULT_REPORT_TYPE: Report used when none is given
        SAP_USERNAME / SAP_PASSWORD: Basic-auth credentials
        SAP_TIMEOUT_SECONDS: Per-request timeout
        SAP_FILTER_PUSHDOWN: Whether filters are sent as ``$filter``

    Example:
        ```python
        settings = SnapshotSourceSettings(
            urls={"rotacion-personal": "https://sap.example.com/ZHCM_ROT_SRV"},
        )
        settings.get_base_url(ReportType.PERSONNEL_ROTATION)
        ```
    """

    model_config = SettingsConfigDict(
        env_prefix="SAP_",
        case_sensitive=False
    )

    urls: Dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_SERVICE_URLS),
        description="OData service root URL per report type"
    )
    default_report_type: ReportType = Field(
        default=ReportType.PAYROLL_SALARIES,
        description="Report type whose URL is used when a report type has none"
    )
    rotation_report_type: ReportType = Field(
        default=ReportType.PERSONNEL_ROTATION,
        description="Report type the rotation snapshots are read from"
    )
    entity_set: str = Field(
        default=DEFAULT_ENTITY_SET,
        description="Entity set holding the employee records"
    )
    reference_date_field: str = Field(
        default=REFERENCE_DATE,
        description="Entity property the snapshot reference date is matched on"
    )
    timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        le=600,
        description="Per-request HTTP timeout in seconds"
    )
    filter_pushdown: bool = Field(
        default=True,
        description="Send RotationFilter values as an OData $filter instead of filtering client-side"
    )
    username: Optional[str] = Field(
        default=None,
        description="Basic-auth user name"
    )
    password: Optional[SecretStr] = Field(
        default=None,
        description="Basic-auth password"
    )

    @field_validator("urls")
    @classmethod
    def validate_urls(cls, v: Dict[str, str]) -> Dict[str, str]:
        """Strip trailing slashes and reject non-HTTP URLs."""
        cleaned = {}
        for report_type, url in v.items():
            url = url.strip().rstrip("/")
            if not url.startswith(("http://", "https://")):
                raise ValueError(
                    f"Invalid URL for report type '{report_type}': {url}. "
                    f"URLs must start with http:// or https://"
                )
            cleaned[report_type] = url
        return cleaned

    @model_validator(mode="after")
    def validate_default_report_url(self) -> "SnapshotSourceSettings":
        if self.default_report_type.value not in self.urls:
            raise ValueError(
                f"No URL configured for the default report type "
                f"'{self.default_report_type.value}'"
            )
        return self

    def get_base_url(self, report_type: Optional[str] = None) -> str:
        """Service root URL for a report type.

        Args:
            report_type: Report type key or ReportType; defaults to the
                rotation report

        Returns:
            The configured URL, or the default report's URL when the report
            type has none
        """
        if report_type is None:
            report_type = self.rotation_report_type
        key = report_type.value if isinstance(report_type, ReportType) else str(report_type)
        return self.urls.get(key, self.urls[self.default_report_type.value])

    @property
    def retry_budget_seconds(self) -> float:
        """Worst-case duration of one request with every retry and backoff delay."""
        backoff = sum(
            min(self.retry_delay_seconds * RETRY_BACKOFF_BASE ** attempt, RETRY_MAX_DELAY_SECONDS)
            for attempt in range(self.max_retries)
        )
        return self.timeout_seconds * (self.max_retries + 1) + backoff

    @property
    def has_credentials(self) -> bool:
        return bool(self.username and self.password and self.password.get_secret_value())

    def get_credentials(self) -> Tuple[Optional[str], Optional[SecretStr]]:
        """Return (username, password) as configured; either may be None."""
        return self.username, self.password
