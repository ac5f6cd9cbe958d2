"""Credential provider backed by SnapshotSourceSettings."""

from typing import Tuple

from pydantic import SecretStr

from workforce_rotation.common.exceptions import ErrorCode, RotationError
from workforce_rotation.settings.source import SnapshotSourceSettings


class SettingsCredentialProvider:
    """Reads credentials from ``SAP_USERNAME`` / ``SAP_PASSWORD``.

    The settings object is consulted on every call, so replacing it on the
    provider takes effect immediately.
    """

    def __init__(self, settings: SnapshotSourceSettings):
        self.settings = settings

    def get_credentials(self) -> Tuple[str, SecretStr]:
        username, password = self.settings.get_credentials()
        if not self.settings.has_credentials:
            raise RotationError.from_error_code(
                ErrorCode.CONFIG_MISSING,
                "SAP_USERNAME and SAP_PASSWORD must be set",
                details={"env_prefix": self.settings.get_env_prefix()},
            )
        return username, password
