"""Credential provider holding a fixed user name and password.

Used by interactive callers that already hold the user's source
credentials (for example, decrypted into a session) and by tests.
"""

from typing import Optional, Tuple, Union

from pydantic import SecretStr

from workforce_rotation.common.exceptions import ErrorCode, RotationError


class StaticCredentialProvider:
    """Credential provider returning the credentials it was built with.

    Attributes:
        username: Source user name
    """

    def __init__(self, username: Optional[str], password: Union[str, SecretStr, None]):
        """Initialize the provider.

        Args:
            username: Source user name
            password: Password, plain or already wrapped in SecretStr
        """
        self.username = username
        if password is not None and not isinstance(password, SecretStr):
            password = SecretStr(password)
        self._password: Optional[SecretStr] = password

    def get_credentials(self) -> Tuple[str, SecretStr]:
        """Return (username, password).

        Raises:
            RotationError: CONFIG_MISSING when either value is empty
        """
        if not self.username or self._password is None or not self._password.get_secret_value():
            raise RotationError.from_error_code(
                ErrorCode.CONFIG_MISSING,
                "Source credentials are not configured",
                details={"provider": type(self).__name__},
            )
        return self.username, self._password

    def __repr__(self) -> str:
        return f"{type(self).__name__}(username={self.username!r}, password='**********')"
