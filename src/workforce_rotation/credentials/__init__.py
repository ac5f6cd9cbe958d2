"""Credential providers for the snapshot source.

Both implementations satisfy the ``CredentialProvider`` protocol, so the
OData fetcher accepts either interchangeably.
"""

from workforce_rotation.protocols.providers import CredentialProvider
from .settings import SettingsCredentialProvider
from .static import StaticCredentialProvider

__all__ = [
    "CredentialProvider",
    "SettingsCredentialProvider",
    "StaticCredentialProvider",
]
