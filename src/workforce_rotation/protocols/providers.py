"""Provider protocol definitions.

This module defines the collaborator interfaces the rotation engine
consumes. Any object with the right shape satisfies them; no
inheritance is required.
"""

from datetime import date
from typing import List, Optional, Protocol, Tuple, runtime_checkable

from pydantic import SecretStr

from workforce_rotation.types.records import EmployeeSnapshotRecord, RotationFilter


@runtime_checkable
class SnapshotFetcher(Protocol):
    """Protocol for sources of point-in-time workforce snapshots.

    The engine calls ``fetch`` once per reference date it needs and never
    retries; transport-level retries belong to the implementation.

    Implementations must honor the filter semantics of ``RotationFilter``
    (OR within a field, AND across fields), either by pushing the filter
    down to the source or by filtering client-side.
    """

    async def fetch(
        self,
        reference_date: date,
        rotation_filter: Optional[RotationFilter] = None,
    ) -> List[EmployeeSnapshotRecord]:
        """Return the workforce as of ``reference_date``.

        Args:
            reference_date: Calendar date the snapshot is taken at
            rotation_filter: Optional restriction of the returned records

        Returns:
            Records of the snapshot, possibly empty

        Raises:
            Exception: Any transport, authorization or payload error
        """
        ...


@runtime_checkable
class CredentialProvider(Protocol):
    """Protocol for suppliers of source credentials.

    The protocol is marked as runtime_checkable to allow isinstance()
    checks at runtime, which is useful for validation and testing.
    """

    def get_credentials(self) -> Tuple[str, SecretStr]:
        """Return (username, password) for the snapshot source.

        Raises:
            RotationError: With CONFIG_MISSING when no credentials are available
        """
        ...
