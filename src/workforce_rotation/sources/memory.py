"""In-process snapshot source.

Serves snapshots registered per reference date and applies the
RotationFilter client-side. Used in tests and by callers that already
hold the workforce data (exports, fixtures, cached extracts).
"""

import asyncio
from datetime import date
from typing import Dict, Iterable, List, Mapping, Optional

from workforce_rotation.common.exceptions import fetch_error
from workforce_rotation.rotation.filtering import apply_filter
from workforce_rotation.types.records import EmployeeSnapshotRecord, RotationFilter


class InMemorySnapshotFetcher:
    """SnapshotFetcher over snapshots held in memory.

    Attributes:
        snapshots: Records per reference date
        failures: Exceptions to raise instead of serving a reference date
        delays: Seconds to wait before serving a reference date
        calls: Reference dates requested so far, in call order

    Example:
        >>> fetcher = InMemorySnapshotFetcher({date(2025, 9, 1): records})
        >>> await fetcher.fetch(date(2025, 9, 1))
    """

    def __init__(
        self,
        snapshots: Optional[Mapping[date, Iterable[EmployeeSnapshotRecord]]] = None,
        *,
        default: Optional[Iterable[EmployeeSnapshotRecord]] = None,
        failures: Optional[Mapping[date, BaseException]] = None,
        delays: Optional[Mapping[date, float]] = None,
    ):
        """Initialize the fetcher.

        Args:
            snapshots: Records per reference date
            default: Records served for dates without a registered snapshot;
                when None such dates raise a fetch error
            failures: Exceptions raised for specific reference dates
            delays: Artificial latency per reference date, in seconds
        """
        self.snapshots: Dict[date, List[EmployeeSnapshotRecord]] = {
            reference_date: list(records) for reference_date, records in (snapshots or {}).items()
        }
        self.default = list(default) if default is not None else None
        self.failures: Dict[date, BaseException] = dict(failures or {})
        self.delays: Dict[date, float] = dict(delays or {})
        self.calls: List[date] = []

    def add_snapshot(self, reference_date: date, records: Iterable[EmployeeSnapshotRecord]) -> None:
        self.snapshots[reference_date] = list(records)

    async def fetch(
        self,
        reference_date: date,
        rotation_filter: Optional[RotationFilter] = None,
    ) -> List[EmployeeSnapshotRecord]:
        self.calls.append(reference_date)

        delay = self.delays.get(reference_date)
        if delay:
            await asyncio.sleep(delay)

        failure = self.failures.get(reference_date)
        if failure is not None:
            raise failure

        if reference_date in self.snapshots:
            records = self.snapshots[reference_date]
        elif self.default is not None:
            records = self.default
        else:
            raise fetch_error(
                f"No snapshot registered for {reference_date.isoformat()}",
                reference_date=reference_date.isoformat(),
            )
        return apply_filter(records, rotation_filter)
