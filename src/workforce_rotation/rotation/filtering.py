"""Client-side application of a RotationFilter."""

from typing import Iterable, List, Optional

from workforce_rotation.types.records import EmployeeSnapshotRecord, RotationFilter


def apply_filter(
    records: Iterable[EmployeeSnapshotRecord],
    rotation_filter: Optional[RotationFilter] = None,
) -> List[EmployeeSnapshotRecord]:
    """Keep the records that pass ``rotation_filter``, in input order.

    A missing or empty filter keeps every record.
    """
    if rotation_filter is None or rotation_filter.is_empty:
        return list(records)
    return [record for record in records if rotation_filter.matches(record)]
