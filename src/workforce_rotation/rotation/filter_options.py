"""Distinct dimension values of a snapshot, for filter pickers."""

from typing import Dict, Iterable, List, Optional, Tuple

from workforce_rotation.types.indicators import FilterOptions
from workforce_rotation.types.records import CodedValue, EmployeeSnapshotRecord


def _sort_key(value: CodedValue) -> Tuple[str, str]:
    return value.code or "", value.description or ""


def _distinct_coded(values: Iterable[CodedValue]) -> List[CodedValue]:
    seen: Dict[Tuple[Optional[str], Optional[str]], CodedValue] = {}
    for value in values:
        if not value.code:
            continue
        seen.setdefault((value.code, value.description), value)
    return sorted(seen.values(), key=_sort_key)


def extract_filter_options(snapshot: Iterable[EmployeeSnapshotRecord]) -> FilterOptions:
    """Collect the filterable values observed in an unfiltered snapshot.

    Companies are the sorted distinct company codes. Personnel areas, cost
    centers and jobs are distinct (code, description) pairs sorted by code,
    then description. Records with a blank code contribute nothing to that
    dimension.

    Pure function: the same snapshot always yields an equal result,
    whatever the record order.

    Args:
        snapshot: Employee records of one reference date

    Returns:
        FilterOptions with four sorted, de-duplicated lists
    """
    records = list(snapshot)
    companies = sorted({record.company_code for record in records if record.company_code})
    return FilterOptions(
        companies=companies,
        personnel_areas=_distinct_coded(record.personnel_area for record in records),
        cost_centers=_distinct_coded(record.cost_center for record in records),
        jobs=_distinct_coded(record.job for record in records),
    )
