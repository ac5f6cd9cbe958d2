"""OData ``$filter`` expressions for snapshot requests."""

from datetime import date
from typing import List, Optional

from workforce_rotation.constants import odata as fields
from workforce_rotation.constants.odata import REFERENCE_DATE
from workforce_rotation.types.records import RotationFilter
from workforce_rotation.utils.dates import format_sap_date

# RotationFilter dimension -> entity property
FILTER_PROPERTIES = {
    "company_code": fields.COMPANY_CODE,
    "personnel_area": fields.PERSONNEL_AREA_CODE,
    "cost_center": fields.COST_CENTER_CODE,
    "job_code": fields.JOB_CODE,
}


def quote_literal(value: str) -> str:
    """Render a string literal, doubling embedded single quotes."""
    return "'" + str(value).replace("'", "''") + "'"


def build_odata_filter(
    reference_date: Optional[date] = None,
    rotation_filter: Optional[RotationFilter] = None,
    reference_date_field: str = REFERENCE_DATE,
) -> Optional[str]:
    """Build the ``$filter`` value of a snapshot request.

    The reference date is matched in the ``YYYYMMDD`` form. Each non-empty
    filter field becomes one parenthesized OR-group; the groups and the
    date clause are AND-combined.

    Args:
        reference_date: Snapshot date, or None to omit the date clause
        rotation_filter: Optional filter to push down
        reference_date_field: Entity property holding the snapshot date

    Returns:
        The expression, or None when there is nothing to filter on

    Example:
        >>> build_odata_filter(date(2025, 9, 1), RotationFilter(company_codes=["1000", "2000"]))
        "Keydate eq '20250901' and (Companycode eq '1000' or Companycode eq '2000')"
    """
    clauses: List[str] = []
    if reference_date is not None:
        clauses.append(f"{reference_date_field} eq {quote_literal(format_sap_date(reference_date))}")

    if rotation_filter is not None:
        for dimension, values in rotation_filter.field_values():
            prop = FILTER_PROPERTIES[dimension]
            group = " or ".join(f"{prop} eq {quote_literal(value)}" for value in values)
            clauses.append(f"({group})")

    if not clauses:
        return None
    return " and ".join(clauses)
