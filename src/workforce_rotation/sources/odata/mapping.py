"""Mapping of SAP OData employee entities to snapshot records."""

from typing import Any, Dict, List, Mapping, Optional

from pydantic import ValidationError

from workforce_rotation.common.exceptions import malformed_payload_error
from workforce_rotation.constants import odata as fields
from workforce_rotation.types.records import CodedValue, EmployeeSnapshotRecord


def _hours(raw: Any) -> Any:
    # SAP sends decimals as strings and leaves them blank when unset
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return 0.0
    return raw


def record_from_odata(raw: Mapping[str, Any]) -> EmployeeSnapshotRecord:
    """Build a record from one entity of the employee entity set.

    Contract dates are passed through raw; the record normalizes them.

    Raises:
        RotationError: MALFORMED_PAYLOAD if the entity cannot be mapped
    """
    if not isinstance(raw, Mapping):
        raise malformed_payload_error(
            "Employee entity is not an object",
            payload_type=type(raw).__name__,
        )
    try:
        return EmployeeSnapshotRecord(
            employee_id=raw.get(fields.EMPLOYEE_ID),
            name=raw.get(fields.EMPLOYEE_NAME),
            job=CodedValue(
                code=raw.get(fields.JOB_CODE),
                description=raw.get(fields.JOB_DESCRIPTION),
            ),
            organizational_unit=CodedValue(
                code=raw.get(fields.ORG_UNIT_CODE),
                description=raw.get(fields.ORG_UNIT_DESCRIPTION),
            ),
            personnel_area=CodedValue(
                code=raw.get(fields.PERSONNEL_AREA_CODE),
                description=raw.get(fields.PERSONNEL_AREA_DESCRIPTION),
            ),
            cost_center=CodedValue(
                code=raw.get(fields.COST_CENTER_CODE),
                description=raw.get(fields.COST_CENTER_DESCRIPTION),
            ),
            company_code=raw.get(fields.COMPANY_CODE),
            contracted_hours=_hours(raw.get(fields.CONTRACTED_HOURS)),
            contract_start=raw.get(fields.CONTRACT_START_DATE),
            contract_end=raw.get(fields.CONTRACT_END_DATE),
        )
    except ValidationError as exc:
        raise malformed_payload_error(
            f"Employee entity {raw.get(fields.EMPLOYEE_ID)!r} could not be mapped",
            payload_type=type(raw).__name__,
            details={"errors": exc.errors(include_url=False, include_input=False)},
            cause=exc,
        ) from exc


def _results(payload: Any) -> Optional[List[Any]]:
    if not isinstance(payload, Mapping):
        return None
    # OData v2 wraps collections as {"d": {"results": [...]}}, older services as {"d": [...]}
    if "d" in payload:
        body = payload["d"]
        if isinstance(body, list):
            return body
        if isinstance(body, Mapping) and isinstance(body.get("results"), list):
            return body["results"]
        return None
    # OData v4
    if isinstance(payload.get("value"), list):
        return payload["value"]
    return None


def records_from_payload(payload: Any) -> List[EmployeeSnapshotRecord]:
    """Map a collection response to snapshot records.

    Raises:
        RotationError: MALFORMED_PAYLOAD if the payload is not an entity
            collection or any entity cannot be mapped
    """
    results = _results(payload)
    if results is None:
        raise malformed_payload_error(
            "Snapshot response is not an OData entity collection",
            payload_type=type(payload).__name__,
        )
    return [record_from_odata(raw) for raw in results]


def next_link(payload: Any) -> Optional[str]:
    """Server-driven paging link of a collection response, if any."""
    if not isinstance(payload, Mapping):
        return None
    body = payload.get("d")
    if isinstance(body, Mapping) and body.get("__next"):
        return str(body["__next"])
    link = payload.get("@odata.nextLink")
    return str(link) if link else None


def payload_summary(payload: Any) -> Dict[str, Any]:
    """Shape of a payload for log lines; never includes record contents."""
    results = _results(payload)
    return {
        "payload_type": type(payload).__name__,
        "record_count": len(results) if results is not None else None,
        "has_next": next_link(payload) is not None,
    }
