"""Snapshot record and filter types."""

from typing import Any, Iterable, Mapping, Optional, Tuple

from pydantic import Field, field_validator

from .base import RotationBaseModel
from .dates import DateValue


class CodedValue(RotationBaseModel):
    """An organizational dimension value: code plus human description."""

    code: Optional[str] = None
    description: Optional[str] = None

    @field_validator("code", "description", mode="before")
    @classmethod
    def _strip(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        text = str(v).strip()
        return text or None


class EmployeeSnapshotRecord(RotationBaseModel):
    """One worker's state as of a snapshot reference date.

    Contract dates may be given in any wire shape the source produces;
    they are normalized on construction. ``contract_start`` is never
    open-ended: anything that is not a concrete date becomes unusable.
    """

    employee_id: str
    name: Optional[str] = None
    job: CodedValue = Field(default_factory=CodedValue)
    organizational_unit: CodedValue = Field(default_factory=CodedValue)
    personnel_area: CodedValue = Field(default_factory=CodedValue)
    cost_center: CodedValue = Field(default_factory=CodedValue)
    company_code: Optional[str] = None
    contracted_hours: float = 0.0
    contract_start: DateValue = Field(default_factory=DateValue.unusable)
    contract_end: DateValue = Field(default_factory=DateValue.open_ended)

    @field_validator("employee_id", mode="before")
    @classmethod
    def _coerce_id(cls, v: Any) -> str:
        if v is None:
            raise ValueError("employee_id is required")
        return str(v).strip()

    @field_validator("company_code", mode="before")
    @classmethod
    def _coerce_company(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        text = str(v).strip()
        return text or None

    @field_validator("contract_start", mode="before")
    @classmethod
    def _normalize_start(cls, v: Any) -> DateValue:
        # Lazy import: utils.dates depends on this package
        from workforce_rotation.utils.dates import normalize_contract_start
        return normalize_contract_start(v)

    @field_validator("contract_end", mode="before")
    @classmethod
    def _normalize_end(cls, v: Any) -> DateValue:
        from workforce_rotation.utils.dates import normalize_contract_end
        return normalize_contract_end(v)

    @property
    def job_code(self) -> Optional[str]:
        return self.job.code

    @property
    def personnel_area_code(self) -> Optional[str]:
        return self.personnel_area.code

    @property
    def cost_center_code(self) -> Optional[str]:
        return self.cost_center.code


def _split_values(raw: Any) -> Tuple[str, ...]:
    if raw is None:
        return ()
    if isinstance(raw, str):
        items: Iterable[Any] = raw.split(",")
    elif isinstance(raw, Iterable):
        items = raw
    else:
        # Single code such as company_codes=1000
        items = (raw,)
    values = []
    for item in items:
        text = str(item).strip()
        if text and text not in values:
            values.append(text)
    return tuple(values)


class RotationFilter(RotationBaseModel):
    """Optional restriction of a snapshot to some organizational values.

    Values within one field are OR-combined; distinct fields are
    AND-combined. An empty field places no restriction.

    Example:
        >>> f = RotationFilter(company_codes=["1000", "2000"], job_codes=["J1"])
        >>> # matches records of company 1000 OR 2000 AND job J1
    """

    company_codes: Tuple[str, ...] = ()
    personnel_areas: Tuple[str, ...] = ()
    cost_centers: Tuple[str, ...] = ()
    job_codes: Tuple[str, ...] = ()

    @field_validator("company_codes", "personnel_areas", "cost_centers", "job_codes", mode="before")
    @classmethod
    def _normalize_values(cls, v: Any) -> Tuple[str, ...]:
        return _split_values(v)

    @classmethod
    def from_query(cls, params: Mapping[str, Any]) -> "RotationFilter":
        """Build a filter from report query parameters.

        Accepts the parameter names used by the report endpoints
        (``companyCode``, ``personnelArea``, ``costCenter``, ``jobCode``),
        each a comma-separated list.

        Args:
            params: Query-string mapping

        Returns:
            RotationFilter with blank values dropped
        """
        return cls(
            company_codes=params.get("companyCode"),
            personnel_areas=params.get("personnelArea"),
            cost_centers=params.get("costCenter"),
            job_codes=params.get("jobCode"),
        )

    @property
    def is_empty(self) -> bool:
        return not (self.company_codes or self.personnel_areas or self.cost_centers or self.job_codes)

    def field_values(self) -> Tuple[Tuple[str, Tuple[str, ...]], ...]:
        """(dimension, values) pairs for the non-empty fields, in fixed order."""
        pairs = (
            ("company_code", self.company_codes),
            ("personnel_area", self.personnel_areas),
            ("cost_center", self.cost_centers),
            ("job_code", self.job_codes),
        )
        return tuple((name, values) for name, values in pairs if values)

    def matches(self, record: EmployeeSnapshotRecord) -> bool:
        """Whether a record passes the filter."""
        observed = {
            "company_code": record.company_code,
            "personnel_area": record.personnel_area_code,
            "cost_center": record.cost_center_code,
            "job_code": record.job_code,
        }
        return all(observed[name] in values for name, values in self.field_values())
