from datetime import date
from typing import Any, Dict, Mapping, Optional, Union

from workforce_rotation.monitoring.metrics import RotationMetricsCollector
from workforce_rotation.observability.context import (
    execution_request_scope,
    resolve_request_context,
)
from workforce_rotation.protocols.providers import SnapshotFetcher
from workforce_rotation.rotation.aggregator import AnnualRotationAggregator
from workforce_rotation.rotation.filter_options import extract_filter_options
from workforce_rotation.settings.rotation import RotationSettings
from workforce_rotation.types.indicators import (
    AnnualRotationIndicators,
    FilterOptions,
    MonthlyRotationIndicators,
)
from workforce_rotation.types.records import RotationFilter

FilterLike = Union[RotationFilter, Mapping[str, Any], None]

def _coerce_filter(rotation_filter: FilterLike) -> Optional[RotationFilter]:
    if rotation_filter is None or isinstance(rotation_filter, RotationFilter):
        return rotation_filter
    # Report query parameters: companyCode=1000,2000&jobCode=J1
    return RotationFilter.from_query(rotation_filter)


def _aggregator(
    fetcher: SnapshotFetcher,
    settings: Optional[RotationSettings],
    metrics: Optional[RotationMetricsCollector],
) -> AnnualRotationAggregator:
    return AnnualRotationAggregator(
        fetcher, settings or RotationSettings(), metrics=metrics or RotationMetricsCollector()
    )


async def compute_monthly_indicators(
    fetcher: SnapshotFetcher,
    year: int,
    month: int,
    rotation_filter: FilterLike = None,
    *,
    settings: Optional[RotationSettings] = None,
    metrics: Optional[RotationMetricsCollector] = None,
    ctx: Optional[Dict[str, Any]] = None,
) -> MonthlyRotationIndicators:
    """Compute the rotation indicators of one month.

    Args:
        fetcher: Snapshot source
        year: Calendar year
        month: 1-based month
        rotation_filter: RotationFilter, or report query parameters
            (``companyCode``, ``personnelArea``, ``costCenter``, ``jobCode``)
        settings: Rotation settings; read from the environment when omitted
        metrics: Collector to record into; a fresh one per call when omitted
        ctx: Optional request context carrying logging/trace metadata

    Raises:
        RotationError: For invalid parameters or when a snapshot cannot be fetched
    """
    request_ctx = resolve_request_context(ctx)
    with execution_request_scope(request_ctx, operation="rotation.compute_monthly"):
        return await _aggregator(fetcher, settings, metrics).compute_monthly(
            year, month, _coerce_filter(rotation_filter)
        )


async def compute_annual_indicators(
    fetcher: SnapshotFetcher,
    year: int,
    rotation_filter: FilterLike = None,
    *,
    settings: Optional[RotationSettings] = None,
    metrics: Optional[RotationMetricsCollector] = None,
    ctx: Optional[Dict[str, Any]] = None,
) -> AnnualRotationIndicators:
    """Compute the rotation indicators of a whole year.

    Months whose snapshots cannot be fetched are returned degraded; check
    ``AnnualRotationIndicators.degraded_months``.

    Raises:
        RotationError: For an invalid year
    """
    request_ctx = resolve_request_context(ctx)
    with execution_request_scope(request_ctx, operation="rotation.compute_annual"):
        return await _aggregator(fetcher, settings, metrics).compute_annual(
            year, _coerce_filter(rotation_filter)
        )


async def get_filter_options(
    fetcher: SnapshotFetcher,
    reference_date: Optional[date] = None,
    *,
    ctx: Optional[Dict[str, Any]] = None,
) -> FilterOptions:
    """Filterable values present in the unfiltered snapshot of ``reference_date``.

    Args:
        fetcher: Snapshot source
        reference_date: Snapshot date; today when omitted
        ctx: Optional request context carrying logging/trace metadata
    """
    request_ctx = resolve_request_context(ctx)
    with execution_request_scope(request_ctx, operation="rotation.get_filter_options"):
        snapshot = await fetcher.fetch(reference_date or date.today(), None)
        return extract_filter_options(snapshot)


def check_connection(fetcher: Any) -> bool:
    """Test connectivity of a fetcher that supports probing (e.g. OData)."""
    return bool(fetcher.test_connection())
