"""Metrics collection for rotation computations.

This module records snapshot fetches and month computations and exports
them through OpenTelemetry. Without a configured MeterProvider the
instruments are no-ops, so the collector is always safe to use.
"""

from dataclasses import asdict, dataclass, field
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from workforce_rotation.__version__ import __version__
from workforce_rotation.logging import get_logger
from workforce_rotation.observability.context import sanitize_extras
from workforce_rotation.telemetry import INSTRUMENTATION_NAME, get_meter


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class FetchMetrics:
    """Container for one snapshot fetch.

    Attributes:
        reference_date: Snapshot reference date
        duration_seconds: Wall-clock duration of the fetch
        success: Whether the fetch returned records
        record_count: Number of records returned
        error_type: Exception class name if the fetch failed
        timestamp: When the fetch finished
    """

    reference_date: date
    duration_seconds: float
    success: bool
    record_count: int = 0
    error_type: Optional[str] = None
    timestamp: datetime = field(default_factory=_utcnow)

    def to_dict(self) -> Dict[str, Any]:
        """Convert metrics to dictionary."""
        data = asdict(self)
        data['reference_date'] = self.reference_date.isoformat()
        data['timestamp'] = self.timestamp.isoformat()
        return data


class RotationMetricsCollector:
    """Collector for snapshot fetch and month computation metrics.

    Attributes:
        logger: Logger instance
        meter: OpenTelemetry meter
        retention: How long recorded fetches and months are kept
        _fetches: Fetch metrics recorded within the retention period
        _months: (year, month, status, timestamp) of recent month computations
    """

    def __init__(
        self,
        meter_name: str = INSTRUMENTATION_NAME,
        retention: timedelta = timedelta(hours=1),
    ):
        """Initialize metrics collector.

        Args:
            meter_name: Instrumentation scope of the OpenTelemetry meter
            retention: Entries older than this are dropped as new ones arrive
        """
        self.logger = get_logger(__name__)
        self.retention = retention
        self._fetches: List[FetchMetrics] = []
        self._months: List[Dict[str, Any]] = []

        self.meter = get_meter(meter_name, __version__)
        self._setup_instruments()

    def _setup_instruments(self) -> None:
        """Setup OpenTelemetry instruments."""
        self.month_counter = self.meter.create_counter(
            "rotation_month_computations_total",
            description="Total number of month computations, by status",
            unit="months"
        )

        self.fetch_counter = self.meter.create_counter(
            "rotation_snapshot_fetches_total",
            description="Total number of snapshot fetches, by status",
            unit="fetches"
        )

        self.records_counter = self.meter.create_counter(
            "rotation_snapshot_records_total",
            description="Total employee records received",
            unit="records"
        )

        self.fetch_duration_histogram = self.meter.create_histogram(
            "rotation_snapshot_fetch_duration_seconds",
            description="Duration of snapshot fetches",
            unit="seconds"
        )

    def record_fetch(self, metrics: FetchMetrics) -> None:
        """Record a snapshot fetch.

        Args:
            metrics: Fetch metrics to record
        """
        self.clear_old_metrics()
        self._fetches.append(metrics)

        attributes = {
            "status": "success" if metrics.success else "failure",
            "error_type": metrics.error_type or "none",
        }

        self.fetch_counter.add(1, attributes)
        self.records_counter.add(metrics.record_count, attributes)
        self.fetch_duration_histogram.record(metrics.duration_seconds, attributes)

        self.logger.debug(
            "metrics.fetch.recorded",
            extra=sanitize_extras(metrics.to_dict()),
        )

    def record_month(self, year: int, month: int, degraded: bool) -> None:
        """Record the outcome of one month computation."""
        status = "degraded" if degraded else "ok"
        self.clear_old_metrics()
        self._months.append(
            {"year": year, "month": month, "status": status, "timestamp": _utcnow()}
        )
        self.month_counter.add(1, {"status": status})

    def get_metrics_summary(self, time_window: timedelta = timedelta(hours=1)) -> Dict[str, Any]:
        """Get summary of fetch and month metrics.

        Args:
            time_window: Time window of fetches to summarize

        Returns:
            Dictionary with metrics summary
        """
        cutoff = _utcnow() - time_window
        recent = [m for m in self._fetches if m.timestamp > cutoff]
        successful = [m for m in recent if m.success]
        months = [m for m in self._months if m["timestamp"] > cutoff]

        return {
            "total_fetches": len(recent),
            "successful_fetches": len(successful),
            "failed_fetches": len(recent) - len(successful),
            "total_records": sum(m.record_count for m in recent),
            "average_fetch_seconds": (
                sum(m.duration_seconds for m in recent) / len(recent) if recent else 0.0
            ),
            "months_computed": len(months),
            "months_degraded": sum(1 for m in months if m["status"] == "degraded"),
        }

    def clear_old_metrics(self, retention: Optional[timedelta] = None) -> None:
        """Drop fetches and months older than the retention period.

        Args:
            retention: Retention to apply; defaults to ``self.retention``
        """
        cutoff = _utcnow() - (retention or self.retention)
        self._fetches = [m for m in self._fetches if m.timestamp > cutoff]
        self._months = [m for m in self._months if m["timestamp"] > cutoff]

    def clear(self) -> None:
        """Drop all recorded metrics."""
        self._fetches.clear()
        self._months.clear()
