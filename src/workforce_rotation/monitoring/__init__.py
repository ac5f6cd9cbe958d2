"""Monitoring infrastructure for metrics and telemetry.

This module provides metrics collection for snapshot fetches and month
computations, exported through OpenTelemetry.
"""

from workforce_rotation.monitoring.metrics import FetchMetrics, RotationMetricsCollector

__all__ = [
    "FetchMetrics",
    "RotationMetricsCollector",
]
