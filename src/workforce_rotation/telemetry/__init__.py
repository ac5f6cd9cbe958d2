"""OpenTelemetry accessors.

The engine only talks to the OpenTelemetry API; the hosting application
installs whichever SDK providers and exporters it needs.
"""

from typing import Optional

from opentelemetry import metrics, trace

__all__ = [
    "get_tracer",
    "get_meter",
]

INSTRUMENTATION_NAME = "workforce_rotation"


def get_tracer(name: str = INSTRUMENTATION_NAME, version: Optional[str] = None):
    """Return a tracer from the active OpenTelemetry provider."""
    return trace.get_tracer(name, version)


def get_meter(name: str = INSTRUMENTATION_NAME, version: Optional[str] = None):
    """Return a meter from the active OpenTelemetry provider."""
    return metrics.get_meter(name, version)
