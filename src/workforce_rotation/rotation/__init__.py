"""Rotation indicator computation.

    - calculator: pure monthly classification of two snapshots
    - aggregator: concurrent annual fan-out over a SnapshotFetcher
    - filter_options: distinct filterable values of a snapshot
    - filtering: client-side RotationFilter application
"""

from .aggregator import AnnualRotationAggregator, build_annual_indicators
from .calculator import RotationMetricsCalculator
from .filter_options import extract_filter_options
from .filtering import apply_filter

__all__ = [
    "AnnualRotationAggregator",
    "build_annual_indicators",
    "RotationMetricsCalculator",
    "extract_filter_options",
    "apply_filter",
]
