"""Protocol definitions for the rotation engine.

Protocols provide type-safe interfaces without requiring inheritance,
following Python's structural subtyping (duck typing with type hints).
"""

from .providers import CredentialProvider, SnapshotFetcher

__all__ = [
    "CredentialProvider",
    "SnapshotFetcher",
]
