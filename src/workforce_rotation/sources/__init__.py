"""Snapshot sources implementing the SnapshotFetcher protocol.

    - memory: snapshots held in process, filtered client-side
    - odata: SAP OData service over HTTP, filter pushed down as $filter
"""

from .memory import InMemorySnapshotFetcher
from .odata import ODataSnapshotFetcher

__all__ = [
    "InMemorySnapshotFetcher",
    "ODataSnapshotFetcher",
]
