"""SAP OData snapshot source."""

from .fetcher import ODataSnapshotFetcher
from .filters import build_odata_filter, quote_literal
from .mapping import next_link, record_from_odata, records_from_payload

__all__ = [
    "ODataSnapshotFetcher",
    "build_odata_filter",
    "quote_literal",
    "next_link",
    "record_from_odata",
    "records_from_payload",
]
