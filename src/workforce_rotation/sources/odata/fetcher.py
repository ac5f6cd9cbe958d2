"""Snapshot source backed by the SAP OData employee service.

The HTTP client is synchronous (``requests``); ``fetch`` runs each
request in a worker thread so concurrent month units do not block the
event loop. Retries with exponential backoff apply to transient
failures only: connection errors, timeouts, HTTP 429 and 5xx.

Cancelling ``fetch`` stops the worker thread before its next request
or retry and waits for the request in progress, so a caller that bounds
its concurrent fetches also bounds the requests hitting the service.
"""

import asyncio
import threading
from datetime import date
from typing import Any, Dict, List, Optional, Tuple, Union
from urllib.parse import urljoin

import requests

from workforce_rotation.common.exceptions import (
    RotationError,
    authentication_error,
    connection_error,
    fetch_error,
    malformed_payload_error,
    resource_not_found_error,
    timeout_error,
)
from workforce_rotation.constants.odata import (
    METADATA_PATH,
    RETRY_BACKOFF_BASE,
    RETRY_MAX_DELAY_SECONDS,
)
from workforce_rotation.constants.rotation import ReportType
from workforce_rotation.credentials.settings import SettingsCredentialProvider
from workforce_rotation.logging import get_logger
from workforce_rotation.observability.context import sanitize_extras
from workforce_rotation.protocols.providers import CredentialProvider
from workforce_rotation.rotation.filtering import apply_filter
from workforce_rotation.settings.source import SnapshotSourceSettings
from workforce_rotation.types.records import EmployeeSnapshotRecord, RotationFilter
from workforce_rotation.utils.decorators import retry_with_backoff, traced
from .filters import build_odata_filter
from .mapping import next_link, payload_summary, records_from_payload

logger = get_logger(__name__)

_DEFAULT_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}


def _is_retryable(exc: Exception) -> bool:
    return isinstance(exc, RotationError) and exc.is_retryable


def _fetch_span_attributes(_fetcher, reference_date, rotation_filter=None, cancel=None) -> Dict[str, str]:
    return {"rotation.reference_date": reference_date.isoformat()}


def _check_cancelled(cancel: Optional[threading.Event], url: str) -> None:
    if cancel is not None and cancel.is_set():
        raise fetch_error(
            "Snapshot fetch was cancelled",
            details={"url": url, "cancelled": True},
        )


class ODataSnapshotFetcher:
    """SnapshotFetcher reading dated snapshots from a SAP OData service.

    Attributes:
        settings: Service URLs, entity set, timeout and retry settings
        credentials: Supplier of the basic-auth credentials
        base_url: Root URL of the report service in use

    Example:
        >>> settings = SnapshotSourceSettings()
        >>> with ODataSnapshotFetcher(settings, StaticCredentialProvider("user", "secret")) as fetcher:
        ...     records = await fetcher.fetch(date(2025, 9, 1))
    """

    def __init__(
        self,
        settings: SnapshotSourceSettings,
        credentials: Optional[CredentialProvider] = None,
        *,
        report_type: Union[ReportType, str, None] = None,
        session: Optional[requests.Session] = None,
    ):
        """Initialize the fetcher.

        Args:
            settings: Snapshot source settings
            credentials: Credential provider; defaults to the credentials in
                ``settings``
            report_type: Report service to read; defaults to the rotation report
            session: Pre-built HTTP session, mainly for tests
        """
        self.settings = settings
        self.credentials = credentials or SettingsCredentialProvider(settings)
        self.base_url = settings.get_base_url(report_type)
        self._session = session or self._create_session()
        self._get_json = retry_with_backoff(
            max_retries=settings.max_retries,
            initial_delay=settings.retry_delay_seconds,
            max_delay=RETRY_MAX_DELAY_SECONDS,
            exponential_base=RETRY_BACKOFF_BASE,
            retry_condition=_is_retryable,
        )(self._request_json)

    def _create_session(self) -> requests.Session:
        """Create HTTP session with JSON headers."""
        session = requests.Session()
        session.headers.update(_DEFAULT_HEADERS)
        return session

    @property
    def entity_url(self) -> str:
        return f"{self.base_url}/{self.settings.entity_set}"

    def _auth(self) -> Tuple[str, str]:
        username, password = self.credentials.get_credentials()
        return username, password.get_secret_value()

    def _raise_for_status(self, response: requests.Response, url: str) -> None:
        status = response.status_code
        if status < 400:
            return
        if status in (401, 403):
            raise authentication_error(
                f"The source rejected the credentials ({status})",
                status_code=status,
                details={"url": url},
            )
        if status == 404:
            raise resource_not_found_error(
                f"OData resource not found: {url}",
                resource_name=url,
            )
        raise fetch_error(
            f"OData request failed with status {status}: {response.reason}",
            status_code=status,
            details={"url": url},
            is_retryable=status == 429 or status >= 500,
        )

    def _request_json(
        self,
        url: str,
        params: Optional[Dict[str, str]] = None,
        cancel: Optional[threading.Event] = None,
    ) -> Any:
        _check_cancelled(cancel, url)
        try:
            response = self._session.get(
                url,
                params=params,
                auth=self._auth(),
                timeout=self.settings.timeout_seconds,
            )
        except requests.Timeout as exc:
            raise timeout_error(
                f"OData request timed out after {self.settings.timeout_seconds}s",
                timeout_seconds=self.settings.timeout_seconds,
                details={"url": url},
                cause=exc,
            ) from exc
        except requests.ConnectionError as exc:
            raise connection_error(
                f"Could not connect to the OData service: {exc}",
                host=self.base_url,
                cause=exc,
            ) from exc
        except requests.RequestException as exc:
            raise fetch_error(
                f"OData request failed: {exc}",
                details={"url": url},
                cause=exc,
            ) from exc

        self._raise_for_status(response, url)
        try:
            return response.json()
        except ValueError as exc:
            raise malformed_payload_error(
                "OData response is not valid JSON",
                payload_type=response.headers.get("Content-Type"),
                cause=exc,
            ) from exc

    def build_params(
        self,
        reference_date: date,
        rotation_filter: Optional[RotationFilter] = None,
    ) -> Dict[str, str]:
        """Query parameters of a snapshot request."""
        pushed = rotation_filter if self.settings.filter_pushdown else None
        params = {"$format": "json"}
        expression = build_odata_filter(reference_date, pushed, self.settings.reference_date_field)
        if expression:
            params["$filter"] = expression
        return params

    @traced("workforce_rotation.odata.fetch", attribute_getter=_fetch_span_attributes)
    def fetch_sync(
        self,
        reference_date: date,
        rotation_filter: Optional[RotationFilter] = None,
        cancel: Optional[threading.Event] = None,
    ) -> List[EmployeeSnapshotRecord]:
        """Blocking variant of ``fetch``; follows server-driven paging.

        Once ``cancel`` is set no further request or retry is issued.

        Raises:
            RotationError: AUTH_ERROR, RESOURCE_NOT_FOUND, TIMEOUT_ERROR,
                CONNECTION_ERROR, SNAPSHOT_FETCH_ERROR or MALFORMED_PAYLOAD
        """
        url: Optional[str] = self.entity_url
        params: Optional[Dict[str, str]] = self.build_params(reference_date, rotation_filter)
        records: List[EmployeeSnapshotRecord] = []
        pages = 0

        while url:
            payload = self._get_json(url, params, cancel)
            records.extend(records_from_payload(payload))
            pages += 1
            link = next_link(payload)
            # Paging links carry their own query string
            url = urljoin(f"{self.base_url}/", link) if link else None
            params = None
            logger.debug(
                "odata.fetch.page",
                extra=sanitize_extras(
                    {"reference_date": reference_date.isoformat(), "page": pages, **payload_summary(payload)}
                ),
            )

        if rotation_filter is not None and not self.settings.filter_pushdown:
            records = apply_filter(records, rotation_filter)

        logger.info(
            "odata.fetch.complete",
            extra=sanitize_extras(
                {
                    "reference_date": reference_date.isoformat(),
                    "record_count": len(records),
                    "pages": pages,
                    "pushdown": self.settings.filter_pushdown,
                }
            ),
        )
        return records

    async def fetch(
        self,
        reference_date: date,
        rotation_filter: Optional[RotationFilter] = None,
    ) -> List[EmployeeSnapshotRecord]:
        """Fetch the snapshot as of ``reference_date`` without blocking the loop.

        On cancellation the worker thread is told to stop and is awaited
        before ``CancelledError`` propagates; the request in progress is
        bounded by ``timeout_seconds``.
        """
        cancel = threading.Event()
        worker = asyncio.ensure_future(
            asyncio.to_thread(self.fetch_sync, reference_date, rotation_filter, cancel)
        )
        try:
            return await asyncio.shield(worker)
        except asyncio.CancelledError:
            cancel.set()
            await asyncio.gather(worker, return_exceptions=True)
            logger.info(
                "odata.fetch.cancelled",
                extra=sanitize_extras({"reference_date": reference_date.isoformat()}),
            )
            raise

    def test_connection(self) -> bool:
        """Request the service metadata document with the current credentials.

        Returns:
            True if the service answered the metadata request, False otherwise
        """
        url = f"{self.base_url}/{METADATA_PATH}"
        try:
            response = self._session.get(
                url,
                auth=self._auth(),
                timeout=self.settings.timeout_seconds,
            )
            self._raise_for_status(response, url)
        except (RotationError, requests.RequestException) as exc:
            logger.warning(
                "odata.connection.failed",
                extra=sanitize_extras({"url": url, "error": str(exc)}),
            )
            return False

        logger.info("odata.connection.ok", extra=sanitize_extras({"url": url}))
        return True

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "ODataSnapshotFetcher":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
