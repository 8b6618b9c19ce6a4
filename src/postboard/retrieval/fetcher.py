"""One-shot retrieval of the remote post collection."""

import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import requests
from pydantic import BaseModel, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from postboard.config.loader import get_source_settings
from postboard.errors import FetchError
from postboard.records.models import Collection, Record
from postboard.utils.logging import get_logger

logger = get_logger(__name__)

_RECORD_LIST = TypeAdapter(List[Record])


class FetchResult(BaseModel):
    """Result of fetching the collection."""

    url: str
    fetched_at_utc: str  # ISO 8601
    status: str  # SUCCESS | FAILURE
    status_code: Optional[int] = None
    error: Optional[str] = None
    duration_seconds: Optional[float] = None
    records: List[Record] = Field(default_factory=list)
    bytes_downloaded: int = 0

    @property
    def ok(self) -> bool:
        return self.status == "SUCCESS"


def parse_records(payload: Any) -> Collection:
    """
    Validate a decoded JSON payload as a list of records.

    Args:
        payload: Decoded JSON body

    Returns:
        Tuple of Record objects in payload order

    Raises:
        FetchError: If the payload is not an array of complete records
    """
    if not isinstance(payload, list):
        raise FetchError(f"Expected a JSON array of records, got {type(payload).__name__}")
    try:
        return tuple(_RECORD_LIST.validate_python(payload))
    except PydanticValidationError as e:
        raise FetchError(f"Malformed record payload: {e.error_count()} validation error(s)") from e


class RecordFetcher:
    """Fetches the full record collection from the configured endpoint."""

    def __init__(self, config: Optional[Dict] = None):
        """
        Initialize fetcher.

        Args:
            config: Optional loaded config dict. If None, loads from default path.
        """
        source = get_source_settings(config)
        self.url = source["url"]
        self.timeout = source.get("timeout_seconds", 20)
        self.user_agent = source.get("user_agent", "postboard/0.1")

    def _get_headers(self) -> Dict[str, str]:
        return {
            "User-Agent": self.user_agent,
            "Accept": "application/json",
        }

    def _request(self) -> requests.Response:
        try:
            response = requests.get(self.url, headers=self._get_headers(), timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            status_code = None
            if getattr(e, "response", None) is not None:
                status_code = e.response.status_code
            raise FetchError(f"Failed to fetch {self.url}: {e}", status_code=status_code) from e
        return response

    def _decode(self, response: requests.Response) -> Collection:
        try:
            payload = response.json()
        except ValueError as e:
            raise FetchError(f"Invalid JSON from {self.url}: {e}", status_code=response.status_code) from e
        try:
            return parse_records(payload)
        except FetchError as e:
            e.status_code = response.status_code
            raise

    def fetch_records(self) -> Collection:
        """
        Fetch and validate the collection.

        Returns:
            Tuple of records

        Raises:
            FetchError: On transport errors, non-success status or malformed payload
        """
        return self._decode(self._request())

    def fetch_all(self) -> FetchResult:
        """
        Fetch the collection once, reporting failures instead of raising.

        Failures are logged; no retry is attempted.

        Returns:
            FetchResult with status SUCCESS and the records, or FAILURE and the error
        """
        fetched_at_utc = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
        start_time = time.monotonic()
        status_code = None
        error = None
        records: Collection = ()
        status = "SUCCESS"
        bytes_downloaded = 0

        logger.info(f"Fetching records from {self.url}")
        try:
            response = self._request()
            status_code = response.status_code
            bytes_downloaded = len(response.content or b"")
            records = self._decode(response)
            logger.info(f"Fetched {len(records)} records from {self.url}")
        except FetchError as e:
            if e.status_code is not None:
                status_code = e.status_code
            error = str(e)
            status = "FAILURE"
            records = ()
            logger.error(f"Error fetching records: {error}")

        return FetchResult(
            url=self.url,
            fetched_at_utc=fetched_at_utc,
            status=status,
            status_code=status_code,
            error=error,
            duration_seconds=time.monotonic() - start_time,
            records=list(records),
            bytes_downloaded=bytes_downloaded,
        )
