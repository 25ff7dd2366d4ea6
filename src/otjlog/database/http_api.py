"""HTTP store speaking the journal REST API."""

import logging
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Optional, TypeVar

import requests

from otjlog.database.base import Repository
from otjlog.database.mappers import (
    document_from_json,
    document_to_json,
    ksb_from_json,
    ksb_to_json,
)
from otjlog.domain.entities import (
    DEFAULT_HOLIDAY_ALLOWANCE,
    EntryPayload,
    HolidayRecord,
    JournalEntry,
    KSBTag,
)
from otjlog.domain.errors import NotFoundError, TransportError
from otjlog.utils.date_parser import format_time, parse_time

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 15

T = TypeVar("T")


class HttpRepository(Repository):
    """Repository backed by the journal REST API.

    Endpoints: ``/entries``, ``/holidays`` and ``/ksbs``, with camelCase
    JSON bodies.
    """

    def __init__(
        self,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: int = DEFAULT_TIMEOUT,
    ):
        """Initialize the HTTP store.

        Args:
            base_url: API base URL, e.g. 'http://localhost:8081'
            session: Optional requests session (a new one is created if None)
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session

    @property
    def session(self) -> requests.Session:
        if self._session is None:
            self._session = requests.Session()
        return self._session

    def _request(self, method: str, endpoint: str, json_data: Any = None) -> Any:
        """Make a request and decode the JSON body.

        Returns:
            Decoded JSON, or None for an empty body

        Raises:
            NotFoundError: If the API answers 404
            TransportError: On connection failures and other error statuses
        """
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        try:
            response = self.session.request(
                method=method,
                url=url,
                json=json_data,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning("API call %s %s failed: %s", method, url, e)
            raise TransportError(f"Could not reach {self.base_url}: {e}") from e

        if response.status_code >= 400:
            message = self._error_message(response)
            logger.warning("API call %s %s returned %s", method, url, response.status_code)
            if response.status_code == 404:
                raise NotFoundError(message, status_code=404)
            raise TransportError(message, status_code=response.status_code)

        if not response.text:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise TransportError(f"Invalid response from {url}: {e}") from e

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
        return f"HTTP error! status: {response.status_code}"

    def connect(self) -> None:
        """Connect to the API."""
        # Requests are stateless, so this is a no-op
        pass

    def disconnect(self) -> None:
        """Close the HTTP session."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def initialize_schema(self) -> None:
        """Nothing to prepare: the server owns its schema."""
        pass

    @staticmethod
    def _decode(decoder: Callable[[dict[str, Any]], T], data: Any, endpoint: str) -> T:
        """Decode one response object.

        Raises:
            TransportError: If the body is missing or malformed
        """
        if not isinstance(data, dict):
            raise TransportError(f"Invalid response from {endpoint}: expected a JSON object")
        try:
            return decoder(data)
        except (KeyError, ValueError, TypeError, InvalidOperation) as e:
            raise TransportError(f"Invalid response from {endpoint}: {e}") from e

    def _decode_list(self, decoder: Callable[[dict[str, Any]], T], data: Any, endpoint: str) -> list[T]:
        if data is None:
            return []
        if not isinstance(data, list):
            raise TransportError(f"Invalid response from {endpoint}: expected a JSON list")
        return [self._decode(decoder, item, endpoint) for item in data]

    # Entry operations
    def list_entries(self) -> list[JournalEntry]:
        return self._decode_list(entry_from_json, self._request("GET", "/entries"), "/entries")

    def get_entry(self, entry_id: int) -> Optional[JournalEntry]:
        endpoint = f"/entries/{entry_id}"
        try:
            data = self._request("GET", endpoint)
        except NotFoundError:
            return None
        return self._decode(entry_from_json, data, endpoint) if data else None

    def create_entry(self, payload: EntryPayload) -> JournalEntry:
        data = self._request("POST", "/entries", payload_to_json(payload))
        return self._decode(entry_from_json, data, "/entries")

    def update_entry(self, entry_id: int, payload: EntryPayload) -> JournalEntry:
        endpoint = f"/entries/{entry_id}"
        data = self._request("PUT", endpoint, payload_to_json(payload))
        return self._decode(entry_from_json, data, endpoint)

    def delete_entry(self, entry_id: int) -> None:
        self._request("DELETE", f"/entries/{entry_id}")

    # Holiday operations
    def list_holidays(self) -> list[HolidayRecord]:
        return self._decode_list(holiday_from_json, self._request("GET", "/holidays"), "/holidays")

    def create_holiday(self, record: HolidayRecord) -> HolidayRecord:
        data = self._request("POST", "/holidays", holiday_to_json(record))
        return self._decode(holiday_from_json, data, "/holidays")

    def update_holiday(self, holiday_id: int, record: HolidayRecord) -> HolidayRecord:
        endpoint = f"/holidays/{holiday_id}"
        data = self._request("PUT", endpoint, holiday_to_json(record))
        return self._decode(holiday_from_json, data, endpoint)

    # KSB operations
    def list_ksbs(self) -> list[KSBTag]:
        return self._decode_list(ksb_from_json, self._request("GET", "/ksbs"), "/ksbs")

    def create_ksb(self, ksb: KSBTag) -> KSBTag:
        data = self._request("POST", "/ksbs", ksb_to_json(ksb))
        return self._decode(ksb_from_json, data, "/ksbs")


def payload_to_json(payload: EntryPayload) -> dict[str, Any]:
    """Serialize an entry payload into an API request body."""
    return {
        "title": payload.title,
        "description": payload.description,
        "category": payload.category,
        "date": payload.date.isoformat(),
        "startTime": format_time(payload.start_time),
        "endTime": format_time(payload.end_time),
        "isOffTheJob": payload.is_off_the_job,
        "totalHours": float(payload.total_hours),
        "ksbs": [ksb_to_json(ksb) for ksb in payload.ksbs],
        "documents": [document_to_json(doc) for doc in payload.documents],
    }


def entry_from_json(data: dict[str, Any]) -> JournalEntry:
    """Deserialize an API entry body into a JournalEntry."""
    created = data.get("creation") or data.get("createdAt")
    start_time = data.get("startTime")
    end_time = data.get("endTime")
    return JournalEntry(
        id=data["id"],
        title=data.get("title", ""),
        category=data.get("category", ""),
        description=data.get("description") or "",
        date=date.fromisoformat(str(data["date"])[:10]),
        start_time=parse_time(start_time) if start_time else None,
        end_time=parse_time(end_time) if end_time else None,
        total_hours=Decimal(str(data.get("totalHours") or 0)),
        is_off_the_job=bool(data.get("isOffTheJob", False)),
        ksbs=tuple(ksb_from_json(item) for item in data.get("ksbs") or []),
        documents=tuple(document_from_json(item) for item in data.get("documents") or []),
        created_at=datetime.fromisoformat(created) if created else datetime.now(),
    )


def holiday_to_json(record: HolidayRecord) -> dict[str, Any]:
    """Serialize a holiday record into an API request body (every field)."""
    return {
        "apprenticeId": record.apprentice_id,
        "holidayMode": record.holiday_mode_enabled,
        "holidayDays": record.days_used,
        "holidayAllowance": record.allowance,
    }


def holiday_from_json(data: dict[str, Any]) -> HolidayRecord:
    """Deserialize an API holiday body into a HolidayRecord."""
    return HolidayRecord(
        id=data.get("id"),
        apprentice_id=data["apprenticeId"],
        holiday_mode_enabled=bool(data.get("holidayMode") or False),
        days_used=data.get("holidayDays") or 0,
        allowance=data.get("holidayAllowance") or DEFAULT_HOLIDAY_ALLOWANCE,
    )
