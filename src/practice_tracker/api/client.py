"""
HTTP client for the consistency and streak endpoints.

Endpoints (relative to the configured base URL):
- GET  /consistency/range?today=YYYY-MM-DD
- GET  /consistency/month?year=YYYY&month=MM
- GET  /streak/last-7-days
- POST /streak/mark-today {date}
"""

import logging
from datetime import date
from typing import Any, Dict, List, Optional

import httpx
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from practice_tracker.config import Settings, get_settings
from practice_tracker.exceptions import ApiConnectionError, ApiError, AuthenticationError
from practice_tracker.models.consistency import (
    ConsistencyMonth,
    ConsistencyRange,
    MarkTodayResult,
    StreakDay,
)
from practice_tracker.utils.dates import format_date


logger = logging.getLogger(__name__)

_STREAK_DAYS = TypeAdapter(List[StreakDay])


class ConsistencyClient:
    """
    Client for the consistency calendar and daily streak API.

    The client does not retry; retry-on-focus or reconnect belongs to
    whatever drives it.

    Usage:
        with ConsistencyClient.from_settings() as client:
            rng = client.get_range(date.today())
            month = client.get_month(2026, 10)
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token or None
        self.timeout = timeout
        self._transport = transport
        self._http_client: Optional[httpx.Client] = None

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> "ConsistencyClient":
        settings = settings or get_settings()
        return cls(
            base_url=settings.api_base_url,
            token=settings.api_token,
            timeout=settings.request_timeout,
            transport=transport,
        )

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    def _get_client(self) -> httpx.Client:
        """Get or create the HTTP client."""
        if self._http_client is None or self._http_client.is_closed:
            self._http_client = httpx.Client(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._http_client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._http_client is not None and not self._http_client.is_closed:
            self._http_client.close()
            self._http_client = None

    def __enter__(self) -> "ConsistencyClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def get_auth_headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}

    def _request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        json_data: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Make an authenticated API request.

        Args:
            method: HTTP method
            endpoint: Path relative to the base URL, e.g. "/consistency/range"
            params: Query parameters
            json_data: JSON body

        Returns:
            Decoded JSON body

        Raises:
            AuthenticationError: No token, or the backend rejected it
            ApiConnectionError: The backend could not be reached
            ApiError: Any other non-2xx status or an undecodable body
        """
        if not self.is_authenticated:
            raise AuthenticationError("No session token; sign in first")

        client = self._get_client()
        try:
            response = client.request(
                method,
                endpoint,
                headers=self.get_auth_headers(),
                params=params,
                json=json_data,
            )
        except httpx.HTTPError as e:
            raise ApiConnectionError(f"Request to {endpoint} failed: {e}", endpoint)

        if response.status_code in (401, 403):
            raise AuthenticationError("Session token expired or invalid")

        if not response.is_success:
            try:
                error_data = response.json()
                if isinstance(error_data, dict):
                    error_msg = error_data.get("error") or error_data.get("message") or str(error_data)
                else:
                    error_msg = str(error_data)
            except ValueError:
                error_msg = response.text or f"HTTP {response.status_code}"
            raise ApiError(
                f"API error on {endpoint}: {error_msg}",
                status_code=response.status_code,
                endpoint=endpoint,
            )

        try:
            return response.json()
        except ValueError:
            raise ApiError(
                f"API returned a non-JSON body for {endpoint}",
                status_code=response.status_code,
                endpoint=endpoint,
            )

    def get_range(self, today: date) -> ConsistencyRange:
        """Fetch the navigable month range and the current streak."""
        endpoint = "/consistency/range"
        data = self._request("GET", endpoint, params={"today": format_date(today)})
        try:
            return ConsistencyRange.model_validate(data)
        except PydanticValidationError as e:
            raise ApiError(f"Unexpected range payload: {e}", endpoint=endpoint)

    def get_month(self, year: int, month: int) -> ConsistencyMonth:
        """Fetch one month, normalised to one entry per calendar day."""
        endpoint = "/consistency/month"
        data = self._request("GET", endpoint, params={"year": year, "month": month})
        try:
            result = ConsistencyMonth.model_validate(data)
        except PydanticValidationError as e:
            raise ApiError(f"Unexpected month payload: {e}", endpoint=endpoint)

        if (result.year, result.month) != (year, month):
            logger.warning(
                "Requested %04d-%02d but backend answered %04d-%02d",
                year, month, result.year, result.month,
            )
            result = ConsistencyMonth(year=year, month=month, days=result.days)
        return result.normalized()

    def get_last_7_days(self, on: Optional[date] = None) -> List[StreakDay]:
        """Fetch the trailing 7-day activity window (oldest first)."""
        endpoint = "/streak/last-7-days"
        params = {"date": format_date(on)} if on else None
        data = self._request("GET", endpoint, params=params)
        try:
            days = _STREAK_DAYS.validate_python(data)
        except PydanticValidationError as e:
            raise ApiError(f"Unexpected streak payload: {e}", endpoint=endpoint)
        return sorted(days, key=lambda d: d.date)

    def mark_today(self, today: date) -> MarkTodayResult:
        """Record activity for today. Idempotent per date on the backend."""
        endpoint = "/streak/mark-today"
        data = self._request("POST", endpoint, json_data={"date": format_date(today)})
        try:
            return MarkTodayResult.model_validate(data)
        except PydanticValidationError as e:
            raise ApiError(f"Unexpected mark-today payload: {e}", endpoint=endpoint)
