"""
HTTP clients for the position and small-body feeds.

The clients are thin: they fetch JSON with ``requests``, raise on HTTP
errors and hand the payload to the reshaping helpers.
"""

import logging
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Sequence

import requests

from .catalog import (
    close_approach_from_row,
    fireball_from_row,
    mission_target_from_record,
    neows_feed_approaches,
    risk_from_record,
    rows_as_dicts,
)
from .events import AtmosphericEvent, CloseApproach, MissionTarget, RiskAssessment
from .models import GeoPoint, Illumination, TimestampedPosition

logger = logging.getLogger(__name__)

ISS_API_URL = "https://api.wheretheiss.at/v1"
ISS_NORAD_ID = 25544
MAX_TIMESTAMPS_PER_REQUEST = 10  # wheretheiss.at positions limit

JPL_SSD_API_URL = "https://ssd-api.jpl.nasa.gov"
NASA_API_URL = "https://api.nasa.gov"
NASA_DEMO_KEY = "DEMO_KEY"

DEFAULT_TIMEOUT_SECONDS = 30


def position_from_payload(payload: Dict[str, Any]) -> TimestampedPosition:
    """
    Convert one wheretheiss.at satellite record into a position sample.

    Raises:
        ValueError: If the record is not a position object
    """
    if not isinstance(payload, dict):
        raise ValueError(f"Expected a position record, got {type(payload).__name__}")

    try:
        velocity = payload.get("velocity")
        return TimestampedPosition(
            time=float(payload["timestamp"]),
            point=GeoPoint(float(payload["latitude"]), float(payload["longitude"])),
            altitude_km=float(payload["altitude"]),
            illumination=Illumination.from_feed(payload.get("visibility")),
            velocity_kmh=float(velocity) if velocity is not None else None,
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f"Malformed position record {payload!r}: {e}") from e


class _JsonClient:
    """Shared session handling and GET-with-timeout."""

    def __init__(
        self,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self.base_url}/{path.lstrip('/')}"
        logger.info(f"GET {url} {params or ''}")
        response = self.session.get(url, params=params, timeout=self.timeout)
        response.raise_for_status()
        return response.json()


class IssClient(_JsonClient):
    """Client for the wheretheiss.at satellite position API."""

    def __init__(
        self,
        satellite_id: int = ISS_NORAD_ID,
        base_url: str = ISS_API_URL,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        super().__init__(base_url, session, timeout)
        self.satellite_id = satellite_id

    def current_position(self) -> TimestampedPosition:
        """Fetch the platform's current position."""
        payload = self._get(f"satellites/{self.satellite_id}", {"units": "kilometers"})
        return position_from_payload(payload)

    def positions(self, timestamps: Sequence[int]) -> List[TimestampedPosition]:
        """
        Fetch positions for many instants.

        Timestamps are requested in chunks of MAX_TIMESTAMPS_PER_REQUEST and
        the combined result is returned in timestamp order.

        Args:
            timestamps: Epoch seconds

        Returns:
            List of TimestampedPosition, sorted by time

        Raises:
            ValueError: If the feed answers with something other than
                a list of position records
        """
        results: List[TimestampedPosition] = []
        for i in range(0, len(timestamps), MAX_TIMESTAMPS_PER_REQUEST):
            chunk = timestamps[i:i + MAX_TIMESTAMPS_PER_REQUEST]
            payload = self._get(
                f"satellites/{self.satellite_id}/positions",
                {"timestamps": ",".join(str(int(t)) for t in chunk), "units": "kilometers"},
            )
            if not isinstance(payload, list):
                raise ValueError(f"Unexpected positions response: {payload!r}")
            results.extend(position_from_payload(item) for item in payload)

        results.sort(key=lambda p: p.time)
        logger.debug(f"Fetched {len(results)} positions for satellite {self.satellite_id}")
        return results


class JplClient(_JsonClient):
    """Client for the JPL Solar System Dynamics feeds."""

    def __init__(
        self,
        base_url: str = JPL_SSD_API_URL,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        super().__init__(base_url, session, timeout)

    def _table(self, endpoint: str, params: Dict[str, Any], required: Iterable[str]) -> List[Dict[str, Any]]:
        payload = self._get(endpoint, params)
        rows = payload.get("data") or []
        if not rows:
            return []

        fields = payload.get("fields") or []
        missing = [name for name in required if name not in fields]
        if missing:
            raise ValueError(f"{endpoint} response lacks fields: {missing}")
        return rows_as_dicts(fields, rows)

    def fireballs(self, limit: int = 10) -> List[AtmosphericEvent]:
        """Most recent fireball reports."""
        rows = self._table("fireball.api", {"limit": limit}, ("date", "lat", "lon"))
        return [fireball_from_row(row) for row in rows]

    def close_approaches(self, limit: int = 10) -> List[CloseApproach]:
        """Close-approach records (distances converted from AU to km)."""
        rows = self._table("cad.api", {"limit": limit}, ("des", "cd", "dist"))
        approaches = []
        for row in rows:
            try:
                approaches.append(close_approach_from_row(row))
            except ValueError as e:
                logger.warning(f"Skipping close approach: {e}")
        return approaches

    def _records(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        payload = self._get(endpoint, params)
        return payload.get("data") or []

    def sentry(self, limit: Optional[int] = None) -> List[RiskAssessment]:
        """Objects on the Sentry impact-monitoring list."""
        records = self._records("sentry.api")
        if limit is not None:
            records = records[:limit]

        risks = []
        for record in records:
            try:
                risks.append(risk_from_record(record))
            except ValueError as e:
                logger.warning(f"Skipping Sentry object: {e}")
        return risks

    def nhats(self, limit: Optional[int] = None) -> List[MissionTarget]:
        """Human-accessible NEOs from NHATS."""
        records = self._records("nhats.api")
        if limit is not None:
            records = records[:limit]

        targets = []
        for record in records:
            try:
                targets.append(mission_target_from_record(record))
            except ValueError as e:
                logger.warning(f"Skipping NHATS object: {e}")
        return targets


class NeoWsClient(_JsonClient):
    """Client for NASA's Near Earth Object Web Service feed."""

    def __init__(
        self,
        api_key: str = NASA_DEMO_KEY,
        base_url: str = NASA_API_URL,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        super().__init__(base_url, session, timeout)
        self.api_key = api_key

    def near_earth_objects(self, start_date: date, end_date: Optional[date] = None) -> List[CloseApproach]:
        """
        Close approaches listed by the NeoWs feed for a date range.

        Args:
            start_date: First day of the feed
            end_date: Last day (default: same as start_date); NeoWs caps
                the range at 7 days

        Returns:
            List of CloseApproach records, feed order kept
        """
        end_date = end_date or start_date
        payload = self._get(
            "neo/rest/v1/feed",
            {
                "start_date": start_date.isoformat(),
                "end_date": end_date.isoformat(),
                "api_key": self.api_key,
            },
        )
        approaches = neows_feed_approaches(payload)
        logger.debug(f"NeoWs listed {len(approaches)} objects for {start_date} to {end_date}")
        return approaches
