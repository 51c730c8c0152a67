"""
Reshaping of JPL and NeoWs small-body feed records into category records.

The SSD APIs return either column-ordered rows with a ``fields`` header
(fireball, close-approach) or per-object dictionaries (Sentry, NHATS).
NeoWs groups nested per-object dictionaries by day.
This module turns them into the records of ``starwx.events`` and applies
the time windows and orderings the dashboard shows.
"""

import logging
import re
from datetime import datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from .events import AtmosphericEvent, CloseApproach, MissionTarget, RiskAssessment
from .utils import get_current_utc, parse_datetime

logger = logging.getLogger(__name__)

AU_KM = 149597870.7

FIREBALL_FIELDS = ("date", "energy", "impact-e", "lat", "lat-dir", "lon", "lon-dir", "alt", "vel")
CLOSE_APPROACH_FIELDS = ("des", "orbit_id", "jd", "cd", "dist", "dist_min", "dist_max",
                         "v_rel", "v_inf", "t_sigma_f", "h")

# Windows relative to now, in days
FIREBALL_WINDOW_DAYS = (-30, 30)
CLOSE_APPROACH_WINDOW_DAYS = (-7, 90)

MIN_LISTED_IMPACT_PROBABILITY = 0.0001
MAX_MISSION_DELTA_V_KMS = 15.0
MAX_MISSION_DURATION_DAYS = 1000

MAX_MERGED_EVENTS = 12

# NeoWs objects worth listing
INTERESTING_NEO_DISTANCE_KM = 5_000_000.0
INTERESTING_NEO_DIAMETER_KM = 0.1
MAX_INTERESTING_NEOS = 5

FLARE_CLASS_LABELS = {
    "X": "Extreme",
    "M": "High",
    "C": "Moderate",
    "B": "Low",
    "A": "Very Low",
}

STORM_SCALE_LABELS = {
    "G5": "Extreme",
    "G4": "Severe",
    "G3": "Strong",
    "G2": "Moderate",
    "G1": "Minor",
}


def _to_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _to_int(value: Any) -> Optional[int]:
    number = _to_float(value)
    return int(number) if number is not None else None


def _slug(text: str) -> str:
    return re.sub(r"[^a-zA-Z0-9]", "", text)


def rows_as_dicts(fields: Sequence[str], rows: Iterable[Sequence[Any]]) -> List[Dict[str, Any]]:
    """Zip column-ordered rows with their field names."""
    return [dict(zip(fields, row)) for row in rows]


def au_to_km(distance_au: float) -> float:
    return distance_au * AU_KM


def fireball_from_row(row: Dict[str, Any]) -> AtmosphericEvent:
    """
    Build an AtmosphericEvent from a fireball API row.

    Coordinates stay as "<value>°<hemisphere>" strings; a missing value or
    hemisphere leaves the coordinate unset.
    """
    date_text = row.get("date") or ""

    def coordinate(value_key: str, dir_key: str) -> Optional[str]:
        value, hemisphere = row.get(value_key), row.get(dir_key)
        if value is None or hemisphere is None:
            return None
        return f"{value}°{hemisphere}"

    try:
        date = parse_datetime(date_text) if date_text else None
    except ValueError:
        logger.warning(f"Unparseable fireball date: {date_text!r}")
        date = None

    return AtmosphericEvent(
        event_id=f"fireball-{_slug(date_text)}",
        latitude=coordinate("lat", "lat-dir"),
        longitude=coordinate("lon", "lon-dir"),
        date=date,
        energy_kt=_to_float(row.get("energy")),
        impact_energy_kt=_to_float(row.get("impact-e")),
        altitude_km=_to_float(row.get("alt")),
        velocity_kms=_to_float(row.get("vel")),
    )


def close_approach_from_row(row: Dict[str, Any]) -> CloseApproach:
    """Build a CloseApproach from a close-approach API row (distance in AU)."""
    distance_au = _to_float(row.get("dist"))
    if distance_au is None:
        raise ValueError(f"Close approach {row.get('des')!r} has no distance")

    date_text = row.get("cd")
    return CloseApproach(
        name=str(row.get("des", "")),
        distance_km=au_to_km(distance_au),
        absolute_magnitude=_to_float(row.get("h")),
        date=parse_datetime(date_text) if date_text else None,
        relative_velocity_kms=_to_float(row.get("v_rel")),
    )


def close_approach_from_neows(neo: Dict[str, Any], feed_date: Optional[str] = None) -> CloseApproach:
    """
    Build a CloseApproach from a NeoWs feed object.

    The first entry of ``close_approach_data`` supplies distance, velocity
    and date; ``feed_date`` (the feed's day key) is the fallback date.

    Raises:
        ValueError: If the object has no close-approach distance
    """
    approaches = neo.get("close_approach_data") or [{}]
    approach = approaches[0]

    distance = _to_float((approach.get("miss_distance") or {}).get("kilometers"))
    if distance is None:
        raise ValueError(f"NEO {neo.get('name')!r} has no miss distance")

    date_text = approach.get("close_approach_date_full") or approach.get("close_approach_date") or feed_date
    try:
        date = parse_datetime(date_text) if date_text else None
    except ValueError:
        logger.warning(f"Unparseable NEO approach date: {date_text!r}")
        date = None

    diameter = (neo.get("estimated_diameter") or {}).get("kilometers") or {}
    velocity = approach.get("relative_velocity") or {}

    return CloseApproach(
        name=str(neo.get("name", "")),
        distance_km=distance,
        absolute_magnitude=_to_float(neo.get("absolute_magnitude_h")),
        date=date,
        relative_velocity_kms=_to_float(velocity.get("kilometers_per_second")),
        diameter_km=_to_float(diameter.get("estimated_diameter_max")),
        hazardous=bool(neo.get("is_potentially_hazardous_asteroid")),
    )


def neows_feed_approaches(payload: Dict[str, Any]) -> List[CloseApproach]:
    """Flatten a NeoWs feed response, day by day, into CloseApproach records."""
    approaches = []
    for feed_date, neos in (payload.get("near_earth_objects") or {}).items():
        for neo in neos:
            try:
                approaches.append(close_approach_from_neows(neo, feed_date))
            except ValueError as e:
                logger.warning(f"Skipping NEO: {e}")
    return approaches


def interesting_neos(
    approaches: Iterable[CloseApproach], limit: int = MAX_INTERESTING_NEOS
) -> List[CloseApproach]:
    """Hazardous, close (< 5 million km) or large (> 100 m) objects, feed order kept."""
    kept = [
        a for a in approaches
        if a.hazardous
        or a.distance_km < INTERESTING_NEO_DISTANCE_KM
        or (a.diameter_km is not None and a.diameter_km > INTERESTING_NEO_DIAMETER_KM)
    ]
    return kept[:limit]


def risk_from_record(record: Dict[str, Any]) -> RiskAssessment:
    """Build a RiskAssessment from a Sentry summary record."""
    probability = _to_float(record.get("ip"))
    if probability is None:
        raise ValueError(f"Sentry object {record.get('des')!r} has no impact probability")

    return RiskAssessment(
        designation=str(record.get("des", "")),
        impact_probability=probability,
        name=(record.get("fullname") or "").strip() or None,
        diameter_km=_to_float(record.get("diameter")),
        impact_count=_to_int(record.get("n_imp")),
        absolute_magnitude=_to_float(record.get("h")),
        impact_range=record.get("range"),
    )


def mission_target_from_record(record: Dict[str, Any]) -> MissionTarget:
    """Build a MissionTarget from an NHATS summary record."""
    min_dv = record.get("min_dv") or {}
    delta_v = _to_float(min_dv.get("dv"))
    if delta_v is None:
        raise ValueError(f"NHATS object {record.get('des')!r} has no minimum delta-v")

    return MissionTarget(
        designation=str(record.get("des", "")),
        min_delta_v_kms=delta_v,
        duration_days=_to_int(min_dv.get("dur")),
        absolute_magnitude=_to_float(record.get("h")),
        trajectory_count=_to_int(record.get("n_via_traj")),
    )


def _within(date: Optional[datetime], now: datetime, window_days: Tuple[int, int]) -> bool:
    if date is None:
        return False
    days = (date - now).total_seconds() / 86400.0
    return window_days[0] <= days <= window_days[1]


def recent_fireballs(
    events: Iterable[AtmosphericEvent], now: Optional[datetime] = None
) -> List[AtmosphericEvent]:
    """Fireballs within 30 days of now, oldest first."""
    now = now or get_current_utc()
    kept = [e for e in events if _within(e.date, now, FIREBALL_WINDOW_DAYS)]
    return sorted(kept, key=lambda e: e.date)


def upcoming_close_approaches(
    approaches: Iterable[CloseApproach], now: Optional[datetime] = None
) -> List[CloseApproach]:
    """Close approaches from 7 days ago to 90 days ahead, soonest first."""
    now = now or get_current_utc()
    kept = [a for a in approaches if _within(a.date, now, CLOSE_APPROACH_WINDOW_DAYS)]
    return sorted(kept, key=lambda a: a.date)


def notable_risks(
    risks: Iterable[RiskAssessment], high_risk_threshold: float = 0.001
) -> List[RiskAssessment]:
    """Risk objects worth listing, highest probability first."""
    kept = [
        r for r in risks
        if r.impact_probability > MIN_LISTED_IMPACT_PROBABILITY
        or r.impact_probability > high_risk_threshold
    ]
    return sorted(kept, key=lambda r: r.impact_probability, reverse=True)


def accessible_targets(targets: Iterable[MissionTarget]) -> List[MissionTarget]:
    """Mission targets with reasonable delta-v and duration, lowest delta-v first."""
    kept = [
        t for t in targets
        if t.min_delta_v_kms < MAX_MISSION_DELTA_V_KMS
        and t.duration_days is not None
        and t.duration_days < MAX_MISSION_DURATION_DAYS
    ]
    return sorted(kept, key=lambda t: t.min_delta_v_kms)


def merge_events(
    close_approaches: Sequence[CloseApproach] = (),
    fireballs: Sequence[AtmosphericEvent] = (),
    risks: Sequence[RiskAssessment] = (),
    mission_targets: Sequence[MissionTarget] = (),
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    limit: int = MAX_MERGED_EVENTS,
) -> List[Any]:
    """
    Combine category lists into one ordered event list.

    Categories rank close approach, fireball, risk, mission target; ties
    are broken by date. With both ``start`` and ``end`` given, only dated
    events inside the inclusive range are kept.
    """
    ranked: List[Tuple[int, Any]] = (
        [(1, e) for e in close_approaches]
        + [(2, e) for e in fireballs]
        + [(3, e) for e in risks]
        + [(4, e) for e in mission_targets]
    )

    if start is not None and end is not None:
        ranked = [
            (rank, e) for rank, e in ranked
            if getattr(e, "date", None) is not None and start <= e.date <= end
        ]

    def sort_key(item: Tuple[int, Any]) -> Tuple[int, datetime]:
        rank, event = item
        return rank, getattr(event, "date", None) or datetime.max

    ranked.sort(key=sort_key)
    return [event for _, event in ranked[:limit]]


def flare_class_label(class_type: Optional[str]) -> str:
    """Intensity label for a solar flare class such as 'M2.3'."""
    if not class_type:
        return "Unknown"
    return FLARE_CLASS_LABELS.get(class_type[0].upper(), "Unknown")


def storm_scale_label(scale: Optional[str]) -> str:
    """Severity label for a NOAA geomagnetic storm scale such as 'G3'."""
    if not scale:
        return "Unknown"
    return STORM_SCALE_LABELS.get(scale.upper(), "Unknown")
