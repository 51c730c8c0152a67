"""
Object category records for visibility classification.

Each category is a plain record; the classifier dispatches on the record
type. Only the orbiting platform and the located atmospheric event carry
observer-relative geometry.
"""

from dataclasses import dataclass
from datetime import datetime
import re
from typing import Optional, Union

from .models import GeoPoint, TimestampedPosition

# "<number>°<hemisphere>", e.g. "45.0°N" or "90.5° W"
_COORDINATE_RE = re.compile(r"^\s*([+-]?\d+(?:\.\d+)?)\s*°\s*([A-Za-z])\s*$")


def parse_coordinate(text: str, positive: str, negative: str) -> float:
    """
    Parse a hemisphere-tagged coordinate string.

    Args:
        text: Coordinate string such as "45.0°N"
        positive: Hemisphere letter for positive values ("N" or "E")
        negative: Hemisphere letter for negative values ("S" or "W")

    Returns:
        Signed coordinate in degrees

    Raises:
        ValueError: If the string does not match the expected pattern
    """
    match = _COORDINATE_RE.match(text)
    if not match:
        raise ValueError(f"Unrecognized coordinate: {text!r}")

    value = float(match.group(1))
    hemisphere = match.group(2).upper()
    if hemisphere == positive:
        return value
    if hemisphere == negative:
        return -value
    raise ValueError(f"Unexpected hemisphere {hemisphere!r} in {text!r}")


def format_coordinate(value: float, positive: str, negative: str) -> str:
    """Render a signed coordinate in the feed's "<number>°<H>" form."""
    hemisphere = positive if value >= 0 else negative
    return f"{abs(value)}°{hemisphere}"


@dataclass(frozen=True)
class OrbitingPlatform:
    """A tracked satellite sample, e.g. the ISS."""

    position: TimestampedPosition
    name: str = "ISS"


@dataclass(frozen=True)
class AtmosphericEvent:
    """A bolide / fireball report with raw coordinate strings."""

    event_id: str
    latitude: Optional[str] = None
    longitude: Optional[str] = None
    date: Optional[datetime] = None
    energy_kt: Optional[float] = None
    impact_energy_kt: Optional[float] = None
    altitude_km: Optional[float] = None
    velocity_kms: Optional[float] = None

    @property
    def has_location(self) -> bool:
        """True when both coordinate strings are present."""
        return bool(self.latitude) and bool(self.longitude)

    def location(self) -> GeoPoint:
        """
        Parse the raw coordinates.

        Raises:
            ValueError: If a coordinate is missing or malformed
        """
        if not self.has_location:
            raise ValueError(f"Event {self.event_id} has no location data")
        return GeoPoint(
            latitude=parse_coordinate(self.latitude, "N", "S"),
            longitude=parse_coordinate(self.longitude, "E", "W"),
        )


@dataclass(frozen=True)
class CloseApproach:
    """A near-Earth object close approach."""

    name: str
    distance_km: float
    absolute_magnitude: Optional[float] = None
    date: Optional[datetime] = None
    relative_velocity_kms: Optional[float] = None
    diameter_km: Optional[float] = None
    hazardous: bool = False


@dataclass(frozen=True)
class RiskAssessment:
    """An object on an impact-monitoring list."""

    designation: str
    impact_probability: float
    name: Optional[str] = None
    diameter_km: Optional[float] = None
    impact_count: Optional[int] = None
    absolute_magnitude: Optional[float] = None
    impact_range: Optional[str] = None


@dataclass(frozen=True)
class MissionTarget:
    """A human-accessible body ranked by minimum mission delta-v."""

    designation: str
    min_delta_v_kms: float
    duration_days: Optional[int] = None
    absolute_magnitude: Optional[float] = None
    trajectory_count: Optional[int] = None


EventCategory = Union[
    TimestampedPosition,
    OrbitingPlatform,
    AtmosphericEvent,
    CloseApproach,
    RiskAssessment,
    MissionTarget,
]
