"""
Value types shared by the geometry, visibility and pass modules.

All records are immutable and created per call.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class Illumination(Enum):
    """Whether a tracked object is in sunlight or in Earth's shadow."""
    DAYLIGHT = "daylight"
    NIGHT = "night"
    UNKNOWN = "unknown"

    @classmethod
    def from_feed(cls, label: Optional[str]) -> "Illumination":
        """Map a feed's visibility label onto an Illumination state."""
        if not label:
            return cls.UNKNOWN
        label = label.strip().lower()
        if label in ("eclipsed", "nighttime", "night"):
            return cls.NIGHT
        if label == "daylight":
            return cls.DAYLIGHT
        return cls.UNKNOWN


@dataclass(frozen=True)
class GeoPoint:
    """A point on Earth's surface in degrees.

    Latitude is expected in [-90, 90] and longitude in [-180, 180]; the
    type does not enforce it.
    """

    latitude: float
    longitude: float

    def __str__(self) -> str:
        return f"({self.latitude:.4f}°, {self.longitude:.4f}°)"


@dataclass(frozen=True)
class Observer:
    """Ground location visibility is evaluated from."""

    location: GeoPoint
    name: Optional[str] = None

    def relocated(self, location: GeoPoint) -> "Observer":
        return Observer(location=location, name=self.name)


@dataclass(frozen=True)
class TimestampedPosition:
    """One sample of a moving object's sub-point at an instant."""

    time: float  # seconds since epoch
    point: GeoPoint
    altitude_km: float
    illumination: Illumination = Illumination.UNKNOWN
    velocity_kmh: Optional[float] = None


@dataclass(frozen=True)
class VisibilityResult:
    """Outcome of classifying one object for one observer."""

    is_visible: bool
    reason: str
    distance_km: Optional[float] = None
    direction: Optional[str] = None
    tier: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "is_visible": self.is_visible,
            "reason": self.reason,
        }
        if self.distance_km is not None:
            result["distance_km"] = round(self.distance_km, 1)
        if self.direction is not None:
            result["direction"] = self.direction
        if self.tier is not None:
            result["tier"] = self.tier
        return result


@dataclass(frozen=True)
class Pass:
    """A contiguous interval during which a platform is visible."""

    start_time: float
    end_time: float
    duration_seconds: float
    max_altitude_km: float
    min_distance_km: float

    @property
    def duration_minutes(self) -> int:
        """Duration rounded to whole minutes for display."""
        return int(math.floor(self.duration_seconds / 60.0 + 0.5))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "start_time": self.start_time,
            "end_time": self.end_time,
            "duration_seconds": self.duration_seconds,
            "duration_minutes": self.duration_minutes,
            "max_altitude_km": round(self.max_altitude_km, 2),
            "min_distance_km": round(self.min_distance_km, 2),
        }

    def __str__(self) -> str:
        return (f"Pass: {self.start_time:.0f} - {self.end_time:.0f} "
                f"({self.duration_minutes} min, closest {self.min_distance_km:.0f} km)")
