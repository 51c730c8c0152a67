"""
Great-circle geometry between ground points.

Distances use the haversine formula on a spherical Earth. Inputs are not
validated: out-of-range or NaN coordinates propagate into the result.
"""

import math
from typing import Sequence

import numpy as np

from .models import GeoPoint

EARTH_RADIUS_KM = 6371.0

# Index order used by the compass quantization below
COMPASS_POINTS = ("N", "NE", "E", "SE", "S", "SW", "W", "NW")


def distance_km(a: GeoPoint, b: GeoPoint) -> float:
    """
    Calculate great circle distance between two points on Earth.

    Args:
        a: First point
        b: Second point

    Returns:
        Distance in kilometers
    """
    lat1_rad = math.radians(a.latitude)
    lat2_rad = math.radians(b.latitude)
    dlat = math.radians(b.latitude - a.latitude)
    dlon = math.radians(b.longitude - a.longitude)

    h = (
        math.sin(dlat / 2) ** 2
        + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(dlon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))

    return EARTH_RADIUS_KM * c


def distances_km(
    origin: GeoPoint,
    latitudes: Sequence[float],
    longitudes: Sequence[float],
) -> np.ndarray:
    """
    Vectorized haversine distance from one point to many.

    Args:
        origin: Reference point
        latitudes: Latitudes of the other points (degrees)
        longitudes: Longitudes of the other points (degrees)

    Returns:
        Array of distances in kilometers, one per point
    """
    lats = np.radians(np.asarray(latitudes, dtype=float))
    lons = np.asarray(longitudes, dtype=float)
    lat0 = math.radians(origin.latitude)

    dlat = lats - lat0
    dlon = np.radians(lons - origin.longitude)

    h = np.sin(dlat / 2) ** 2 + math.cos(lat0) * np.cos(lats) * np.sin(dlon / 2) ** 2
    c = 2 * np.arctan2(np.sqrt(h), np.sqrt(1 - h))

    return EARTH_RADIUS_KM * c


def _initial_bearing_rad(origin: GeoPoint, target: GeoPoint) -> float:
    lat1 = math.radians(origin.latitude)
    lat2 = math.radians(target.latitude)
    dlon = math.radians(target.longitude - origin.longitude)

    y = math.sin(dlon) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(dlon)

    return math.atan2(y, x) % (2 * math.pi)


def initial_bearing_deg(origin: GeoPoint, target: GeoPoint) -> float:
    """Initial great-circle bearing from origin to target in [0, 360)."""
    return math.degrees(_initial_bearing_rad(origin, target)) % 360.0


def bearing_compass(origin: GeoPoint, target: GeoPoint) -> str:
    """
    Quantize the bearing from origin to target onto 8 compass labels.

    The label index is ``round(theta * 4 / pi + 4) mod 8`` into
    COMPASS_POINTS, rounding halves up. Identical points have no bearing
    and always give "N".

    Args:
        origin: Observer location
        target: Object location

    Returns:
        One of N, NE, E, SE, S, SW, W, NW
    """
    if origin == target:
        return "N"

    theta = _initial_bearing_rad(origin, target)
    index = int(math.floor(theta * 4 / math.pi + 4 + 0.5)) % 8
    return COMPASS_POINTS[index]


def validate_coordinates(latitude: float, longitude: float) -> bool:
    """
    Validate latitude and longitude coordinates.

    Args:
        latitude: Latitude in degrees
        longitude: Longitude in degrees

    Returns:
        True if coordinates are valid
    """
    return (-90 <= latitude <= 90) and (-180 <= longitude <= 180)
