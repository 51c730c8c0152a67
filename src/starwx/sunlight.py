"""
Sunlight and illumination estimates for orbiting platforms.

This module provides a low-precision solar model used to decide whether
a platform sample is in sunlight or in Earth's shadow when the position
feed does not say.
"""

import dataclasses
import math
from datetime import datetime, timezone
from typing import Tuple, Union

import numpy as np

from .geo import EARTH_RADIUS_KM
from .models import Illumination, TimestampedPosition

AU_KM = 149597870.7  # Astronomical Unit in kilometers

J2000 = datetime(2000, 1, 1, 12, 0, 0)


def _as_naive_utc(timestamp: Union[datetime, float, int]) -> datetime:
    if isinstance(timestamp, datetime):
        if timestamp.tzinfo is not None:
            timestamp = timestamp.astimezone(timezone.utc).replace(tzinfo=None)
        return timestamp
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).replace(tzinfo=None)


def _days_since_j2000(timestamp: Union[datetime, float, int]) -> float:
    delta = _as_naive_utc(timestamp) - J2000
    return delta.total_seconds() / 86400.0


def calculate_sun_position(timestamp: Union[datetime, float, int]) -> Tuple[float, float, float]:
    """
    Calculate the sun's position in Earth-Centered Inertial (ECI) coordinates.

    Args:
        timestamp: UTC datetime or epoch seconds

    Returns:
        Tuple of (x, y, z) coordinates in kilometers
    """
    days = _days_since_j2000(timestamp)

    # Mean anomaly
    M = math.radians(357.52911 + 0.98560028 * days) % (2 * math.pi)

    # Equation of center
    C = math.radians(1.914602 * math.sin(M) + 0.019993 * math.sin(2 * M))

    # Ecliptic longitude
    lambda_sun = math.radians(280.46646 + 0.98564736 * days) + C

    # Obliquity of ecliptic
    epsilon = math.radians(23.439291)

    x = AU_KM * math.cos(lambda_sun)
    y = AU_KM * math.sin(lambda_sun) * math.cos(epsilon)
    z = AU_KM * math.sin(lambda_sun) * math.sin(epsilon)

    return x, y, z


def calculate_gmst(timestamp: Union[datetime, float, int]) -> float:
    """
    Calculate Greenwich Mean Sidereal Time (GMST) in degrees.

    Args:
        timestamp: UTC datetime or epoch seconds

    Returns:
        GMST in degrees
    """
    days = _days_since_j2000(timestamp)

    T = days / 36525.0  # Julian centuries
    gmst = 280.46061837 + 360.98564736629 * days + 0.000387933 * T * T

    return gmst % 360.0


def get_sun_elevation(
    latitude: float, longitude: float, timestamp: Union[datetime, float, int]
) -> float:
    """
    Get the sun elevation angle at a ground location.

    Args:
        latitude: Latitude in degrees
        longitude: Longitude in degrees
        timestamp: UTC datetime or epoch seconds

    Returns:
        Sun elevation angle in degrees (positive = above horizon, negative = below)
    """
    sun_x, sun_y, sun_z = calculate_sun_position(timestamp)

    # Rotate the ground point into ECI
    gmst = calculate_gmst(timestamp)
    lon_rad = math.radians(longitude + gmst)
    lat_rad = math.radians(latitude)

    ground = EARTH_RADIUS_KM * np.array([
        math.cos(lat_rad) * math.cos(lon_rad),
        math.cos(lat_rad) * math.sin(lon_rad),
        math.sin(lat_rad),
    ])

    sun_vec = np.array([sun_x, sun_y, sun_z]) - ground
    sun_unit = sun_vec / np.linalg.norm(sun_vec)
    up_vec = ground / EARTH_RADIUS_KM

    cos_elevation = float(np.dot(sun_unit, up_vec))
    return math.degrees(math.asin(max(-1.0, min(1.0, cos_elevation))))


def horizon_dip_deg(altitude_km: float) -> float:
    """Angle below the geometric horizon still seen from altitude_km."""
    ratio = EARTH_RADIUS_KM / (EARTH_RADIUS_KM + max(0.0, altitude_km))
    return math.degrees(math.acos(ratio))


def estimate_illumination(position: TimestampedPosition) -> Illumination:
    """
    Estimate whether a platform sample is sunlit.

    The platform sees the sun while the sun is above its dipped horizon,
    i.e. while the sun elevation at the sub-point exceeds -dip.
    """
    sun_elevation = get_sun_elevation(
        position.point.latitude, position.point.longitude, position.time
    )
    if sun_elevation > -horizon_dip_deg(position.altitude_km):
        return Illumination.DAYLIGHT
    return Illumination.NIGHT


def with_estimated_illumination(position: TimestampedPosition) -> TimestampedPosition:
    """Return the sample with UNKNOWN illumination filled in; others unchanged."""
    if position.illumination is not Illumination.UNKNOWN:
        return position
    return dataclasses.replace(position, illumination=estimate_illumination(position))
