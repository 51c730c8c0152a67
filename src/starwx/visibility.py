"""
Observer-relative visibility classification.

This module decides whether an object is visible from an observer and
explains why. A single ``classify`` function dispatches on the category
record:

- orbiting platforms need darkness and proximity
- atmospheric events need parseable coordinates and proximity
- close approaches, risk objects and mission targets are observable
  worldwide and only carry an informational tier
"""

import logging
import math
from typing import Optional

from .config import VisibilityConfig
from .events import (
    AtmosphericEvent,
    CloseApproach,
    EventCategory,
    MissionTarget,
    OrbitingPlatform,
    RiskAssessment,
)
from .geo import bearing_compass, distance_km
from .models import Illumination, Observer, TimestampedPosition, VisibilityResult

logger = logging.getLogger(__name__)

NO_LOCATION_REASON = "no location data"
INVALID_COORDINATES_REASON = "invalid coordinates"
TOO_FAR_REASON = "too far"


def _rounded_km(value: float) -> int:
    # Half-up, matching the dashboard's display rounding
    return int(math.floor(value + 0.5))


def classify(
    observer: Observer,
    item: EventCategory,
    config: Optional[VisibilityConfig] = None,
) -> VisibilityResult:
    """
    Classify one object for one observer.

    Args:
        observer: Ground observer
        item: Category record (a TimestampedPosition is treated as an
            orbiting platform sample)
        config: Thresholds; defaults to VisibilityConfig()

    Returns:
        VisibilityResult for the pair

    Raises:
        TypeError: If the record type is not a known category
    """
    config = config or VisibilityConfig()

    if isinstance(item, TimestampedPosition):
        return classify_platform(observer, item, config.platform_name, config)
    if isinstance(item, OrbitingPlatform):
        return classify_platform(observer, item.position, item.name, config)
    if isinstance(item, AtmosphericEvent):
        return classify_atmospheric_event(observer, item, config)
    if isinstance(item, CloseApproach):
        return classify_close_approach(item, config)
    if isinstance(item, RiskAssessment):
        return classify_risk(item, config)
    if isinstance(item, MissionTarget):
        return classify_mission_target(item, config)

    raise TypeError(f"Unsupported object category: {type(item).__name__}")


def classify_platform(
    observer: Observer,
    position: TimestampedPosition,
    name: str = "ISS",
    config: Optional[VisibilityConfig] = None,
) -> VisibilityResult:
    """
    Visibility of an orbiting platform sample.

    Visible when the ground distance is within range AND the platform is
    in Earth's shadow. Distance is reported as the limiting factor first;
    illumination only when the platform is within range.
    """
    config = config or VisibilityConfig()
    distance = distance_km(observer.location, position.point)
    direction = bearing_compass(observer.location, position.point)
    km = _rounded_km(distance)

    in_range = distance <= config.platform_max_distance_km
    is_dark = position.illumination is Illumination.NIGHT

    if in_range and is_dark:
        reason = f"{name} visible {km} km away"
    elif not in_range:
        reason = f"{name} {km} km away, {TOO_FAR_REASON}"
    elif position.illumination is Illumination.DAYLIGHT:
        reason = f"{name} {km} km away, in daylight"
    else:
        reason = f"{name} {km} km away, illumination unknown"

    return VisibilityResult(
        is_visible=in_range and is_dark,
        reason=reason,
        distance_km=distance,
        direction=direction,
    )


def classify_atmospheric_event(
    observer: Observer,
    event: AtmosphericEvent,
    config: Optional[VisibilityConfig] = None,
) -> VisibilityResult:
    """
    Visibility of a located atmospheric flash.

    Coordinate problems are reported as reasons, never raised.
    """
    config = config or VisibilityConfig()

    if not event.has_location:
        return VisibilityResult(is_visible=False, reason=NO_LOCATION_REASON)

    try:
        location = event.location()
    except ValueError as e:
        logger.debug(f"Event {event.event_id}: {e}")
        return VisibilityResult(is_visible=False, reason=INVALID_COORDINATES_REASON)

    distance = distance_km(observer.location, location)
    direction = bearing_compass(observer.location, location)
    is_visible = distance <= config.event_max_distance_km

    return VisibilityResult(
        is_visible=is_visible,
        reason=f"visible {_rounded_km(distance)} km away" if is_visible else TOO_FAR_REASON,
        distance_km=distance,
        direction=direction,
    )


def close_approach_priority(approach: CloseApproach, config: Optional[VisibilityConfig] = None) -> str:
    """Priority tier: high (very close), medium (bright), else normal."""
    config = config or VisibilityConfig()
    if approach.distance_km < config.close_approach_high_priority_km:
        return "high"
    if (approach.absolute_magnitude is not None
            and approach.absolute_magnitude < config.close_approach_magnitude_limit):
        return "medium"
    return "normal"


def classify_close_approach(
    approach: CloseApproach,
    config: Optional[VisibilityConfig] = None,
) -> VisibilityResult:
    config = config or VisibilityConfig()
    return VisibilityResult(
        is_visible=True,
        reason=f"{approach.name} passes within {_rounded_km(approach.distance_km)} km of Earth",
        distance_km=approach.distance_km,
        tier=close_approach_priority(approach, config),
    )


def classify_risk(
    risk: RiskAssessment,
    config: Optional[VisibilityConfig] = None,
) -> VisibilityResult:
    config = config or VisibilityConfig()
    tier = "high" if risk.impact_probability > config.risk_probability_threshold else "low"
    return VisibilityResult(
        is_visible=True,
        reason=f"{risk.name or risk.designation} has a {risk.impact_probability * 100:.6f}% chance of Earth impact",
        tier=tier,
    )


def classify_mission_target(
    target: MissionTarget,
    config: Optional[VisibilityConfig] = None,
) -> VisibilityResult:
    config = config or VisibilityConfig()
    tier = "excellent" if target.min_delta_v_kms < config.excellent_delta_v_kms else "good"
    return VisibilityResult(
        is_visible=True,
        reason=f"{target.designation} is accessible with ΔV of {target.min_delta_v_kms} km/s",
        tier=tier,
    )
