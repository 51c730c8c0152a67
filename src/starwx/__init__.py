"""
StarWX Sky Core

Observer-relative geometry, visibility classification and pass detection
behind the StarWX astronomy dashboard, plus thin clients for the feeds it
consumes.
"""

from .config import PredictionConfig, VisibilityConfig
from .events import (
    AtmosphericEvent,
    CloseApproach,
    MissionTarget,
    OrbitingPlatform,
    RiskAssessment,
)
from .geo import bearing_compass, distance_km
from .models import (
    GeoPoint,
    Illumination,
    Observer,
    Pass,
    TimestampedPosition,
    VisibilityResult,
)
from .passes import detect_passes, find_passes
from .predictor import PassPredictor
from .visibility import classify

__version__ = "0.1.0"
__author__ = "StarWX Team"

__all__ = [
    "AtmosphericEvent",
    "CloseApproach",
    "GeoPoint",
    "Illumination",
    "MissionTarget",
    "Observer",
    "OrbitingPlatform",
    "Pass",
    "PassPredictor",
    "PredictionConfig",
    "RiskAssessment",
    "TimestampedPosition",
    "VisibilityConfig",
    "VisibilityResult",
    "bearing_compass",
    "classify",
    "detect_passes",
    "distance_km",
    "find_passes",
]
