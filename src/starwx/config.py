"""
Threshold and sampling configuration.

This module keeps the tunable numbers of the classifier and the pass
predictor in validated dataclasses:
- Visibility thresholds per object category
- Prediction horizon and sampling cadence
"""

from dataclasses import dataclass, field
import logging

logger = logging.getLogger(__name__)


@dataclass
class VisibilityConfig:
    """
    Visibility thresholds.

    Distances are great-circle distances between the observer and the
    object's ground position.
    """
    platform_max_distance_km: float = 2000.0
    event_max_distance_km: float = 1000.0

    # Informational tiers (never affect visibility)
    close_approach_high_priority_km: float = 1_000_000.0
    close_approach_magnitude_limit: float = 20.0
    risk_probability_threshold: float = 0.001
    excellent_delta_v_kms: float = 10.0

    platform_name: str = "ISS"

    def __post_init__(self):
        """Validate thresholds."""
        for name in ("platform_max_distance_km", "event_max_distance_km",
                     "close_approach_high_priority_km"):
            value = getattr(self, name)
            if value <= 0:
                raise ValueError(f"{name} must be > 0, got {value}")

        if not 0 <= self.risk_probability_threshold <= 1:
            raise ValueError(
                f"risk_probability_threshold must be in [0, 1], got {self.risk_probability_threshold}"
            )

        if self.excellent_delta_v_kms <= 0:
            raise ValueError(
                f"excellent_delta_v_kms must be > 0, got {self.excellent_delta_v_kms}"
            )


@dataclass
class PredictionConfig:
    """
    Pass prediction sampling.

    The default samples every 10 minutes over one day (144 samples).
    """
    horizon_hours: float = 24.0
    step_seconds: int = 600
    estimate_illumination: bool = True  # fill UNKNOWN samples from solar geometry
    visibility: VisibilityConfig = field(default_factory=VisibilityConfig)

    def __post_init__(self):
        """Validate sampling parameters."""
        if self.horizon_hours <= 0:
            raise ValueError(f"horizon_hours must be > 0, got {self.horizon_hours}")

        if self.step_seconds <= 0:
            raise ValueError(f"step_seconds must be > 0, got {self.step_seconds}")

        if self.step_seconds > self.horizon_hours * 3600:
            logger.warning(
                f"step_seconds ({self.step_seconds}) exceeds the horizon; "
                f"only one sample will be taken"
            )

    @property
    def sample_count(self) -> int:
        """Number of samples covering the horizon."""
        return max(1, int(self.horizon_hours * 3600 // self.step_seconds))
