"""
Visible pass detection over sampled platform positions.

A pass opens on the first visible sample and closes on the first
invisible sample after it. The scan is a single forward pass with no
backtracking, so output order follows input order.
"""

import logging
import math
from typing import Iterable, Iterator, List, Optional, Tuple

from .config import VisibilityConfig
from .models import Observer, Pass, TimestampedPosition, VisibilityResult
from .visibility import classify_platform

logger = logging.getLogger(__name__)


class _OpenPass:
    """Running aggregates of a pass that has not ended yet."""

    __slots__ = ("start_time", "max_altitude_km", "min_distance_km")

    def __init__(self, start_time: float, altitude_km: float, distance_km: Optional[float]) -> None:
        self.start_time = start_time
        self.max_altitude_km = altitude_km
        self.min_distance_km = math.inf
        self._track_distance(distance_km)

    def update(self, altitude_km: float, distance_km: Optional[float]) -> None:
        self.max_altitude_km = max(self.max_altitude_km, altitude_km)
        self._track_distance(distance_km)

    def _track_distance(self, distance_km: Optional[float]) -> None:
        # Samples without a distance do not take part in the minimum
        if distance_km is not None:
            self.min_distance_km = min(self.min_distance_km, distance_km)

    def close(self, end_time: float) -> Pass:
        return Pass(
            start_time=self.start_time,
            end_time=end_time,
            duration_seconds=end_time - self.start_time,
            max_altitude_km=self.max_altitude_km,
            min_distance_km=self.min_distance_km,
        )


def detect_passes(
    samples: Iterable[Tuple[TimestampedPosition, VisibilityResult]],
) -> Iterator[Pass]:
    """
    Turn time-ordered (position, visibility) pairs into visible passes.

    A pass still open after the last sample never saw its end and is not
    emitted. Visible samples without a distance are left out of
    ``min_distance_km``, which stays ``math.inf`` if none has one.

    Args:
        samples: Pairs in chronological order

    Yields:
        Pass records in chronological order
    """
    current: Optional[_OpenPass] = None

    for position, visibility in samples:
        if visibility.is_visible:
            if current is None:
                # Start of new pass
                current = _OpenPass(position.time, position.altitude_km, visibility.distance_km)
            else:
                current.update(position.altitude_km, visibility.distance_km)
        elif current is not None:
            # End of current pass
            yield current.close(position.time)
            current = None

    if current is not None:
        # TODO: emit passes cut off by the horizon once consumers can mark them as partial
        logger.debug(
            f"Dropping pass open since {current.start_time:.0f} at end of samples"
        )


def find_passes(
    observer: Observer,
    positions: Iterable[TimestampedPosition],
    config: Optional[VisibilityConfig] = None,
) -> List[Pass]:
    """
    Classify platform samples for an observer and collect the passes.

    Args:
        observer: Ground observer
        positions: Platform samples in chronological order
        config: Visibility thresholds

    Returns:
        List of Pass objects
    """
    config = config or VisibilityConfig()
    pairs = (
        (position, classify_platform(observer, position, config.platform_name, config))
        for position in positions
    )
    passes = list(detect_passes(pairs))
    logger.info(f"Found {len(passes)} passes for observer at {observer.location}")
    return passes
