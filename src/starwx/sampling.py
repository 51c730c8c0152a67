"""
Sampling instants for pass prediction and freshness of live positions.
"""

from datetime import datetime, timezone
from typing import List, Optional, Union

from .models import TimestampedPosition

LIVE_MAX_AGE_SECONDS = 60
RECENT_MAX_AGE_SECONDS = 300


def _epoch_seconds(value: Union[datetime, float, int]) -> int:
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return int(value.timestamp())
    return int(value)


def prediction_timestamps(
    start: Union[datetime, float, int],
    hours: float = 24.0,
    step_seconds: int = 600,
) -> List[int]:
    """
    Evenly spaced epoch seconds covering a horizon.

    Args:
        start: First instant (naive datetimes are taken as UTC)
        hours: Horizon length in hours
        step_seconds: Spacing between samples

    Returns:
        ``hours * 3600 / step_seconds`` timestamps starting at ``start``
    """
    if step_seconds <= 0:
        raise ValueError(f"step_seconds must be > 0, got {step_seconds}")

    first = _epoch_seconds(start)
    count = int(hours * 3600 // step_seconds)
    return [first + i * step_seconds for i in range(count)]


def position_status(position: Optional[TimestampedPosition], now: Optional[float] = None) -> str:
    """Freshness label of a live position: Live, Recent, Stale or Unknown."""
    if position is None:
        return "Unknown"

    if now is None:
        now = datetime.now(timezone.utc).timestamp()

    age = now - position.time
    if age < LIVE_MAX_AGE_SECONDS:
        return "Live"
    if age < RECENT_MAX_AGE_SECONDS:
        return "Recent"
    return "Stale"
