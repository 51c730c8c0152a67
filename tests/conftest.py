"""
Pytest configuration and shared fixtures.

This file is automatically loaded by pytest and provides shared fixtures
for observers, platform samples and sample sequences.
"""

import sys
from pathlib import Path
from typing import Callable, List, Sequence

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from starwx.models import (  # noqa: E402
    GeoPoint,
    Illumination,
    Observer,
    TimestampedPosition,
    VisibilityResult,
)


# =============================================================================
# FIXTURES - Common test setup
# =============================================================================


@pytest.fixture
def observer() -> Observer:
    """Observer on the equator at the prime meridian."""
    return Observer(location=GeoPoint(0.0, 0.0), name="Null Island")


@pytest.fixture
def base_time() -> float:
    """Standard base instant for tests (2025-11-08 00:00:00 UTC)."""
    return 1762560000.0


@pytest.fixture
def make_position() -> Callable[..., TimestampedPosition]:
    """Factory for platform samples."""

    def _make(
        time: float = 0.0,
        latitude: float = 0.0,
        longitude: float = 0.0,
        altitude_km: float = 420.0,
        illumination: Illumination = Illumination.NIGHT,
    ) -> TimestampedPosition:
        return TimestampedPosition(
            time=time,
            point=GeoPoint(latitude, longitude),
            altitude_km=altitude_km,
            illumination=illumination,
        )

    return _make


@pytest.fixture
def make_samples(make_position) -> Callable[..., List[tuple]]:
    """Build (position, visibility) pairs from a visibility pattern."""

    def _make(
        visible: Sequence[bool],
        step: float = 600.0,
        start: float = 0.0,
        distances: Sequence[float] = (),
        altitudes: Sequence[float] = (),
    ) -> List[tuple]:
        samples = []
        for i, flag in enumerate(visible):
            distance = distances[i] if distances else 500.0
            altitude = altitudes[i] if altitudes else 420.0
            position = make_position(time=start + i * step, altitude_km=altitude)
            result = VisibilityResult(
                is_visible=flag,
                reason="visible" if flag else "not visible",
                distance_km=distance,
                direction="N",
            )
            samples.append((position, result))
        return samples

    return _make
