"""
Tests for geo module.
"""

import math

import numpy as np
import pytest

from starwx.geo import (
    COMPASS_POINTS,
    bearing_compass,
    distance_km,
    distances_km,
    initial_bearing_deg,
    validate_coordinates,
)
from starwx.models import GeoPoint


class TestDistanceKm:
    """Tests for distance_km function."""

    def test_same_point(self) -> None:
        p = GeoPoint(45.0, 90.0)
        assert distance_km(p, p) == 0.0

    def test_equator_one_degree(self) -> None:
        d = distance_km(GeoPoint(0, 0), GeoPoint(0, 1))
        assert d == pytest.approx(111.2, abs=1.0)

    def test_pole_to_equator(self) -> None:
        d = distance_km(GeoPoint(90, 0), GeoPoint(0, 0))
        assert 9900 < d < 10100

    def test_symmetric(self) -> None:
        pairs = [
            (GeoPoint(25.2, 55.3), GeoPoint(-33.9, 151.2)),
            (GeoPoint(45.0, -90.0), GeoPoint(44.0, -91.5)),
            (GeoPoint(-80.0, 170.0), GeoPoint(80.0, -170.0)),
        ]
        for a, b in pairs:
            assert distance_km(a, b) == pytest.approx(distance_km(b, a))

    def test_antimeridian_is_short(self) -> None:
        d = distance_km(GeoPoint(0, 179.5), GeoPoint(0, -179.5))
        assert d == pytest.approx(111.2, abs=1.0)

    def test_non_negative(self) -> None:
        assert distance_km(GeoPoint(10, 10), GeoPoint(-10, -10)) > 0

    def test_nan_propagates(self) -> None:
        assert math.isnan(distance_km(GeoPoint(float("nan"), 0), GeoPoint(0, 0)))


class TestDistancesKm:
    """Tests for the vectorized distance."""

    def test_matches_scalar(self) -> None:
        origin = GeoPoint(45.0, -90.0)
        lats = [45.0, 50.0, -10.0, 0.0]
        lons = [-90.0, -80.0, 30.0, 179.0]

        result = distances_km(origin, lats, lons)

        assert isinstance(result, np.ndarray)
        for i, (lat, lon) in enumerate(zip(lats, lons)):
            assert result[i] == pytest.approx(distance_km(origin, GeoPoint(lat, lon)))

    def test_empty_input(self) -> None:
        assert distances_km(GeoPoint(0, 0), [], []).size == 0


class TestBearingCompass:
    """Tests for bearing_compass function."""

    def test_returns_known_label(self) -> None:
        origin = GeoPoint(40.0, -100.0)
        for lat, lon in [(50, -100), (40, -90), (30, -100), (40, -110), (45, -95), (35, -105)]:
            assert bearing_compass(origin, GeoPoint(lat, lon)) in COMPASS_POINTS

    def test_identical_points_give_north(self) -> None:
        p = GeoPoint(12.5, 99.0)
        assert bearing_compass(p, p) == "N"

    def test_index_formula_orientation(self) -> None:
        origin = GeoPoint(0.0, 0.0)
        # Index is round(theta * 4 / pi + 4) mod 8 into (N, NE, E, SE, S, SW, W, NW)
        assert bearing_compass(origin, GeoPoint(10.0, 0.0)) == "S"
        assert bearing_compass(origin, GeoPoint(0.0, 10.0)) == "W"
        assert bearing_compass(origin, GeoPoint(-10.0, 0.0)) == "N"
        assert bearing_compass(origin, GeoPoint(0.0, -10.0)) == "E"

    def test_diagonal(self) -> None:
        origin = GeoPoint(0.0, 0.0)
        assert bearing_compass(origin, GeoPoint(1.0, 1.0)) == "SW"

    def test_compass_order(self) -> None:
        assert COMPASS_POINTS == ("N", "NE", "E", "SE", "S", "SW", "W", "NW")


class TestInitialBearingDeg:
    """Tests for initial_bearing_deg function."""

    def test_due_east(self) -> None:
        assert initial_bearing_deg(GeoPoint(0, 0), GeoPoint(0, 10)) == pytest.approx(90.0)

    def test_due_west_normalized(self) -> None:
        assert initial_bearing_deg(GeoPoint(0, 0), GeoPoint(0, -10)) == pytest.approx(270.0)

    def test_range(self) -> None:
        b = initial_bearing_deg(GeoPoint(-33.9, 151.2), GeoPoint(51.5, -0.1))
        assert 0 <= b < 360


class TestValidateCoordinates:
    """Tests for validate_coordinates function."""

    def test_valid_coordinates(self) -> None:
        assert validate_coordinates(0, 0) is True
        assert validate_coordinates(45.0, 90.0) is True

    def test_boundary_coordinates(self) -> None:
        assert validate_coordinates(90, 180) is True
        assert validate_coordinates(-90, -180) is True

    def test_invalid(self) -> None:
        assert validate_coordinates(91, 0) is False
        assert validate_coordinates(0, -181) is False
        assert validate_coordinates(float("nan"), 0) is False
