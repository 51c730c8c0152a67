"""
Tests for event records and coordinate parsing.
"""

import pytest

from starwx.events import AtmosphericEvent, format_coordinate, parse_coordinate
from starwx.models import GeoPoint, Illumination, Observer


class TestParseCoordinate:
    """Tests for parse_coordinate function."""

    def test_north(self) -> None:
        assert parse_coordinate("45.0°N", "N", "S") == 45.0

    def test_south_is_negative(self) -> None:
        assert parse_coordinate("12.3°S", "N", "S") == -12.3

    def test_west_is_negative(self) -> None:
        assert parse_coordinate("90.0°W", "E", "W") == -90.0

    def test_integer_and_whitespace(self) -> None:
        assert parse_coordinate(" 7 ° e ", "E", "W") == 7.0

    def test_missing_degree_sign(self) -> None:
        with pytest.raises(ValueError):
            parse_coordinate("45.0N", "N", "S")

    def test_null_placeholder(self) -> None:
        with pytest.raises(ValueError):
            parse_coordinate("null°null", "N", "S")

    def test_wrong_axis_hemisphere(self) -> None:
        with pytest.raises(ValueError):
            parse_coordinate("45.0°E", "N", "S")


class TestFormatCoordinate:
    """Tests for format_coordinate function."""

    def test_negative(self) -> None:
        assert format_coordinate(-90.5, "E", "W") == "90.5°W"

    def test_parse_back(self) -> None:
        text = format_coordinate(33.25, "N", "S")
        assert parse_coordinate(text, "N", "S") == 33.25


class TestAtmosphericEventLocation:
    """Tests for AtmosphericEvent.location."""

    def test_location(self) -> None:
        event = AtmosphericEvent("fb", latitude="45.0°N", longitude="90.0°W")
        assert event.location() == GeoPoint(45.0, -90.0)

    def test_missing(self) -> None:
        with pytest.raises(ValueError):
            AtmosphericEvent("fb").location()

    def test_one_coordinate_missing(self) -> None:
        event = AtmosphericEvent("fb", latitude="45.0°N", longitude="")
        assert not event.has_location
        with pytest.raises(ValueError, match="no location data"):
            event.location()

    def test_has_location(self) -> None:
        assert AtmosphericEvent("fb", latitude="45.0°N", longitude="90.0°W").has_location
        assert not AtmosphericEvent("fb", longitude="90.0°W").has_location


class TestObserver:
    """Tests for Observer.relocated."""

    def test_relocated_keeps_name(self) -> None:
        home = Observer(GeoPoint(51.5, -0.1), name="London")

        moved = home.relocated(GeoPoint(48.9, 2.4))

        assert moved == Observer(GeoPoint(48.9, 2.4), name="London")
        assert home.location == GeoPoint(51.5, -0.1)


class TestIlluminationFromFeed:
    """Tests for Illumination.from_feed."""

    def test_eclipsed_is_night(self) -> None:
        assert Illumination.from_feed("eclipsed") is Illumination.NIGHT

    def test_nighttime_is_night(self) -> None:
        assert Illumination.from_feed("nighttime") is Illumination.NIGHT

    def test_daylight(self) -> None:
        assert Illumination.from_feed("Daylight") is Illumination.DAYLIGHT

    def test_unknown(self) -> None:
        assert Illumination.from_feed(None) is Illumination.UNKNOWN
        assert Illumination.from_feed("twilight") is Illumination.UNKNOWN
