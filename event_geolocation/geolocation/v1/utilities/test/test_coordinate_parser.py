import pytest

from event_geolocation.geolocation.v1.utilities.coordinate_parser import (
    CoordinateParser,
)


@pytest.mark.parametrize(
    "location,lat,lng,address",
    [
        ("Conference Room (37.7749, -122.4194)", 37.7749, -122.4194, "Conference Room"),
        ("(40.7128,-74.0060) Office", 40.7128, -74.006, "Office"),
        ("Cafe (-33.8688, 151.2093) downstairs", -33.8688, 151.2093, "Cafe  downstairs"),
        ("(12, 34)", 12.0, 34.0, ""),
    ],
)
def test_parenthesized_pair(location: str, lat: float, lng: float, address: str) -> None:
    parsed = CoordinateParser.parse(location)

    assert parsed.coordinates is not None
    assert parsed.coordinates.lat == lat
    assert parsed.coordinates.lng == lng
    assert parsed.address == address


@pytest.mark.parametrize(
    "location,lat,lng",
    [
        ("40.7128,-74.0060", 40.7128, -74.006),
        ("40.7128, -74.0060", 40.7128, -74.006),
        ("-33,151", -33.0, 151.0),
        ("  51.5074,-0.1278  ", 51.5074, -0.1278),
    ],
)
def test_bare_pair_keeps_original_address(location: str, lat: float, lng: float) -> None:
    parsed = CoordinateParser.parse(location)

    assert parsed.coordinates is not None
    assert parsed.coordinates.lat == lat
    assert parsed.coordinates.lng == lng
    assert parsed.address == location


@pytest.mark.parametrize(
    "location",
    [
        "1600 Amphitheatre Parkway, Mountain View, CA",
        "Room 12, Building 4",
        "Meet at 40.7128,-74.0060 please",
        "",
    ],
)
def test_no_coordinates(location: str) -> None:
    parsed = CoordinateParser.parse(location)

    assert parsed.coordinates is None
    assert parsed.address == location
    assert not parsed.has_coordinates()


def test_out_of_range_values_are_still_parsed() -> None:
    parsed = CoordinateParser.parse("(91, 181)")

    assert parsed.coordinates is not None
    assert parsed.coordinates.lat == 91
    assert not parsed.coordinates.is_valid()


def test_parenthesized_pair_wins_over_bare_pair() -> None:
    parsed = CoordinateParser.parse("1,2 (3, 4)")

    assert parsed.coordinates is not None
    assert (parsed.coordinates.lat, parsed.coordinates.lng) == (3, 4)
    assert parsed.address == "1,2"
