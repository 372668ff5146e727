import math

from puja_locator.core import Coordinate, NamedLocation
from puja_locator.services import ProximityRanker

USER = Coordinate(28.6139, 77.2090)  # New Delhi


def test_rank_sorts_by_ascending_distance():
    locations = {
        "Chennai": Coordinate(13.0827, 80.2707),
        "Noida": Coordinate(28.5355, 77.3910),
        "Mumbai": Coordinate(19.0760, 72.8777),
    }

    result = ProximityRanker().rank(USER, locations)

    assert [location.name for location in result.ranked_locations] == ["Noida", "Mumbai", "Chennai"]
    distances = [location.distance_km for location in result.ranked_locations]
    assert distances == sorted(distances)
    assert result.nearest_name == "Noida"


def test_rank_is_stable_for_equal_distances():
    # Mirror images across the user's meridian are equidistant.
    user = Coordinate(28.0, 77.0)
    locations = {
        "East": Coordinate(28.0, 78.0),
        "West": Coordinate(28.0, 76.0),
        "Far": Coordinate(10.0, 77.0),
    }

    result = ProximityRanker().rank(user, locations)

    assert [location.name for location in result.ranked_locations] == ["East", "West", "Far"]
    assert math.isclose(result.ranked_locations[0].distance_km, result.ranked_locations[1].distance_km)

    reversed_result = ProximityRanker().rank(user, dict(reversed(list(locations.items()))))
    assert [location.name for location in reversed_result.ranked_locations] == ["West", "East", "Far"]


def test_rank_without_user_keeps_input_order():
    locations = [
        NamedLocation("B", Coordinate(19.0, 72.8)),
        NamedLocation("A", Coordinate(28.6, 77.2)),
    ]

    result = ProximityRanker().rank(None, locations)

    assert [location.name for location in result.ranked_locations] == ["B", "A"]
    assert all(location.distance_km is None for location in result.ranked_locations)
    assert result.nearest_name == "B"


def test_rank_empty_set():
    result = ProximityRanker().rank(USER, {})

    assert result.ranked_locations == []
    assert result.nearest_name == ""
    assert result.as_dict() == {"ranked_locations": [], "nearest_location": ""}
