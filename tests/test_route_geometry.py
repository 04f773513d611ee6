import math

from src.fieldplan.models.domain import Depot, LatLng, SegmentLabel, Waypoint
from src.fieldplan.services.routing.geometry import (
    build_straight_line_segments,
    get_segment_label,
    split_geometry_into_segments,
)


def _stop(lat: float, lng: float, name: str | None = None) -> Waypoint:
    return Waypoint(coordinates=LatLng(lat=lat, lng=lng), name=name)


def test_split_returns_empty_for_empty_geometry():
    assert split_geometry_into_segments([], [], Depot(lat=50, lng=14)) == []


def test_split_without_stops_yields_single_depot_loop():
    geometry = [(14, 50), (15, 51)]

    segments = split_geometry_into_segments(geometry, [], Depot(lat=50, lng=14))

    assert segments == [[(14, 50), (15, 51)]]


def test_split_depot_and_single_stop():
    geometry = [[0, 0], [0.3, 0.3], [0.6, 0.6], [1, 1], [0.7, 0.7], [0.3, 0.3], [0, 0]]

    segments = split_geometry_into_segments(geometry, [_stop(1, 1)], Depot(lat=0, lng=0))

    assert len(segments) == 2
    assert segments[0][0] == [0, 0]
    assert segments[0][-1] == [1, 1]
    assert segments[1][0] == [1, 1]
    assert segments[1][-1] == [0, 0]


def test_split_produces_one_segment_per_leg():
    geometry = [(0, 0), (1, 0), (2, 0), (3, 0), (2, 0), (1, 0), (0, 0)]
    stops = [_stop(0, 1), _stop(0, 2), _stop(0, 3)]

    segments = split_geometry_into_segments(geometry, stops, Depot(lat=0, lng=0))

    assert len(segments) == len(stops) + 1
    assert segments[0] == [(0, 0), (1, 0)]
    assert segments[3] == [(3, 0), (2, 0), (1, 0), (0, 0)]


def test_split_segments_have_at_least_two_points():
    geometry = [(0, 0), (1, 1), (2, 2)]

    segments = split_geometry_into_segments(geometry, [_stop(1, 1)], Depot(lat=0, lng=0))

    assert len(segments) == 2
    assert all(len(segment) >= 2 for segment in segments)


def test_split_anchors_first_and_last_segment_to_geometry_endpoints():
    geometry = [
        (14.0, 50.0),
        (14.1, 50.05),
        (14.2, 50.1),
        (14.3, 50.15),
        (14.4, 50.2),
        (14.5, 50.25),
    ]
    stops = [_stop(50.1, 14.2), _stop(50.2, 14.4)]

    segments = split_geometry_into_segments(geometry, stops, Depot(lat=50.0, lng=14.0))

    assert len(segments) == 3
    assert segments[0][0] == geometry[0]
    assert segments[-1][-1] == geometry[-1]


def test_split_anchors_endpoints_when_depot_is_off_the_route():
    geometry = [(1, 1), (2, 2), (3, 3)]

    segments = split_geometry_into_segments(geometry, [_stop(2, 2)], Depot(lat=10, lng=10))

    assert segments[0][0] == (1, 1)
    assert segments[-1][-1] == (3, 3)


def test_split_collapsed_stops_get_two_point_segments():
    geometry = [(0, 0), (1, 0), (2, 0)]
    stops = [_stop(0, 1), _stop(0, 1)]

    segments = split_geometry_into_segments(geometry, stops, Depot(lat=0, lng=0))

    assert len(segments) == 3
    assert segments[1] == [(1, 0), (2, 0)]
    assert all(len(segment) == 2 for segment in segments)


def test_split_search_only_moves_forward():
    # The stop sits next to the outbound leg but is visited on the way back.
    geometry = [(0, 0), (1, 0), (2, 0), (2, 1), (1, 1), (0, 1)]
    stops = [_stop(0, 2), _stop(0.4, 1)]

    segments = split_geometry_into_segments(geometry, stops, Depot(lat=1, lng=0))

    assert segments[1][0] == (2, 0)
    assert segments[1][-1] == (1, 1)


def test_split_skips_non_finite_geometry_points():
    geometry = [(0, 0), (math.nan, math.nan), (1, 1), (math.inf, 0), (0, 0)]

    segments = split_geometry_into_segments(geometry, [_stop(1, 1)], Depot(lat=0, lng=0))

    assert len(segments) == 2
    assert segments[0][-1] == (1, 1)
    assert segments[1][-1] == (0, 0)


def test_split_non_finite_stop_maps_to_search_start():
    geometry = [(0, 0), (1, 0), (2, 0), (3, 0), (2, 0), (1, 0), (0, 0)]
    stops = [_stop(0, 1), _stop(math.nan, math.nan), _stop(0, 3)]

    segments = split_geometry_into_segments(geometry, stops, Depot(lat=0, lng=0))

    assert len(segments) == len(stops) + 1
    assert all(len(segment) >= 2 for segment in segments)
    assert segments[0] == [(0, 0), (1, 0)]
    assert segments[1] == [(1, 0), (2, 0)]
    assert segments[2] == [(1, 0), (2, 0), (3, 0)]
    assert segments[3][-1] == (0, 0)


def test_split_single_non_finite_stop():
    geometry = [(0, 0), (1, 1), (0, 0)]

    segments = split_geometry_into_segments(geometry, [_stop(math.nan, math.nan)], Depot(lat=0, lng=0))

    assert len(segments) == 2
    assert all(len(segment) >= 2 for segment in segments)
    assert segments[0] == [(0, 0), (1, 1)]
    assert segments[1] == [(0, 0), (1, 1), (0, 0)]


def test_split_does_not_mutate_inputs():
    geometry = [(0, 0), (1, 1), (0, 0)]
    snapshot = list(geometry)

    segments = split_geometry_into_segments(geometry, [_stop(1, 1)], Depot(lat=0, lng=0))
    segments[0].append((9, 9))

    assert geometry == snapshot


def test_straight_line_depot_only_yields_single_segment():
    assert len(build_straight_line_segments([], Depot(lat=0, lng=0))) == 1


def test_straight_line_segments_connect_in_order():
    stops = [_stop(1, 1), _stop(2, 2)]

    segments = build_straight_line_segments(stops, Depot(lat=0, lng=0))

    assert segments == [
        [(0, 0), (1, 1)],
        [(1, 1), (2, 2)],
        [(2, 2), (0, 0)],
    ]


def test_straight_line_without_depot_connects_stops_only():
    stops = [_stop(1, 1), _stop(2, 2), _stop(3, 3)]

    segments = build_straight_line_segments(stops, None)

    assert len(segments) == len(stops) - 1
    assert segments[0] == [(1, 1), (2, 2)]


def test_straight_line_without_depot_needs_two_stops():
    assert build_straight_line_segments([_stop(1, 1)], None) == []
    assert build_straight_line_segments([], None) == []


class TestSegmentLabel:
    stops = [_stop(0, 0, "Jana"), _stop(0, 0, "Karel"), _stop(0, 0, "Marie")]

    def test_first_segment_starts_at_depot(self):
        assert get_segment_label(0, self.stops, "Depot Brno") == SegmentLabel("Depot Brno", "Jana")

    def test_middle_segment_joins_stops(self):
        assert get_segment_label(1, self.stops, "Depot Brno") == SegmentLabel("Jana", "Karel")

    def test_last_segment_returns_to_depot(self):
        assert get_segment_label(3, self.stops, "Depot Brno") == SegmentLabel("Marie", "Depot Brno")

    def test_default_depot_name(self):
        assert get_segment_label(0, self.stops).from_name == "Depot"

    def test_empty_stops(self):
        assert get_segment_label(0, [], "Depot") == SegmentLabel("Depot", "Depot")

    def test_unnamed_stops_use_position(self):
        stops = [_stop(0, 0), _stop(1, 1, "B")]

        assert get_segment_label(1, stops) == SegmentLabel("Point 1", "B")
        assert get_segment_label(0, stops) == SegmentLabel("Depot", "Point 1")
