"""Route geometry segmentation.

Splits a driving-route polyline into per-leg segments
(depot -> stop 1 -> ... -> stop N -> depot), builds straight-line fallbacks
when no routed geometry is available, and labels segments for display.

The depot is pinned to the first and last polyline points. Stops are matched
with a forward-only nearest-point scan: each stop is searched for starting at
the index matched by the previous one.
This assumes the geometry is roughly monotonic along the travel direction; a
route that loops back close to an earlier point can yield a suboptimal match.
"""

from __future__ import annotations

import logging
import math
from typing import Optional, Sequence

from ...models.domain import Coordinate, Depot, Segment, SegmentLabel, Waypoint

logger = logging.getLogger(__name__)

DEFAULT_DEPOT_NAME = "Depot"


def _anchor_chain(stops: Sequence[Waypoint], depot: Optional[Depot]) -> list[Coordinate]:
    stop_coords = [stop.as_coordinate() for stop in stops]
    if depot is None:
        return stop_coords
    depot_coord = depot.as_coordinate()
    return [depot_coord, *stop_coords, depot_coord]


def _nearest_index(geometry: Sequence[Coordinate], anchor: Coordinate, start: int) -> int:
    """Index of the geometry point closest to ``anchor`` at or after ``start``.

    Non-finite geometry points are never selected. If no finite candidate is
    closer than infinity (e.g. the anchor itself is NaN) ``start`` is returned.
    """

    best_index = start
    best_distance = math.inf
    ax, ay = anchor[0], anchor[1]
    for index in range(start, len(geometry)):
        x, y = geometry[index][0], geometry[index][1]
        if not (math.isfinite(x) and math.isfinite(y)):
            continue
        dx = x - ax
        dy = y - ay
        distance = dx * dx + dy * dy
        if distance < best_distance:
            best_distance = distance
            best_index = index
    return best_index


def split_geometry_into_segments(
    geometry: Sequence[Coordinate],
    stops: Sequence[Waypoint],
    depot: Depot,
) -> list[Segment]:
    """Split a full route geometry into one segment per leg.

    Returns ``len(stops) + 1`` segments for non-empty geometry, each with at
    least two points, or ``[]`` when there is nothing to split.
    """

    anchors = _anchor_chain(stops, depot)
    if not geometry or len(anchors) < 2:
        return []

    last = len(geometry) - 1

    # The depot legs start and end at the true route endpoints.
    indices = [0]
    search_start = 0
    for anchor in anchors[1:-1]:
        index = _nearest_index(geometry, anchor, search_start)
        indices.append(index)
        search_start = index
    indices.append(last)

    segments: list[Segment] = []
    for start, end in zip(indices, indices[1:]):
        if end > start:
            segments.append(list(geometry[start : end + 1]))
        else:
            logger.debug(f"Anchors collapsed onto geometry index {start}; emitting 2-point segment")
            segments.append([geometry[start], geometry[min(start + 1, last)]])
    return segments


def build_straight_line_segments(
    stops: Sequence[Waypoint],
    depot: Optional[Depot],
) -> list[Segment]:
    """Connect consecutive waypoints with straight 2-point segments.

    Without a depot the depot legs are omitted and only the stops are chained.
    """

    anchors = _anchor_chain(stops, depot)
    if len(anchors) < 2:
        return []
    return [[start, end] for start, end in zip(anchors, anchors[1:])]


def _stop_name(stops: Sequence[Waypoint], index: int) -> str:
    name = stops[index].name if 0 <= index < len(stops) else None
    return name or f"Point {index + 1}"


def get_segment_label(
    segment_index: int,
    stops: Sequence[Waypoint],
    depot_name: str = DEFAULT_DEPOT_NAME,
) -> SegmentLabel:
    """Human-readable endpoints of a depot-anchored segment.

    Segment 0 is depot -> stop 1, segment ``i`` is stop ``i`` -> stop ``i + 1``
    and segment ``len(stops)`` is the last stop -> depot.
    """

    from_name = depot_name if segment_index <= 0 else _stop_name(stops, segment_index - 1)
    to_name = depot_name if segment_index >= len(stops) else _stop_name(stops, segment_index)
    return SegmentLabel(from_name=from_name, to_name=to_name)
