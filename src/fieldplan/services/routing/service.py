"""Route segmentation orchestration."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from ...config import settings
from ...models.domain import Coordinate, Depot, LatLng, SegmentLabel, Waypoint
from ..geospatial import path_length_km
from .geometry import (
    build_straight_line_segments,
    get_segment_label,
    split_geometry_into_segments,
)
from .models import RouteStop, SegmentedRoute

logger = logging.getLogger(__name__)


def _to_waypoints(stops: Sequence[RouteStop]) -> list[Waypoint]:
    return [
        Waypoint(coordinates=LatLng(lat=stop.lat, lng=stop.lng), name=stop.name)
        for stop in stops
    ]


def segment_label_for_chain(segment_index: int, waypoints: Sequence[Waypoint]) -> SegmentLabel:
    """Label for a depot-less chain where segment ``i`` joins stop ``i`` and ``i + 1``."""

    def _name(index: int) -> str:
        name = waypoints[index].name if 0 <= index < len(waypoints) else None
        return name or f"Point {index + 1}"

    return SegmentLabel(from_name=_name(segment_index), to_name=_name(segment_index + 1))


def build_route_segments(
    stops: Sequence[RouteStop],
    depot: Optional[Depot],
    geometry: Optional[Sequence[Coordinate]] = None,
    depot_name: Optional[str] = None,
) -> SegmentedRoute:
    """Segment a route for map display.

    Stops without coordinates are skipped. Routed geometry is preferred; when
    it is missing the waypoints are joined with straight lines instead.
    """

    mappable = [stop for stop in stops if stop.is_mappable]
    skipped = [stop.stop_id for stop in stops if not stop.is_mappable]
    if skipped:
        logger.info(f"Skipping {len(skipped)} stop(s) without coordinates")

    if not mappable:
        return SegmentedRoute(
            source="empty", segments=[], labels=[], distances_km=[], skipped_stop_ids=skipped
        )

    waypoints = _to_waypoints(mappable)
    label_depot = depot_name or (depot.name if depot else None) or settings.default_depot_name
    snapped: dict[str, Coordinate] = {}

    if geometry:
        # Without a depot the first stop stands in as the route anchor.
        effective_depot = depot or Depot(lat=mappable[0].lat, lng=mappable[0].lng)
        logger.debug(f"Splitting geometry of {len(geometry)} points across {len(waypoints)} stops")
        segments = split_geometry_into_segments(geometry, waypoints, effective_depot)
        source = "geometry"
        if depot is not None:
            for stop, segment in zip(mappable, segments):
                snapped[stop.stop_id] = segment[-1]
    else:
        logger.debug(f"No routed geometry; joining {len(waypoints)} stops with straight lines")
        segments = build_straight_line_segments(waypoints, depot)
        source = "straight_line"

    if depot is not None or source == "geometry":
        labels = [get_segment_label(index, waypoints, label_depot) for index in range(len(segments))]
    else:
        labels = [segment_label_for_chain(index, waypoints) for index in range(len(segments))]

    return SegmentedRoute(
        source=source if segments else "empty",
        segments=segments,
        labels=labels,
        distances_km=[round(path_length_km(segment), 3) for segment in segments],
        snapped_stops=snapped,
        skipped_stop_ids=skipped,
    )
