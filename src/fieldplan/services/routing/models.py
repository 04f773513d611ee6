"""Routing domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Optional

from ...models.domain import Coordinate, Segment, SegmentLabel

SegmentSource = Literal["geometry", "straight_line", "empty"]


@dataclass(slots=True)
class RouteStop:
    stop_id: str
    name: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None

    @property
    def is_mappable(self) -> bool:
        return self.lat is not None and self.lng is not None


@dataclass(slots=True)
class SegmentedRoute:
    source: SegmentSource
    segments: List[Segment]
    labels: List[SegmentLabel]
    distances_km: List[float]
    snapped_stops: dict[str, Coordinate] = field(default_factory=dict)
    skipped_stop_ids: List[str] = field(default_factory=list)
