"""Domain models for route waypoints and scheduling candidates."""

from dataclasses import dataclass
from datetime import date
from typing import Optional

# (lng, lat) in decimal degrees, GeoJSON order.
Coordinate = tuple[float, float]
Segment = list[Coordinate]


@dataclass(slots=True, frozen=True)
class LatLng:
    lat: float
    lng: float


@dataclass(slots=True, frozen=True)
class Waypoint:
    """A stop on the route, connected to its neighbours in order."""

    coordinates: LatLng
    name: Optional[str] = None

    def as_coordinate(self) -> Coordinate:
        return (self.coordinates.lng, self.coordinates.lat)


@dataclass(slots=True, frozen=True)
class Depot:
    """Start and end anchor of a route."""

    lat: float
    lng: float
    name: Optional[str] = None

    def as_coordinate(self) -> Coordinate:
        return (self.lng, self.lat)


@dataclass(slots=True, frozen=True)
class SegmentLabel:
    from_name: str
    to_name: str


@dataclass(slots=True)
class Candidate:
    """Scheduling-queue item as read by the inbox filters."""

    id: str
    customer_id: str
    status: str
    days_until_due: int
    customer_phone: Optional[str] = None
    customer_geocode_status: Optional[str] = None
    customer_lat: Optional[float] = None
    customer_lng: Optional[float] = None
    customer_name: Optional[str] = None
    due_date: Optional[date] = None
    priority: Optional[str] = None
