"""Geospatial helper functions."""

from __future__ import annotations

import math
from typing import Sequence

from ..models.domain import Coordinate

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def path_length_km(coordinates: Sequence[Coordinate]) -> float:
    """Length of a polyline given as (lng, lat) pairs."""

    total = 0.0
    for (lng1, lat1), (lng2, lat2) in zip(coordinates, coordinates[1:]):
        total += haversine_km(lat1, lng1, lat2, lng2)
    return total
