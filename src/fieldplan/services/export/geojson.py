"""GeoJSON export of route segments for map layers."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from shapely.geometry import LineString, mapping

from ...models.domain import Segment, SegmentLabel


def generate_segment_color(index: int) -> str:
    """Generate distinct colors for consecutive route legs."""
    colors = [
        "#02d8e0", "#e0003e", "#38e000", "#0000c1", "#e0e005",
        "#611cc7", "#e0af00", "#13aae0", "#a4d819", "#00e0bb",
    ]
    return colors[index % len(colors)]


def segment_to_feature(
    index: int,
    segment: Segment,
    label: Optional[SegmentLabel] = None,
    distance_km: Optional[float] = None,
) -> Dict[str, Any]:
    """Convert one segment into a GeoJSON LineString feature.

    Args:
        index: Position of the segment along the route
        segment: List of (lng, lat) pairs, at least two
        label: Optional from/to names shown on hover
        distance_km: Optional precomputed leg length

    Returns:
        GeoJSON Feature dict
    """
    if len(segment) < 2:
        raise ValueError("LineString must have at least 2 coordinates")

    line = LineString([(float(lng), float(lat)) for lng, lat in segment])
    geometry = mapping(line)
    return {
        "type": "Feature",
        "geometry": {
            "type": geometry["type"],
            "coordinates": [list(point) for point in geometry["coordinates"]],
        },
        "properties": {
            "segmentIndex": index,
            "fromName": label.from_name if label else None,
            "toName": label.to_name if label else None,
            "distanceKm": distance_km,
            "color": generate_segment_color(index),
        },
    }


def segments_to_feature_collection(
    segments: Sequence[Segment],
    labels: Optional[Sequence[SegmentLabel]] = None,
    distances_km: Optional[Sequence[float]] = None,
) -> Dict[str, Any]:
    """Build a FeatureCollection with one feature per route segment."""
    features: List[Dict[str, Any]] = []
    for idx, segment in enumerate(segments):
        label = labels[idx] if labels is not None and idx < len(labels) else None
        distance = distances_km[idx] if distances_km is not None and idx < len(distances_km) else None
        features.append(segment_to_feature(idx, segment, label, distance))
    return {"type": "FeatureCollection", "features": features}


def save_feature_collection(collection: Dict[str, Any], output_path: Path) -> None:
    """Save a FeatureCollection as a .geojson file.

    Args:
        collection: GeoJSON FeatureCollection
        output_path: Path to save JSON file
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8") as f:
        json.dump(collection, f, indent=2, ensure_ascii=False)
