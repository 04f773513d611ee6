"""Route segmentation request/response schemas."""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field, FiniteFloat


class DepotModel(BaseModel):
    lat: float = Field(..., ge=-90, le=90, allow_inf_nan=False)
    lng: float = Field(..., ge=-180, le=180, allow_inf_nan=False)
    name: Optional[str] = None


class RouteStopModel(BaseModel):
    stop_id: str
    name: Optional[str] = None
    lat: Optional[float] = Field(default=None, ge=-90, le=90, allow_inf_nan=False)
    lng: Optional[float] = Field(default=None, ge=-180, le=180, allow_inf_nan=False)


class SegmentationRequest(BaseModel):
    stops: List[RouteStopModel]
    depot: Optional[DepotModel] = None
    geometry: Optional[List[tuple[FiniteFloat, FiniteFloat]]] = Field(
        default=None,
        description="Decoded routing-provider polyline as [lng, lat] pairs.",
    )
    depot_name: Optional[str] = Field(default=None, description="Overrides the depot label in segment names.")
    include_geojson: Optional[bool] = Field(
        default=None, description="Attach a GeoJSON FeatureCollection; defaults to the server setting."
    )


class SegmentLabelModel(BaseModel):
    from_name: str
    to_name: str


class SegmentationResponse(BaseModel):
    source: str
    segments: List[List[tuple[float, float]]]
    labels: List[SegmentLabelModel]
    distances_km: List[float]
    snapped_stops: Dict[str, tuple[float, float]]
    skipped_stop_ids: List[str]
    geojson: Optional[dict] = None
