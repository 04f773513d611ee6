"""Route segmentation endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from ...config import settings
from ...models.domain import Depot
from ...schemas.routing import SegmentLabelModel, SegmentationRequest, SegmentationResponse
from ...services.export.geojson import segments_to_feature_collection
from ...services.routing.models import RouteStop
from ...services.routing.service import build_route_segments

router = APIRouter(prefix="/routes", tags=["routes"])


@router.post("/segments", response_model=SegmentationResponse, status_code=status.HTTP_200_OK)
def segments(payload: SegmentationRequest) -> SegmentationResponse:
    """Split a route into per-leg segments for map display."""
    try:
        depot = (
            Depot(lat=payload.depot.lat, lng=payload.depot.lng, name=payload.depot.name)
            if payload.depot
            else None
        )
        stops = [
            RouteStop(stop_id=stop.stop_id, name=stop.name, lat=stop.lat, lng=stop.lng)
            for stop in payload.stops
        ]
        result = build_route_segments(stops, depot, payload.geometry, payload.depot_name)

        include_geojson = (
            payload.include_geojson if payload.include_geojson is not None else settings.include_geojson
        )
        geojson = (
            segments_to_feature_collection(result.segments, result.labels, result.distances_km)
            if include_geojson
            else None
        )
        return SegmentationResponse(
            source=result.source,
            segments=[[tuple(point) for point in segment] for segment in result.segments],
            labels=[SegmentLabelModel(from_name=label.from_name, to_name=label.to_name) for label in result.labels],
            distances_km=result.distances_km,
            snapped_stops={stop_id: tuple(point) for stop_id, point in result.snapped_stops.items()},
            skipped_stop_ids=result.skipped_stop_ids,
            geojson=geojson,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error segmenting route: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to segment route: {str(exc)}",
        ) from exc
