"""Timeline planner endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...config import settings
from ...schemas.planner import SnapRequest, SnapResponse
from ...services.planner.snap import minutes_to_hm, snap_to_grid

router = APIRouter(prefix="/planner", tags=["planner"])


@router.post("/snap", response_model=SnapResponse, status_code=status.HTTP_200_OK)
def snap(payload: SnapRequest) -> SnapResponse:
    """Snap a dropped item onto the timeline grid; ``fits`` is false when the gap is too small."""
    start = snap_to_grid(
        payload.raw_minutes,
        payload.item_duration,
        payload.gap_start,
        payload.gap_end,
        grid_minutes=settings.snap_grid_minutes,
    )
    if start is None:
        return SnapResponse(fits=False)
    return SnapResponse(
        fits=True,
        start_minutes=start,
        start_time=minutes_to_hm(start),
        end_time=minutes_to_hm(start + payload.item_duration),
    )
