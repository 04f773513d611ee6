"""Timeline drop request/response schemas."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, model_validator


class SnapRequest(BaseModel):
    raw_minutes: float = Field(..., allow_inf_nan=False, description="Raw drop position in minutes from midnight.")
    item_duration: float = Field(..., ge=0, allow_inf_nan=False, description="Duration of the dropped item in minutes.")
    gap_start: float = Field(..., ge=0, allow_inf_nan=False, description="Gap start (inclusive), minutes from midnight.")
    gap_end: float = Field(..., ge=0, allow_inf_nan=False, description="Gap end (exclusive), minutes from midnight.")

    @model_validator(mode="after")
    def validate_gap(self) -> "SnapRequest":
        if self.gap_end < self.gap_start:
            raise ValueError("gap_end must be >= gap_start")
        return self


class SnapResponse(BaseModel):
    fits: bool
    start_minutes: Optional[int] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
