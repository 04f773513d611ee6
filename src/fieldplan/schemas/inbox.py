"""Pydantic request/response models for inbox filter endpoints."""

from __future__ import annotations

from datetime import date
from typing import Any, List, Optional

from pydantic import BaseModel, Field


class CandidateModel(BaseModel):
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


class InboxFilterRequest(BaseModel):
    candidates: List[CandidateModel]
    expression: Optional[dict[str, Any]] = Field(
        default=None,
        description="Filter expression (camelCase or snake_case keys); missing parts use the defaults.",
    )
    in_route_ids: List[str] = Field(default_factory=list, description="Customer ids already in the active route.")


class InboxFilterResponse(BaseModel):
    items: List[CandidateModel]
    total: int
    matched: int
    expression: dict[str, Any]
    ast: dict[str, Any]
    active_filter_count: int
    summary: str
    advanced: bool


class FilterPresetModel(BaseModel):
    id: str
    label: str
