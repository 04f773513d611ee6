"""Planning inbox filter endpoints."""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Any, Optional

from fastapi import APIRouter, Body, HTTPException, status

from ...models.domain import Candidate
from ...schemas.inbox import FilterPresetModel, InboxFilterRequest, InboxFilterResponse
from ...services.inbox import (
    FILTER_PRESETS,
    apply_filter_preset,
    build_filter_summary,
    evaluate_candidate,
    expression_to_dict,
    get_active_filter_count,
    has_advanced_criteria,
    normalize_expression,
    to_filter_ast,
)

router = APIRouter(prefix="/inbox", tags=["inbox"])


@router.get("/presets", response_model=list[FilterPresetModel], status_code=status.HTTP_200_OK)
def list_presets() -> list[FilterPresetModel]:
    return [FilterPresetModel(id=preset.id, label=preset.label) for preset in FILTER_PRESETS]


@router.post("/presets/{preset_id}", status_code=status.HTTP_200_OK)
def apply_preset(preset_id: str, expression: Optional[dict[str, Any]] = Body(default=None)) -> dict:
    """Apply a quick-filter preset to the current expression."""
    try:
        return expression_to_dict(apply_filter_preset(preset_id.upper(), expression))
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.post("/filter", response_model=InboxFilterResponse, status_code=status.HTTP_200_OK)
def filter_candidates(payload: InboxFilterRequest) -> InboxFilterResponse:
    try:
        expression = normalize_expression(payload.expression)
        ast = to_filter_ast(expression)
        in_route_ids = set(payload.in_route_ids)
        items = [
            model
            for model in payload.candidates
            if evaluate_candidate(Candidate(**model.model_dump()), ast, in_route_ids)
        ]
        return InboxFilterResponse(
            items=items,
            total=len(payload.candidates),
            matched=len(items),
            expression=expression_to_dict(expression),
            ast={"root_operator": ast.root_operator, "nodes": [asdict(node) for node in ast.nodes]},
            active_filter_count=get_active_filter_count(expression),
            summary=build_filter_summary(expression),
            advanced=has_advanced_criteria(expression),
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error filtering inbox candidates: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to filter candidates: {str(exc)}",
        ) from exc
