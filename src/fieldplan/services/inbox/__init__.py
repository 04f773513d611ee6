"""Planning inbox filter helpers."""

from .filters import (
    FILTER_PRESETS,
    FilterAst,
    InboxFilterExpression,
    InboxFilterGroups,
    TokenGroup,
    TokenSetNode,
    TriStateNode,
    apply_filter_preset,
    apply_inbox_filters,
    build_filter_summary,
    create_default_expression,
    create_empty_expression,
    deserialize_expression,
    evaluate_candidate,
    expression_to_dict,
    get_active_filter_count,
    has_advanced_criteria,
    map_expression_to_call_queue_request,
    normalize_expression,
    serialize_expression,
    to_filter_ast,
    toggle_token,
)

__all__ = [
    "FILTER_PRESETS",
    "FilterAst",
    "InboxFilterExpression",
    "InboxFilterGroups",
    "TokenGroup",
    "TokenSetNode",
    "TriStateNode",
    "apply_filter_preset",
    "apply_inbox_filters",
    "build_filter_summary",
    "create_default_expression",
    "create_empty_expression",
    "deserialize_expression",
    "evaluate_candidate",
    "expression_to_dict",
    "get_active_filter_count",
    "has_advanced_criteria",
    "map_expression_to_call_queue_request",
    "normalize_expression",
    "serialize_expression",
    "to_filter_ast",
    "toggle_token",
]
