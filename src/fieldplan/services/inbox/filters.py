"""Declarative inbox filters for the planning call queue.

An ``InboxFilterExpression`` holds two multi-select token groups (``time`` and
``problems``) and two tri-state scalars (``has_term`` and ``in_route``), all
combined by a root AND/OR operator. Disabled or empty groups and ``ANY``
tri-states add no constraint.

The expression is flattened into a ``FilterAst`` before evaluation so a single
candidate can be checked without walking the full expression shape.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import AbstractSet, Any, Iterable, Literal, Optional, Sequence, TypeVar, Union

from ...models.domain import Candidate

logger = logging.getLogger(__name__)

GroupOperator = Literal["AND", "OR"]
RootOperator = Literal["AND", "OR"]
TriState = Literal["ANY", "YES", "NO"]

TokenField = Literal["time", "problems"]
TriStateField = Literal["hasTerm", "inRoute"]
FilterPresetId = Literal["ALL", "URGENT", "THIS_WEEK", "THIS_MONTH", "HAS_TERM", "PROBLEMS"]

TIME_TOKENS: tuple[str, ...] = ("OVERDUE", "DUE_IN_7_DAYS", "DUE_IN_30_DAYS")
PROBLEM_TOKENS: tuple[str, ...] = ("MISSING_PHONE", "GEOCODE_FAILED")
SCHEDULED_STATUSES = frozenset({"scheduled", "confirmed"})

T = TypeVar("T")


@dataclass(slots=True)
class TokenGroup:
    enabled: bool = False
    operator: GroupOperator = "OR"
    selected: list[str] = field(default_factory=list)


@dataclass(slots=True)
class InboxFilterGroups:
    time: TokenGroup = field(default_factory=TokenGroup)
    problems: TokenGroup = field(default_factory=TokenGroup)
    has_term: TriState = "ANY"
    in_route: TriState = "ANY"


@dataclass(slots=True)
class InboxFilterExpression:
    root_operator: RootOperator = "AND"
    groups: InboxFilterGroups = field(default_factory=InboxFilterGroups)
    version: int = 1


@dataclass(slots=True, frozen=True)
class TokenSetNode:
    field: TokenField
    operator: GroupOperator
    tokens: tuple[str, ...]
    type: Literal["TOKENSET"] = "TOKENSET"


@dataclass(slots=True, frozen=True)
class TriStateNode:
    field: TriStateField
    value: TriState
    type: Literal["TRISTATE"] = "TRISTATE"


FilterNode = Union[TokenSetNode, TriStateNode]


@dataclass(slots=True, frozen=True)
class FilterAst:
    root_operator: RootOperator
    nodes: tuple[FilterNode, ...]


@dataclass(slots=True, frozen=True)
class FilterPreset:
    id: FilterPresetId
    label: str


FILTER_PRESETS: tuple[FilterPreset, ...] = (
    FilterPreset(id="ALL", label="All"),
    FilterPreset(id="URGENT", label="Urgent"),
    FilterPreset(id="THIS_WEEK", label="Due in 7 days"),
    FilterPreset(id="THIS_MONTH", label="Due in 30 days"),
    FilterPreset(id="HAS_TERM", label="Has appointment"),
    FilterPreset(id="PROBLEMS", label="Problems"),
)

TOKEN_LABELS: dict[str, str] = {
    "OVERDUE": "Overdue",
    "DUE_IN_7_DAYS": "Due in 7 days",
    "DUE_IN_30_DAYS": "Due in 30 days",
    "MISSING_PHONE": "Missing phone",
    "GEOCODE_FAILED": "Geocode failed",
}


# --- factories ------------------------------------------------------------


def create_empty_expression() -> InboxFilterExpression:
    """Expression with every group disabled and every tri-state ``ANY``."""
    return InboxFilterExpression()


def create_default_expression() -> InboxFilterExpression:
    """Default inbox view: candidates due within the next 7 days."""
    return InboxFilterExpression(
        root_operator="AND",
        groups=InboxFilterGroups(
            time=TokenGroup(enabled=True, operator="OR", selected=["DUE_IN_7_DAYS"]),
        ),
    )


# --- candidate predicates -------------------------------------------------


def is_scheduled_candidate(candidate: Candidate) -> bool:
    return candidate.status in SCHEDULED_STATUSES


def has_phone(candidate: Candidate) -> bool:
    return candidate.customer_phone is not None and candidate.customer_phone.strip() != ""


def has_valid_address(candidate: Candidate) -> bool:
    return (
        candidate.customer_geocode_status == "success"
        and candidate.customer_lat is not None
        and candidate.customer_lng is not None
    )


def _token_matches(candidate: Candidate, token: str) -> bool:
    match token:
        case "OVERDUE":
            return candidate.days_until_due < 0
        case "DUE_IN_7_DAYS":
            return candidate.days_until_due <= 7
        case "DUE_IN_30_DAYS":
            return candidate.days_until_due <= 30
        case "MISSING_PHONE":
            return not has_phone(candidate)
        case "GEOCODE_FAILED":
            return not has_valid_address(candidate)
        case _:
            return False


# --- normalization --------------------------------------------------------


def _pick(source: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in source:
            return source[key]
    return None


def _as_mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _is_operator(value: Any) -> bool:
    return value in ("AND", "OR")


def _is_tri_state(value: Any) -> bool:
    return value in ("ANY", "YES", "NO")


def _normalize_group(raw: Any, base: TokenGroup, allowed: Sequence[str]) -> TokenGroup:
    source = _as_mapping(raw)
    enabled = source.get("enabled")
    operator = source.get("operator")
    selected = source.get("selected")
    if not isinstance(selected, (list, tuple)):
        selected = base.selected
    return TokenGroup(
        enabled=enabled if isinstance(enabled, bool) else base.enabled,
        operator=operator if _is_operator(operator) else base.operator,
        selected=[token for token in selected if token in allowed],
    )


def expression_to_dict(expression: InboxFilterExpression) -> dict[str, Any]:
    """Serializable camelCase shape, as stored in URLs and preferences."""
    groups = expression.groups
    return {
        "version": expression.version,
        "rootOperator": expression.root_operator,
        "groups": {
            "time": {
                "enabled": groups.time.enabled,
                "operator": groups.time.operator,
                "selected": list(groups.time.selected),
            },
            "problems": {
                "enabled": groups.problems.enabled,
                "operator": groups.problems.operator,
                "selected": list(groups.problems.selected),
            },
            "hasTerm": groups.has_term,
            "inRoute": groups.in_route,
        },
    }


def normalize_expression(
    partial: Union[InboxFilterExpression, Mapping[str, Any], None] = None,
) -> InboxFilterExpression:
    """Fill missing or invalid parts of ``partial`` from the default expression.

    Always returns a new expression that shares no lists with the input.
    Accepts camelCase (``rootOperator``, ``hasTerm``, ``inRoute``) and
    snake_case keys. Unknown tokens are dropped.
    """
    base = create_default_expression()
    if partial is None:
        return base
    if isinstance(partial, InboxFilterExpression):
        partial = expression_to_dict(partial)

    source = _as_mapping(partial)
    groups = _as_mapping(source.get("groups"))
    root_operator = _pick(source, "rootOperator", "root_operator")
    has_term = _pick(groups, "hasTerm", "has_term")
    in_route = _pick(groups, "inRoute", "in_route")

    return InboxFilterExpression(
        root_operator="OR" if root_operator == "OR" else "AND",
        groups=InboxFilterGroups(
            time=_normalize_group(groups.get("time"), base.groups.time, TIME_TOKENS),
            problems=_normalize_group(groups.get("problems"), base.groups.problems, PROBLEM_TOKENS),
            has_term=has_term if _is_tri_state(has_term) else base.groups.has_term,
            in_route=in_route if _is_tri_state(in_route) else base.groups.in_route,
        ),
    )


def serialize_expression(expression: InboxFilterExpression) -> str:
    return json.dumps(expression_to_dict(expression), separators=(",", ":"))


def deserialize_expression(raw: Optional[str]) -> InboxFilterExpression:
    """Restore an expression from JSON, falling back to the default on bad input."""
    if not raw:
        return create_default_expression()
    try:
        parsed = json.loads(raw)
    except (json.JSONDecodeError, TypeError) as exc:
        logger.warning(f"Ignoring unreadable inbox filter expression: {exc}")
        return create_default_expression()
    if not isinstance(parsed, Mapping):
        logger.warning(f"Ignoring inbox filter expression of type {type(parsed).__name__}")
        return create_default_expression()
    return normalize_expression(parsed)


# --- AST and evaluation ---------------------------------------------------


def _known_tokens(group: TokenGroup, allowed: Sequence[str]) -> tuple[str, ...]:
    """Selected tokens of an enabled group, minus any the engine doesn't know."""
    if not group.enabled:
        return ()
    return tuple(token for token in group.selected if token in allowed)


def to_filter_ast(expression: InboxFilterExpression) -> FilterAst:
    """Flatten the active parts of ``expression`` into predicate nodes.

    Node order is fixed: time, problems, hasTerm, inRoute. Unknown tokens are
    dropped here too, so a hand-built expression evaluates like a normalized one.
    """
    groups = expression.groups
    nodes: list[FilterNode] = []

    time_tokens = _known_tokens(groups.time, TIME_TOKENS)
    if time_tokens:
        nodes.append(TokenSetNode(field="time", operator=groups.time.operator, tokens=time_tokens))
    problem_tokens = _known_tokens(groups.problems, PROBLEM_TOKENS)
    if problem_tokens:
        nodes.append(TokenSetNode(field="problems", operator=groups.problems.operator, tokens=problem_tokens))
    if groups.has_term != "ANY":
        nodes.append(TriStateNode(field="hasTerm", value=groups.has_term))
    if groups.in_route != "ANY":
        nodes.append(TriStateNode(field="inRoute", value=groups.in_route))

    return FilterAst(root_operator=expression.root_operator, nodes=tuple(nodes))


def _combine(results: Iterable[bool], operator: str) -> bool:
    return all(results) if operator == "AND" else any(results)


def _evaluate_node(candidate: Candidate, node: FilterNode, in_route_ids: AbstractSet[str]) -> bool:
    if isinstance(node, TokenSetNode):
        return _combine((_token_matches(candidate, token) for token in node.tokens), node.operator)

    if node.field == "hasTerm":
        actual = is_scheduled_candidate(candidate)
    else:
        actual = candidate.customer_id in in_route_ids
    return actual if node.value == "YES" else not actual


def evaluate_candidate(
    candidate: Candidate,
    ast: FilterAst,
    in_route_ids: AbstractSet[str],
) -> bool:
    """Check one candidate against a prebuilt AST. No nodes means no filter."""
    if not ast.nodes:
        return True
    return _combine((_evaluate_node(candidate, node, in_route_ids) for node in ast.nodes), ast.root_operator)


def apply_inbox_filters(
    candidates: Sequence[Candidate],
    expression: Union[InboxFilterExpression, Mapping[str, Any], None],
    in_route_ids: AbstractSet[str],
) -> list[Candidate]:
    ast = to_filter_ast(normalize_expression(expression))
    return [candidate for candidate in candidates if evaluate_candidate(candidate, ast, in_route_ids)]


# --- UI helpers -----------------------------------------------------------


def get_active_filter_count(expression: InboxFilterExpression) -> int:
    """Number of active predicates, one per AST node."""
    return len(to_filter_ast(expression).nodes)


def toggle_token(values: Sequence[T], value: T) -> list[T]:
    if value in values:
        return [entry for entry in values if entry != value]
    return [*values, value]


def _time_only(base: InboxFilterExpression, tokens: list[str]) -> InboxFilterExpression:
    return InboxFilterExpression(
        root_operator="AND",
        groups=InboxFilterGroups(
            time=TokenGroup(enabled=True, operator="OR", selected=tokens),
            problems=TokenGroup(),
            has_term="ANY",
            in_route="ANY",
        ),
        version=base.version,
    )


def apply_filter_preset(
    preset_id: FilterPresetId,
    current: Union[InboxFilterExpression, Mapping[str, Any], None] = None,
) -> InboxFilterExpression:
    """Apply a quick-filter preset on top of ``current``."""
    base = normalize_expression(current)

    match preset_id:
        case "ALL":
            return create_empty_expression()
        case "URGENT":
            return _time_only(base, ["OVERDUE", "DUE_IN_7_DAYS"])
        case "THIS_WEEK":
            return _time_only(base, ["DUE_IN_7_DAYS"])
        case "THIS_MONTH":
            return _time_only(base, ["DUE_IN_30_DAYS"])
        case "HAS_TERM":
            return InboxFilterExpression(
                root_operator="AND",
                groups=InboxFilterGroups(
                    time=TokenGroup(enabled=False, operator=base.groups.time.operator, selected=[]),
                    problems=TokenGroup(),
                    has_term="YES",
                    in_route="ANY",
                ),
            )
        case "PROBLEMS":
            return InboxFilterExpression(
                root_operator="AND",
                groups=InboxFilterGroups(
                    time=TokenGroup(enabled=False, operator=base.groups.time.operator, selected=[]),
                    problems=TokenGroup(enabled=True, operator="OR", selected=list(PROBLEM_TOKENS)),
                    has_term="ANY",
                    in_route="ANY",
                ),
            )
        case _:
            raise ValueError(f"Unknown filter preset '{preset_id}'.")


def has_advanced_criteria(expression: InboxFilterExpression) -> bool:
    """True when the quick-filter chips cannot represent ``expression``.

    That is a root OR, an active group combined with AND, or more than one
    active group/tri-state at once (every preset activates exactly one).
    """
    if expression.root_operator != "AND":
        return True
    nodes = to_filter_ast(expression).nodes
    if any(isinstance(node, TokenSetNode) and node.operator != "OR" for node in nodes):
        return True
    return len(nodes) > 1


def _group_clause(title: str, node: TokenSetNode) -> str:
    labels = [TOKEN_LABELS[token] for token in node.tokens]
    return f"{title}: ({f' {node.operator} '.join(labels)})"


def build_filter_summary(expression: InboxFilterExpression) -> str:
    groups = expression.groups
    token_nodes = {node.field: node for node in to_filter_ast(expression).nodes if isinstance(node, TokenSetNode)}
    parts: list[str] = []

    if "time" in token_nodes:
        parts.append(_group_clause("New revision", token_nodes["time"]))
    if "problems" in token_nodes:
        parts.append(_group_clause("Problems", token_nodes["problems"]))
    if groups.has_term != "ANY":
        parts.append(f"Appointment = {'Has' if groups.has_term == 'YES' else 'Has none'}")
    if groups.in_route != "ANY":
        parts.append(f"Route = {'In route' if groups.in_route == 'YES' else 'Not in route'}")

    if not parts:
        return "No filters"
    return f" {expression.root_operator} ".join(parts)


def map_expression_to_call_queue_request(
    expression: InboxFilterExpression,
    geocoded_only: bool,
) -> dict[str, Any]:
    """Backend narrowing for the call-queue request.

    Only a single selected time token narrows the server-side query; anything
    richer is filtered client-side.
    """
    priority_filter = "all"
    time_group = expression.groups.time
    if time_group.enabled and len(time_group.selected) == 1:
        token = time_group.selected[0]
        if token == "OVERDUE":
            priority_filter = "overdue"
        elif token == "DUE_IN_7_DAYS":
            priority_filter = "due_soon"
    return {"priority_filter": priority_filter, "geocoded_only": geocoded_only}
