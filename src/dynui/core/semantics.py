"""
Python-side reference semantics.

The generated runtime filters records, evaluates trigger conditions and
plans rule actions in the browser. This module applies the same rules in
Python so that generation can pre-compute initial panel visibility and
rule order, and so a server can answer filter requests for
server-filterable components with identical results.
"""

from __future__ import annotations

import logging
import math
from collections import defaultdict
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from dynui.specs.data import FilterableDataset, FilterType
from dynui.specs.rules import ActionKind, ConditionOperator, DependencyAction, DependencyRule
from dynui.specs.state import ComponentState

logger = logging.getLogger(__name__)


# =============================================================================
# Conditions
# =============================================================================


def _to_number(value: Any) -> float:
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if value is None:
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(str(value).strip() or 0)
    except ValueError:
        return math.nan


def _range_number(value: Any) -> float | None:
    """A record value as a number for range bounds, or None when it has none."""
    if value is None:
        return None
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, (int, float)):
        return None if math.isnan(value) else float(value)
    text = str(value).strip()
    if not text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    return None if math.isnan(number) else number


def is_truthy(value: Any) -> bool:
    """Truthiness as the runtime sees it: empty lists and objects are still values."""
    if value is None or isinstance(value, bool):
        return bool(value)
    if isinstance(value, (int, float)):
        return value != 0 and not math.isnan(value)
    if isinstance(value, str):
        return value != ""
    return True


def loose_equals(left: Any, right: Any) -> bool:
    """Equality as the runtime compares form values (``"5"`` equals ``5``)."""
    if left is None or right is None:
        return left is None and right is None
    if type(left) is type(right):
        return left == right
    if isinstance(left, str) and isinstance(right, str):
        return left == right
    return _to_number(left) == _to_number(right)


def _to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def evaluate_condition(operator: str, value: Any, expected: Any = None) -> bool:
    """
    Evaluate a trigger condition against the trigger element's value.

    Unknown operators never match.
    """
    if operator == ConditionOperator.EQUALS.value:
        return loose_equals(value, expected)
    if operator == ConditionOperator.NOT_EQUALS.value:
        return not loose_equals(value, expected)
    if operator == ConditionOperator.CONTAINS.value:
        return _to_text(expected) in _to_text(value)
    if operator == ConditionOperator.GREATER_THAN.value:
        return _to_number(value) > _to_number(expected)
    if operator == ConditionOperator.LESS_THAN.value:
        return _to_number(value) < _to_number(expected)
    if operator == ConditionOperator.CHECKED.value:
        return value is True
    if operator == ConditionOperator.UNCHECKED.value:
        return value is False
    if operator == ConditionOperator.EMPTY.value:
        return not is_truthy(value)
    if operator == ConditionOperator.NOT_EMPTY.value:
        return is_truthy(value)

    logger.warning(f"Unknown condition operator '{operator}'")
    return False


# =============================================================================
# Filtering
# =============================================================================


def filter_is_active(filter_type: str, value: Any) -> bool:
    """Whether a filter value currently constrains results."""
    if filter_type in (FilterType.TEXT.value, FilterType.SELECT.value):
        return value is not None and _to_text(value) != ""
    if filter_type == FilterType.BOOLEAN.value:
        return value is True
    if filter_type == FilterType.MULTISELECT.value:
        return isinstance(value, (list, tuple, set)) and len(value) > 0
    if filter_type == FilterType.RANGE.value:
        return isinstance(value, Mapping) and (
            value.get("min") is not None or value.get("max") is not None
        )
    return False


def matches_filter(filter_type: str, item_value: Any, value: Any) -> bool:
    """
    Whether one record value passes one filter value.

    text: case-insensitive substring. boolean: exact. select: exact, any when
    empty. multiselect: membership, any when empty. range: inclusive bounds,
    open when a bound is missing; records without a numeric value never
    match. Unknown types match everything.

    Select and multiselect compare text forms, since control values are
    strings in the browser.
    """
    if filter_type == FilterType.TEXT.value:
        return _to_text(value).lower() in _to_text(item_value).lower()
    if filter_type == FilterType.BOOLEAN.value:
        return isinstance(item_value, bool) and item_value == value
    if filter_type == FilterType.SELECT.value:
        return value in (None, "") or _to_text(item_value) == _to_text(value)
    if filter_type == FilterType.MULTISELECT.value:
        return not value or _to_text(item_value) in {_to_text(v) for v in value}
    if filter_type == FilterType.RANGE.value:
        bounds = value or {}
        number = _range_number(item_value)
        if number is None:
            return False
        low = bounds.get("min")
        high = bounds.get("max")
        if low is not None and not number >= _to_number(low):
            return False
        if high is not None and not number <= _to_number(high):
            return False
        return True
    return True


def search_fields(dataset: FilterableDataset) -> list[str]:
    """Fields a free-text search looks in: the searchable ones, else every text field."""
    fields = dataset.resolved_fields()
    searchable = [f.name for f in fields if f.searchable]
    return searchable or [f.name for f in fields if f.type == FilterType.TEXT.value]


def matches_search(item: Mapping[str, Any], fields: Iterable[str], term: str) -> bool:
    """Case-insensitive substring match of ``term`` in any of ``fields``."""
    needle = term.lower()
    return any(needle in _to_text(item.get(name)).lower() for name in fields)


@dataclass
class FilterResult:
    """Outcome of filtering a dataset."""

    items: list[dict[str, Any]] = field(default_factory=list)
    total: int = 0
    page: int = 1
    pages: int = 1


def filter_items(
    dataset: FilterableDataset,
    filter_values: Mapping[str, Any],
    page: int | None = None,
    search: str | None = None,
) -> FilterResult:
    """
    Filter records the same way the runtime's data manager does.

    Args:
        dataset: Records, schema and options
        filter_values: Field name -> filter value; fields not in the schema are ignored
        page: 1-indexed page; paginates only when the dataset enables pagination
        search: Free-text search term; applies only when the dataset enables search

    Returns:
        FilterResult with the visible items and the total match count
    """
    fields = {f.name: f for f in dataset.resolved_fields()}
    active = []
    for name, value in filter_values.items():
        schema_field = fields.get(name)
        if schema_field is None:
            logger.warning(f"Ignoring filter on unknown field '{name}'")
            continue
        if filter_is_active(schema_field.type, value):
            active.append((name, schema_field.type, value))

    term = (search or "").strip()
    if term and not dataset.options.enable_search:
        logger.warning(f"Ignoring search '{term}': search is not enabled for this dataset")
        term = ""
    searched = search_fields(dataset) if term else []

    matched = [
        item
        for item in dataset.items
        if all(matches_filter(ftype, item.get(name), value) for name, ftype, value in active)
        and (not term or matches_search(item, searched, term))
    ]

    total = len(matched)
    if not dataset.options.enable_pagination or page is None:
        return FilterResult(items=matched, total=total)

    per_page = dataset.options.items_per_page
    pages = max(1, math.ceil(total / per_page))
    current = min(max(page, 1), pages)
    start = (current - 1) * per_page
    return FilterResult(items=matched[start : start + per_page], total=total, page=current, pages=pages)


# =============================================================================
# States
# =============================================================================


def select_initial_state(states: Sequence[ComponentState]) -> str | None:
    """
    The id of the initially active state.

    The first state marked active wins; with none marked, the first declared
    state is active.
    """
    if not states:
        return None
    marked = [state.id for state in states if state.active]
    if len(marked) > 1:
        logger.warning(f"Multiple active states {marked}, using '{marked[0]}'")
    return marked[0] if marked else states[0].id


# =============================================================================
# Rules
# =============================================================================


def order_rules(rules: Iterable[DependencyRule]) -> list[DependencyRule]:
    """Sort by descending priority. Ties keep declaration order."""
    return sorted(rules, key=lambda rule: -rule.priority)


def index_rules(rules: Iterable[DependencyRule]) -> dict[str, list[DependencyRule]]:
    """Ordered rules grouped by trigger element id."""
    index: dict[str, list[DependencyRule]] = defaultdict(list)
    for rule in order_rules(rules):
        index[rule.trigger.component_id].append(rule)
    return dict(index)


_OPPOSITE = {ActionKind.SHOW.value: ActionKind.HIDE.value, ActionKind.HIDE.value: ActionKind.SHOW.value}


@dataclass
class PlannedAction:
    """An action the runtime would apply, tagged with its rule."""

    rule_id: str
    target_id: str
    action: str
    value: Any = None


def plan_rule_actions(
    rules: Iterable[DependencyRule], trigger_id: str, value: Any
) -> tuple[list[PlannedAction], list[str]]:
    """
    Plan the actions fired when ``trigger_id`` takes ``value``.

    Show and hide actions apply the opposite visibility when the condition
    does not hold. Other actions run only when it holds.

    Returns:
        (planned actions in execution order, ids of rules whose condition held)
    """
    planned: list[PlannedAction] = []
    executed: list[str] = []

    for rule in index_rules(rules).get(trigger_id, []):
        met = evaluate_condition(rule.trigger.condition, value, rule.trigger.value)
        for action in rule.actions:
            kind = _planned_kind(action, met)
            if kind is not None:
                planned.append(
                    PlannedAction(rule_id=rule.id, target_id=action.target_id, action=kind, value=action.value)
                )
        if met:
            executed.append(rule.id)

    return planned, executed


def _planned_kind(action: DependencyAction, met: bool) -> str | None:
    if action.is_visibility:
        return action.action if met else _OPPOSITE[action.action]
    return action.action if met else None


def visibility_after(planned: Iterable[PlannedAction]) -> dict[str, bool]:
    """Final visibility per target after applying planned show/hide actions in order."""
    visible: dict[str, bool] = {}
    for step in planned:
        if step.action in _OPPOSITE:
            visible[step.target_id] = step.action == ActionKind.SHOW.value
    return visible
