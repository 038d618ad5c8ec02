"""
Convenience constructors.

One-call helpers for the common component shapes, plus small factories
for states, rules and filter fields.

Example:
    spec = tabs("profile", [
        active_state("info", "Info", info_content),
        new_state("settings", "Settings", settings_content),
    ])
    html = spec.render().html
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from dynui.core.builder import Dyn
from dynui.specs.component import ComponentSpec
from dynui.specs.data import FilterableDataset, FilterableField, FilterOptions, FilterSchema, RangeInfo
from dynui.specs.rules import ActionKind, DependencyAction, DependencyRule, TriggerCondition
from dynui.specs.state import ComponentState
from dynui.themes.base import DynamicTheme

Records = Sequence[Mapping[str, Any]]


def _dataset(
    data: Records,
    schema: FilterSchema | Iterable[FilterableField] | None,
    options: FilterOptions | None = None,
) -> FilterableDataset:
    if schema is None:
        schema = FilterSchema()
    elif not isinstance(schema, FilterSchema):
        schema = FilterSchema(fields=list(schema))
    return FilterableDataset(
        items=[dict(item) for item in data],
        filter_schema=schema,
        options=options or FilterOptions(),
    )


# =============================================================================
# Single-pattern components
# =============================================================================


def tabs(id: str, states: Sequence[ComponentState], theme: DynamicTheme | None = None) -> ComponentSpec:
    """A tabbed interface."""
    builder = Dyn(id).states(states)
    if theme is not None:
        builder.theme(theme)
    return builder.build()


def filter_view(
    id: str,
    data: Records,
    schema: FilterSchema | Iterable[FilterableField] | None = None,
    options: FilterOptions | None = None,
) -> ComponentSpec:
    """A filterable data view. With no schema, fields are inferred from the first record."""
    return Dyn(id).data(_dataset(data, schema, options)).build()


def form(id: str, rules: Sequence[DependencyRule]) -> ComponentSpec:
    """A form driven by dependency rules on existing page elements."""
    return Dyn(id).rules(rules).build()


# =============================================================================
# Combinations
# =============================================================================


def tabs_with_data(
    id: str,
    states: Sequence[ComponentState],
    data: Records,
    schema: FilterSchema | Iterable[FilterableField] | None = None,
) -> ComponentSpec:
    """Tabs over a shared filterable dataset."""
    return Dyn(id).states(states).data(_dataset(data, schema)).build()


def tabs_with_rules(
    id: str, states: Sequence[ComponentState], rules: Sequence[DependencyRule]
) -> ComponentSpec:
    """Tabs whose availability is controlled by dependency rules."""
    return Dyn(id).states(states).rules(rules).build()


def filter_with_rules(
    id: str,
    data: Records,
    schema: FilterSchema | Iterable[FilterableField] | None,
    rules: Sequence[DependencyRule],
) -> ComponentSpec:
    """A filterable view with dependency rules."""
    return Dyn(id).data(_dataset(data, schema)).rules(rules).build()


def dynamic(
    id: str,
    states: Sequence[ComponentState],
    data: Records,
    schema: FilterSchema | Iterable[FilterableField] | None,
    rules: Sequence[DependencyRule],
) -> ComponentSpec:
    """A component using states, data and rules together."""
    return Dyn(id).states(states).data(_dataset(data, schema)).rules(rules).build()


# =============================================================================
# State helpers
# =============================================================================


def new_state(id: str, label: str, content: Any = None) -> ComponentState:
    return ComponentState(id=id, label=label, content=content)


def active_state(id: str, label: str, content: Any = None) -> ComponentState:
    return ComponentState(id=id, label=label, content=content, active=True)


# =============================================================================
# Rule helpers
# =============================================================================


def _single_action_rule(
    action: ActionKind, trigger_id: str, condition: str, value: Any, target_id: str
) -> DependencyRule:
    return DependencyRule(
        id=f"{action.value}-{target_id}-when-{trigger_id}",
        trigger=TriggerCondition(
            component_id=trigger_id, event="change", condition=condition, value=value
        ),
        actions=[DependencyAction(target_id=target_id, action=action.value)],
    )


def show_when(trigger_id: str, condition: str, value: Any, target_id: str) -> DependencyRule:
    """
    Show ``target_id`` while the trigger condition holds.

    The target is also hidden while it does not hold.
    """
    return _single_action_rule(ActionKind.SHOW, trigger_id, condition, value, target_id)


def hide_when(trigger_id: str, condition: str, value: Any, target_id: str) -> DependencyRule:
    return _single_action_rule(ActionKind.HIDE, trigger_id, condition, value, target_id)


def enable_when(trigger_id: str, condition: str, value: Any, target_id: str) -> DependencyRule:
    return _single_action_rule(ActionKind.ENABLE, trigger_id, condition, value, target_id)


def disable_when(trigger_id: str, condition: str, value: Any, target_id: str) -> DependencyRule:
    return _single_action_rule(ActionKind.DISABLE, trigger_id, condition, value, target_id)


# =============================================================================
# Filter field helpers
# =============================================================================


def text_field(name: str, label: str = "") -> FilterableField:
    return FilterableField(name=name, type="text", label=label, searchable=True)


def select_field(name: str, label: str = "", options: Iterable[str] = ()) -> FilterableField:
    return FilterableField(name=name, type="select", label=label, options=list(options))


def multiselect_field(name: str, label: str = "", options: Iterable[str] = ()) -> FilterableField:
    return FilterableField(name=name, type="multiselect", label=label, options=list(options))


def bool_field(name: str, label: str = "") -> FilterableField:
    return FilterableField(name=name, type="boolean", label=label)


def range_field(
    name: str, label: str = "", min: float = 0, max: float = 100, step: float = 1
) -> FilterableField:
    return FilterableField(
        name=name, type="range", label=label, range=RangeInfo(min=min, max=max, step=step)
    )
