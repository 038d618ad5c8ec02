"""
Component input and specification types.

Callers hand over up to three optional inputs (states, a dataset, rules).
They are normalized once, at the API boundary, into one variant of the
``ComponentInput`` tagged union. Nothing downstream inspects input shapes.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from dynui.specs.data import FilterableDataset
from dynui.specs.options import DynamicOptions
from dynui.specs.rules import DependencyRule
from dynui.specs.state import ComponentState
from dynui.themes.base import DynamicTheme

if TYPE_CHECKING:
    from dynui.core.render import RenderedComponent

# Renders one record to markup (used for server-rendered rows)
RowRenderer = Callable[[dict[str, Any]], Any]


@dataclass(frozen=True)
class InputFacts:
    """Presence and size facts consumed by pattern detection."""

    has_states: bool = False
    has_data: bool = False
    has_rules: bool = False
    state_count: int = 0
    data_size: int = 0
    rule_count: int = 0
    client_side: bool = False


# =============================================================================
# Input Variants
# =============================================================================


class _InputBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    def get_states(self) -> list[ComponentState]:
        return list(getattr(self, "states", []))

    def get_dataset(self) -> FilterableDataset | None:
        return getattr(self, "data", None)

    def get_rules(self) -> list[DependencyRule]:
        return list(getattr(self, "rules", []))

    def facts(self) -> InputFacts:
        states = self.get_states()
        dataset = self.get_dataset()
        rules = self.get_rules()
        return InputFacts(
            has_states=bool(states),
            has_data=dataset is not None,
            has_rules=bool(rules),
            state_count=len(states),
            data_size=dataset.size if dataset is not None else 0,
            rule_count=len(rules),
            client_side=dataset.options.client_side if dataset is not None else False,
        )


def _unique_state_ids(states: list[ComponentState]) -> list[ComponentState]:
    seen: set[str] = set()
    for state in states:
        if state.id in seen:
            raise ValueError(f"Duplicate state id '{state.id}'")
        seen.add(state.id)
    return states


class _HasStates(_InputBase):
    states: list[ComponentState] = Field(min_length=1)

    @field_validator("states")
    @classmethod
    def validate_states(cls, v: list[ComponentState]) -> list[ComponentState]:
        return _unique_state_ids(v)


class _HasRules(_InputBase):
    rules: list[DependencyRule] = Field(min_length=1)


class EmptyInput(_InputBase):
    kind: Literal["empty"] = "empty"


class StatesOnly(_HasStates):
    kind: Literal["states"] = "states"


class DataOnly(_InputBase):
    kind: Literal["data"] = "data"
    data: FilterableDataset


class RulesOnly(_HasRules):
    kind: Literal["rules"] = "rules"


class StatesAndData(_HasStates):
    kind: Literal["states+data"] = "states+data"
    data: FilterableDataset


class StatesAndRules(_HasStates, _HasRules):
    kind: Literal["states+rules"] = "states+rules"


class DataAndRules(_HasRules):
    kind: Literal["data+rules"] = "data+rules"
    data: FilterableDataset


class CompleteInput(_HasStates, _HasRules):
    kind: Literal["complete"] = "complete"
    data: FilterableDataset


ComponentInput = Annotated[
    Union[
        EmptyInput,
        StatesOnly,
        DataOnly,
        RulesOnly,
        StatesAndData,
        StatesAndRules,
        DataAndRules,
        CompleteInput,
    ],
    Field(discriminator="kind"),
]


# =============================================================================
# Boundary Constructor
# =============================================================================


def _normalize_states(states: Any) -> list[ComponentState]:
    if states is None:
        return []
    if isinstance(states, ComponentState):
        return [states]
    if isinstance(states, Mapping):
        result = []
        for state_id, state in states.items():
            if isinstance(state, ComponentState):
                result.append(state if state.id == state_id else state.model_copy(update={"id": state_id}))
            else:
                result.append(ComponentState(**{"id": state_id, **dict(state)}))
        return result
    return [s if isinstance(s, ComponentState) else ComponentState(**s) for s in states]


def _normalize_data(data: Any) -> FilterableDataset | None:
    if data is None:
        return None
    if isinstance(data, FilterableDataset):
        dataset = data
    elif isinstance(data, Mapping):
        dataset = FilterableDataset.model_validate(dict(data))
    else:
        dataset = FilterableDataset(items=[dict(item) for item in data])
    return dataset if dataset.is_declared else None


def _normalize_rules(rules: Any) -> list[DependencyRule]:
    if rules is None:
        return []
    if isinstance(rules, DependencyRule):
        return [rules]
    return [r if isinstance(r, DependencyRule) else DependencyRule.model_validate(r) for r in rules]


def make_input(
    states: Iterable[Any] | Mapping[str, Any] | ComponentState | None = None,
    data: FilterableDataset | Iterable[Mapping[str, Any]] | Mapping[str, Any] | None = None,
    rules: Iterable[Any] | DependencyRule | None = None,
) -> ComponentInput:
    """
    Build the input variant matching whichever parts are present.

    Empty collections count as absent. A dataset with no items still counts
    when it declares schema fields or server-rendered rows.

    Raises:
        pydantic.ValidationError: On malformed parts or duplicate state ids
    """
    state_list = _normalize_states(states)
    dataset = _normalize_data(data)
    rule_list = _normalize_rules(rules)

    has_states, has_data, has_rules = bool(state_list), dataset is not None, bool(rule_list)

    if has_states and has_data and has_rules:
        return CompleteInput(states=state_list, data=dataset, rules=rule_list)
    if has_states and has_data:
        return StatesAndData(states=state_list, data=dataset)
    if has_states and has_rules:
        return StatesAndRules(states=state_list, rules=rule_list)
    if has_data and has_rules:
        return DataAndRules(data=dataset, rules=rule_list)
    if has_states:
        return StatesOnly(states=state_list)
    if has_data:
        return DataOnly(data=dataset)
    if has_rules:
        return RulesOnly(rules=rule_list)
    return EmptyInput()


# =============================================================================
# Component Specification
# =============================================================================


class ComponentSpec(BaseModel):
    """
    Everything needed to generate one component.

    Example:
        spec = ComponentSpec(id="product-tabs", input=make_input(states=[...]))
        html = spec.render().html
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    id: str = Field(description="Component id, also the container element id")
    input: ComponentInput = Field(default_factory=EmptyInput)
    options: DynamicOptions = Field(default_factory=DynamicOptions)
    theme: DynamicTheme | None = Field(default=None, description="Overrides the manifest theme")
    renderer: RowRenderer | None = Field(
        default=None, exclude=True, description="Renders a record for server-rendered rows"
    )

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Component id must not be empty")
        if any(ch.isspace() or ch in "\"'<>&" for ch in v):
            raise ValueError(f"Component id '{v}' contains characters not allowed in an element id")
        return v

    @property
    def states(self) -> list[ComponentState]:
        return self.input.get_states()

    @property
    def dataset(self) -> FilterableDataset | None:
        return self.input.get_dataset()

    @property
    def rules(self) -> list[DependencyRule]:
        return self.input.get_rules()

    def render(self, **kwargs: Any) -> RenderedComponent:
        """Shortcut for :func:`dynui.core.render.render`."""
        from dynui.core.render import render

        return render(self, **kwargs)
