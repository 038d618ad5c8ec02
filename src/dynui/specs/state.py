"""
State specification types.

A component state is one named, independently show/hide-able content
panel (a tab, a view, a wizard step).
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from dynui.specs.rules import ConditionOperator


class StateCondition(BaseModel):
    """
    Condition gating whether a state may be switched to.

    The runtime looks up the element whose id is ``component`` (or ``field``
    when no component is given) and compares its current value.

    Example:
        StateCondition(field="plan", operator="equals", value="pro")
    """

    model_config = ConfigDict(frozen=True)

    field: str = Field(description="Id of the element whose value is tested")
    operator: str = Field(
        default=ConditionOperator.EQUALS.value,
        description="equals, notEquals, contains, greaterThan, lessThan",
    )
    value: Any = Field(default=None, description="Value compared against")
    component: str | None = Field(
        default=None, description="External element id, overrides field"
    )


class ComponentState(BaseModel):
    """
    One state (tab, view, panel) of a dynamic component.

    ``content`` is rendered once at generation time. It may be plain text
    (escaped), a ``markupsafe.Markup`` / object with ``__html__`` (inserted
    as-is), or a zero-argument callable returning either of those.

    Example:
        ComponentState(id="info", label="Info", active=True, content="Hello")
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    id: str = Field(description="State id, unique within a component")
    label: str = Field(default="", description="Trigger label")
    icon: str | None = Field(default=None, description="Icon markup placed before the label")
    active: bool = Field(default=False, description="Initially active state")
    disabled: bool = Field(default=False, description="State cannot be switched to")
    condition: StateCondition | None = Field(
        default=None, description="Trigger condition gating availability"
    )
    content: Any = Field(default=None, exclude=True, description="Panel content")
    metadata: dict[str, Any] = Field(default_factory=dict)

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("State id must not be empty")
        if any(ch.isspace() for ch in v):
            raise ValueError(f"State id '{v}' must not contain whitespace")
        return v

    def panel_id(self, component_id: str) -> str:
        """DOM id of the content panel, unique per component on a page."""
        return f"{component_id}-state-{self.id}"

    def target_ids(self, component_id: str) -> set[str]:
        """Rule target ids that resolve to this state's panel."""
        return {self.id, f"state-{self.id}", self.panel_id(component_id)}

    def to_payload(self) -> dict[str, Any]:
        """State metadata for the configuration payload (content excluded)."""
        return {
            "id": self.id,
            "label": self.label,
            "active": self.active,
            "disabled": self.disabled,
            "condition": (
                self.condition.model_dump(mode="json", exclude_none=True)
                if self.condition
                else None
            ),
        }
