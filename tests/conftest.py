"""Shared pytest fixtures for dynui tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from dynui.specs import (
    ComponentSpec,
    ComponentState,
    DependencyAction,
    DependencyRule,
    FilterableDataset,
    FilterableField,
    FilterOptions,
    FilterSchema,
    TriggerCondition,
    make_input,
)


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def three_states() -> list[ComponentState]:
    """Three states, the second marked active."""
    return [
        ComponentState(id="a", label="A", content="Alpha"),
        ComponentState(id="b", label="B", active=True, content="Beta"),
        ComponentState(id="c", label="C", content="Gamma"),
    ]


@pytest.fixture
def status_dataset() -> FilterableDataset:
    """Three records with a select filter on status."""
    return FilterableDataset(
        items=[{"status": "open"}, {"status": "closed"}, {"status": "open"}],
        filter_schema=FilterSchema(
            fields=[FilterableField(name="status", type="select", options=["open", "closed"])]
        ),
    )


@pytest.fixture
def products() -> list[dict]:
    """Product records with text, select, numeric and boolean values."""
    return [
        {"name": "Laptop", "category": "electronics", "price": 1200, "in_stock": True},
        {"name": "Desk Lamp", "category": "home", "price": 40, "in_stock": False},
        {"name": "Headphones", "category": "electronics", "price": 150, "in_stock": True},
        {"name": "Chair", "category": "home", "price": 300, "in_stock": True},
    ]


@pytest.fixture
def spouse_rule() -> DependencyRule:
    """Show the spouse section when marital status is married."""
    return DependencyRule(
        id="show-spouse",
        trigger=TriggerCondition(component_id="marital-status", condition="equals", value="married"),
        actions=[DependencyAction(target_id="spouse-section", action="show")],
    )


@pytest.fixture
def complete_spec(
    three_states: list[ComponentState], status_dataset: FilterableDataset, spouse_rule: DependencyRule
) -> ComponentSpec:
    """A component with states, data and rules."""
    return ComponentSpec(
        id="everything",
        input=make_input(states=three_states, data=status_dataset, rules=[spouse_rule]),
    )


@pytest.fixture
def paginated_dataset(products: list[dict]) -> FilterableDataset:
    return FilterableDataset(
        items=products,
        options=FilterOptions(enable_pagination=True, items_per_page=2),
    )
