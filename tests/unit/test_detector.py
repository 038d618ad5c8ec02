"""Tests for pattern detection."""

from __future__ import annotations

import logging

import pytest

from dynui.core.detector import (
    DetectionThresholds,
    detect_facts,
    detect_pattern,
    determine_optimizations,
    determine_primary_pattern,
)
from dynui.core.errors import ComponentSpecError
from dynui.specs import (
    ComponentSpec,
    ComponentState,
    DynamicOptions,
    FilterableDataset,
    FilterOptions,
    InputFacts,
    make_input,
)
from dynui.specs.pattern import Optimization, Pattern


def facts(states: int = 0, data: int | None = None, rules: int = 0) -> InputFacts:
    return InputFacts(
        has_states=states > 0,
        has_data=data is not None,
        has_rules=rules > 0,
        state_count=states,
        data_size=data or 0,
        rule_count=rules,
    )


class TestPrimaryPattern:
    """The decision table, first match wins."""

    @pytest.mark.parametrize(
        "input_facts,expected",
        [
            (facts(), Pattern.EMPTY),
            (facts(states=3), Pattern.PRE_RENDERED_STATES),
            (facts(data=10), Pattern.CLIENT_FILTERABLE),
            (facts(rules=2), Pattern.DEPENDENCY_ONLY),
            (facts(states=3, data=10), Pattern.STATEFUL_DATA),
            (facts(states=3, rules=2), Pattern.DEPENDENT_STATES),
            (facts(data=10, rules=2), Pattern.DEPENDENT_DATA),
            (facts(states=3, data=10, rules=2), Pattern.COMPLETE),
        ],
    )
    def test_presence_combinations(self, input_facts: InputFacts, expected: Pattern) -> None:
        assert determine_primary_pattern(input_facts) is expected

    @pytest.mark.parametrize(
        "count,expected",
        [
            (1, Pattern.PRE_RENDERED_STATES),
            (10, Pattern.PRE_RENDERED_STATES),
            (11, Pattern.DYNAMIC_STATES),
            (40, Pattern.DYNAMIC_STATES),
        ],
    )
    def test_state_count_boundary(self, count: int, expected: Pattern) -> None:
        assert determine_primary_pattern(facts(states=count)) is expected

    @pytest.mark.parametrize(
        "size,expected",
        [
            (0, Pattern.CLIENT_FILTERABLE),
            (50, Pattern.CLIENT_FILTERABLE),
            (51, Pattern.SERVER_FILTERABLE),
            (5000, Pattern.SERVER_FILTERABLE),
        ],
    )
    def test_data_size_boundary(self, size: int, expected: Pattern) -> None:
        assert determine_primary_pattern(facts(data=size)) is expected

    @pytest.mark.parametrize(
        "size,expected",
        [
            (100, Pattern.STATEFUL_DATA),
            (101, Pattern.FILTERABLE_STATES),
        ],
    )
    def test_states_with_data_boundary(self, size: int, expected: Pattern) -> None:
        assert determine_primary_pattern(facts(states=2, data=size)) is expected

    def test_complete_ignores_sizes(self) -> None:
        assert determine_primary_pattern(facts(states=99, data=9999, rules=99)) is Pattern.COMPLETE

    def test_client_side_forces_client_filtering(self) -> None:
        large = InputFacts(has_data=True, data_size=5000, client_side=True)
        assert determine_primary_pattern(large) is Pattern.CLIENT_FILTERABLE

    def test_custom_thresholds(self) -> None:
        thresholds = DetectionThresholds(max_pre_rendered_states=2, max_client_data_size=5)
        assert determine_primary_pattern(facts(states=3), thresholds) is Pattern.DYNAMIC_STATES
        assert determine_primary_pattern(facts(data=6), thresholds) is Pattern.SERVER_FILTERABLE


class TestOptimizations:
    """Advisory hints never change the primary pattern."""

    def test_pagination_above_500_records(self) -> None:
        assert Optimization.PAGINATION not in determine_optimizations(facts(data=500))
        assert Optimization.PAGINATION in determine_optimizations(facts(data=501))

    def test_lazy_loading_for_many_states(self) -> None:
        assert Optimization.LAZY_STATE_LOADING in determine_optimizations(facts(states=21))

    def test_rule_grouping(self) -> None:
        assert Optimization.RULE_GROUPING in determine_optimizations(facts(rules=51))

    def test_coordination_hints(self) -> None:
        hints = determine_optimizations(facts(states=2, data=5, rules=1))
        assert Optimization.STATE_DATA_COORDINATION in hints
        assert Optimization.RULE_COORDINATION in hints

    def test_rules_alone_need_no_coordination(self) -> None:
        assert determine_optimizations(facts(rules=3)) == []

    def test_hints_do_not_change_pattern(self) -> None:
        detected = detect_facts(facts(data=600))
        assert detected.primary_pattern is Pattern.SERVER_FILTERABLE
        assert detected.optimizations == [Optimization.PAGINATION]


class TestDetectPattern:
    """Detection over whole component specifications."""

    def test_is_deterministic(self, complete_spec: ComponentSpec) -> None:
        assert detect_pattern(complete_spec) == detect_pattern(complete_spec)

    def test_flags_and_counts(self, complete_spec: ComponentSpec) -> None:
        detected = detect_pattern(complete_spec)
        assert detected.has_states and detected.has_data and detected.has_rules
        assert detected.state_count == 3
        assert detected.data_size == 3
        assert detected.rule_count == 1
        assert detected.primary_pattern is Pattern.COMPLETE

    def test_renderer_flag(self) -> None:
        spec = ComponentSpec(
            id="rows",
            input=make_input(data=[{"a": 1}]),
            renderer=lambda item: str(item["a"]),
        )
        assert detect_pattern(spec).has_renderer

    def test_client_side_option_read_from_dataset(self) -> None:
        items = [{"n": i} for i in range(200)]
        forced = FilterableDataset(items=items, options=FilterOptions(client_side=True))
        assert (
            detect_pattern(ComponentSpec(id="big", input=make_input(data=forced))).primary_pattern
            is Pattern.CLIENT_FILTERABLE
        )
        assert (
            detect_pattern(ComponentSpec(id="big", input=make_input(data=items))).primary_pattern
            is Pattern.SERVER_FILTERABLE
        )

    def test_payload_uses_wire_names(self) -> None:
        payload = detect_facts(facts(states=2)).to_payload()
        assert payload["primaryPattern"] == "pre-rendered-states"
        assert payload["hasStates"] is True
        assert payload["stateCount"] == 2


class TestLimits:
    """Per-component size ceilings."""

    def _many_states(self, count: int) -> list[ComponentState]:
        return [ComponentState(id=f"s{i}", label=f"S{i}") for i in range(count)]

    def test_exceeding_warns_by_default(self, caplog: pytest.LogCaptureFixture) -> None:
        spec = ComponentSpec(
            id="big",
            input=make_input(states=self._many_states(4)),
            options=DynamicOptions(max_states=3),
        )
        with caplog.at_level(logging.WARNING, logger="dynui.core.detector"):
            detected = detect_pattern(spec)
        assert "exceed max_states" in caplog.text
        assert detected.primary_pattern is Pattern.PRE_RENDERED_STATES

    def test_exceeding_raises_under_strict_validation(self) -> None:
        spec = ComponentSpec(
            id="big",
            input=make_input(data=[{"n": i} for i in range(5)]),
            options=DynamicOptions(max_data_size=4, strict_validation=True),
        )
        with pytest.raises(ComponentSpecError, match="max_data_size"):
            detect_pattern(spec)

    def test_fallback_pattern_applies_when_exceeded(self) -> None:
        spec = ComponentSpec(
            id="big",
            input=make_input(data=[{"n": i} for i in range(5)]),
            options=DynamicOptions(max_data_size=4, fallback_pattern=Pattern.SERVER_FILTERABLE),
        )
        assert detect_pattern(spec).primary_pattern is Pattern.SERVER_FILTERABLE

    def test_fallback_not_fitting_inputs_degrades_to_empty(self) -> None:
        spec = ComponentSpec(
            id="big",
            input=make_input(states=self._many_states(4)),
            options=DynamicOptions(max_states=3, fallback_pattern=Pattern.CLIENT_FILTERABLE),
        )
        detected = detect_pattern(spec)
        assert detected.primary_pattern is Pattern.EMPTY
        assert not detected.has_states

    def test_fallback_ignored_within_limits(self) -> None:
        spec = ComponentSpec(
            id="small",
            input=make_input(states=self._many_states(2)),
            options=DynamicOptions(fallback_pattern=Pattern.EMPTY),
        )
        assert detect_pattern(spec).primary_pattern is Pattern.PRE_RENDERED_STATES
