"""
Pattern detection.

Chooses the cheapest adequate client-side implementation for a component
from which of {states, dataset, rules} are present and how large they are.
Detection is a pure function of those facts.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from dynui.core.errors import make_spec_error
from dynui.specs.component import ComponentSpec, InputFacts
from dynui.specs.options import DynamicOptions
from dynui.specs.pattern import DetectedPattern, Optimization, Pattern

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DetectionThresholds:
    """
    Size thresholds used by the decision table.

    Every comparison is strict ``>`` against the threshold, so a count equal
    to a threshold selects the cheaper pattern.
    """

    max_pre_rendered_states: int = 10
    max_client_data_size: int = 50
    filterable_states_data_size: int = 100
    pagination_data_size: int = 500
    lazy_state_count: int = 20
    rule_grouping_count: int = 50


DEFAULT_THRESHOLDS = DetectionThresholds()


def determine_primary_pattern(
    facts: InputFacts, thresholds: DetectionThresholds = DEFAULT_THRESHOLDS
) -> Pattern:
    """Apply the decision table, first match wins."""
    if facts.has_states and facts.has_data and facts.has_rules:
        return Pattern.COMPLETE

    if facts.has_states and facts.has_data:
        if facts.data_size > thresholds.filterable_states_data_size:
            return Pattern.FILTERABLE_STATES
        return Pattern.STATEFUL_DATA

    if facts.has_states and facts.has_rules:
        return Pattern.DEPENDENT_STATES

    if facts.has_data and facts.has_rules:
        return Pattern.DEPENDENT_DATA

    if facts.has_states:
        if facts.state_count <= thresholds.max_pre_rendered_states:
            return Pattern.PRE_RENDERED_STATES
        return Pattern.DYNAMIC_STATES

    if facts.has_data:
        # clientSide keeps a large dataset in the browser
        if facts.client_side or facts.data_size <= thresholds.max_client_data_size:
            return Pattern.CLIENT_FILTERABLE
        return Pattern.SERVER_FILTERABLE

    if facts.has_rules:
        return Pattern.DEPENDENCY_ONLY

    return Pattern.EMPTY


def determine_optimizations(
    facts: InputFacts, thresholds: DetectionThresholds = DEFAULT_THRESHOLDS
) -> list[Optimization]:
    """Advisory hints. They never change the primary pattern."""
    optimizations: list[Optimization] = []

    if facts.data_size > thresholds.pagination_data_size:
        optimizations.append(Optimization.PAGINATION)
    if facts.state_count > thresholds.lazy_state_count:
        optimizations.append(Optimization.LAZY_STATE_LOADING)
    if facts.rule_count > thresholds.rule_grouping_count:
        optimizations.append(Optimization.RULE_GROUPING)
    if facts.has_states and facts.has_data:
        optimizations.append(Optimization.STATE_DATA_COORDINATION)
    if facts.has_rules and (facts.has_states or facts.has_data):
        optimizations.append(Optimization.RULE_COORDINATION)

    return optimizations


def detect_facts(
    facts: InputFacts,
    thresholds: DetectionThresholds = DEFAULT_THRESHOLDS,
    has_renderer: bool = False,
) -> DetectedPattern:
    """Detect the pattern for a set of presence/size facts."""
    return DetectedPattern(
        has_states=facts.has_states,
        has_data=facts.has_data,
        has_rules=facts.has_rules,
        has_renderer=has_renderer,
        state_count=facts.state_count,
        data_size=facts.data_size,
        rule_count=facts.rule_count,
        primary_pattern=determine_primary_pattern(facts, thresholds),
        optimizations=determine_optimizations(facts, thresholds),
    )


def check_limits(spec_id: str, facts: InputFacts, options: DynamicOptions) -> bool:
    """
    Enforce the per-component size ceilings.

    Warns, or raises ComponentSpecError when strict validation is enabled.

    Returns:
        True if any ceiling was exceeded
    """
    problems = []
    if facts.state_count > options.max_states:
        problems.append(f"{facts.state_count} states exceed max_states={options.max_states}")
    if facts.data_size > options.max_data_size:
        problems.append(f"{facts.data_size} records exceed max_data_size={options.max_data_size}")

    for problem in problems:
        if options.strict_validation:
            raise make_spec_error(problem, component=spec_id)
        logger.warning(f"Component '{spec_id}': {problem}")
    return bool(problems)


def apply_fallback(spec_id: str, detected: DetectedPattern, fallback: Pattern) -> DetectedPattern:
    """
    Replace the primary pattern with a fallback.

    A fallback needing inputs the component does not have degrades
    to ``empty``.
    """
    if (
        (fallback.uses_states and not detected.has_states)
        or (fallback.uses_data and not detected.has_data)
        or (fallback.uses_rules and not detected.has_rules)
    ):
        logger.warning(
            f"Component '{spec_id}': fallback pattern '{fallback.value}' does not fit its inputs, "
            f"using 'empty'"
        )
        fallback = Pattern.EMPTY
    return detected.model_copy(
        update={
            "primary_pattern": fallback,
            "has_states": fallback.uses_states,
            "has_data": fallback.uses_data,
            "has_rules": fallback.uses_rules,
        }
    )


def detect_pattern(
    spec: ComponentSpec, thresholds: DetectionThresholds = DEFAULT_THRESHOLDS
) -> DetectedPattern:
    """
    Detect the implementation pattern of a component.

    Args:
        spec: Component specification
        thresholds: Decision table thresholds (defaults match the manifest defaults)

    Returns:
        DetectedPattern with flags, counts, primary pattern and hints
    """
    facts = spec.input.facts()
    exceeded = check_limits(spec.id, facts, spec.options)

    detected = detect_facts(facts, thresholds, has_renderer=spec.renderer is not None)
    if exceeded and spec.options.fallback_pattern is not None:
        detected = apply_fallback(spec.id, detected, spec.options.fallback_pattern)

    logger.debug(
        f"Component '{spec.id}': pattern={detected.primary_pattern.value} "
        f"optimizations={[o.value for o in detected.optimizations]}"
    )
    return detected
