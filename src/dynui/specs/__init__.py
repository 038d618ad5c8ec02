"""
Component specification types.

This module exports all specification types.
"""

from dynui.specs.component import (
    CompleteInput,
    ComponentInput,
    ComponentSpec,
    DataAndRules,
    DataOnly,
    EmptyInput,
    InputFacts,
    RowRenderer,
    RulesOnly,
    StatesAndData,
    StatesAndRules,
    StatesOnly,
    make_input,
)
from dynui.specs.data import (
    FilterableDataset,
    FilterableField,
    FilterOptions,
    FilterSchema,
    FilterType,
    RangeInfo,
    infer_schema,
)
from dynui.specs.options import ComponentHooks, DynamicOptions, ExternalScript
from dynui.specs.pattern import DetectedPattern, Optimization, Pattern
from dynui.specs.rules import (
    ActionKind,
    ConditionOperator,
    DependencyAction,
    DependencyRule,
    TriggerCondition,
)
from dynui.specs.state import ComponentState, StateCondition

__all__ = [
    # Component
    "ComponentSpec",
    "ComponentInput",
    "EmptyInput",
    "StatesOnly",
    "DataOnly",
    "RulesOnly",
    "StatesAndData",
    "StatesAndRules",
    "DataAndRules",
    "CompleteInput",
    "InputFacts",
    "RowRenderer",
    "make_input",
    # States
    "ComponentState",
    "StateCondition",
    # Data
    "FilterType",
    "RangeInfo",
    "FilterableField",
    "FilterSchema",
    "FilterOptions",
    "FilterableDataset",
    "infer_schema",
    # Rules
    "ConditionOperator",
    "ActionKind",
    "TriggerCondition",
    "DependencyAction",
    "DependencyRule",
    # Options
    "ExternalScript",
    "ComponentHooks",
    "DynamicOptions",
    # Pattern
    "Pattern",
    "Optimization",
    "DetectedPattern",
]
