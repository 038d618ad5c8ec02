"""
dynui - declarative-to-interactive component compiler.

Given up to three optional inputs (named UI states, a filterable dataset,
dependency rules) dynui picks the cheapest adequate client-side pattern,
emits the markup skeleton with an embedded configuration payload, and a
self-contained browser runtime that brings it to life.
"""

from __future__ import annotations

from dynui._version import get_version
from dynui.core.builder import Dyn
from dynui.core.convenience import (
    active_state,
    bool_field,
    disable_when,
    dynamic,
    enable_when,
    filter_view,
    filter_with_rules,
    form,
    hide_when,
    multiselect_field,
    new_state,
    range_field,
    select_field,
    show_when,
    tabs,
    tabs_with_data,
    tabs_with_rules,
    text_field,
)
from dynui.core.errors import ComponentSpecError, ConfigError, DynError, RenderError
from dynui.core.minify import minify_js
from dynui.core.render import RenderedComponent, render
from dynui.specs import (
    ComponentSpec,
    ComponentState,
    DependencyAction,
    DependencyRule,
    DetectedPattern,
    DynamicOptions,
    FilterableDataset,
    FilterableField,
    FilterOptions,
    FilterSchema,
    Pattern,
    TriggerCondition,
    make_input,
)
from dynui.themes import DynamicTheme, default_css, get_theme, with_default_css

__version__ = get_version()

__all__ = [
    "__version__",
    # Building
    "Dyn",
    "ComponentSpec",
    "make_input",
    "render",
    "RenderedComponent",
    "minify_js",
    # Convenience
    "tabs",
    "filter_view",
    "form",
    "tabs_with_data",
    "tabs_with_rules",
    "filter_with_rules",
    "dynamic",
    "new_state",
    "active_state",
    "show_when",
    "hide_when",
    "enable_when",
    "disable_when",
    "text_field",
    "select_field",
    "multiselect_field",
    "bool_field",
    "range_field",
    # Specs
    "ComponentState",
    "FilterableField",
    "FilterSchema",
    "FilterOptions",
    "FilterableDataset",
    "TriggerCondition",
    "DependencyAction",
    "DependencyRule",
    "DynamicOptions",
    "DetectedPattern",
    "Pattern",
    # Themes
    "DynamicTheme",
    "get_theme",
    "default_css",
    "with_default_css",
    # Errors
    "DynError",
    "ComponentSpecError",
    "RenderError",
    "ConfigError",
]
