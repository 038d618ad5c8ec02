"""
Themes for dynamic components.

A theme is a set of CSS class names (plus optional stylesheet text) the
generators embed verbatim.
"""

from dynui.themes.base import DynamicTheme, combine_classes
from dynui.themes.css import default_css, style_element, with_default_css
from dynui.themes.presets import (
    BOOTSTRAP_THEME,
    DEFAULT_THEME,
    TAILWIND_DARK_THEME,
    TAILWIND_THEME,
    THEME_PRESETS,
    get_theme,
    get_theme_preset,
    list_theme_presets,
)

__all__ = [
    "DynamicTheme",
    "combine_classes",
    "default_css",
    "style_element",
    "with_default_css",
    "DEFAULT_THEME",
    "BOOTSTRAP_THEME",
    "TAILWIND_THEME",
    "TAILWIND_DARK_THEME",
    "THEME_PRESETS",
    "get_theme",
    "get_theme_preset",
    "list_theme_presets",
]
