"""
Theme presets for dynamic components.

Each preset is a DynamicTheme instance that can be selected by name in
dynui.toml or on the command line.
"""

from __future__ import annotations

import logging

from dynui.themes.base import DynamicTheme

logger = logging.getLogger(__name__)

# =============================================================================
# Default Theme
# =============================================================================

# Semantic class names that work standalone together with default_css().
DEFAULT_THEME = DynamicTheme(name="default")

# =============================================================================
# Bootstrap Theme
# =============================================================================

BOOTSTRAP_THEME = DynamicTheme(
    name="bootstrap",
    state_navigation="nav nav-tabs",
    state_trigger="nav-link",
    state_trigger_active="active",
    state_trigger_disabled="disabled",
    state_content="tab-pane fade",
    state_content_active="show active",
    state_content_hidden="",  # Bootstrap hides inactive panes via .fade
    state_container="tab-content",
    filter_controls="row g-3 mb-3",
    filter_group="col-md-4",
    filter_label="form-label",
    filter_input="form-control",
    filter_select="form-select",
    filter_checkbox="form-check-input",
    filter_range="form-range",
    results_empty="alert alert-info",
    results_summary="text-muted mb-2",
    pagination="pagination",
    pagination_button="page-link",
    hidden="d-none",
)

# =============================================================================
# Tailwind Themes
# =============================================================================

TAILWIND_THEME = DynamicTheme(
    name="tailwind",
    state_navigation="flex border-b border-gray-200 mb-4",
    state_trigger=(
        "px-4 py-2.5 text-sm font-medium text-gray-500 hover:text-gray-700 "
        "hover:bg-gray-50 border-b-2 border-transparent -mb-px cursor-pointer transition-colors"
    ),
    state_trigger_active="text-blue-600 !border-b-4 !border-blue-600 !bg-blue-50 font-semibold",
    state_trigger_disabled="opacity-50 cursor-not-allowed",
    state_content_active="block",
    state_content_hidden="hidden",
    state_container="mt-4",
    filter_controls="grid grid-cols-1 md:grid-cols-3 gap-4 mb-4",
    filter_group="flex flex-col",
    filter_label="text-sm font-medium text-gray-700 mb-1",
    filter_input=(
        "mt-1 block w-full px-3 py-2 border border-gray-300 rounded-md shadow-sm "
        "focus:outline-none focus:ring-blue-500 focus:border-blue-500 sm:text-sm"
    ),
    filter_select=(
        "mt-1 block w-full px-3 py-2 border border-gray-300 bg-white rounded-md shadow-sm "
        "focus:outline-none focus:ring-blue-500 focus:border-blue-500 sm:text-sm"
    ),
    filter_checkbox="h-4 w-4 text-blue-600 focus:ring-blue-500 border-gray-300 rounded",
    filter_range="w-full h-2 bg-gray-200 rounded-lg appearance-none cursor-pointer",
    results_empty="text-center py-8 text-gray-500",
    results_summary="text-sm text-gray-500 mb-2",
    pagination="flex justify-center space-x-2 mt-4",
    pagination_button="px-3 py-1 text-sm border border-gray-300 rounded hover:bg-gray-100",
    pagination_button_active="bg-blue-600 text-white border-blue-600 hover:bg-blue-700",
    disabled="opacity-50 cursor-not-allowed",
)

TAILWIND_DARK_THEME = TAILWIND_THEME.model_copy(
    update={
        "name": "tailwind-dark",
        "state_navigation": "flex border-b border-gray-200 dark:border-gray-700 mb-4",
        "state_trigger": (
            "px-4 py-2.5 text-sm font-medium text-gray-500 dark:text-gray-400 "
            "hover:text-gray-700 dark:hover:text-gray-200 hover:bg-gray-50 "
            "dark:hover:bg-gray-700/50 border-b-2 border-transparent -mb-px cursor-pointer transition-colors"
        ),
        "state_trigger_active": (
            "!text-blue-600 dark:!text-blue-400 !border-blue-600 dark:!border-blue-400 "
            "!bg-blue-50 dark:!bg-blue-900/30 font-semibold"
        ),
        "filter_label": "text-sm font-medium text-gray-700 dark:text-gray-300 mb-1",
        "filter_input": (
            "mt-1 block w-full px-3 py-2 border border-gray-300 dark:border-gray-600 "
            "bg-white dark:bg-gray-700 text-gray-900 dark:text-gray-100 rounded-md shadow-sm "
            "focus:outline-none focus:ring-blue-500 focus:border-blue-500 sm:text-sm"
        ),
        "filter_select": (
            "mt-1 block w-full px-3 py-2 border border-gray-300 dark:border-gray-600 "
            "bg-white dark:bg-gray-700 text-gray-900 dark:text-gray-100 rounded-md shadow-sm "
            "focus:outline-none focus:ring-blue-500 focus:border-blue-500 sm:text-sm"
        ),
        "filter_checkbox": (
            "h-4 w-4 text-blue-600 focus:ring-blue-500 border-gray-300 dark:border-gray-600 rounded"
        ),
        "filter_range": "w-full h-2 bg-gray-200 dark:bg-gray-700 rounded-lg appearance-none cursor-pointer",
        "results_empty": "text-center py-8 text-gray-500 dark:text-gray-400",
        "results_summary": "text-sm text-gray-500 dark:text-gray-400 mb-2",
        "pagination_button": (
            "px-3 py-1 text-sm border border-gray-300 dark:border-gray-600 rounded "
            "hover:bg-gray-100 dark:hover:bg-gray-700 text-gray-700 dark:text-gray-300 "
            "bg-white dark:bg-gray-800"
        ),
        "pagination_button_active": "!bg-blue-600 !text-white !border-blue-600 hover:!bg-blue-700",
    }
)

# =============================================================================
# Preset Registry
# =============================================================================

THEME_PRESETS: dict[str, DynamicTheme] = {
    "default": DEFAULT_THEME,
    "bootstrap": BOOTSTRAP_THEME,
    "tailwind": TAILWIND_THEME,
    "tailwind-dark": TAILWIND_DARK_THEME,
}


def get_theme_preset(name: str) -> DynamicTheme | None:
    """Get a theme preset by name."""
    return THEME_PRESETS.get(name)


def list_theme_presets() -> list[str]:
    """List available theme preset names."""
    return list(THEME_PRESETS.keys())


def get_theme(name: str | None) -> DynamicTheme:
    """Resolve a theme by name, falling back to the default preset."""
    if not name:
        return DEFAULT_THEME
    theme = get_theme_preset(name)
    if theme is None:
        logger.warning(f"Unknown theme preset '{name}', using 'default'")
        return DEFAULT_THEME
    return theme
