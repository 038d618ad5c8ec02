"""
Theme contract for dynamic components.

A theme supplies CSS class names (and optionally stylesheet text). It
carries no behaviour: the structure and script generators embed the
class names verbatim.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class DynamicTheme(BaseModel):
    """
    Class names for every styled slot of a dynamic component.

    Empty strings are allowed (e.g. Bootstrap has no hidden class for tab
    panes) and are dropped when classes are combined.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(default="default", description="Theme name")

    # Container
    component: str = "dyn-component"
    pattern_prefix: str = "dyn-"

    # State navigation
    state_navigation: str = "dyn-state-navigation"
    state_trigger: str = "dyn-state-trigger"
    state_trigger_active: str = "active"
    state_trigger_disabled: str = "disabled"
    state_content: str = "dyn-state-content"
    state_content_active: str = "active"
    state_content_hidden: str = "hidden"
    state_container: str = "dyn-state-container"

    # Filter controls
    filter_controls: str = "dyn-filter-controls"
    filter_group: str = "dyn-filter-group"
    filter_label: str = "dyn-filter-label"
    filter_input: str = "dyn-filter-input"
    filter_select: str = "dyn-filter-select"
    filter_checkbox: str = "dyn-filter-checkbox"
    filter_range: str = "dyn-filter-range"

    # Results
    results: str = "dyn-results"
    results_empty: str = "dyn-no-results"
    results_summary: str = "dyn-results-summary"
    pagination: str = "dyn-pagination"
    pagination_button: str = "dyn-page-btn"
    pagination_button_active: str = "active"

    # Utility
    hidden: str = "hidden"
    disabled: str = "disabled"

    css: str | None = Field(default=None, description="Stylesheet injected before the markup")

    def pattern_class(self, pattern: str) -> str:
        return f"{self.pattern_prefix}{pattern}"

    def class_payload(self) -> dict[str, str]:
        """Class names the runtime needs when it toggles elements."""
        return {
            "triggerBase": self.state_trigger,
            "triggerActive": self.state_trigger_active,
            "triggerDisabled": self.state_trigger_disabled,
            "contentBase": self.state_content,
            "contentActive": self.state_content_active,
            "contentHidden": self.state_content_hidden,
            "paginationButton": self.pagination_button,
            "paginationButtonActive": self.pagination_button_active,
            "resultsEmpty": self.results_empty,
            "hidden": self.hidden,
            "disabled": self.disabled,
        }


def combine_classes(*classes: str | None) -> str:
    """Join class names, skipping empty ones."""
    return " ".join(c for c in classes if c)
