"""
Default CSS for dynamic components.

Minimal stylesheet for the default theme so components work without a
CSS framework.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from markupsafe import Markup, escape


@dataclass
class CSSRule:
    """A selector with ordered declarations."""

    selector: str
    properties: list[tuple[str, str]] = field(default_factory=list)


class CSSBuilder:
    """
    Accumulates CSS rules and renders them.

    Example:
        css = CSSBuilder().rule(".hidden", display="none !important").render()
    """

    def __init__(self) -> None:
        self.rules: list[CSSRule] = []

    def rule(self, selector: str, **properties: str) -> CSSBuilder:
        """Add a rule. Underscores in property names become hyphens."""
        self.rules.append(
            CSSRule(
                selector=selector,
                properties=[(name.replace("_", "-"), value) for name, value in properties.items()],
            )
        )
        return self

    def render(self) -> str:
        lines: list[str] = []
        for rule in self.rules:
            lines.append(f"{rule.selector} {{")
            for name, value in rule.properties:
                lines.append(f"  {name}: {value};")
            lines.append("}")
        return "\n".join(lines) + "\n"


def default_css() -> str:
    """Generate the default component stylesheet."""
    return (
        CSSBuilder()
        # Hidden utility
        .rule(".hidden", display="none !important")
        .rule(".dyn-component", position="relative")
        # State navigation (tabs)
        .rule(
            ".dyn-state-navigation",
            display="flex",
            gap="0.25rem",
            border_bottom="2px solid #e5e7eb",
            margin_bottom="1rem",
        )
        .rule(
            ".dyn-state-trigger",
            padding="0.75rem 1.25rem",
            border="none",
            background="transparent",
            cursor="pointer",
            font_size="0.875rem",
            font_weight="500",
            color="#6b7280",
            border_bottom="2px solid transparent",
            margin_bottom="-2px",
            transition="all 0.15s ease",
        )
        .rule(".dyn-state-trigger:hover", color="#374151", background_color="#f9fafb")
        .rule(".dyn-state-trigger.active", color="#2563eb", border_bottom="2px solid #2563eb")
        .rule(".dyn-state-trigger.disabled", opacity="0.5", cursor="not-allowed")
        # State content
        .rule(".dyn-state-content", display="none")
        .rule(".dyn-state-content.active", display="block")
        # Filter controls
        .rule(
            ".dyn-filter-controls",
            display="grid",
            grid_template_columns="repeat(auto-fit, minmax(200px, 1fr))",
            gap="1rem",
            margin_bottom="1rem",
        )
        .rule(".dyn-filter-group", display="flex", flex_direction="column")
        .rule(
            ".dyn-filter-label",
            font_size="0.875rem",
            font_weight="500",
            color="#374151",
            margin_bottom="0.25rem",
        )
        .rule(
            ".dyn-filter-input, .dyn-filter-select",
            padding="0.5rem 0.75rem",
            border="1px solid #d1d5db",
            border_radius="0.375rem",
            font_size="0.875rem",
            transition="border-color 0.15s ease",
        )
        .rule(
            ".dyn-filter-input:focus, .dyn-filter-select:focus",
            outline="none",
            border_color="#2563eb",
            box_shadow="0 0 0 3px rgba(37, 99, 235, 0.1)",
        )
        # Results
        .rule(".dyn-results", min_height="100px")
        .rule(".dyn-no-results", text_align="center", padding="2rem", color="#6b7280")
        .rule(".dyn-results-summary", font_size="0.875rem", color="#6b7280", margin_bottom="0.5rem")
        # Pagination
        .rule(
            ".dyn-pagination",
            display="flex",
            justify_content="center",
            gap="0.25rem",
            margin_top="1rem",
        )
        .rule(
            ".dyn-page-btn",
            padding="0.5rem 0.75rem",
            border="1px solid #d1d5db",
            background="white",
            cursor="pointer",
            border_radius="0.25rem",
            font_size="0.875rem",
            transition="all 0.15s ease",
        )
        .rule(".dyn-page-btn:hover", background_color="#f3f4f6")
        .rule(".dyn-page-btn.active", background_color="#2563eb", border_color="#2563eb", color="white")
        .render()
    )


def style_element(css: str) -> Markup:
    """Wrap stylesheet text in a <style> element."""
    # A stylesheet cannot legitimately contain "</style"; escape it so it cannot end the element.
    safe = css.replace("</", "<\\/")
    return Markup("<style>\n") + Markup(safe) + Markup("</style>")


def with_default_css(html: str | Markup) -> Markup:
    """Prefix rendered component HTML with the default stylesheet."""
    return style_element(default_css()) + Markup("\n") + (
        html if isinstance(html, Markup) else escape(html)
    )
