"""
Markup skeleton generation.

Emits the server-rendered structure for a detected pattern: state
navigation and panels, filter controls with results and pagination
placeholders, or an inert status placeholder for rules-only components.
Combined patterns emit the union of their parts.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any

from markupsafe import Markup, escape

from dynui.core.errors import RenderError
from dynui.core.semantics import select_initial_state
from dynui.core.templating import render_template
from dynui.specs.component import ComponentSpec
from dynui.specs.data import FilterableDataset, FilterableField
from dynui.specs.pattern import DetectedPattern, Pattern
from dynui.specs.rules import DependencyRule
from dynui.themes.base import DynamicTheme

logger = logging.getLogger(__name__)

DEFAULT_ROW_CLASS = "dyn-data-row"

_SIMPLE_CLASS_SELECTOR = re.compile(r"^\.([A-Za-z_][A-Za-z0-9_-]*)$")

# Extra panel/container classes per combined pattern
_PANEL_CLASSES = {
    Pattern.STATEFUL_DATA: ("dyn-filterable-state", "dyn-stateful-data-container"),
    Pattern.FILTERABLE_STATES: ("dyn-filterable-state", "dyn-filterable-states-container"),
    Pattern.DEPENDENT_STATES: ("dyn-dependent-state", "dyn-dependent-states-container"),
    Pattern.COMPLETE: ("dyn-complete-state", "dyn-complete-container"),
}


@dataclass
class DataRow:
    """A pre-rendered record for server-rendered filtering."""

    attributes: list[tuple[str, str]] = field(default_factory=list)
    content: Markup = field(default_factory=Markup)


def render_content(content: Any) -> Markup:
    """
    Render state content once, at generation time.

    Objects with ``__html__`` are inserted as-is, strings are escaped,
    callables are called first. Anything else is shown as escaped JSON.
    """
    if callable(content) and not hasattr(content, "__html__"):
        content = content()
    if content is None:
        return Markup("")
    if hasattr(content, "__html__"):
        return Markup(content.__html__())
    if isinstance(content, str):
        return escape(content)
    return escape(json.dumps(content, default=str))


def data_attribute_name(field_name: str) -> str:
    """``inStock`` -> ``in-stock`` so the runtime finds it via ``dataset.inStock``."""
    return re.sub(r"([A-Z])", r"-\1", field_name).lower()


def _attribute_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def row_class(dataset: FilterableDataset) -> str:
    """Class of pre-rendered rows: the row selector when it is a plain class selector."""
    match = _SIMPLE_CLASS_SELECTOR.match(dataset.options.row_selector)
    return match.group(1) if match else DEFAULT_ROW_CLASS


def rules_affecting(
    rules: list[DependencyRule], targets: dict[str, set[str]]
) -> dict[str, list[str]]:
    """Key -> ids of the rules with an action on any of the key's target ids."""
    affecting: dict[str, list[str]] = {}
    for key, target_ids in targets.items():
        ids = [rule.id for rule in rules if rule.affects(*target_ids)]
        if ids:
            affecting[key] = ids
    return affecting


class StructureGenerator:
    """
    Generates the markup skeleton of a component.

    The active state's panel is visible in the generated markup; the
    runtime only takes over from there.
    """

    def __init__(self, spec: ComponentSpec, detected: DetectedPattern, theme: DynamicTheme):
        """
        Initialize the generator.

        Args:
            spec: Component specification
            detected: Pattern detected for the spec
            theme: Theme supplying class names
        """
        self.spec = spec
        self.detected = detected
        self.theme = theme

    @property
    def pattern(self) -> Pattern:
        return self.detected.primary_pattern

    @property
    def dependent(self) -> bool:
        """Rules coexist with states or data."""
        return self.detected.has_rules and self.pattern is not Pattern.DEPENDENCY_ONLY

    def generate(self) -> Markup:
        """Markup for the detected pattern."""
        if self.pattern is Pattern.EMPTY:
            return Markup(render_template("structure/empty.html"))
        if self.pattern is Pattern.DEPENDENCY_ONLY:
            return self.generate_rules_placeholder()

        parts: list[Markup] = []
        if self.pattern.uses_states:
            parts.append(self.generate_states())
        if self.pattern.uses_data:
            parts.append(self.generate_data())
        return Markup("").join(parts)

    # =========================================================================
    # States
    # =========================================================================

    def generate_states(self) -> Markup:
        states = self.spec.states
        panel_class, container_class = _PANEL_CLASSES.get(self.pattern, ("", ""))
        rules = self.spec.rules

        affecting = (
            rules_affecting(rules, {s.id: s.target_ids(self.spec.id) for s in states})
            if self.dependent
            else {}
        )
        contents = {state.id: render_content(state.content) for state in states}

        return Markup(
            render_template(
                "structure/states.html",
                component_id=self.spec.id,
                states=states,
                theme=self.theme,
                active_id=select_initial_state(states),
                contents=contents,
                dependent=self.dependent,
                dependent_ids=set(affecting),
                affecting_rules=affecting,
                panel_class=panel_class,
                container_class=container_class,
            )
        )

    # =========================================================================
    # Data
    # =========================================================================

    def generate_data(self) -> Markup:
        dataset = self.spec.dataset
        if dataset is None:
            raise RenderError(
                f"Component '{self.spec.id}': pattern '{self.pattern.value}' needs a dataset"
            )
        fields = dataset.resolved_fields()
        for schema_field in fields:
            if not schema_field.is_known_type:
                logger.warning(
                    f"Component '{self.spec.id}': unknown filter type '{schema_field.type}' "
                    f"for field '{schema_field.name}'"
                )

        affecting = (
            rules_affecting(self.spec.rules, {f.name: {f.name} for f in fields})
            if self.dependent
            else {}
        )

        return Markup(
            render_template(
                "structure/data.html",
                component_id=self.spec.id,
                fields=fields,
                theme=self.theme,
                dependent=self.dependent,
                affecting_rules=affecting,
                rows=self.server_rows(dataset, fields),
                row_class=row_class(dataset),
                paginate=dataset.options.enable_pagination,
                search=dataset.options.enable_search,
            )
        )

    def server_rows(
        self, dataset: FilterableDataset, fields: list[FilterableField]
    ) -> list[DataRow]:
        """Pre-rendered rows, when the dataset is server-rendered and a renderer is set."""
        if not dataset.options.server_rendered or self.spec.renderer is None:
            return []

        rows = []
        for item in dataset.items:
            attributes = [
                (data_attribute_name(f.name), _attribute_value(item.get(f.name))) for f in fields
            ]
            rows.append(DataRow(attributes=attributes, content=render_content(self.spec.renderer(item))))
        return rows

    # =========================================================================
    # Rules
    # =========================================================================

    def generate_rules_placeholder(self) -> Markup:
        return Markup(
            render_template("structure/rules.html", component_id=self.spec.id, theme=self.theme)
        )


def generate_structure(
    spec: ComponentSpec, detected: DetectedPattern, theme: DynamicTheme
) -> Markup:
    """Generate the markup skeleton for a component."""
    return StructureGenerator(spec, detected, theme).generate()
