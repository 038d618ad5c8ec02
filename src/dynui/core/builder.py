"""
Fluent component builder.

Collects states, data, rules, hooks and options step by step and produces
a ComponentSpec. Inputs are normalized once, in ``build()``.

Example:
    spec = (
        Dyn("complex")
        .states(my_states)
        .data(my_records)
        .rules(my_rules)
        .external("map")
        .on_init("this.registerExternal('map', new google.maps.Map(...))")
        .build()
    )
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from dynui.core.render import RenderedComponent, render
from dynui.specs.component import ComponentSpec, RowRenderer, make_input
from dynui.specs.data import FilterableDataset, FilterableField, FilterSchema
from dynui.specs.options import ComponentHooks, DynamicOptions, ExternalScript
from dynui.themes.base import DynamicTheme


@dataclass
class Dyn:
    """Builder for one dynamic component."""

    id: str
    raw_states: Any = None
    raw_data: Any = None
    raw_rules: Any = None
    schema_fields: list[FilterableField] = field(default_factory=list)
    filter_options: dict[str, Any] = field(default_factory=dict)
    row_renderer: RowRenderer | None = None
    component_theme: DynamicTheme | None = None
    base_options: DynamicOptions = field(default_factory=DynamicOptions)
    scripts: list[ExternalScript] = field(default_factory=list)
    registry: list[str] = field(default_factory=list)
    hooks: dict[str, Any] = field(default_factory=dict)
    state_hooks: dict[str, str] = field(default_factory=dict)
    filters_by_state: dict[str, dict[str, Any]] = field(default_factory=dict)
    minify: bool = False

    # =========================================================================
    # Inputs
    # =========================================================================

    def states(self, states: Any) -> Dyn:
        """Set the states: a sequence of states/dicts or a mapping id -> state."""
        self.raw_states = states
        return self

    def data(self, data: Any) -> Dyn:
        """Set the data: a FilterableDataset, a dataset dict or a list of records."""
        self.raw_data = data
        return self

    def rules(self, rules: Any) -> Dyn:
        """Set the dependency rules."""
        self.raw_rules = rules
        return self

    def server_rendered_data(self, row_selector: str, counter_selector: str = "") -> Dyn:
        """Filter pre-rendered rows matched by ``row_selector`` instead of JSON records."""
        self.filter_options.update(
            server_rendered=True, row_selector=row_selector, counter_selector=counter_selector
        )
        return self

    def filter_field(self, schema_field: FilterableField) -> Dyn:
        """Add a filter field; declared fields replace the dataset's schema."""
        self.schema_fields.append(schema_field)
        return self

    def text_filter(self, name: str, label: str = "") -> Dyn:
        return self.filter_field(FilterableField(name=name, type="text", label=label, searchable=True))

    def select_filter(self, name: str, label: str = "", options: Iterable[str] = ()) -> Dyn:
        return self.filter_field(
            FilterableField(name=name, type="select", label=label, options=list(options))
        )

    def renderer(self, renderer: RowRenderer) -> Dyn:
        """Set the renderer used for server-rendered rows."""
        self.row_renderer = renderer
        return self

    def theme(self, theme: DynamicTheme) -> Dyn:
        self.component_theme = theme
        return self

    def options(self, options: DynamicOptions) -> Dyn:
        """Set base options; scripts, hooks and registry names added here are merged in."""
        self.base_options = options
        return self

    # =========================================================================
    # Externals
    # =========================================================================

    def external_script(
        self,
        src: str,
        required: bool = False,
        async_: bool = False,
        defer: bool = False,
        on_load: str | None = None,
    ) -> Dyn:
        self.scripts.append(
            ExternalScript(src=src, required=required, async_=async_, defer=defer, on_load=on_load)
        )
        return self

    def external(self, name: str) -> Dyn:
        """Reserve a name in the external object registry."""
        self.registry.append(name)
        return self

    # =========================================================================
    # Hooks
    # =========================================================================

    def before_init(self, code: str) -> Dyn:
        self.hooks["before_init"] = code
        return self

    def on_init(self, code: str) -> Dyn:
        self.hooks["after_init"] = code
        return self

    def before_state_change(self, code: str) -> Dyn:
        self.hooks["before_state_change"] = code
        return self

    def on_state_change(self, code: str) -> Dyn:
        self.hooks["after_state_change"] = code
        return self

    def on_state(self, state_id: str, code: str) -> Dyn:
        self.state_hooks[state_id] = code
        return self

    def before_filter(self, code: str) -> Dyn:
        self.hooks["before_filter"] = code
        return self

    def on_filter(self, code: str) -> Dyn:
        self.hooks["after_filter"] = code
        return self

    def on_destroy(self, code: str) -> Dyn:
        self.hooks["on_destroy"] = code
        return self

    def state_filters(self, state_id: str, filters: Mapping[str, Any]) -> Dyn:
        """Filter values applied when ``state_id`` becomes active."""
        self.filters_by_state[state_id] = dict(filters)
        return self

    def minified(self) -> Dyn:
        self.minify = True
        return self

    # =========================================================================
    # Build
    # =========================================================================

    def _dataset(self) -> FilterableDataset | None:
        if isinstance(self.raw_data, FilterableDataset):
            dataset = self.raw_data
        elif isinstance(self.raw_data, Mapping):
            dataset = FilterableDataset.model_validate(dict(self.raw_data))
        elif self.raw_data is not None:
            dataset = FilterableDataset(items=[dict(item) for item in self.raw_data])
        elif self.schema_fields or self.filter_options:
            dataset = FilterableDataset()
        else:
            return None

        update: dict[str, Any] = {}
        if self.schema_fields:
            update["filter_schema"] = FilterSchema(fields=list(self.schema_fields))
        if self.filter_options:
            update["options"] = dataset.options.model_copy(update=self.filter_options)
        return dataset.model_copy(update=update) if update else dataset

    def _options(self) -> DynamicOptions:
        base = self.base_options
        hooks = base.hooks.model_dump()
        hooks.update(self.hooks)
        hooks["state_hooks"] = {**hooks.get("state_hooks", {}), **self.state_hooks}

        return base.model_copy(
            update={
                "external_scripts": [*base.external_scripts, *self.scripts],
                "external_registry": list(dict.fromkeys([*base.external_registry, *self.registry])),
                "hooks": ComponentHooks(**hooks),
                "state_filters": {**base.state_filters, **self.filters_by_state},
                "minify_js": base.minify_js or self.minify,
            }
        )

    def build(self) -> ComponentSpec:
        """
        Build the component specification.

        Raises:
            pydantic.ValidationError: On malformed inputs or duplicate state ids
        """
        return ComponentSpec(
            id=self.id,
            input=make_input(states=self.raw_states, data=self._dataset(), rules=self.raw_rules),
            options=self._options(),
            theme=self.component_theme,
            renderer=self.row_renderer,
        )

    def render(self, **kwargs: Any) -> RenderedComponent:
        """Build and render in one step."""
        return render(self.build(), **kwargs)

