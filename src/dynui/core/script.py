"""
Runtime script generation.

Composes the per-component browser runtime from named sections: the base
controller, one manager per present input (States/Data/Rules), pattern
coordination and bootstrap. Each section is a Jinja2 template rendered
with explicit, escaped values; sections are joined, never spliced.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from dynui.core.errors import make_spec_error
from dynui.core.minify import minify_js
from dynui.core.templating import render_template, sanitize_id
from dynui.specs.component import ComponentSpec
from dynui.specs.pattern import DetectedPattern, Pattern

logger = logging.getLogger(__name__)


@dataclass
class ScriptSection:
    """One named, rendered piece of the runtime."""

    name: str
    template: str
    context: dict[str, Any] = field(default_factory=dict)

    def render(self) -> str:
        return render_template(self.template, **self.context).strip("\n")


class ScriptBuilder:
    """
    Ordered collection of script sections sharing a base context.

    Example:
        builder = ScriptBuilder(js_id="tabs", component_id="tabs")
        builder.add("base", "runtime/base.js", has_states=True)
        script = builder.build()
    """

    def __init__(self, **base_context: Any):
        self.base_context = base_context
        self.sections: list[ScriptSection] = []

    def add(self, name: str, template: str, **context: Any) -> ScriptBuilder:
        if any(section.name == name for section in self.sections):
            raise ValueError(f"Duplicate script section '{name}'")
        self.sections.append(
            ScriptSection(name=name, template=template, context={**self.base_context, **context})
        )
        return self

    def names(self) -> list[str]:
        return [section.name for section in self.sections]

    def build(self) -> str:
        return "\n\n".join(section.render() for section in self.sections) + "\n"


class ScriptGenerator:
    """Generates the runtime script for one component."""

    def __init__(self, spec: ComponentSpec, detected: DetectedPattern):
        self.spec = spec
        self.detected = detected
        self.js_id = sanitize_id(spec.id)
        if not self.js_id:
            raise make_spec_error("Component id yields an empty script identifier", component=spec.id)

    def builder(self) -> ScriptBuilder:
        """Sections for the detected pattern, in emission order."""
        detected = self.detected
        builder = ScriptBuilder(
            js_id=self.js_id,
            component_id=self.spec.id,
            pattern=detected.primary_pattern.value,
            has_states=detected.has_states,
            has_data=detected.has_data,
            has_rules=detected.has_rules,
            complete=detected.primary_pattern is Pattern.COMPLETE,
        )

        builder.add("base", "runtime/base.js")
        if detected.has_states:
            builder.add("states", "runtime/states_manager.js")
        if detected.has_data:
            builder.add("data", "runtime/data_manager.js")
        if detected.has_rules:
            builder.add("rules", "runtime/rules_manager.js")
        builder.add("coordination", "runtime/coordination.js")
        builder.add("bootstrap", "runtime/bootstrap.js")
        return builder

    def generate(self, minify: bool | None = None) -> str:
        """
        Render the runtime script (without the surrounding <script> element).

        Args:
            minify: Override for the component's ``minify_js`` option
        """
        builder = self.builder()
        script = builder.build()
        logger.debug(f"Component '{self.spec.id}': script sections {builder.names()}")

        if minify if minify is not None else self.spec.options.minify_js:
            script = minify_js(script)
        return script


def generate_script(
    spec: ComponentSpec, detected: DetectedPattern, minify: bool | None = None
) -> str:
    """Generate the runtime script for a component."""
    return ScriptGenerator(spec, detected).generate(minify=minify)
