"""
Component rendering.

Runs the compiler passes for one component and assembles the container:
configuration block, markup skeleton and runtime script. Rendering is a
pure function of its inputs, so independent components can be rendered
concurrently.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any

from markupsafe import Markup

from dynui.core.detector import detect_pattern
from dynui.core.errors import make_spec_error
from dynui.core.manifest import DynuiManifest
from dynui.core.payload import build_config, serialize_config
from dynui.core.script import generate_script
from dynui.core.structure import generate_structure
from dynui.core.templating import render_template, sanitize_id
from dynui.specs.component import ComponentSpec
from dynui.specs.pattern import DetectedPattern
from dynui.themes.base import DynamicTheme
from dynui.themes.css import with_default_css
from dynui.themes.presets import get_theme

logger = logging.getLogger(__name__)

_ATTRIBUTE_NAME_RE = re.compile(r"^[a-z][a-z0-9-]*$")
_SCRIPT_CLOSE_RE = re.compile(r"</(script)", re.IGNORECASE)


@dataclass(frozen=True)
class RenderedComponent:
    """
    Generated output for one component.

    Attributes:
        id: Component id
        pattern: Detected pattern
        markup: Structure markup (navigation, panels, filters, placeholders)
        config: Configuration payload embedded next to the markup
        script: Runtime script text, without the <script> element
        theme: Theme the markup was rendered with
    """

    id: str
    pattern: DetectedPattern
    markup: Markup
    config: dict[str, Any]
    script: str
    theme: DynamicTheme
    custom_attributes: dict[str, str] = field(default_factory=dict)
    include_default_css: bool = False

    @property
    def global_name(self) -> str:
        """Window property the ready controller is exposed under."""
        return f"DynComponent_{sanitize_id(self.id)}"

    @property
    def config_json(self) -> Markup:
        return serialize_config(self.config)

    @property
    def html(self) -> Markup:
        """The complete container element."""
        pattern = self.pattern.primary_pattern.value
        html = Markup(
            render_template(
                "structure/container.html",
                component_id=self.id,
                theme=self.theme,
                pattern=pattern,
                custom_attributes=self.custom_attributes,
                config_json=self.config_json,
                structure=self.markup,
                script=embed_script(self.script),
            )
        )
        if self.include_default_css:
            return with_default_css(html)
        return html

    def __html__(self) -> Markup:
        return self.html

    def __str__(self) -> str:
        return str(self.html)


def embed_script(script: str) -> Markup:
    """Script text made safe to place inside a <script> element."""
    return Markup(_SCRIPT_CLOSE_RE.sub(r"<\\/\1", script))


def _check_custom_attributes(spec: ComponentSpec) -> dict[str, str]:
    for name in spec.options.custom_attributes:
        if not _ATTRIBUTE_NAME_RE.match(name):
            raise make_spec_error(
                f"Custom attribute name '{name}' is not a valid data-* suffix",
                component=spec.id,
                field=name,
            )
    return dict(spec.options.custom_attributes)


def render(
    spec: ComponentSpec,
    theme: DynamicTheme | str | None = None,
    manifest: DynuiManifest | None = None,
    minify: bool | None = None,
) -> RenderedComponent:
    """
    Compile a component specification.

    Args:
        spec: Component specification
        theme: Theme or preset name; the spec's own theme takes precedence
        manifest: Project settings (theme preset, thresholds, minification)
        minify: Override for minification; defaults to the spec option or manifest

    Returns:
        RenderedComponent with markup, configuration and script

    Raises:
        ComponentSpecError: On limits exceeded under strict validation or unsafe names
        RenderError: On template or serialization failures
    """
    manifest = manifest or DynuiManifest()

    if spec.theme is not None:
        resolved_theme = spec.theme
    elif isinstance(theme, DynamicTheme):
        resolved_theme = theme
    else:
        resolved_theme = get_theme(theme or manifest.render.theme)

    if minify is None:
        minify = spec.options.minify_js or manifest.render.minify

    custom_attributes = _check_custom_attributes(spec)
    detected = detect_pattern(spec, manifest.detection.thresholds())

    markup = generate_structure(spec, detected, resolved_theme)
    config = build_config(spec, detected, resolved_theme)
    script = generate_script(spec, detected, minify=minify)

    logger.debug(
        f"Rendered component '{spec.id}' ({detected.primary_pattern.value}, "
        f"{len(script)} script chars, minified={minify})"
    )

    return RenderedComponent(
        id=spec.id,
        pattern=detected,
        markup=markup,
        config=config,
        script=script,
        theme=resolved_theme,
        custom_attributes=custom_attributes,
        include_default_css=manifest.render.include_default_css,
    )
