"""
Configuration payload serialization.

Packages everything the runtime needs into one JSON document embedded
next to the markup as ``<script type="application/json" id="{id}-config">``.
State content is never included (it is already in the markup) and empty
sections are omitted to keep small components small.
"""

from __future__ import annotations

import logging
from typing import Any

from jinja2.utils import htmlsafe_json_dumps
from markupsafe import Markup

from dynui.core.errors import RenderError
from dynui.core.semantics import order_rules
from dynui.specs.component import ComponentSpec
from dynui.specs.pattern import DetectedPattern
from dynui.themes.base import DynamicTheme

logger = logging.getLogger(__name__)


def config_element_id(component_id: str) -> str:
    """DOM id of a component's configuration block."""
    return f"{component_id}-config"


def build_config(spec: ComponentSpec, detected: DetectedPattern, theme: DynamicTheme) -> dict[str, Any]:
    """
    Build the configuration payload for a component.

    Args:
        spec: Component specification
        detected: Pattern detected for the spec
        theme: Theme supplying runtime class names

    Returns:
        JSON-compatible dict with camelCase keys
    """
    config: dict[str, Any] = {
        "id": spec.id,
        "pattern": detected.to_payload(),
        "themeClasses": theme.class_payload(),
    }

    if detected.has_states:
        config["states"] = [state.to_payload() for state in spec.states]

    dataset = spec.dataset
    if detected.has_data and dataset is not None:
        filter_options = dataset.options.model_dump(mode="json", by_alias=True, exclude_none=True)
        if not dataset.options.server_rendered:
            config["data"] = dataset.items
        config["schema"] = {
            "fields": [
                f.model_dump(mode="json", by_alias=True, exclude_none=True)
                for f in dataset.resolved_fields()
            ]
        }
        config["filterOptions"] = filter_options

    if detected.has_rules:
        # Pre-sorted so the runtime's stable sort sees declaration order on ties
        config["rules"] = [rule.to_payload() for rule in order_rules(spec.rules)]

    options = spec.options
    hooks = options.hooks.to_payload()
    if hooks:
        config["hooks"] = hooks
    if options.external_scripts:
        config["externalScripts"] = [
            script.model_dump(mode="json", by_alias=True, exclude_none=True)
            for script in options.external_scripts
        ]
    if options.external_registry:
        config["externalRegistry"] = list(options.external_registry)
    if options.state_filters:
        unknown = set(options.state_filters) - {s.id for s in spec.states}
        if unknown:
            logger.warning(f"Component '{spec.id}': state filters for unknown states {sorted(unknown)}")
        config["stateFilters"] = options.state_filters

    return config


def serialize_config(config: dict[str, Any]) -> Markup:
    """
    Serialize a payload for embedding inside a <script> element.

    ``<``, ``>``, ``&`` and ``'`` are escaped as JSON unicode escapes, so
    record values cannot close the element.

    Raises:
        RenderError: If the payload holds values JSON cannot represent
    """
    try:
        return htmlsafe_json_dumps(config, default=_json_default)
    except (TypeError, ValueError) as e:
        raise RenderError(f"Cannot serialize component configuration: {e}") from e


def _json_default(value: Any) -> Any:
    if isinstance(value, (set, frozenset, tuple)):
        return list(value)
    if hasattr(value, "isoformat"):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")
