"""
Component description files.

A component description is a JSON document:

    {
        "id": "product-tabs",
        "states": [{"id": "info", "label": "Info", "content": "Plain text"},
                   {"id": "specs", "label": "Specs", "html": "<ul>...</ul>"}],
        "data": {"items": [...], "schema": {"fields": [...]}, "options": {...}},
        "rules": [...],
        "options": {"minifyJs": true, "hooks": {"afterInit": "..."}}
    }

``content`` is escaped text, ``html`` is inserted as markup.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from markupsafe import Markup

from dynui.core.errors import ConfigError, ErrorContext
from dynui.specs.component import ComponentSpec, make_input
from dynui.specs.options import DynamicOptions


def _state_entry(entry: dict[str, Any]) -> dict[str, Any]:
    state = dict(entry)
    html = state.pop("html", None)
    if html is not None:
        state["content"] = Markup(html)
    return state


def spec_from_dict(data: dict[str, Any]) -> ComponentSpec:
    """
    Build a ComponentSpec from a parsed component description.

    Raises:
        pydantic.ValidationError: On malformed parts
    """
    raw_states = data.get("states")
    if isinstance(raw_states, dict):
        states: Any = {key: _state_entry(value) for key, value in raw_states.items()}
    elif raw_states is not None:
        states = [_state_entry(entry) for entry in raw_states]
    else:
        states = None

    return ComponentSpec(
        id=data.get("id", ""),
        input=make_input(states=states, data=data.get("data"), rules=data.get("rules")),
        options=DynamicOptions.model_validate(data.get("options", {})),
    )


def load_component_file(path: Path) -> ComponentSpec:
    """
    Load a component description from a JSON file.

    Raises:
        ConfigError: If the file cannot be read or is not a JSON object
        pydantic.ValidationError: On malformed parts
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Cannot read component description: {e}", ErrorContext(file=path)) from e

    if not isinstance(data, dict):
        raise ConfigError("Component description must be a JSON object", ErrorContext(file=path))
    return spec_from_dict(data)
