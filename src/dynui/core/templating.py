"""
Jinja2 environment for markup and runtime script templates.

Markup templates (``structure/*.html``) are autoescaped. Script templates
(``runtime/*.js``) are not; every value interpolated into them must pass
through ``js_string`` (JSON literal) or ``js_ident`` (validated
identifier), so nothing is spliced into generated code unescaped.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError, select_autoescape
from jinja2.utils import htmlsafe_json_dumps
from markupsafe import Markup

from dynui.core.errors import RenderError
from dynui.themes.base import combine_classes

# Template directory
TEMPLATES_DIR = Path(__file__).parent.parent / "templates"

_IDENT_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def sanitize_id(component_id: str) -> str:
    """
    Turn a component id into a JavaScript identifier fragment.

    Hyphens and any other character outside ``[A-Za-z0-9_]`` become ``_``;
    a leading digit is prefixed with ``_``.
    """
    chars = []
    for i, ch in enumerate(component_id):
        if ch.isascii() and (ch.isalpha() or ch == "_" or (ch.isdigit() and i > 0)):
            chars.append(ch)
        elif i == 0 and ch.isascii() and ch.isdigit():
            chars.append("_" + ch)
        else:
            chars.append("_")
    return "".join(chars)


def _js_string_filter(value: Any) -> Markup:
    """Serialize a value as a JavaScript literal that is safe inside <script>."""
    try:
        return htmlsafe_json_dumps(value)
    except TypeError as e:
        raise RenderError(f"Cannot serialize {type(value).__name__} into script: {e}") from e


def _js_ident_filter(value: Any) -> str:
    """Pass through a JavaScript identifier, refusing anything else."""
    text = str(value)
    if not _IDENT_RE.match(text):
        raise RenderError(f"'{text}' is not a valid JavaScript identifier")
    return text


def _classes_filter(value: Any, *extra: str | None) -> str:
    """Join class names, skipping empty ones."""
    if isinstance(value, (list, tuple)):
        return combine_classes(*value, *extra)
    return combine_classes(value, *extra)


def _json_attr_filter(value: Any) -> str:
    """Compact JSON for a data-* attribute (autoescaping quotes it)."""
    return json.dumps(value, separators=(",", ":"), default=str)


def _number_filter(value: Any) -> str:
    """Format a number without a trailing ``.0`` for whole values."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def create_jinja_env() -> Environment:
    """Create and configure the Jinja2 environment."""
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(["html"], default_for_string=False, default=False),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )

    env.filters["js_string"] = _js_string_filter
    env.filters["js_ident"] = _js_ident_filter
    env.filters["js_id"] = sanitize_id
    env.filters["classes"] = _classes_filter
    env.filters["json_attr"] = _json_attr_filter
    env.filters["number"] = _number_filter

    return env


# Module-level singleton
_env: Environment | None = None


def get_jinja_env() -> Environment:
    """Get or create the shared Jinja2 environment."""
    global _env
    if _env is None:
        _env = create_jinja_env()
    return _env


def render_template(template_name: str, **context: Any) -> str:
    """
    Render a template by name.

    Raises:
        RenderError: If the template is missing or fails to render
    """
    try:
        template = get_jinja_env().get_template(template_name)
        return template.render(**context)
    except RenderError:
        raise
    except TemplateError as e:
        raise RenderError(f"Template '{template_name}' failed: {e}") from e
