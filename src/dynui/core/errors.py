"""
Error types for dynamic component generation.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class DynError(Exception):
    """Base exception for all dynui errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}: {self.message}"
        return self.message


class ComponentSpecError(DynError):
    """
    Raised when component inputs cannot be compiled.

    Examples:
    - Duplicate state ids
    - Size ceiling exceeded under strict validation
    - Identifiers that are unsafe to embed in generated script
    """

    pass


class RenderError(DynError):
    """
    Raised when markup or script generation fails.

    Examples:
    - Missing or broken template
    - Value that cannot be serialized into the configuration payload
    """

    pass


class ConfigError(DynError):
    """
    Raised when a dynui.toml manifest cannot be loaded.

    Examples:
    - Invalid TOML syntax
    - Unknown theme preset
    - Non-positive detection thresholds
    """

    pass


@dataclass
class ErrorContext:
    """
    Where an error occurred.

    Attributes:
        component: Component id being generated
        field: Optional field, state or rule id within the component
        file: Optional source file (manifest or component description)
    """

    component: str | None = None
    field: str | None = None
    file: Path | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "dynui.toml: component 'tabs' (field 'status')"
        """
        parts = []
        if self.file:
            parts.append(str(self.file))
        if self.component:
            parts.append(f"component '{self.component}'")
        if self.field:
            parts.append(f"(field '{self.field}')")
        return " ".join(parts) if parts else "<unknown>"


def make_spec_error(
    message: str,
    component: str | None = None,
    field: str | None = None,
) -> ComponentSpecError:
    """
    Helper to create a ComponentSpecError with optional context.

    Args:
        message: Error description
        component: Optional component id
        field: Optional field, state or rule id

    Returns:
        ComponentSpecError with context if a location is provided
    """
    if component or field:
        return ComponentSpecError(message, ErrorContext(component=component, field=field))
    return ComponentSpecError(message)
