import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from dynui.core.detector import DetectionThresholds
from dynui.core.errors import ConfigError, ErrorContext
from dynui.themes.presets import list_theme_presets

MANIFEST_FILENAME = "dynui.toml"


@dataclass
class RenderConfig:
    """Output configuration."""

    theme: str = "default"  # preset name, see dynui.themes.presets
    minify: bool = False
    include_default_css: bool = False


@dataclass
class DetectionConfig:
    """Pattern detection thresholds.

    Examples in dynui.toml:

        [detection]
        max_pre_rendered_states = 10
        max_client_data_size = 50
    """

    max_pre_rendered_states: int = 10
    max_client_data_size: int = 50
    filterable_states_data_size: int = 100
    pagination_data_size: int = 500
    lazy_state_count: int = 20
    rule_grouping_count: int = 50

    def thresholds(self) -> DetectionThresholds:
        return DetectionThresholds(
            max_pre_rendered_states=self.max_pre_rendered_states,
            max_client_data_size=self.max_client_data_size,
            filterable_states_data_size=self.filterable_states_data_size,
            pagination_data_size=self.pagination_data_size,
            lazy_state_count=self.lazy_state_count,
            rule_grouping_count=self.rule_grouping_count,
        )


@dataclass
class DynuiManifest:
    """Project-level generation settings."""

    render: RenderConfig = field(default_factory=RenderConfig)
    detection: DetectionConfig = field(default_factory=DetectionConfig)
    path: Path | None = None


def load_manifest(path: Path) -> DynuiManifest:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Cannot read manifest: {e}", ErrorContext(file=path)) from e

    render_data = data.get("render", {})
    detection_data = data.get("detection", {})

    render_config = RenderConfig(
        theme=render_data.get("theme", "default"),
        minify=render_data.get("minify", False),
        include_default_css=render_data.get("include_default_css", False),
    )
    if render_config.theme not in list_theme_presets():
        raise ConfigError(
            f"Unknown theme preset '{render_config.theme}' "
            f"(available: {', '.join(list_theme_presets())})",
            ErrorContext(file=path),
        )

    detection_config = DetectionConfig(
        max_pre_rendered_states=detection_data.get("max_pre_rendered_states", 10),
        max_client_data_size=detection_data.get("max_client_data_size", 50),
        filterable_states_data_size=detection_data.get("filterable_states_data_size", 100),
        pagination_data_size=detection_data.get("pagination_data_size", 500),
        lazy_state_count=detection_data.get("lazy_state_count", 20),
        rule_grouping_count=detection_data.get("rule_grouping_count", 50),
    )
    for name, value in vars(detection_config).items():
        if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
            raise ConfigError(
                f"[detection] {name} must be a positive integer, got {value!r}",
                ErrorContext(file=path),
            )

    return DynuiManifest(render=render_config, detection=detection_config, path=path)


def find_manifest(start: Path) -> Path | None:
    """Walk up from ``start`` looking for dynui.toml."""
    current = start.resolve()
    if current.is_file():
        current = current.parent
    for directory in (current, *current.parents):
        candidate = directory / MANIFEST_FILENAME
        if candidate.is_file():
            return candidate
    return None
