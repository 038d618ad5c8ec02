"""
dynui command-line interface.

Commands:
- render: compile a component description to HTML
- detect: show the detected pattern of a component description
- minify: minify a JavaScript file
- css: print the default stylesheet
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from dynui._version import get_version
from dynui.cli.loader import load_component_file
from dynui.core.detector import detect_pattern
from dynui.core.errors import DynError
from dynui.core.manifest import DynuiManifest, find_manifest, load_manifest
from dynui.core.minify import minify_js
from dynui.core.render import render
from dynui.themes.css import default_css
from dynui.themes.presets import get_theme_preset, list_theme_presets

console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"dynui version {get_version()}")
        raise typer.Exit()


app = typer.Typer(
    help="dynui - compile declarative component descriptions into interactive HTML",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    verbose: Annotated[bool, typer.Option("--verbose", help="Enable debug logging")] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            callback=version_callback,
            is_eager=True,
            help="Show version",
        ),
    ] = None,
) -> None:
    """dynui CLI main callback for global options."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _fail(message: str) -> typer.Exit:
    err_console.print(f"[red]{escape(message)}[/red]")
    return typer.Exit(code=1)


def _load_manifest(config: Path | None, spec_file: Path) -> DynuiManifest:
    path = config or find_manifest(spec_file)
    if path is None:
        return DynuiManifest()
    return load_manifest(path)


def _write_output(text: str, output: Path | None) -> None:
    if output is None:
        typer.echo(text, nl=not text.endswith("\n"))
        return
    output.write_text(text, encoding="utf-8")
    err_console.print(f"[green]Wrote {escape(str(output))}[/green]")


@app.command(name="render")
def render_command(
    spec_file: Annotated[Path, typer.Argument(help="Component description (JSON)")],
    theme: Annotated[
        str | None, typer.Option("--theme", "-t", help="Theme preset (overrides dynui.toml)")
    ] = None,
    minify: Annotated[bool, typer.Option("--minify", help="Minify the runtime script")] = False,
    default_css_flag: Annotated[
        bool, typer.Option("--default-css", help="Prepend the default stylesheet")
    ] = False,
    config: Annotated[
        Path | None, typer.Option("--config", "-c", help="dynui.toml (default: nearest one)")
    ] = None,
    output: Annotated[
        Path | None, typer.Option("--output", "-o", help="Output file (default: stdout)")
    ] = None,
) -> None:
    """Compile a component description to HTML."""
    if theme is not None and get_theme_preset(theme) is None:
        raise _fail(f"Unknown theme '{theme}' (available: {', '.join(list_theme_presets())})")

    try:
        manifest = _load_manifest(config, spec_file)
        if default_css_flag:
            manifest.render.include_default_css = True
        spec = load_component_file(spec_file)
        rendered = render(spec, theme=theme, manifest=manifest, minify=True if minify else None)
        html = str(rendered.html)
    except (DynError, ValidationError) as e:
        raise _fail(f"Error: {e}") from e

    _write_output(html, output)


@app.command(name="detect")
def detect_command(
    spec_file: Annotated[Path, typer.Argument(help="Component description (JSON)")],
    config: Annotated[
        Path | None, typer.Option("--config", "-c", help="dynui.toml (default: nearest one)")
    ] = None,
) -> None:
    """Show the detected pattern and optimization hints."""
    try:
        manifest = _load_manifest(config, spec_file)
        spec = load_component_file(spec_file)
        detected = detect_pattern(spec, manifest.detection.thresholds())
    except (DynError, ValidationError) as e:
        raise _fail(f"Error: {e}") from e

    table = Table(title=f"Component '{spec.id}'")
    table.add_column("Property", style="dim")
    table.add_column("Value")
    table.add_row("Pattern", f"[bold]{detected.primary_pattern.value}[/bold]")
    table.add_row("States", str(detected.state_count) if detected.has_states else "-")
    table.add_row("Records", str(detected.data_size) if detected.has_data else "-")
    table.add_row("Rules", str(detected.rule_count) if detected.has_rules else "-")
    table.add_row(
        "Optimizations", ", ".join(o.value for o in detected.optimizations) or "[dim]none[/dim]"
    )
    console.print(table)


@app.command(name="minify")
def minify_command(
    script_file: Annotated[Path, typer.Argument(help="JavaScript file")],
    output: Annotated[
        Path | None, typer.Option("--output", "-o", help="Output file (default: stdout)")
    ] = None,
) -> None:
    """Minify a JavaScript file."""
    try:
        source = script_file.read_text(encoding="utf-8")
    except OSError as e:
        raise _fail(f"Cannot read {script_file}: {e}") from e

    try:
        minified = minify_js(source)
    except DynError as e:
        raise _fail(f"Error: {e}") from e

    _write_output(minified + "\n", output)


@app.command(name="css")
def css_command(
    theme: Annotated[str, typer.Option("--theme", "-t", help="Theme preset")] = "default",
) -> None:
    """Print the default stylesheet, followed by the theme's own CSS if it has any."""
    preset = get_theme_preset(theme)
    if preset is None:
        raise _fail(f"Unknown theme '{theme}' (available: {', '.join(list_theme_presets())})")

    css = default_css()
    if preset.css:
        css = css + "\n" + preset.css
    typer.echo(css, nl=False)


def main() -> None:
    app(standalone_mode=True)


if __name__ == "__main__":
    main()
