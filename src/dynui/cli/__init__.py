"""
dynui CLI package.

- app.py: typer application and commands
- loader.py: JSON component descriptions
"""

from dynui.cli.app import app, main

__all__ = ["app", "main"]
