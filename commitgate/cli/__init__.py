"""CLI entry point for commitgate.

This module provides the main CLI application that combines the default
generate-and-commit command with the config subcommands.
"""

import typer

from commitgate.cli.config import config_app
from commitgate.cli.main import main_command

# Main application
app = typer.Typer(
    name="commitgate",
    help="commitgate: conventional commit messages from local models",
    add_completion=False,
)

# Add subcommand groups
app.add_typer(config_app, name="config")

# Set the main callback for default behavior
app.callback(invoke_without_command=True)(main_command)


__all__ = [
    "app",
    "config_app",
    "main_command",
]
