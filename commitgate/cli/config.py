"""CLI commands for global configuration management."""

from dataclasses import replace
from typing import Optional

import typer

from commitgate import global_config
from commitgate.cli.utils import parse_backend_option
from commitgate.config import BackendKind, load_backend_config_from_dict

# Subcommand group for configuration management
config_app = typer.Typer(
    name="config",
    help="Manage commitgate configuration in ~/.commitgate/",
    add_completion=False,
)


@config_app.command("show")
def config_show() -> None:
    """Show the effective backend configuration (file, environment and defaults)."""
    try:
        config = global_config.resolve_backend_config()
    except global_config.GlobalConfigError as e:
        typer.echo(f"Error reading configuration: {e}", err=True)
        raise typer.Exit(1)

    config_file = global_config.get_config_file_path()
    source = str(config_file) if config_file.exists() else "defaults (no config file)"

    typer.echo(f"Current commitgate configuration ({source}):")
    typer.echo()
    typer.echo(f"  Backend: {config.kind.value}")
    if config.kind == BackendKind.CLI:
        typer.echo(f"  Command: {' '.join(config.get_cli_command())}")
    else:
        typer.echo(f"  Base URL: {config.base_url}")
        typer.echo(f"  Model: {config.model}")
        typer.echo(f"  Max Tokens: {config.max_tokens}")
        typer.echo(f"  Temperature: {config.temperature}")
    typer.echo(f"  Timeout: {config.timeout:g}s")
    typer.echo(f"  API Key: {'set' if config.api_key else 'not set'}")


@config_app.command("set")
def config_set(
    backend: Optional[str] = typer.Option(
        None,
        "--backend",
        "-b",
        help="Generation backend (schema, grammar, freeform, cli)",
    ),
    api_host: Optional[str] = typer.Option(None, "--api-host", help="Backend server host"),
    api_port: Optional[int] = typer.Option(None, "--api-port", help="Backend server port"),
    api_model: Optional[str] = typer.Option(None, "--api-model", help="Model name"),
    api_timeout: Optional[float] = typer.Option(
        None,
        "--api-timeout",
        help="Request timeout in seconds",
    ),
) -> None:
    """Save backend settings to ~/.commitgate/config.yaml."""
    kind = parse_backend_option(backend)

    updates = {
        "kind": kind,
        "host": api_host,
        "port": api_port,
        "model": api_model,
        "timeout": api_timeout,
    }
    updates = {k: v for k, v in updates.items() if v is not None}
    if not updates:
        typer.echo("Nothing to set. Pass at least one option.", err=True)
        raise typer.Exit(1)

    try:
        current = load_backend_config_from_dict(global_config.load_global_config())
        global_config.save_backend_config(replace(current, **updates))
    except global_config.GlobalConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    for key, value in updates.items():
        shown = value.value if key == "kind" else value
        typer.echo(f"✓ {key} set to: {shown}")
