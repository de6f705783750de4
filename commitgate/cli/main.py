"""Main CLI command for generating and committing messages."""

from typing import Optional

import typer

from commitgate import __version__
from commitgate.analysis import analyze_status, describe_changes
from commitgate.cli.utils import (
    artifact_kind_for,
    echo_framed,
    format_artifact,
    parse_backend_option,
)
from commitgate.constraints import build_constraint_artifact
from commitgate.diagnostics import CollectingSink
from commitgate.engine import EngineOptions, generate_commit_message
from commitgate.exceptions import LLMError, SchemaViolation
from commitgate.git import (
    GitError,
    NoStagedChangesError,
    build_context_bundle,
    commit_with_message,
    get_repo_root,
    get_staged_status,
)
from commitgate.global_config import GlobalConfigError, resolve_backend_config
from commitgate.llm import get_backend
from commitgate.logging_config import configure_logging


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"commitgate {__version__}")
        raise typer.Exit()


def main_command(
    ctx: typer.Context,
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        "-n",
        help="Print the generated message without committing",
    ),
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Bypass confirmation prompt and commit immediately",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Log every extraction and validation step to stderr",
    ),
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
    show_artifact: bool = typer.Option(
        False,
        "--show-artifact",
        help="Print the grammar or schema for the staged changes and exit",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """Generate a conventional commit message for the staged changes."""
    # If a subcommand is invoked, don't run the default behavior
    if ctx.invoked_subcommand is not None:
        return

    configure_logging(debug=debug)
    backend_kind = parse_backend_option(backend)
    sink = CollectingSink(forward_to_log=True) if debug else None

    try:
        config = resolve_backend_config(
            kind=backend_kind,
            host=api_host,
            port=api_port,
            model=api_model,
            timeout=api_timeout,
        )

        get_repo_root()
        status = get_staged_status()
        analysis = analyze_status(status)
        if analysis.staged_file_count == 0:
            raise NoStagedChangesError("No staged changes found.")

        typer.echo(f"Staged: {describe_changes(analysis)}", err=True)

        if show_artifact:
            artifact = build_constraint_artifact(artifact_kind_for(config.kind), analysis)
            typer.echo(format_artifact(artifact))
            raise typer.Exit(0)

        context_bundle = build_context_bundle(status=status)
        generator = get_backend(config)

        typer.echo(f"Generating commit message with {config.kind.value} backend...", err=True)
        message = generate_commit_message(
            generator,
            analysis,
            context_bundle,
            EngineOptions(debug_sink=sink),
        )

        if sink is not None:
            typer.echo("\n[DIAGNOSTICS]", err=True)
            typer.echo(sink.format_report(), err=True)

        echo_framed(message)

        if dry_run:
            raise typer.Exit(0)

        if not yes:
            typer.echo("")
            confirm = typer.prompt(
                "Commit with this message? [Y/n]",
                default="y",
                show_default=False,
            )
            if confirm.lower() not in ("y", "yes", ""):
                typer.echo("Commit cancelled.", err=True)
                raise typer.Exit(0)

        typer.echo("Committing...", err=True)
        output = commit_with_message(message)
        typer.echo("Commit successful!", err=True)
        if output:
            typer.echo(output)

    except NoStagedChangesError:
        typer.echo("nothing to commit (no changes staged for commit)", err=True)
        typer.echo("", err=True)
        typer.echo("Stage your changes first with:", err=True)
        typer.echo("  git add <file>...", err=True)
        raise typer.Exit(1)
    except GitError as e:
        typer.echo(f"Git error: {e}", err=True)
        raise typer.Exit(1)
    except GlobalConfigError as e:
        typer.echo(f"Config error: {e}", err=True)
        raise typer.Exit(1)
    except SchemaViolation as e:
        if sink is not None:
            typer.echo(sink.format_report(), err=True)
        typer.echo(f"Backend ignored its output constraints: {e}", err=True)
        typer.echo("Check that the server supports the selected backend mode.", err=True)
        raise typer.Exit(1)
    except LLMError as e:
        if sink is not None:
            typer.echo(sink.format_report(), err=True)
        typer.echo(f"Generation error: {e}", err=True)
        raise typer.Exit(1)
