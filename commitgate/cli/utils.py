"""Shared helpers for CLI commands."""

import json
from typing import Optional

import typer

from commitgate.config import BackendKind
from commitgate.constraints import ArtifactKind, ConstraintArtifact

RULE = "=" * 60


def parse_backend_option(backend: Optional[str]) -> Optional[BackendKind]:
    """Convert the --backend option to a BackendKind, exiting on bad input."""
    if backend is None:
        return None
    try:
        return BackendKind(backend.lower())
    except ValueError:
        typer.echo(f"Invalid backend: {backend}", err=True)
        typer.echo(f"Valid backends: {', '.join(k.value for k in BackendKind)}", err=True)
        raise typer.Exit(1)


def artifact_kind_for(kind: BackendKind) -> ArtifactKind:
    """Artifact dialect shown by --show-artifact for a backend kind."""
    return ArtifactKind.GRAMMAR if kind == BackendKind.GRAMMAR else ArtifactKind.SCHEMA


def format_artifact(artifact: ConstraintArtifact) -> str:
    if artifact.kind == ArtifactKind.GRAMMAR:
        return artifact.value
    return json.dumps(artifact.value, indent=2, ensure_ascii=False)


def echo_framed(message: str) -> None:
    """Print a message between horizontal rules on stdout."""
    typer.echo("")
    typer.echo(RULE)
    typer.echo(message)
    typer.echo(RULE)
