"""Constraint artifacts for generation backends.

This package builds, per request, the artifact a constrained backend uses
to shape its output:
- grammar: GBNF grammar string (grammar-constrained decoding)
- schema: JSON Schema / response_format (schema-guided decoding)
- instructions: prompt fragments describing the same constraints
"""

from dataclasses import dataclass
from enum import Enum

from commitgate.analysis import ChangeAnalysis
from commitgate.constraints.grammar import (
    build_bullet_items_rule,
    build_commit_grammar,
    gbnf_literal,
)
from commitgate.constraints.instructions import build_contextual_instructions
from commitgate.constraints.schema import build_commit_schema, unwrap_schema


class ArtifactKind(Enum):
    """Constraint artifact dialects."""

    GRAMMAR = "grammar"
    SCHEMA = "schema"


@dataclass(frozen=True)
class ConstraintArtifact:
    """A generated grammar or schema, tied to the analysis it was built from."""

    kind: ArtifactKind
    value: str | dict
    analysis: ChangeAnalysis | None = None


def build_constraint_artifact(
    kind: ArtifactKind,
    analysis: ChangeAnalysis | None = None,
) -> ConstraintArtifact:
    """Build a fresh constraint artifact for one request.

    Args:
        kind: The dialect the backend accepts.
        analysis: The change analysis (None uses the static fallback).

    Returns:
        The ConstraintArtifact.
    """
    if kind == ArtifactKind.GRAMMAR:
        value = build_commit_grammar(analysis)
    else:
        value = build_commit_schema(analysis, structured_output=True)
    return ConstraintArtifact(kind=kind, value=value, analysis=analysis)


__all__ = [
    "ArtifactKind",
    "ConstraintArtifact",
    "build_constraint_artifact",
    "build_commit_grammar",
    "build_bullet_items_rule",
    "build_commit_schema",
    "build_contextual_instructions",
    "gbnf_literal",
    "unwrap_schema",
]
