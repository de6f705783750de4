"""JSON Schema generation for structured commit messages.

Produces the schema-guided decoding equivalent of the GBNF grammar: the
same enums, length windows and bullet-count bounds, expressed as JSON
Schema (draft-07) for backends that accept `response_format`.
"""

from commitgate.analysis import FALLBACK_BULLET_RANGE, ChangeAnalysis
from commitgate.commit_types import COMMIT_EMOJIS, COMMIT_TYPES
from commitgate.models import (
    BULLET_MAX_LENGTH,
    BULLET_MIN_LENGTH,
    SCOPE_MIN_LENGTH,
    SCOPE_PATTERN,
    SUBJECT_MAX_LENGTH,
    SUBJECT_MIN_LENGTH,
    SUMMARY_MAX_LENGTH,
    SUMMARY_MIN_LENGTH,
)

SCHEMA_NAME = "commit_message"
JSON_SCHEMA_DRAFT = "http://json-schema.org/draft-07/schema#"


def build_commit_schema(
    analysis: ChangeAnalysis | None = None,
    structured_output: bool = False,
) -> dict:
    """Generate a JSON Schema for a conventional commit JSON object.

    Args:
        analysis: The change analysis. Without one, a static 1-5 bullet
            range is used.
        structured_output: Wrap the schema in an OpenAI-style
            `response_format` descriptor.

    Returns:
        The schema (or response_format) dictionary.
    """
    bullet_range = analysis.suggested_bullet_range if analysis else FALLBACK_BULLET_RANGE
    change_note = (
        f"{analysis.total_change_count} file change(s)" if analysis else "an unknown change set"
    )

    schema = {
        "$schema": JSON_SCHEMA_DRAFT,
        "title": "ConventionalCommitMessage",
        "description": f"Conventional Git commit message adapted for {change_note}.",
        "type": "object",
        "properties": {
            "emoji": {
                "description": "A single emoji representing the type of change.",
                "type": "string",
                "enum": list(COMMIT_EMOJIS),
            },
            "type": {
                "description": "The type of change based on conventional commits.",
                "type": "string",
                "enum": list(COMMIT_TYPES),
            },
            "scope": {
                "description": "The component or area affected (e.g., parser, api, auth).",
                "type": "string",
                "minLength": SCOPE_MIN_LENGTH,
                "pattern": SCOPE_PATTERN,
            },
            "subject": {
                "description": "A brief, imperative, present tense summary of the change.",
                "type": "string",
                "minLength": SUBJECT_MIN_LENGTH,
                "maxLength": SUBJECT_MAX_LENGTH,
            },
            "body": {
                "description": "The commit message body, providing more detail.",
                "type": "object",
                "properties": {
                    "summary": {
                        "description": "One sentence giving the big picture of the change.",
                        "type": "string",
                        "minLength": SUMMARY_MIN_LENGTH,
                        "maxLength": SUMMARY_MAX_LENGTH,
                    },
                    "bulletPoints": {
                        "description": (
                            "Specific changes, one per item, without a leading dash. "
                            f"Provide {bullet_range.min}-{bullet_range.max} items."
                        ),
                        "type": "array",
                        "items": {
                            "type": "string",
                            "minLength": BULLET_MIN_LENGTH,
                            "maxLength": BULLET_MAX_LENGTH,
                        },
                        "minItems": bullet_range.min,
                        "maxItems": bullet_range.max,
                    },
                },
                "required": ["summary", "bulletPoints"],
                "additionalProperties": False,
            },
        },
        "required": ["emoji", "type", "scope", "subject", "body"],
        "additionalProperties": False,
    }

    if structured_output:
        return {
            "type": "json_schema",
            "json_schema": {
                "name": SCHEMA_NAME,
                "strict": True,
                "schema": schema,
            },
        }

    return schema


def unwrap_schema(artifact: dict) -> dict:
    """Return the bare schema from a possibly wrapped response_format."""
    if artifact.get("type") == "json_schema" and "json_schema" in artifact:
        return artifact["json_schema"]["schema"]
    return artifact
