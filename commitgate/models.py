"""Data models for structured commit content.

Contains:
- CommitBody: Pydantic model for the summary and bullet points
- CommitContent: Pydantic model for a complete structured commit message
- build_content_model: Request-specific model with bullet-count bounds
"""

import re
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, create_model, field_validator

from commitgate.analysis import FALLBACK_BULLET_RANGE, ChangeAnalysis
from commitgate.commit_types import COMMIT_EMOJIS, COMMIT_TYPES

# Length windows shared with the grammar and schema generators
SCOPE_MIN_LENGTH = 3
SCOPE_PATTERN = r"^[a-zA-Z0-9_-]+$"
SUBJECT_MIN_LENGTH = 10
SUBJECT_MAX_LENGTH = 100
SUMMARY_MIN_LENGTH = 5
SUMMARY_MAX_LENGTH = 500
BULLET_MIN_LENGTH = 1
BULLET_MAX_LENGTH = 100

BulletText = Annotated[
    str, StringConstraints(min_length=BULLET_MIN_LENGTH, max_length=BULLET_MAX_LENGTH)
]

BULLET_MARKER = re.compile(r"^[-*](?:\s+|$)")


def single_line(text: str) -> str:
    """Collapse all whitespace runs (newlines included) into single spaces."""
    return " ".join(text.split())


def bullet_text(point: str) -> str:
    """Bullet text as rendered: one line, without a leading marker."""
    return BULLET_MARKER.sub("", single_line(point))


def summary_text(summary: str) -> str:
    """Summary text as rendered: one line, without leading bullet characters."""
    return single_line(summary).lstrip("-* ")


class CommitBody(BaseModel):
    """Body of a structured commit message.

    Attributes:
        summary: One-sentence overview of the change.
        bullet_points: Ordered bullet texts (wire name: bulletPoints).
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    summary: str = Field(min_length=SUMMARY_MIN_LENGTH, max_length=SUMMARY_MAX_LENGTH)
    bullet_points: list[BulletText] = Field(alias="bulletPoints")

    @field_validator("summary")
    @classmethod
    def summary_must_have_text(cls, v: str) -> str:
        if not summary_text(v):
            raise ValueError("summary is blank")
        return v

    @field_validator("bullet_points")
    @classmethod
    def bullets_must_have_text(cls, v: list[str]) -> list[str]:
        """Reject bullets that are blank or only a bullet marker."""
        for index, point in enumerate(v):
            if not bullet_text(point):
                raise ValueError(f"bullet point {index} is blank")
        return v


class CommitContent(BaseModel):
    """Structured commit message as produced by a constrained backend.

    Attributes:
        emoji: Glyph from the commit type table.
        type: Conventional commit type token.
        scope: Affected component (3+ chars of [a-zA-Z0-9_-]).
        subject: Imperative summary line.
        body: Summary paragraph and bullet points.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    emoji: str
    type: str
    scope: str = Field(min_length=SCOPE_MIN_LENGTH, pattern=SCOPE_PATTERN)
    subject: str = Field(min_length=SUBJECT_MIN_LENGTH, max_length=SUBJECT_MAX_LENGTH)
    body: CommitBody

    @field_validator("emoji")
    @classmethod
    def emoji_must_be_known(cls, v: str) -> str:
        """Ensure the emoji is one of the table glyphs."""
        if v not in COMMIT_EMOJIS:
            raise ValueError(f"emoji {v!r} is not a known commit glyph")
        return v

    @field_validator("type")
    @classmethod
    def type_must_be_known(cls, v: str) -> str:
        """Ensure the type is a known conventional commit token."""
        if v not in COMMIT_TYPES:
            raise ValueError(f"type {v!r} is not one of: {', '.join(COMMIT_TYPES)}")
        return v

    @field_validator("subject")
    @classmethod
    def subject_must_have_text(cls, v: str) -> str:
        if not single_line(v):
            raise ValueError("subject is blank")
        return v

    @property
    def bullet_points(self) -> list[str]:
        return self.body.bullet_points

    def to_payload(self) -> dict:
        """Dump the content using the wire field names."""
        return self.model_dump(by_alias=True)


def build_content_model(analysis: ChangeAnalysis | None = None) -> type[CommitContent]:
    """Build a CommitContent model whose bullet list honors the analysis bounds.

    Args:
        analysis: The change analysis. Falls back to 1-5 bullets when None.

    Returns:
        A CommitContent subclass specific to the bullet range.
    """
    bullet_range = analysis.suggested_bullet_range if analysis else FALLBACK_BULLET_RANGE
    suffix = f"{bullet_range.min}_{bullet_range.max}"

    body_model = create_model(
        f"CommitBody_{suffix}",
        __base__=CommitBody,
        bullet_points=(
            list[BulletText],
            Field(
                alias="bulletPoints",
                min_length=bullet_range.min,
                max_length=bullet_range.max,
            ),
        ),
    )

    return create_model(
        f"CommitContent_{suffix}",
        __base__=CommitContent,
        body=(body_model, ...),
    )
