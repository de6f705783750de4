"""Freeform output extraction for commitgate.

This package recovers a commit message from backends that cannot honor a
grammar or schema:
- stages: Pure extraction stages returning Matched or NotApplicable
- pipeline: extract_commit_message, the ordered fallback chain
"""

from commitgate.extraction.pipeline import extract_commit_message
from commitgate.extraction.stages import (
    EXTRACTION_STAGES,
    Matched,
    NotApplicable,
    StageResult,
    strip_decorations,
    strip_leading_commentary,
    strip_trailing_commentary,
)

__all__ = [
    "extract_commit_message",
    "EXTRACTION_STAGES",
    "Matched",
    "NotApplicable",
    "StageResult",
    "strip_decorations",
    "strip_leading_commentary",
    "strip_trailing_commentary",
]
