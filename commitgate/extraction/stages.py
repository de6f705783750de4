"""Extraction stages for freeform model output.

Every stage is a pure function `(raw_output) -> StageResult` over the full
raw output. Stages 3-5 build on the cleanup of the stages before them, so
each one only reports Matched when it changed something relative to its
predecessor.
"""

import re
from dataclasses import dataclass
from typing import Callable, Union

from commitgate.commit_types import TYPE_ALTERNATION
from commitgate.config import SENTINEL_END, SENTINEL_START
from commitgate.validator import match_header


@dataclass(frozen=True)
class Matched:
    """A stage produced a candidate message."""

    candidate: str
    note: str = ""


@dataclass(frozen=True)
class NotApplicable:
    """A stage found nothing to extract."""

    reason: str


StageResult = Union[Matched, NotApplicable]
Stage = Callable[[str], StageResult]


SENTINEL_PATTERN = re.compile(
    rf"{re.escape(SENTINEL_START)}\s*([\s\S]*?)\s*{re.escape(SENTINEL_END)}"
)

ANSI_ESCAPE = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")

DECORATION_PATTERNS = [
    # MCP safety banner printed by the q CLI
    re.compile(r"To learn more about MCP safety.*?\n", re.DOTALL),
    # Helper menu with commands and shortcuts
    re.compile(r"/help.*?fuzzy search\n", re.DOTALL),
    # Horizontal separators
    re.compile(r"━+"),
]

LEADING_COMMENTARY_PATTERNS = [
    re.compile(
        r"^Here(?:[’']?s|\s+is)\s+(?:a|an|your|the)\s+(?:[\w-]+[ \t]+)*?(?:commit\s+message|message).*?:\s*",
        re.IGNORECASE,
    ),
    re.compile(
        r"^I(?:[’']ve|\s+have)\s+(?:created|generated|written|prepared)\s+(?:a|the)\s+"
        r"(?:[\w-]+[ \t]+)*?(?:commit\s+message|message).*?:\s*",
        re.IGNORECASE,
    ),
    re.compile(
        r"^This\s+(?:commit\s+message|message)\s+(?:follows|is|adheres).*?:\s*",
        re.IGNORECASE,
    ),
    re.compile(r"^Based\s+on\s+the\s+changes.*?:\s*", re.IGNORECASE),
]

TRAILING_COMMENTARY = re.compile(
    r"^[*_#>\s]*(?:note|explanation|commentary)\b"
    r"|\b(?:follows|adheres\s+to|uses|is\s+formatted\s+according\s+to)\b.*?\bconventional\s+commits?\b",
    re.IGNORECASE | re.DOTALL,
)

BULLET_PARAGRAPH = re.compile(r"^[-*]\s")

CODE_FENCE_BLOCK = re.compile(r"```[\w-]*[ \t]*\n([\s\S]*?)\n[ \t]*```")
FENCE_LINE = re.compile(r"^\s*```[\w-]*\s*$")

CONVENTIONAL_SPAN = re.compile(
    rf"(?<![\w-])(?:{TYPE_ALTERNATION})(?:\([a-zA-Z0-9_-]+\))?!?:[ \t]+[^\n]+(?:\n\n[\s\S]+)?"
)


def strip_decorations(text: str) -> str:
    """Remove CLI banners, separators and ANSI escapes."""
    for pattern in DECORATION_PATTERNS:
        text = pattern.sub("", text)
    text = ANSI_ESCAPE.sub("", text)
    return text.strip()


def strip_leading_commentary(text: str) -> str:
    """Remove narrative preambles such as "Here's a commit message:"."""
    text = text.strip()
    for pattern in LEADING_COMMENTARY_PATTERNS:
        text = pattern.sub("", text, count=1)
    return text.strip()


def strip_trailing_commentary(text: str) -> str:
    """Drop trailing paragraphs that talk about the message instead of being part of it.

    The first paragraph (the header) is never removed.
    """
    paragraphs = re.split(r"\n[ \t]*\n", text.strip())
    while len(paragraphs) > 1:
        last = paragraphs[-1].strip()
        if BULLET_PARAGRAPH.match(last) or not TRAILING_COMMENTARY.search(last):
            break
        paragraphs.pop()
    return "\n\n".join(paragraphs).strip()


def _drop_fence_lines(text: str) -> str:
    return "\n".join(line for line in text.split("\n") if not FENCE_LINE.match(line)).strip()


def _changed(candidate: str, previous: str) -> bool:
    return bool(candidate) and candidate != previous


# ============================================================
# STAGES
# ============================================================


def sentinel_stage(raw_output: str) -> StageResult:
    """Take the span between the sentinel markers.

    A single marker is tolerated: the text after the start marker (or
    before the end marker) is used, with a note about the mismatch. Text
    after a lone start marker runs to the end of the output, so trailing
    commentary is removed from it.
    """
    has_start = SENTINEL_START in raw_output
    has_end = SENTINEL_END in raw_output

    if has_start and has_end:
        match = SENTINEL_PATTERN.search(raw_output)
        if match and match.group(1).strip():
            return Matched(match.group(1).strip())
        return NotApplicable("sentinel markers enclose no content")

    if has_start:
        candidate = strip_trailing_commentary(raw_output.split(SENTINEL_START, 1)[1])
        if candidate:
            return Matched(candidate, note="mismatched markers: end marker missing")
        return NotApplicable("nothing follows the start marker")

    if has_end:
        candidate = raw_output.split(SENTINEL_END, 1)[0].strip()
        if candidate:
            return Matched(candidate, note="mismatched markers: start marker missing")
        return NotApplicable("nothing precedes the end marker")

    return NotApplicable("no sentinel markers found")


def decoration_stage(raw_output: str) -> StageResult:
    """Use the raw output with CLI decoration removed."""
    candidate = strip_decorations(raw_output)
    if not candidate:
        return NotApplicable("output is empty after removing decorations")
    return Matched(candidate)


def _after_leading(raw_output: str) -> tuple[str, str]:
    base = strip_decorations(raw_output)
    return base, strip_leading_commentary(base)


def leading_commentary_stage(raw_output: str) -> StageResult:
    """Remove a narrative preamble before the message."""
    base, candidate = _after_leading(raw_output)
    if not _changed(candidate, base):
        return NotApplicable("no leading commentary found")
    return Matched(candidate)


def _after_trailing(raw_output: str) -> tuple[str, str]:
    _, base = _after_leading(raw_output)
    return base, strip_trailing_commentary(base)


def trailing_commentary_stage(raw_output: str) -> StageResult:
    """Remove trailing paragraphs commenting on the message."""
    base, candidate = _after_trailing(raw_output)
    if not _changed(candidate, base):
        return NotApplicable("no trailing commentary found")
    return Matched(candidate)


def conventional_anchor_stage(raw_output: str) -> StageResult:
    """Start the message at the first line in conventional commit format."""
    _, base = _after_trailing(raw_output)
    lines = base.split("\n")

    index = next((i for i, line in enumerate(lines) if match_header(line.strip())), None)
    if index is None:
        return NotApplicable("no line in conventional commit format")

    # A header inside a fenced block ends at the closing fence
    tail = lines[index:]
    end = next((i for i, line in enumerate(tail) if FENCE_LINE.match(line)), len(tail))
    candidate = "\n".join(tail[:end]).strip()
    if not _changed(candidate, base):
        return NotApplicable("conventional commit line is already first")
    return Matched(candidate, note=f"conventional commit format found at line {index + 1}")


def code_fence_stage(raw_output: str) -> StageResult:
    """Use the contents of a fenced code block.

    Prefers the first block whose content has a conventional commit line.
    """
    blocks = [m.group(1).strip() for m in CODE_FENCE_BLOCK.finditer(strip_decorations(raw_output))]
    blocks = [b for b in blocks if b]
    if not blocks:
        return NotApplicable("no fenced code block found")

    for block in blocks:
        if match_header(block.split("\n")[0].strip()):
            return Matched(block)
    return Matched(blocks[0])


def pattern_stage(raw_output: str) -> StageResult:
    """Regex-match from the first valid type token to the end of the text."""
    text = strip_decorations(raw_output)
    match = CONVENTIONAL_SPAN.search(text)
    if not match:
        return NotApplicable("no conventional commit pattern in output")

    candidate = _drop_fence_lines(strip_trailing_commentary(match.group(0)))
    if not candidate:
        return NotApplicable("pattern match is empty")
    return Matched(candidate)


EXTRACTION_STAGES: list[tuple[str, Stage]] = [
    ("sentinel", sentinel_stage),
    ("decorations", decoration_stage),
    ("leading_commentary", leading_commentary_stage),
    ("trailing_commentary", trailing_commentary_stage),
    ("conventional_anchor", conventional_anchor_stage),
    ("code_fence", code_fence_stage),
    ("pattern", pattern_stage),
]
