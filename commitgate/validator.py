"""Conventional commit message validation.

`validate_commit_message` is the single predicate deciding whether a
candidate is a usable commit message. It is pure: no I/O, no state.

Checks, in order (the first failure wins):
1. Non-empty after trimming
2. No sentinel markers in the content
3. No narrative preamble ("here's ...", "based on ...", ...)
4. Header matches `type(scope)?!?: description`, leading emoji allowed
5. No blank line inside a run of bullet lines
"""

import re
import unicodedata
from typing import Optional

from commitgate.commit_types import TYPE_ALTERNATION
from commitgate.config import SENTINEL_END, SENTINEL_START

HEADER_PATTERN = re.compile(
    rf"^(?P<type>{TYPE_ALTERNATION})(?P<scope>\([a-zA-Z0-9_-]+\))?(?P<breaking>!)?:\s+.+"
)

BAD_PREFIXES = (
    "here",
    "here is",
    "here's",
    "this commit",
    "i've",
    "i have",
    "below is",
    "following is",
    "this is",
    "the commit",
    "based on",
    "<commit",
    "commit-start",
    "commit-end",
)

# Joiners and modifiers that can follow an emoji base character
_EMOJI_EXTRAS = {"\ufe0f", "\u200d", "\u20e3"}


def _is_emoji_char(ch: str) -> bool:
    if ch in _EMOJI_EXTRAS:
        return True
    if 0x1F3FB <= ord(ch) <= 0x1F3FF:  # skin tone modifiers
        return True
    return unicodedata.category(ch) == "So"


def split_leading_emoji(line: str) -> tuple[str, str]:
    """Split a leading emoji off a line.

    Args:
        line: The line to inspect.

    Returns:
        (emoji, rest) where emoji is "" when the line has none and rest has
        its leading whitespace removed when an emoji was found.
    """
    stripped = line.lstrip()
    end = 0
    while end < len(stripped) and _is_emoji_char(stripped[end]):
        end += 1
    if end == 0:
        return "", line
    return stripped[:end], stripped[end:].lstrip()


def is_bullet_line(line: str) -> bool:
    """Check whether a line is a bullet point ("-" or "*" prefix)."""
    stripped = line.strip()
    return stripped.startswith("-") or stripped.startswith("*")


def match_header(line: str) -> Optional[re.Match]:
    """Match a header line against the conventional commit grammar.

    A leading emoji is ignored.

    Args:
        line: The candidate header line.

    Returns:
        The match object, or None.
    """
    _, rest = split_leading_emoji(line)
    return HEADER_PATTERN.match(rest)


def _has_blank_line_between_bullets(message: str) -> bool:
    lines = message.split("\n")
    in_bullet_list = False

    for i, raw_line in enumerate(lines):
        line = raw_line.strip()
        if is_bullet_line(line):
            if in_bullet_list and i > 0 and lines[i - 1].strip() == "":
                return True
            in_bullet_list = True
        elif line:
            in_bullet_list = False

    return False


def check_commit_message(candidate: Optional[str]) -> Optional[str]:
    """Explain why a candidate is not a valid commit message.

    Args:
        candidate: The candidate message.

    Returns:
        The reason for the first failing check, or None when valid.
    """
    if not candidate or not candidate.strip():
        return "message is empty or whitespace only"

    if SENTINEL_START in candidate or SENTINEL_END in candidate:
        return "message contains sentinel markers inside the content"

    first_line = candidate.strip().split("\n")[0]
    _, header = split_leading_emoji(first_line)

    lowered = header.lower()
    for prefix in BAD_PREFIXES:
        if lowered.startswith(prefix):
            return f"message starts with narrative prefix '{prefix}'"

    if not HEADER_PATTERN.match(header):
        return f"first line does not match conventional commit format: {first_line!r}"

    if _has_blank_line_between_bullets(candidate):
        return "blank line found between bullet points"

    return None


def validate_commit_message(candidate: Optional[str]) -> bool:
    """Decide whether a candidate is an acceptable conventional commit message.

    Args:
        candidate: The candidate message.

    Returns:
        True if every check passes.
    """
    return check_commit_message(candidate) is None
