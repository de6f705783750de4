"""Commit message formatting and rendering.

Contains:
- render_commit_content: Render a CommitContent into the final message text
- normalize_message: Fix paragraph and bullet spacing in extracted text
- add_type_emoji: Prefix the type glyph to a header lacking an emoji
- enhance_message: normalize_message followed by add_type_emoji
"""

from commitgate.commit_types import BREAKING_EMOJI, COMMIT_TYPE_EMOJIS
from commitgate.config import SENTINEL_END, SENTINEL_START
from commitgate.models import CommitContent, bullet_text, single_line, summary_text
from commitgate.validator import is_bullet_line, match_header, split_leading_emoji


def render_commit_content(content: CommitContent) -> str:
    """Render structured commit content into a commit message string.

    Args:
        content: The structured commit data.

    Returns:
        The formatted message: header, blank line, summary, blank line,
        bullet block.

    Raises:
        ValueError: If a field renders to an empty string.

    Example output:
        ✨ feat(auth): add token refresh endpoint

        Keep sessions alive without forcing a new login.

        - Add refresh route to the auth router
        - Store refresh tokens with an expiry
    """
    subject = single_line(content.subject)
    # A summary starting with a bullet marker would read as a bullet run
    summary = summary_text(content.body.summary)
    bullets = [bullet_text(point) for point in content.body.bullet_points]

    if not subject or not summary or not all(bullets):
        raise ValueError("Cannot render commit content with blank fields")

    header = f"{content.emoji} {content.type}({content.scope}): {subject}"
    parts = [header, "", summary]
    if bullets:
        parts.append("")
        parts.extend(f"- {text}" for text in bullets)

    return "\n".join(parts)


def _next_nonblank(lines: list[str], start: int) -> str | None:
    for line in lines[start:]:
        if line.strip():
            return line
    return None


def normalize_message(message: str) -> str:
    """Normalize paragraph structure of an extracted commit message.

    - Removes sentinel markers left in the text
    - Removes blank lines between consecutive bullet lines
    - Collapses runs of blank lines into one
    - Ensures one blank line between the header and the body

    Args:
        message: The raw candidate message.

    Returns:
        The normalized message.
    """
    if not message:
        return message

    cleaned = message.replace(SENTINEL_START, "").replace(SENTINEL_END, "")
    lines = [line.rstrip() for line in cleaned.split("\n")]

    result: list[str] = []
    for i, line in enumerate(lines):
        if not line.strip():
            previous = result[-1] if result else None
            following = _next_nonblank(lines, i + 1)
            if (
                previous is not None
                and is_bullet_line(previous)
                and following is not None
                and is_bullet_line(following)
            ):
                continue
            if previous is None or not previous.strip():
                # Leading or repeated blank line
                continue
        result.append(line)

    while result and not result[-1].strip():
        result.pop()

    if len(result) > 1 and not is_bullet_line(result[0]) and result[1].strip():
        result.insert(1, "")

    return "\n".join(result).strip()


def add_type_emoji(message: str) -> str:
    """Prefix the glyph of the header's commit type when no emoji is present.

    Breaking headers (`type!:`) get the breaking glyph before the type glyph.
    Messages whose header already has an emoji, or does not match the
    conventional format, are returned unchanged.

    Args:
        message: The commit message.

    Returns:
        The message with an emoji-prefixed header.
    """
    if not message:
        return message

    lines = message.split("\n")
    header = lines[0]

    emoji, _ = split_leading_emoji(header)
    if emoji:
        return message

    match = match_header(header)
    if not match:
        return message

    commit_type = match.group("type")
    glyph = COMMIT_TYPE_EMOJIS[commit_type]
    if match.group("breaking") and glyph != BREAKING_EMOJI:
        glyph = f"{BREAKING_EMOJI}{glyph}"

    lines[0] = f"{glyph} {header.lstrip()}"
    return "\n".join(lines)


def enhance_message(message: str) -> str:
    """Normalize an extracted message and inject its type emoji."""
    return add_type_emoji(normalize_message(message))
