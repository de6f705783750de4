"""Conventional commit type tokens and their glyphs.

Contains:
- COMMIT_TYPE_EMOJIS: Closed mapping of type token to glyph
- COMMIT_TYPES: Ordered list of valid type tokens
- COMMIT_EMOJIS: De-duplicated glyph set, in table order
- BREAKING_EMOJI: Glyph prefixed for breaking-change headers
"""

COMMIT_TYPE_EMOJIS = {
    "feat": "✨",
    "fix": "🐛",
    "docs": "📝",
    "style": "💄",
    "refactor": "♻️",
    "perf": "⚡️",
    "test": "✅",
    "chore": "🔧",
    "ci": "👷",
    "build": "🏗️",
    "revert": "⏪",
    "merge": "🔀",
    "deps": "📦",
    "breaking": "💥",
    "security": "🔒",
    "config": "🔧",
    "i18n": "🌐",
    "release": "🚀",
    "db": "🗃️",
    "a11y": "♿",
    "ux": "🎨",
    "init": "🎉",
}

COMMIT_TYPES = list(COMMIT_TYPE_EMOJIS)

COMMIT_EMOJIS = list(dict.fromkeys(COMMIT_TYPE_EMOJIS.values()))

BREAKING_EMOJI = COMMIT_TYPE_EMOJIS["breaking"]

# Used by the validator, the extraction stages and the formatter
TYPE_ALTERNATION = "|".join(COMMIT_TYPES)


def get_type_emoji(commit_type: str) -> str | None:
    """Get the glyph for a commit type token.

    Args:
        commit_type: The type token (case-insensitive).

    Returns:
        The glyph, or None for unknown tokens.
    """
    return COMMIT_TYPE_EMOJIS.get(commit_type.strip().lower())
