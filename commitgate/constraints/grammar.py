"""GBNF grammar generation for structured commit messages.

The grammar describes the JSON object

    {"emoji": ..., "type": ..., "scope": ..., "subject": ...,
     "body": {"summary": ..., "bulletPoints": [...]}}

and is regenerated per request because the bullet-count rule depends on
the change analysis. The bullet list is always bounded: the grammar never
uses `*` or `+` on bullet items.
"""

from commitgate.analysis import FALLBACK_BULLET_RANGE, BulletRange, ChangeAnalysis
from commitgate.commit_types import COMMIT_EMOJIS, COMMIT_TYPES
from commitgate.models import (
    BULLET_MAX_LENGTH,
    BULLET_MIN_LENGTH,
    SUBJECT_MAX_LENGTH,
    SUBJECT_MIN_LENGTH,
    SUMMARY_MAX_LENGTH,
    SUMMARY_MIN_LENGTH,
)

BULLET_ITEM = "bullet-point-item"
ITEM_SEPARATOR = '"," space'

# A JSON string character: anything but quote, backslash and control chars,
# or one of the JSON escape sequences.
JSON_CHAR_BODY = (
    r'[^"\\\x00-\x1F] | "\\" (["\\/bfnrt] | "u" [0-9a-fA-F]{4})'
)


def gbnf_literal(text: str) -> str:
    """Quote a string as a GBNF terminal.

    Escapes backslash, quote and control characters the same way JSON does,
    so terminals that spell JSON keys stay valid once parsed.

    Args:
        text: The literal text.

    Returns:
        The quoted GBNF terminal.
    """
    out = []
    for ch in text:
        if ch == "\\":
            out.append("\\\\")
        elif ch == '"':
            out.append('\\"')
        elif ch == "\n":
            out.append("\\n")
        elif ch == "\r":
            out.append("\\r")
        elif ch == "\t":
            out.append("\\t")
        elif ord(ch) < 0x20:
            out.append(f"\\x{ord(ch):02X}")
        else:
            out.append(ch)
    return '"' + "".join(out) + '"'


def _json_string_terminal(text: str) -> str:
    """GBNF terminal matching `text` as a quoted JSON string."""
    return gbnf_literal(f'"{text}"')


def _alternatives(values: list[str]) -> str:
    return " | ".join(gbnf_literal(v) for v in values)


def build_bullet_items_rule(bullet_range: BulletRange) -> str:
    """Build the `bullet-points-items` rule for an inclusive count range.

    - min == max: exactly `min` items joined by the separator.
    - min < max: `min` mandatory items, then a bounded optional suffix
      covering the remaining `max - min` items.

    Args:
        bullet_range: The inclusive bullet-count bounds.

    Returns:
        The GBNF rule line.
    """
    low, high = bullet_range.min, bullet_range.max
    optional = high - low
    repeated = f"({ITEM_SEPARATOR} {BULLET_ITEM})"

    if low == 0:
        if high == 0:
            return "bullet-points-items ::= "
        if high == 1:
            return f"bullet-points-items ::= {BULLET_ITEM}?"
        return f"bullet-points-items ::= ({BULLET_ITEM} {repeated}{{0,{high - 1}}})?"

    required = f" {ITEM_SEPARATOR} ".join([BULLET_ITEM] * low)

    if optional == 0:
        return f"bullet-points-items ::= {required}"
    if optional == 1:
        return f"bullet-points-items ::= {required} {repeated}?"
    return f"bullet-points-items ::= {required} {repeated}{{0,{optional}}}"


def build_commit_grammar(analysis: ChangeAnalysis | None = None) -> str:
    """Generate a GBNF grammar for a conventional commit JSON object.

    Args:
        analysis: The change analysis. Without one, a static 1-5 bullet
            range is used.

    Returns:
        The grammar text.
    """
    bullet_range = analysis.suggested_bullet_range if analysis else FALLBACK_BULLET_RANGE

    if analysis:
        header = (
            f"# Generated for {analysis.total_change_count} file change(s)\n"
            f"# Expecting {bullet_range.min}-{bullet_range.max} bullet points"
        )
    else:
        header = (
            "# Generated without change analysis\n"
            f"# Expecting {bullet_range.min}-{bullet_range.max} bullet points"
        )

    rules = [
        "# GBNF grammar for conventional commit messages",
        header,
        "",
        'root ::= "{" space emoji-kv "," space type-kv "," space scope-kv "," space '
        'subject-kv "," space body-kv "}" space',
        "",
        f"emoji-kv ::= {_json_string_terminal('emoji')} space \":\" space emoji-value",
        f"type-kv ::= {_json_string_terminal('type')} space \":\" space type-value",
        f"scope-kv ::= {_json_string_terminal('scope')} space \":\" space scope-value",
        f"subject-kv ::= {_json_string_terminal('subject')} space \":\" space subject-value",
        f"body-kv ::= {_json_string_terminal('body')} space \":\" space body-value",
        "",
        'emoji-value ::= "\\"" emoji-char "\\"" space',
        f"emoji-char ::= {_alternatives(COMMIT_EMOJIS)}",
        "",
        'type-value ::= "\\"" type-enum "\\"" space',
        f"type-enum ::= {_alternatives(COMMIT_TYPES)}",
        "",
        'scope-value ::= "\\"" scope-text "\\"" space',
        "scope-text ::= scope-char scope-char scope-char scope-char*",
        "scope-char ::= [a-zA-Z0-9_-]",
        "",
        'subject-value ::= "\\"" subject-text "\\"" space',
        f"subject-text ::= json-char{{{SUBJECT_MIN_LENGTH},{SUBJECT_MAX_LENGTH}}}",
        "",
        'body-value ::= "{" space summary-kv "," space bullet-points-kv "}" space',
        f"summary-kv ::= {_json_string_terminal('summary')} space \":\" space summary-value",
        'summary-value ::= "\\"" summary-text "\\"" space',
        f"summary-text ::= json-char{{{SUMMARY_MIN_LENGTH},{SUMMARY_MAX_LENGTH}}}",
        "",
        f"bullet-points-kv ::= {_json_string_terminal('bulletPoints')} space \":\" space "
        "bullet-points-array",
        'bullet-points-array ::= "[" space bullet-points-items "]" space',
        build_bullet_items_rule(bullet_range),
        f'{BULLET_ITEM} ::= "\\"" bullet-point-text "\\"" space',
        f"bullet-point-text ::= json-char{{{BULLET_MIN_LENGTH},{BULLET_MAX_LENGTH}}}",
        "",
        f"json-char ::= {JSON_CHAR_BODY}",
        r"space ::= [ \t\n]*",
    ]

    return "\n".join(rules) + "\n"
