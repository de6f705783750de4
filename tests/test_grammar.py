"""Tests for commitgate.constraints.grammar module."""

import re

import pytest

from commitgate.analysis import BulletRange, analyze_changes
from commitgate.commit_types import COMMIT_EMOJIS, COMMIT_TYPES
from commitgate.constraints import (
    ArtifactKind,
    build_bullet_items_rule,
    build_commit_grammar,
    build_constraint_artifact,
    gbnf_literal,
)


def _items_rule_to_regex(rule: str) -> re.Pattern:
    """Translate a bullet-points-items rule into a regex over 'I' and ','."""
    rhs = rule.split("::=", 1)[1]
    rhs = rhs.replace('"," space', ",").replace("bullet-point-item", "I")
    return re.compile(rhs.replace(" ", ""))


def _item_list(count: int) -> str:
    return ",".join(["I"] * count)


class TestGbnfLiteral:
    """Tests for gbnf_literal function."""

    def test_plain_text(self):
        """Test that plain text is quoted."""
        assert gbnf_literal("feat") == '"feat"'

    def test_escapes_quotes_and_backslashes(self):
        """Test JSON-style escaping of special characters."""
        assert gbnf_literal('a"b\\c') == '"a\\"b\\\\c"'

    def test_escapes_control_characters(self):
        """Test newline, tab and other control characters are escaped."""
        assert gbnf_literal("a\nb\tc") == '"a\\nb\\tc"'
        assert gbnf_literal("\x01") == '"\\x01"'

    def test_emoji_passes_through(self):
        """Test that non-ASCII glyphs are kept verbatim."""
        assert gbnf_literal("✨") == '"✨"'


class TestBuildBulletItemsRule:
    """Tests for build_bullet_items_rule function."""

    def test_exact_count(self):
        """Test min == max produces a fixed sequence."""
        rule = build_bullet_items_rule(BulletRange(2, 2))
        assert rule == 'bullet-points-items ::= bullet-point-item "," space bullet-point-item'

    def test_one_optional_item(self):
        """Test min + 1 == max uses a single optional suffix."""
        rule = build_bullet_items_rule(BulletRange(1, 2))
        assert rule == 'bullet-points-items ::= bullet-point-item ("," space bullet-point-item)?'

    def test_bounded_repetition(self):
        """Test a wider range uses a bounded repetition."""
        rule = build_bullet_items_rule(BulletRange(3, 8))
        assert rule.endswith('("," space bullet-point-item){0,5}')
        assert rule.count("bullet-point-item") == 4

    @pytest.mark.parametrize(
        "low,high",
        [(1, 1), (1, 2), (1, 3), (1, 5), (2, 5), (3, 6), (3, 7), (3, 8), (0, 3)],
    )
    def test_never_unbounded(self, low, high):
        """Test that the rule never uses * or +."""
        rule = build_bullet_items_rule(BulletRange(low, high))
        rhs = rule.split("::=", 1)[1]
        assert "*" not in rhs
        assert "+" not in rhs

    @pytest.mark.parametrize(
        "low,high",
        [(1, 1), (1, 2), (1, 3), (1, 5), (2, 5), (3, 6), (3, 7), (3, 8)],
    )
    def test_accepts_exactly_min_to_max(self, low, high):
        """Test the rule accepts every count in range and rejects min-1 and max+1."""
        pattern = _items_rule_to_regex(build_bullet_items_rule(BulletRange(low, high)))

        for count in range(low, high + 1):
            assert pattern.fullmatch(_item_list(count)), count
        if low > 1:
            assert not pattern.fullmatch(_item_list(low - 1))
        assert not pattern.fullmatch(_item_list(high + 1))

    def test_zero_minimum_allows_empty_list(self):
        """Test a 0-n range accepts an empty list."""
        pattern = _items_rule_to_regex(build_bullet_items_rule(BulletRange(0, 3)))
        assert pattern.fullmatch("")
        assert pattern.fullmatch(_item_list(3))
        assert not pattern.fullmatch(_item_list(4))


class TestBuildCommitGrammar:
    """Tests for build_commit_grammar function."""

    def test_has_root_and_fields(self, small_analysis):
        """Test that the grammar defines root and every field rule."""
        grammar = build_commit_grammar(small_analysis)

        assert "\nroot ::= " in grammar
        for rule in ("emoji-kv", "type-kv", "scope-kv", "subject-kv", "body-kv"):
            assert f"\n{rule} ::= " in grammar
        assert grammar.endswith("\n")

    def test_json_keys_are_quoted(self, small_analysis):
        """Test that keys are spelled as quoted JSON strings."""
        grammar = build_commit_grammar(small_analysis)
        assert 'emoji-kv ::= "\\"emoji\\"" space' in grammar
        assert '"\\"bulletPoints\\""' in grammar

    def test_lists_every_type_and_glyph(self, small_analysis):
        """Test that the enums cover the commit type table."""
        grammar = build_commit_grammar(small_analysis)
        type_line = next(l for l in grammar.split("\n") if l.startswith("type-enum ::="))
        emoji_line = next(l for l in grammar.split("\n") if l.startswith("emoji-char ::="))

        for commit_type in COMMIT_TYPES:
            assert f'"{commit_type}"' in type_line
        for glyph in COMMIT_EMOJIS:
            assert f'"{glyph}"' in emoji_line

    def test_length_windows(self, small_analysis):
        """Test subject, summary and bullet length bounds."""
        grammar = build_commit_grammar(small_analysis)
        assert "subject-text ::= json-char{10,100}" in grammar
        assert "summary-text ::= json-char{5,500}" in grammar
        assert "bullet-point-text ::= json-char{1,100}" in grammar
        assert "scope-text ::= scope-char scope-char scope-char scope-char*" in grammar

    def test_bullet_rule_follows_analysis(self, large_analysis):
        """Test that the bullet rule encodes the analysis range."""
        grammar = build_commit_grammar(large_analysis)
        assert "# Generated for 10 file change(s)" in grammar
        assert "# Expecting 3-8 bullet points" in grammar
        assert build_bullet_items_rule(BulletRange(3, 8)) in grammar

    def test_fallback_without_analysis(self):
        """Test the static 1-5 range when no analysis is given."""
        grammar = build_commit_grammar(None)
        assert "# Generated without change analysis" in grammar
        assert build_bullet_items_rule(BulletRange(1, 5)) in grammar

    def test_regenerated_per_analysis(self):
        """Test that different analyses produce different grammars."""
        one = build_commit_grammar(analyze_changes(1, 0, 0))
        many = build_commit_grammar(analyze_changes(6, 4, 0))
        assert one != many

    def test_single_items_rule(self, small_analysis):
        """Test that exactly one bullet-points-items rule is emitted."""
        grammar = build_commit_grammar(small_analysis)
        assert grammar.count("bullet-points-items ::=") == 1


class TestGrammarArtifact:
    """Tests for grammar constraint artifacts."""

    def test_builds_grammar_string(self, small_analysis):
        """Test that a grammar artifact carries the grammar text."""
        artifact = build_constraint_artifact(ArtifactKind.GRAMMAR, small_analysis)

        assert artifact.kind == ArtifactKind.GRAMMAR
        assert isinstance(artifact.value, str)
        assert artifact.value == build_commit_grammar(small_analysis)
        assert artifact.analysis is small_analysis
