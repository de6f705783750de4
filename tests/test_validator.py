"""Tests for commitgate.validator module."""

import pytest

from commitgate.validator import (
    check_commit_message,
    is_bullet_line,
    match_header,
    split_leading_emoji,
    validate_commit_message,
)


class TestValidateCommitMessage:
    """Tests for validate_commit_message function."""

    def test_valid_message(self, valid_message):
        """Test a well-formed message passes."""
        assert validate_commit_message(valid_message) is True

    def test_header_only(self):
        """Test a single header line passes."""
        assert validate_commit_message("fix: handle empty input")

    @pytest.mark.parametrize(
        "header",
        [
            "feat(api): add endpoint",
            "fix!: drop legacy flag",
            "refactor(core-utils)!: split module",
            "✨ feat(ui): add dark mode",
            "💥✨ feat(api)!: remove v1 routes",
            "♻️ refactor(db): extract repository",
            "i18n(web): add german strings",
        ],
    )
    def test_valid_headers(self, header):
        """Test accepted header variants."""
        assert validate_commit_message(header)

    def test_empty_and_whitespace(self):
        """Test empty input fails."""
        assert not validate_commit_message("")
        assert not validate_commit_message("   \n\t ")
        assert not validate_commit_message(None)

    def test_sentinel_marker_in_content(self):
        """Test leaked sentinel markers fail."""
        assert not validate_commit_message("feat: add thing\n<commit-end>")
        assert not validate_commit_message("<commit-start>\nfeat: add thing")

    @pytest.mark.parametrize(
        "message",
        [
            "Here's a commit message:\nfeat: add x",
            "here is the message",
            "This commit adds things",
            "I've created a commit message",
            "Based on the changes, feat: add x",
            "✨ Here is: feat",
            "The commit message is below",
        ],
    )
    def test_narrative_prefixes(self, message):
        """Test messages starting with narration fail."""
        assert not validate_commit_message(message)

    @pytest.mark.parametrize(
        "header",
        [
            "Add new feature",
            "feature(api): add endpoint",
            "Feat(api): add endpoint",
            "feat(api):add endpoint",
            "feat(api):",
            "feat(my scope): add endpoint",
            "feat(): add endpoint",
        ],
    )
    def test_invalid_headers(self, header):
        """Test headers that do not match the conventional format fail."""
        assert not validate_commit_message(header)

    def test_blank_line_between_bullets(self):
        """Test a blank line inside a bullet run fails."""
        message = "feat: add x\n\nSummary.\n\n- one\n\n- two"
        assert not validate_commit_message(message)

    def test_blank_line_after_bullets_allowed(self):
        """Test a paragraph after the bullet block is allowed."""
        message = "feat: add x\n\n- one\n- two\n\nRefs: #12"
        assert validate_commit_message(message)

    def test_star_bullets(self):
        """Test * bullets are treated like - bullets."""
        assert validate_commit_message("feat: add x\n\n* one\n* two")
        assert not validate_commit_message("feat: add x\n\n* one\n\n* two")

    def test_idempotent(self, valid_message):
        """Test repeated validation gives the same answer."""
        for candidate in (valid_message, "nope", "feat: x\n\n- a\n\n- b"):
            assert validate_commit_message(candidate) == validate_commit_message(candidate)


class TestCheckCommitMessage:
    """Tests for check_commit_message reasons."""

    def test_valid_returns_none(self, valid_message):
        """Test valid messages have no reason."""
        assert check_commit_message(valid_message) is None

    def test_first_failure_wins(self):
        """Test the sentinel check runs before the header check."""
        reason = check_commit_message("Here's <commit-start>")
        assert "sentinel" in reason

    def test_reports_prefix(self):
        """Test the narrative prefix is named."""
        assert "based on" in check_commit_message("Based on the diff: feat: x")

    def test_reports_header(self):
        """Test the header failure names the line."""
        assert "conventional commit format" in check_commit_message("Update files")

    def test_reports_bullet_gap(self):
        """Test the bullet gap reason."""
        assert "between bullet points" in check_commit_message("fix: y\n\n- a\n\n- b")


class TestHelpers:
    """Tests for emoji and header helpers."""

    def test_split_leading_emoji(self):
        """Test a leading emoji is split off."""
        assert split_leading_emoji("✨ feat: x") == ("✨", "feat: x")

    def test_split_emoji_with_variation_selector(self):
        """Test glyphs with a variation selector stay whole."""
        assert split_leading_emoji("♻️ refactor: x") == ("♻️", "refactor: x")

    def test_split_without_emoji(self):
        """Test lines without emoji are unchanged."""
        assert split_leading_emoji("feat: x") == ("", "feat: x")

    def test_match_header_groups(self):
        """Test named groups of the header pattern."""
        match = match_header("💥 feat(api)!: drop v1")

        assert match.group("type") == "feat"
        assert match.group("scope") == "(api)"
        assert match.group("breaking") == "!"

    def test_is_bullet_line(self):
        """Test bullet detection."""
        assert is_bullet_line("- item")
        assert is_bullet_line("  * item")
        assert not is_bullet_line("item - not a bullet")
