"""Tests for commitgate.constraints.schema and instruction modules."""

from commitgate.commit_types import COMMIT_EMOJIS, COMMIT_TYPES
from commitgate.constraints import (
    ArtifactKind,
    build_commit_schema,
    build_constraint_artifact,
    build_contextual_instructions,
    unwrap_schema,
)
from commitgate.constraints.schema import SCHEMA_NAME


class TestBuildCommitSchema:
    """Tests for build_commit_schema function."""

    def test_top_level_shape(self, small_analysis):
        """Test required fields and closed object."""
        schema = build_commit_schema(small_analysis)

        assert schema["type"] == "object"
        assert schema["required"] == ["emoji", "type", "scope", "subject", "body"]
        assert schema["additionalProperties"] is False

    def test_enums(self, small_analysis):
        """Test emoji and type enums come from the type table."""
        props = build_commit_schema(small_analysis)["properties"]

        assert props["type"]["enum"] == COMMIT_TYPES
        assert props["emoji"]["enum"] == COMMIT_EMOJIS
        assert len(set(props["emoji"]["enum"])) == len(props["emoji"]["enum"])

    def test_string_bounds(self, small_analysis):
        """Test length windows and scope pattern."""
        props = build_commit_schema(small_analysis)["properties"]
        body = props["body"]["properties"]

        assert props["scope"]["minLength"] == 3
        assert props["scope"]["pattern"] == "^[a-zA-Z0-9_-]+$"
        assert (props["subject"]["minLength"], props["subject"]["maxLength"]) == (10, 100)
        assert (body["summary"]["minLength"], body["summary"]["maxLength"]) == (5, 500)
        assert body["bulletPoints"]["items"]["maxLength"] == 100

    def test_bullet_count_follows_analysis(self, large_analysis):
        """Test minItems/maxItems match the analysis range."""
        bullets = build_commit_schema(large_analysis)["properties"]["body"]["properties"]["bulletPoints"]

        assert bullets["minItems"] == 3
        assert bullets["maxItems"] == 8

    def test_fallback_without_analysis(self):
        """Test the static 1-5 range without analysis."""
        bullets = build_commit_schema(None)["properties"]["body"]["properties"]["bulletPoints"]

        assert bullets["minItems"] == 1
        assert bullets["maxItems"] == 5

    def test_body_is_closed(self, small_analysis):
        """Test the body object forbids extra keys."""
        body = build_commit_schema(small_analysis)["properties"]["body"]

        assert body["required"] == ["summary", "bulletPoints"]
        assert body["additionalProperties"] is False


class TestStructuredOutputWrapper:
    """Tests for the response_format wrapper."""

    def test_wrapped_shape(self, small_analysis):
        """Test the OpenAI-style json_schema descriptor."""
        wrapped = build_commit_schema(small_analysis, structured_output=True)

        assert wrapped["type"] == "json_schema"
        assert wrapped["json_schema"]["name"] == SCHEMA_NAME
        assert wrapped["json_schema"]["strict"] is True
        assert wrapped["json_schema"]["schema"] == build_commit_schema(small_analysis)

    def test_unwrap_schema(self, small_analysis):
        """Test unwrap_schema returns the bare schema for both forms."""
        bare = build_commit_schema(small_analysis)
        wrapped = build_commit_schema(small_analysis, structured_output=True)

        assert unwrap_schema(wrapped) == bare
        assert unwrap_schema(bare) == bare

    def test_schema_artifact_is_wrapped(self, small_analysis):
        """Test build_constraint_artifact wraps schemas for response_format."""
        artifact = build_constraint_artifact(ArtifactKind.SCHEMA, small_analysis)

        assert artifact.kind == ArtifactKind.SCHEMA
        assert artifact.value["type"] == "json_schema"
        assert unwrap_schema(artifact.value)["properties"]["body"]["properties"][
            "bulletPoints"
        ]["maxItems"] == 3


class TestContextualInstructions:
    """Tests for build_contextual_instructions function."""

    def test_mentions_range_and_changes(self, small_analysis):
        """Test instructions describe the change mix and bullet range."""
        text = build_contextual_instructions(small_analysis)

        assert "1 added and 1 modified files" in text
        assert "Provide 1 to 3 bullet points" in text
        assert "Examples of good bullet points" in text

    def test_generic_without_analysis(self):
        """Test generic instructions use the fallback range."""
        text = build_contextual_instructions(None)

        assert "Provide 1 to 5 bullet points" in text
        assert "IMPORTANT" not in text

    def test_examples_are_capped(self, large_analysis):
        """Test at most three example bullets are listed."""
        text = build_contextual_instructions(large_analysis)
        examples = text.split("Examples of good bullet points for this type of change:")[1]

        assert len([l for l in examples.split("\n") if l.startswith("- ")]) == 3
