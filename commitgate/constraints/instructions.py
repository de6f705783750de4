"""Prompt fragments that describe the generated constraints to the model."""

from commitgate.analysis import FALLBACK_BULLET_RANGE, ChangeAnalysis, describe_changes


def build_contextual_instructions(analysis: ChangeAnalysis | None = None) -> str:
    """Build the change-aware instructions appended to the system prompt.

    Args:
        analysis: The change analysis, or None for generic instructions.

    Returns:
        The instructions text.
    """
    bullet_range = analysis.suggested_bullet_range if analysis else FALLBACK_BULLET_RANGE

    lines = []
    if analysis:
        lines.append(f"IMPORTANT: This commit involves {describe_changes(analysis)}.")
        lines.append("")

    lines.extend([
        "For the bulletPoints field:",
        f"- Provide {bullet_range.min} to {bullet_range.max} bullet points",
        "- Each bullet point should describe a specific change or group of related changes",
        "- Be concise but specific about what changed",
        "- Focus on the most important changes if there are many files",
        '- Use imperative mood consistently (e.g., "add", "update", "remove")',
    ])

    if analysis:
        examples = _example_bullets(analysis)
        lines.append("")
        lines.append("Examples of good bullet points for this type of change:")
        lines.extend(examples)

    return "\n".join(lines)


def _example_bullets(analysis: ChangeAnalysis) -> list[str]:
    examples = []
    if analysis.added_file_count:
        examples.append("- Add authentication middleware for API routes")
        examples.append("- Implement user profile validation schema")
    if analysis.modified_file_count:
        examples.append("- Update database connection configuration")
        examples.append("- Refactor error handling in user service")
    if analysis.deleted_file_count:
        examples.append("- Remove deprecated utility functions")
        examples.append("- Clean up unused test fixtures")
    if not examples:
        examples.append("- Update component props interface")
        examples.append("- Fix memory leak in event listeners")
        examples.append("- Add error handling for failed requests")
    return examples[:3]
