"""Prompt templates for commit message generation."""

from typing import Optional

from commitgate.analysis import ChangeAnalysis
from commitgate.commit_types import COMMIT_TYPE_EMOJIS
from commitgate.config import SENTINEL_END, SENTINEL_START
from commitgate.constraints import build_contextual_instructions

TYPE_DESCRIPTIONS = {
    "feat": "A new feature",
    "fix": "A bug fix",
    "docs": "Documentation only changes",
    "style": "Changes that do not affect the meaning of the code",
    "refactor": "A code change that neither fixes a bug nor adds a feature",
    "perf": "A code change that improves performance",
    "test": "Adding missing or correcting existing tests",
    "chore": "Changes to auxiliary tools and maintenance",
    "ci": "Continuous integration changes",
    "build": "Changes to the build process",
    "revert": "Revert changes",
    "merge": "Merge branches",
    "deps": "Update dependencies",
    "breaking": "Breaking changes",
    "security": "Security fixes",
    "config": "Configuration changes",
    "i18n": "Internationalization changes",
    "release": "Release changes",
    "db": "Database changes",
    "a11y": "Accessibility changes",
    "ux": "User experience changes",
    "init": "Initial commit",
}

_TYPE_LIST = "\n".join(
    f"   - {t} ({COMMIT_TYPE_EMOJIS[t]}): {desc}" for t, desc in TYPE_DESCRIPTIONS.items()
)

SYSTEM_PROMPT_STRUCTURED = f"""You are an AI designed to analyze git diffs and generate conventional commit messages in a structured JSON format. Your output is constrained by a grammar or schema that enforces the structure and field limits.

Follow the Conventional Commits specification (conventionalcommits.org):

1. **type**: one of
{_TYPE_LIST}

2. **emoji**: the emoji listed next to the chosen type.

3. **scope**: the component or area affected (at least 3 characters, e.g. 'api', 'auth').

4. **subject**: imperative, present tense ("add" not "added"), no capital first letter, no period at the end, 10-100 characters (under 50 preferred).

5. **body.summary**: one sentence on why the change matters, 5-500 characters. Avoid "we", "I", "this commit".

6. **body.bulletPoints**: specific changes in imperative mood, one per item, 1-100 characters each, without a leading dash."""

SYSTEM_PROMPT_FREEFORM = f"""You are an AI designed to analyze git diffs and write a single conventional commit message.

Format:
<type>(<scope>): <description>

<one sentence summary>

- <specific change>
- <specific change>

Rules:
1. <type> is one of:
{_TYPE_LIST}
2. Use imperative, present tense, no capital first letter and no period in the description; keep it under 50 characters.
3. Put exactly one blank line after the header and after the summary. Never put blank lines between bullet points.
4. For breaking changes add ! before the colon: feat(api)!: ...
5. Wrap the message between {SENTINEL_START} and {SENTINEL_END} on their own lines.
6. Output ONLY the wrapped commit message. No commentary, explanations or notes before or after it."""

USER_PROMPT_TEMPLATE = """Analyze these git changes and generate a conventional commit message:

{context_bundle}"""


def build_system_prompt(analysis: Optional[ChangeAnalysis], constrained: bool) -> str:
    """Build the system prompt with change-aware instructions.

    Args:
        analysis: The change analysis, if available.
        constrained: Whether the backend decodes under a grammar/schema.

    Returns:
        The system prompt.
    """
    base = SYSTEM_PROMPT_STRUCTURED if constrained else SYSTEM_PROMPT_FREEFORM
    return f"{base}\n\n{build_contextual_instructions(analysis)}"


def build_user_prompt(context_bundle: str) -> str:
    """Build the user prompt from the git context bundle."""
    return USER_PROMPT_TEMPLATE.format(context_bundle=context_bundle)
