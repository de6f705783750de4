"""Git status and staged diff.

Contains:
- get_staged_status: Porcelain status limited to staged entries
- get_staged_diff: Staged diff, truncated for the prompt
"""

from commitgate.config import MAX_DIFF_CHARS
from commitgate.git.exceptions import NoStagedChangesError
from commitgate.git.runner import run_git_command

TRUNCATION_MARKER = "\n...[truncated]\n"


def get_staged_status() -> str:
    """Get `git status --porcelain` filtered to staged entries.

    The first porcelain column is the index status. Lines whose first
    column is a space, `?` or `!` have nothing staged and are dropped.
    The `##` branch line is kept.

    Returns:
        The filtered status text.
    """
    output = run_git_command(["status", "--porcelain=v1", "-b"])
    kept = []
    for line in output.split("\n"):
        if not line:
            continue
        if line.startswith("##"):
            kept.append(line)
            continue
        if len(line) < 2 or line[0] in (" ", "?", "!"):
            continue
        kept.append(line)
    return "\n".join(kept)


def get_staged_diff(max_chars: int = MAX_DIFF_CHARS) -> str:
    """Get the staged diff, truncated to max_chars.

    Args:
        max_chars: Maximum characters kept from the diff.

    Returns:
        The staged diff.

    Raises:
        NoStagedChangesError: If nothing is staged.
    """
    diff = run_git_command(["diff", "--staged"])
    if not diff:
        raise NoStagedChangesError(
            "No staged changes found. Stage your changes first with: git add <files>"
        )
    if len(diff) > max_chars:
        diff = diff[:max_chars] + TRUNCATION_MARKER
    return diff
