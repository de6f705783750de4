"""Git context bundle builder.

Contains:
- build_context_bundle: Build the context sent to the model
- get_branch: Current branch name
- get_last_commits: Recent commit subjects
- _parse_file_changes: Human-readable summary of staged files
"""

from commitgate.config import MAX_DIFF_CHARS
from commitgate.git.exceptions import GitError
from commitgate.git.runner import run_git_command
from commitgate.git.status import get_staged_diff, get_staged_status


def get_branch() -> str:
    """Get the current branch name, or a marker in detached HEAD state."""
    branch = run_git_command(["branch", "--show-current"])
    return branch or "HEAD (detached)"


def get_last_commits(n: int = 5) -> list[str]:
    """Get the last n commit subjects (empty for a repo without commits)."""
    try:
        output = run_git_command(["log", f"-n{n}", "--pretty=%s"])
    except GitError:
        return []
    return output.split("\n") if output else []


def _parse_file_changes(status: str) -> str:
    """Summarize staged porcelain entries as new, modified, deleted and renamed files."""
    groups = {
        "New files:": ("+", []),
        "Modified files:": ("~", []),
        "Deleted files:": ("-", []),
        "Renamed files:": (">", []),
    }

    for line in status.split("\n"):
        if not line or line.startswith("##") or len(line) < 4:
            continue
        code, filename = line[0], line[3:]
        if code == "R" or " -> " in filename:
            groups["Renamed files:"][1].append(filename)
        elif code == "A":
            groups["New files:"][1].append(filename)
        elif code in ("M", "C"):
            groups["Modified files:"][1].append(filename)
        elif code == "D":
            groups["Deleted files:"][1].append(filename)

    lines = []
    for title, (mark, files) in groups.items():
        if files:
            lines.append(title)
            lines.extend(f"  {mark} {f}" for f in files)
    return "\n".join(lines) if lines else "(no files)"


def build_context_bundle(max_chars: int = MAX_DIFF_CHARS, status: str | None = None) -> str:
    """Build the git context bundle for the model.

    Args:
        max_chars: Maximum characters for the staged diff.
        status: Staged porcelain status, when the caller already has it.

    Returns:
        The bundle with branch, file change, recent commit and diff sections.

    Raises:
        NoStagedChangesError: If there are no staged changes.
        GitError: If a git command fails.
    """
    if status is None:
        status = get_staged_status()
    staged_diff = get_staged_diff(max_chars=max_chars)
    commits = get_last_commits()
    commits_formatted = "\n".join(f"- {c}" for c in commits) if commits else "- (no commits yet)"

    return f"""[BRANCH]
{get_branch()}

[FILE_CHANGES]
{_parse_file_changes(status)}

[LAST_5_COMMITS]
{commits_formatted}

[STAGED_DIFF]
{staged_diff}"""
