"""Git glue for commitgate.

This package provides:
- exceptions: GitError, NoStagedChangesError
- runner: run_git_command, get_repo_root
- status: get_staged_status, get_staged_diff
- context: build_context_bundle, get_branch, get_last_commits
- commit: commit_with_message
"""

from commitgate.git.exceptions import (
    GitError,
    NoStagedChangesError,
)
from commitgate.git.runner import (
    get_repo_root,
    run_git_command,
)
from commitgate.git.status import (
    get_staged_diff,
    get_staged_status,
)
from commitgate.git.context import (
    build_context_bundle,
    get_branch,
    get_last_commits,
)
from commitgate.git.commit import commit_with_message

__all__ = [
    "GitError",
    "NoStagedChangesError",
    "run_git_command",
    "get_repo_root",
    "get_staged_status",
    "get_staged_diff",
    "build_context_bundle",
    "get_branch",
    "get_last_commits",
    "commit_with_message",
]
