"""Git command runner and repository utilities.

Contains:
- run_git_command: Run a git command and return its output
- get_repo_root: Get the root directory of the current git repository
"""

import logging
import subprocess
from pathlib import Path

from commitgate.git.exceptions import GitError

logger = logging.getLogger(__name__)


def run_git_command(args: list[str]) -> str:
    """Run a git command and return its stripped stdout.

    Args:
        args: Arguments passed to git.

    Returns:
        The stdout of the command.

    Raises:
        GitError: If git is missing or the command fails.
    """
    logger.debug("Running git %s", " ".join(args))
    try:
        result = subprocess.run(
            ["git"] + args,
            capture_output=True,
            text=True,
            check=True,
        )
    except subprocess.CalledProcessError as e:
        raise GitError(f"Git command failed: git {' '.join(args)}\n{(e.stderr or '').strip()}")
    except FileNotFoundError:
        raise GitError("Git is not installed or not in PATH.")
    return result.stdout.strip()


def get_repo_root() -> Path:
    """Get the root directory of the current git repository.

    Raises:
        GitError: If not in a git repository.
    """
    try:
        return Path(run_git_command(["rev-parse", "--show-toplevel"]))
    except GitError:
        raise GitError("Not in a git repository. Please run this command from within a git repo.")
