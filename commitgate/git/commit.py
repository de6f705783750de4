"""Commit execution.

Contains:
- commit_with_message: Run `git commit -F` with the message in a temp file
"""

import logging
import os
import tempfile

from commitgate.git.runner import run_git_command

logger = logging.getLogger(__name__)


def commit_with_message(message: str) -> str:
    """Commit the staged changes with the given message.

    The message is written to a temporary file so that multi-line text and
    emoji reach git unchanged.

    Args:
        message: The final commit message.

    Returns:
        The output of git commit.

    Raises:
        GitError: If the commit fails.
    """
    fd, path = tempfile.mkstemp(prefix="commitgate-", suffix=".txt")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(message.rstrip("\n") + "\n")
        logger.debug("Commit message written to %s", path)
        return run_git_command(["commit", "-F", path])
    finally:
        os.unlink(path)
