"""Change analysis for commit message constraints.

Derives the bullet-count bounds used by the grammar and schema generators
from the number of staged additions, modifications and deletions.

Contains:
- BulletRange: Inclusive [min, max] bullet-count bounds
- ChangeAnalysis: Immutable summary of a staged change set
- analyze_changes: Build a ChangeAnalysis from raw counts
- analyze_status: Build a ChangeAnalysis from porcelain status output
- describe_changes / describe_analysis: Human-readable summaries
"""

import math
from dataclasses import dataclass
from numbers import Real

from commitgate.exceptions import MalformedConstraintInput

# Bounds used when no analysis is available
FALLBACK_MIN_BULLETS = 1
FALLBACK_MAX_BULLETS = 5


@dataclass(frozen=True)
class BulletRange:
    """Inclusive bounds for the number of bullet points."""

    min: int
    max: int

    def __post_init__(self):
        if self.min < 0 or self.min > self.max:
            raise MalformedConstraintInput(
                f"Invalid bullet range: min={self.min}, max={self.max}"
            )

    def contains(self, count: int) -> bool:
        """Check whether a bullet count lies inside the range."""
        return self.min <= count <= self.max


FALLBACK_BULLET_RANGE = BulletRange(FALLBACK_MIN_BULLETS, FALLBACK_MAX_BULLETS)


@dataclass(frozen=True)
class ChangeAnalysis:
    """Summary of the staged changes for one commit attempt.

    Attributes:
        staged_file_count: Number of staged entries.
        added_file_count: Number of added files.
        modified_file_count: Number of modified (incl. renamed/copied) files.
        deleted_file_count: Number of deleted files.
        total_change_count: added + modified + deleted.
        suggested_bullet_range: Bullet-count bounds derived from the total.
    """

    staged_file_count: int
    added_file_count: int
    modified_file_count: int
    deleted_file_count: int
    total_change_count: int
    suggested_bullet_range: BulletRange


def _check_count(name: str, value) -> int:
    """Validate a single change count."""
    if isinstance(value, bool) or not isinstance(value, Real):
        raise MalformedConstraintInput(f"{name} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise MalformedConstraintInput(f"{name} must be finite, got {value!r}")
    if value < 0:
        raise MalformedConstraintInput(f"{name} must not be negative, got {value!r}")
    if int(value) != value:
        raise MalformedConstraintInput(f"{name} must be a whole number, got {value!r}")
    return int(value)


def suggest_bullet_range(total: int) -> BulletRange:
    """Compute the bullet-count bounds for a total change count.

    - 0-2 changes: 1 to max(3, total + 1)
    - 3-5 changes: 2 to max(5, total)
    - 6+ changes: 3 to min(8, max(6, ceil(total * 0.8)))

    Args:
        total: Total number of changed files.

    Returns:
        The suggested BulletRange.
    """
    total = _check_count("total", total)

    if total <= 2:
        return BulletRange(1, max(3, total + 1))
    if total <= 5:
        return BulletRange(2, max(5, total))
    return BulletRange(3, min(8, max(6, math.ceil(total * 0.8))))


def analyze_changes(
    added: int,
    modified: int,
    deleted: int,
    staged: int | None = None,
) -> ChangeAnalysis:
    """Analyze change counts and derive the bullet-count bounds.

    A zero-change input is accepted and yields a 1-3 range; rejecting empty
    commits is up to the caller.

    Args:
        added: Number of added files.
        modified: Number of modified files.
        deleted: Number of deleted files.
        staged: Number of staged entries. Defaults to the total.

    Returns:
        The ChangeAnalysis.

    Raises:
        MalformedConstraintInput: If a count is negative or not finite.
    """
    added = _check_count("added", added)
    modified = _check_count("modified", modified)
    deleted = _check_count("deleted", deleted)

    total = added + modified + deleted
    staged_count = total if staged is None else _check_count("staged", staged)

    return ChangeAnalysis(
        staged_file_count=staged_count,
        added_file_count=added,
        modified_file_count=modified,
        deleted_file_count=deleted,
        total_change_count=total,
        suggested_bullet_range=suggest_bullet_range(total),
    )


def analyze_status(status: str) -> ChangeAnalysis:
    """Analyze `git status --porcelain=v1` output.

    Only the index column is considered. Renames and copies count as
    modifications; untracked and unstaged-only entries are ignored.

    Args:
        status: The porcelain status output (branch header allowed).

    Returns:
        The ChangeAnalysis for the staged entries.
    """
    added = modified = deleted = staged = 0

    for line in status.splitlines():
        if not line or line.startswith("##") or len(line) < 2:
            continue

        index_status = line[0]
        if index_status in (" ", "?", "!"):
            continue

        staged += 1
        if index_status == "A":
            added += 1
        elif index_status in ("M", "R", "C"):
            modified += 1
        elif index_status == "D":
            deleted += 1

    return analyze_changes(added, modified, deleted, staged=staged)


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'s' if count != 1 else ''}"


def describe_changes(analysis: ChangeAnalysis) -> str:
    """Describe the change mix in a short phrase for prompts.

    Args:
        analysis: The change analysis.

    Returns:
        A phrase such as "2 added and 1 modified files".
    """
    added = analysis.added_file_count
    modified = analysis.modified_file_count
    deleted = analysis.deleted_file_count

    if added and modified and deleted:
        return f"{added} added, {modified} modified, and {deleted} deleted files"
    if added and modified:
        return f"{added} added and {modified} modified files"
    if modified and deleted:
        return f"{modified} modified and {deleted} deleted files"
    if added and deleted:
        return f"{added} added and {deleted} deleted files"
    if added:
        return _plural(added, "new file")
    if modified:
        return _plural(modified, "modified file")
    if deleted:
        return _plural(deleted, "deleted file")
    return _plural(analysis.total_change_count, "file change")


def describe_analysis(analysis: ChangeAnalysis) -> str:
    """Render a multi-line summary of the analysis for debug output."""
    bullets = analysis.suggested_bullet_range
    return (
        "Change Analysis:\n"
        f"- Total files: {analysis.total_change_count}\n"
        f"- Added: {analysis.added_file_count}, "
        f"Modified: {analysis.modified_file_count}, "
        f"Deleted: {analysis.deleted_file_count}\n"
        f"- Suggested bullet points: {bullets.min}-{bullets.max}"
    )
