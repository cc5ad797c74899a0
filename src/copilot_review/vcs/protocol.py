"""VcsProvider protocol definition.

This protocol is the narrow query interface the review run depends on.
:class:`~copilot_review.git.repository.GitRepository` satisfies it via
structural typing, and tests substitute in-memory fakes.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from copilot_review.git.repository import CommitInfo


@runtime_checkable
class VcsProvider(Protocol):
    """Read-only branch comparison queries.

    ``current_branch``, ``commits_between`` and ``changed_files`` raise
    :class:`~copilot_review.exceptions.GitError` on failure. ``file_diff`` and
    ``file_content`` return an empty string instead of raising.
    """

    def current_branch(self) -> str:
        """Return the checked-out branch name."""
        ...

    def commits_between(self, base: str, head: str) -> list[CommitInfo]:
        """Return commits on *head* that are not on *base*."""
        ...

    def changed_files(self, base: str, head: str) -> list[str]:
        """Return paths that differ between *base* and *head*."""
        ...

    def file_diff(self, base: str, head: str, path: str) -> str:
        """Return the diff text of *path* between *base* and *head*."""
        ...

    def file_content(self, path: str, ref: str = "HEAD") -> str:
        """Return the content of *path* at *ref*."""
        ...
