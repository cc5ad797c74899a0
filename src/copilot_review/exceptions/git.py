from __future__ import annotations

from pathlib import Path

from copilot_review.exceptions.base import CopilotReviewError


class GitError(CopilotReviewError):
    """Exception for git query failures.

    Raised when a git command needed to plan the review fails, such as
    resolving the current branch or listing commits between two refs.

    Attributes:
        message: Human-readable error message.
        operation: Git operation that failed (e.g., "commits_between").
    """

    def __init__(
        self,
        message: str,
        operation: str | None = None,
    ) -> None:
        """Initialize the GitError.

        Args:
            message: Human-readable error message.
            operation: Git operation that failed.
        """
        self.operation = operation
        super().__init__(message)


class GitNotFoundError(GitError):
    """Exception raised when git CLI is not installed or not in PATH."""

    def __init__(self, message: str = "Git CLI not found") -> None:
        """Initialize the GitNotFoundError.

        Args:
            message: Human-readable error message.
        """
        super().__init__(message, operation="git_check")


class NotARepositoryError(GitError):
    """Exception raised when operating outside a git repository.

    Attributes:
        message: Human-readable error message.
        path: Directory that is not a repo.
    """

    def __init__(
        self,
        message: str,
        path: Path | str | None = None,
    ) -> None:
        """Initialize the NotARepositoryError.

        Args:
            message: Human-readable error message.
            path: Directory that is not a repo.
        """
        self.path = path
        super().__init__(message, operation="repo_check")
