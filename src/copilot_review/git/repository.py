"""GitPython-based branch comparison queries for copilot-review.

This module answers the handful of questions the review planner asks about
two refs: which branch is checked out, which commits and files differ, and
what each file's diff looks like.

Key features:
- Uses GitPython's Repo class; every query runs ``git`` synchronously
- Branch-level query failures raise :class:`~copilot_review.exceptions.GitError`
- Per-file queries degrade to empty text so one bad path never stops a run

Example:
    ```python
    from copilot_review.git import GitRepository

    repo = GitRepository("/path/to/repo")
    branch = repo.current_branch()
    commits = repo.commits_between("develop", branch)
    files = repo.changed_files("develop", branch)
    diff = repo.file_diff("develop", branch, files[0])
    ```
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from git import GitCommandError, InvalidGitRepositoryError, NoSuchPathError, Repo
from git.exc import GitCommandNotFound

from copilot_review.exceptions import GitError, GitNotFoundError, NotARepositoryError
from copilot_review.logging import get_logger

logger = get_logger(__name__)

__all__ = [
    "CommitInfo",
    "GitRepository",
    "parse_oneline_log",
]


# =============================================================================
# Value Objects (Return Types)
# =============================================================================


@dataclass(frozen=True, slots=True)
class CommitInfo:
    """Single commit between two refs.

    Attributes:
        hash: Abbreviated commit hash as printed by ``git log --oneline``.
        message: Subject line of the commit.
    """

    hash: str
    message: str


# =============================================================================
# Helper Functions
# =============================================================================


def parse_oneline_log(output: str) -> list[CommitInfo]:
    """Parse ``git log --oneline`` output into commits.

    The first space-separated token is the hash; everything after it is the
    message, kept verbatim apart from surrounding whitespace.

    Args:
        output: Raw log output, one commit per line.

    Returns:
        Commits in log order (newest first). Empty for blank output.

    Examples:
        >>> parse_oneline_log("a1b2c3d fix: handle  empty diff")
        [CommitInfo(hash='a1b2c3d', message='fix: handle  empty diff')]
        >>> parse_oneline_log("")
        []
    """
    commits: list[CommitInfo] = []
    for line in output.strip().split("\n"):
        if not line.strip():
            continue
        commit_hash, _, message = line.partition(" ")
        commits.append(CommitInfo(hash=commit_hash.strip(), message=message.strip()))
    return commits


def _convert_git_error(exc: Exception, operation: str) -> GitError:
    """Convert a GitPython exception to a copilot-review exception.

    Args:
        exc: GitPython exception.
        operation: Name of the query that failed.

    Returns:
        Appropriate copilot-review exception.
    """
    if isinstance(exc, GitCommandNotFound):
        return GitNotFoundError("Git CLI not found. Please install git.")

    if isinstance(exc, GitCommandError):
        detail = str(exc.stderr or exc.stdout or exc).strip()
        return GitError(detail or str(exc), operation=operation)

    return GitError(str(exc), operation=operation)


# =============================================================================
# Main Class: GitRepository
# =============================================================================


class GitRepository:
    """Read-only branch comparison queries backed by GitPython.

    Example:
        ```python
        repo = GitRepository()
        for commit in repo.commits_between("main", repo.current_branch()):
            print(commit.hash, commit.message)
        ```
    """

    def __init__(self, path: Path | str | None = None) -> None:
        """Initialize GitRepository.

        Args:
            path: Path inside the git repository. Defaults to current directory.

        Raises:
            GitNotFoundError: If git is not installed.
            NotARepositoryError: If path is not inside a git repository.
        """
        resolved_path = Path.cwd() if path is None else Path(path)

        self._path = resolved_path

        try:
            self._repo = Repo(resolved_path, search_parent_directories=True)
        except GitCommandNotFound as e:
            raise GitNotFoundError("Git CLI not found. Please install git.") from e
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            raise NotARepositoryError(
                f"Not a git repository: {resolved_path}",
                path=resolved_path,
            ) from e

    @property
    def path(self) -> Path:
        """Path the repository was opened from."""
        return self._path

    @property
    def repo(self) -> Repo:
        """Underlying GitPython Repo instance."""
        return self._repo

    # -------------------------------------------------------------------------
    # Branch-level queries (fatal on failure)
    # -------------------------------------------------------------------------

    def current_branch(self) -> str:
        """Get current branch name.

        Returns:
            Branch name, or commit SHA if in detached HEAD state.

        Raises:
            GitError: If HEAD cannot be resolved (e.g. repository without commits).
        """
        try:
            if self._repo.head.is_detached:
                return self._repo.head.commit.hexsha
            return self._repo.active_branch.name
        except (GitCommandError, GitCommandNotFound) as e:
            raise _convert_git_error(e, "current_branch") from e
        except (TypeError, ValueError) as e:
            raise GitError(
                f"Unable to determine current branch: {e}",
                operation="current_branch",
            ) from e

    def commits_between(self, base: str, head: str) -> list[CommitInfo]:
        """List non-merge commits reachable from *head* but not from *base*.

        Args:
            base: Base ref (e.g. "develop").
            head: Head ref (usually the current branch).

        Returns:
            Commits newest first; empty when the branches are in sync.

        Raises:
            GitError: If either ref is unknown or git fails.
        """
        try:
            output = self._repo.git.log(f"{base}..{head}", "--oneline", "--no-merges")
        except (GitCommandError, GitCommandNotFound) as e:
            raise _convert_git_error(e, "commits_between") from e

        commits = parse_oneline_log(output)
        logger.debug("commits_listed", base=base, head=head, count=len(commits))
        return commits

    def changed_files(self, base: str, head: str) -> list[str]:
        """List paths that differ between *base* and *head*.

        Args:
            base: Base ref.
            head: Head ref.

        Returns:
            Repository-relative paths in git's output order.

        Raises:
            GitError: If either ref is unknown or git fails.
        """
        try:
            output = self._repo.git.diff("--name-only", f"{base}..{head}")
        except (GitCommandError, GitCommandNotFound) as e:
            raise _convert_git_error(e, "changed_files") from e

        return [line for line in output.split("\n") if line.strip()]

    # -------------------------------------------------------------------------
    # Per-file queries (degrade to empty text)
    # -------------------------------------------------------------------------

    def file_diff(self, base: str, head: str, path: str) -> str:
        """Get the diff of a single file between two refs.

        Output is returned exactly as git prints it, trailing newline included.

        Args:
            base: Base ref.
            head: Head ref.
            path: Repository-relative file path.

        Returns:
            Diff text, or an empty string if git fails for this file.
        """
        try:
            return self._repo.git.diff(
                f"{base}..{head}",
                "--",
                path,
                strip_newline_in_stdout=False,
            )
        except (GitCommandError, GitCommandNotFound) as e:
            logger.warning(
                "file_diff_failed",
                path=path,
                error=_convert_git_error(e, "file_diff").message,
            )
            return ""

    def file_content(self, path: str, ref: str = "HEAD") -> str:
        """Get the content of a file at *ref*.

        Args:
            path: Repository-relative file path.
            ref: Ref to read from (default: HEAD).

        Returns:
            File content, or an empty string if the file does not exist at *ref*.
        """
        try:
            return self._repo.git.show(f"{ref}:{path}", strip_newline_in_stdout=False)
        except (GitCommandError, GitCommandNotFound) as e:
            logger.debug("file_content_unavailable", path=path, ref=ref, error=str(e))
            return ""
