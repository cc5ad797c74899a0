"""Git queries package using GitPython.

Usage:
    ```python
    from copilot_review.git import GitRepository

    repo = GitRepository("/path/to/repo")
    commits = repo.commits_between("develop", repo.current_branch())
    ```
"""

from __future__ import annotations

from copilot_review.git.repository import (
    CommitInfo,
    GitRepository,
    parse_oneline_log,
)

__all__ = [
    "CommitInfo",
    "GitRepository",
    "parse_oneline_log",
]
