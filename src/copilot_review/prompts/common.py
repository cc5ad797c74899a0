"""Formatting helpers shared by the prompt templates."""

from __future__ import annotations

from collections.abc import Iterable

from copilot_review.git.repository import CommitInfo

__all__ = [
    "format_bullets",
    "format_commit_list",
]


def format_commit_list(commits: Iterable[CommitInfo]) -> str:
    """Render commits as ``- <hash>: <message>`` lines."""
    return "\n".join(f"- {commit.hash}: {commit.message}" for commit in commits)


def format_bullets(items: Iterable[str]) -> str:
    return "\n".join(f"- {item}" for item in items)
