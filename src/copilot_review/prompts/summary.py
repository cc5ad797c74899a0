"""Change summary prompt: the overall scope of the review."""

from __future__ import annotations

from collections.abc import Sequence

from copilot_review.git.repository import CommitInfo
from copilot_review.prompts.common import format_commit_list

__all__ = ["render_summary"]


def render_summary(commits: Sequence[CommitInfo], total_batches: int) -> str:
    """Render the summary prompt.

    Args:
        commits: Commits in the compared range.
        total_batches: Number of review batches produced.

    Returns:
        Markdown prompt text.
    """
    return (
        "# Code Review Summary\n"
        "\n"
        "## Overview\n"
        f"This code review covers {len(commits)} commits across {total_batches} batches.\n"
        "\n"
        "## Commits Summary:\n"
        f"{format_commit_list(commits)}\n"
        "\n"
        "## Review Process:\n"
        f"- Total batches: {total_batches}\n"
        "- Each batch contains related changes for focused review\n"
        "- Please review each batch individually for detailed feedback\n"
        "- Use this summary to understand the overall scope of changes\n"
        "\n"
        "## Next Steps:\n"
        "1. Review each batch individually\n"
        "2. Provide specific feedback for each batch\n"
        "3. Consider the overall impact of all changes together\n"
        "4. Suggest any additional testing or documentation needs"
    )
