"""Instructions file explaining how to use the generated prompts."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from copilot_review.review.models import Batch

__all__ = ["render_instructions"]

_HOW_TO_USE = """## How to Use:

### 1. Generate PR Description (Optional but Recommended)
1. Open the PR description file in VS Code
2. Copy the prompt content and paste it into Copilot chat
3. Use the generated description for your Pull Request

### 2. Code Review Process
1. Open each batch file in VS Code
2. Use Copilot to review the code changes
3. Copy the prompt content and paste it into Copilot chat
4. Review the feedback and make necessary changes
5. Move to the next batch

## Tips:
- Start with the PR description to get a high-level overview
- Review batches in order for better context
- Focus on one batch at a time for detailed feedback
- Use the summary to understand the overall scope
- Consider the relationships between changes across batches"""


def _format_batch_details(batches: Sequence[Batch]) -> str:
    return "".join(
        f"\n### Batch {i}:\n"
        f"- Files: {', '.join(batch.paths)}\n"
        f"- Total lines: {batch.total_lines}\n"
        for i, batch in enumerate(batches, start=1)
    )


def render_instructions(
    batches: Sequence[Batch],
    summary_path: Path,
    batch_paths: Sequence[Path],
    pr_description_path: Path,
) -> str:
    """Render the instructions file.

    Only file names are shown; the files all live in the same directory as
    the instructions file itself.
    """
    batch_names = ", ".join(path.name for path in batch_paths)

    return (
        "# Code Review Instructions\n"
        "\n"
        "## Generated Files:\n"
        f"- Summary: {summary_path.name}\n"
        f"- PR Description: {pr_description_path.name}\n"
        f"- Batches: {batch_names}\n"
        "\n"
        f"{_HOW_TO_USE}\n"
        "\n"
        "## Batch Details:\n"
        f"{_format_batch_details(batches)}\n"
    )
