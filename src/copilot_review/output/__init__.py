"""Output housekeeping: prompt files, stale cleanup and ignore-file entry."""

from __future__ import annotations

from copilot_review.output.files import (
    PromptWriter,
    cleanup_old_prompts,
    is_prompt_file,
    make_timestamp,
)
from copilot_review.output.gitignore import ensure_gitignore_entry

__all__ = [
    "PromptWriter",
    "cleanup_old_prompts",
    "ensure_gitignore_entry",
    "is_prompt_file",
    "make_timestamp",
]
