"""Markdown prompt templates rendered from the planned review.

Every function here is pure: it takes commits, batches and branch names and
returns the text of one prompt file.
"""

from __future__ import annotations

from copilot_review.prompts.instructions import render_instructions
from copilot_review.prompts.pr_description import render_pr_description
from copilot_review.prompts.review import render_review_prompt
from copilot_review.prompts.summary import render_summary

__all__ = [
    "render_instructions",
    "render_pr_description",
    "render_review_prompt",
    "render_summary",
]
