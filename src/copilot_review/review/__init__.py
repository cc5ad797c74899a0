"""Review planning: eligibility policy, batch planner and file-type classifier."""

from __future__ import annotations

from copilot_review.review.batching import DiffSource, plan_batches
from copilot_review.review.eligibility import is_eligible
from copilot_review.review.file_types import FileCategory, classify, count_file_types
from copilot_review.review.models import Batch, BatchPlan, ChangedFile, count_lines

__all__ = [
    "Batch",
    "BatchPlan",
    "ChangedFile",
    "DiffSource",
    "FileCategory",
    "classify",
    "count_file_types",
    "count_lines",
    "is_eligible",
    "plan_batches",
]
