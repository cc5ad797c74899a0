"""Greedy batch planning for review prompts.

Changed files are packed into batches in a single left-to-right pass:

- ineligible paths are dropped before their diff is fetched
- a file whose diff exceeds ``max_file_size`` lines is skipped with a warning
- a new batch starts when the open one already holds ``max_files_per_batch``
  files or would go over ``max_total_lines`` with the next file

Files are never reordered and closed batches are never revisited.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace
from functools import reduce

from copilot_review.config import PlannerConfig
from copilot_review.logging import get_logger
from copilot_review.review.eligibility import is_eligible
from copilot_review.review.models import Batch, BatchPlan, ChangedFile

logger = get_logger(__name__)

__all__ = [
    "DiffSource",
    "plan_batches",
]

#: Returns the diff text of a path; failures must come back as ""
DiffSource = Callable[[str], str]


@dataclass(frozen=True, slots=True)
class _PlannerState:
    """Accumulator threaded through the planning fold."""

    closed: tuple[Batch, ...] = ()
    open_files: tuple[ChangedFile, ...] = ()
    open_lines: int = 0
    oversized: tuple[ChangedFile, ...] = ()
    excluded: tuple[str, ...] = ()

    def exclude(self, path: str) -> _PlannerState:
        return replace(self, excluded=(*self.excluded, path))

    def reject(self, changed: ChangedFile) -> _PlannerState:
        return replace(self, oversized=(*self.oversized, changed))

    def close_open(self) -> _PlannerState:
        if not self.open_files:
            return self
        return replace(
            self,
            closed=(*self.closed, Batch(files=self.open_files)),
            open_files=(),
            open_lines=0,
        )

    def append(self, changed: ChangedFile) -> _PlannerState:
        return replace(
            self,
            open_files=(*self.open_files, changed),
            open_lines=self.open_lines + changed.lines,
        )


def _needs_new_batch(
    state: _PlannerState, changed: ChangedFile, config: PlannerConfig
) -> bool:
    if not state.open_files:
        return False
    return (
        len(state.open_files) >= config.max_files_per_batch
        or state.open_lines + changed.lines > config.max_total_lines
    )


def _step(
    state: _PlannerState,
    path: str,
    diff_for: DiffSource,
    config: PlannerConfig,
) -> _PlannerState:
    if not is_eligible(path):
        logger.debug("file_excluded", path=path)
        return state.exclude(path)

    changed = ChangedFile.from_diff(path, diff_for(path))

    if changed.lines > config.max_file_size:
        logger.warning(
            "file_skipped_oversized",
            path=path,
            lines=changed.lines,
            max_file_size=config.max_file_size,
        )
        return state.reject(changed)

    if _needs_new_batch(state, changed, config):
        state = state.close_open()

    return state.append(changed)


def plan_batches(
    paths: Iterable[str],
    diff_for: DiffSource,
    config: PlannerConfig | None = None,
) -> BatchPlan:
    """Pack changed files into review batches.

    Args:
        paths: Changed paths in discovery order. Duplicates are planned
            independently.
        diff_for: Returns the diff text for a path. Only called for
            eligible paths.
        config: Planner ceilings (defaults to :class:`PlannerConfig`).

    Returns:
        BatchPlan with the ordered batches plus the oversized and excluded
        inputs.

    Example:
        >>> diffs = {"a.py": "x\\n" * 99, "b.py": "y"}
        >>> plan = plan_batches(["a.py", "b.py"], diffs.__getitem__)
        >>> [batch.paths for batch in plan]
        [['a.py', 'b.py']]
    """
    config = config or PlannerConfig()

    state = reduce(
        lambda acc, path: _step(acc, path, diff_for, config),
        paths,
        _PlannerState(),
    ).close_open()

    logger.debug(
        "batches_planned",
        batch_count=len(state.closed),
        oversized_count=len(state.oversized),
        excluded_count=len(state.excluded),
    )

    return BatchPlan(
        batches=state.closed,
        oversized=state.oversized,
        excluded=state.excluded,
    )
