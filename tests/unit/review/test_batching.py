"""Tests for greedy review batch planning."""

from __future__ import annotations

import pytest

from copilot_review.config import PlannerConfig
from copilot_review.review.batching import plan_batches
from copilot_review.review.models import BatchPlan, ChangedFile, count_lines


def diff_with_lines(n: int) -> str:
    """Build diff text that counts as exactly *n* lines."""
    return "\n".join(["+line"] * n)


def sizer(sizes: dict[str, int]):
    return lambda path: diff_with_lines(sizes[path])


def batch_sizes(plan: BatchPlan) -> list[list[int]]:
    return [[f.lines for f in batch.files] for batch in plan.batches]


# =============================================================================
# Line counting
# =============================================================================


class TestCountLines:
    def test_empty_string_counts_as_one(self) -> None:
        assert count_lines("") == 1

    def test_trailing_newline_adds_segment(self) -> None:
        assert count_lines("a\nb\n") == 3

    def test_changed_file_from_diff(self) -> None:
        changed = ChangedFile.from_diff("a.py", "x\ny")
        assert changed == ChangedFile(path="a.py", diff="x\ny", lines=2)


# =============================================================================
# Ceilings
# =============================================================================


class TestPlanBatches:
    def test_splits_on_file_count(self) -> None:
        paths = [f"f{i}.py" for i in range(6)]
        config = PlannerConfig(max_files_per_batch=5, max_total_lines=2000)

        plan = plan_batches(paths, sizer(dict.fromkeys(paths, 100)), config)

        assert [len(batch) for batch in plan] == [5, 1]
        assert plan[0].paths == paths[:5]
        assert plan[1].paths == ["f5.py"]

    def test_splits_on_line_ceiling(self) -> None:
        sizes = {"a.py": 100, "b.py": 100, "c.py": 10}
        config = PlannerConfig(
            max_file_size=150, max_files_per_batch=5, max_total_lines=150
        )

        plan = plan_batches(list(sizes), sizer(sizes), config)

        assert batch_sizes(plan) == [[100], [100, 10]]

    def test_oversized_file_is_excluded_everywhere(self) -> None:
        sizes = {"small.py": 10, "huge.sql": 1001, "other.py": 20}

        plan = plan_batches(list(sizes), sizer(sizes))

        assert [f.path for f in plan.planned_files] == ["small.py", "other.py"]
        assert [f.path for f in plan.oversized] == ["huge.sql"]
        assert plan[0].total_lines == 30

    def test_file_at_size_ceiling_is_kept(self) -> None:
        plan = plan_batches(["edge.py"], sizer({"edge.py": 1000}))

        assert batch_sizes(plan) == [[1000]]
        assert plan.oversized == ()

    def test_empty_input_produces_no_batches(self) -> None:
        plan = plan_batches([], sizer({}))

        assert len(plan) == 0
        assert plan.batches == ()

    def test_only_ineligible_files_produce_no_batches(self) -> None:
        paths = ["yarn.lock", "dist/app.js", "logo.png"]

        plan = plan_batches(paths, sizer({}))

        assert plan.batches == ()
        assert plan.excluded == tuple(paths)

    def test_ineligible_files_are_never_sized(self) -> None:
        requested: list[str] = []

        def diff_for(path: str) -> str:
            requested.append(path)
            return "x"

        plan_batches(["yarn.lock", "src/app.js", "node_modules/a.js"], diff_for)

        assert requested == ["src/app.js"]

    def test_batch_exactly_at_line_ceiling_closes_for_next_file(self) -> None:
        sizes = {"a.py": 600, "b.py": 400, "c.py": 1}
        config = PlannerConfig(max_file_size=1000, max_total_lines=1000)

        plan = plan_batches(list(sizes), sizer(sizes), config)

        assert batch_sizes(plan) == [[600, 400], [1]]

    def test_single_file_at_line_ceiling_fills_a_batch(self) -> None:
        sizes = {"a.py": 1000, "b.py": 5, "c.py": 5}
        config = PlannerConfig(max_file_size=1000, max_total_lines=1000)

        plan = plan_batches(list(sizes), sizer(sizes), config)

        assert batch_sizes(plan) == [[1000], [5, 5]]

    def test_empty_diff_counts_one_line(self) -> None:
        plan = plan_batches(["gone.py"], lambda _path: "")

        assert plan[0].files[0].lines == 1
        assert plan[0].files[0].diff == ""

    def test_duplicate_paths_are_independent_entries(self) -> None:
        plan = plan_batches(["a.py", "a.py"], sizer({"a.py": 3}))

        assert plan[0].paths == ["a.py", "a.py"]
        assert plan[0].total_lines == 6

    def test_both_ceilings_checked_independently(self) -> None:
        sizes = {"a.py": 10, "b.py": 10, "c.py": 90, "d.py": 1}
        config = PlannerConfig(
            max_file_size=100, max_files_per_batch=2, max_total_lines=100
        )

        plan = plan_batches(list(sizes), sizer(sizes), config)

        # c starts a new batch on file count; c + d fit under both ceilings
        assert batch_sizes(plan) == [[10, 10], [90, 1]]


# =============================================================================
# Ceilings and ordering over varied inputs
# =============================================================================

SCENARIOS = [
    ([5, 5, 5, 5, 5, 5, 5, 5, 5, 5, 5], PlannerConfig()),
    ([999, 999, 2, 1000, 1, 1], PlannerConfig()),
    ([1500, 10, 20, 30], PlannerConfig()),
    ([50, 60, 70, 80, 90, 100], PlannerConfig(max_file_size=100, max_total_lines=150)),
    ([1, 1, 1, 1, 1, 1, 1], PlannerConfig(max_files_per_batch=1)),
    ([300, 300, 300, 300, 300, 300, 300, 300], PlannerConfig()),
]


@pytest.mark.parametrize(("sizes", "config"), SCENARIOS)
def test_batches_respect_ceilings(sizes: list[int], config: PlannerConfig) -> None:
    paths = [f"file{i}.py" for i in range(len(sizes))]
    plan = plan_batches(paths, sizer(dict(zip(paths, sizes))), config)

    for batch in plan:
        assert 0 < len(batch) <= config.max_files_per_batch
        assert batch.total_lines <= config.max_total_lines


@pytest.mark.parametrize(("sizes", "config"), SCENARIOS)
def test_batches_preserve_order_without_loss(
    sizes: list[int], config: PlannerConfig
) -> None:
    paths = [f"file{i}.py" for i in range(len(sizes))]
    plan = plan_batches(paths, sizer(dict(zip(paths, sizes))), config)

    expected = [p for p, n in zip(paths, sizes) if n <= config.max_file_size]
    assert [f.path for f in plan.planned_files] == expected
    assert all(f.lines > config.max_file_size for f in plan.oversized)
