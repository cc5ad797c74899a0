"""Tests for ReviewPromptGenerator run sequencing."""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path

import pytest
import structlog
from rich.console import Console

from copilot_review.config import CopilotReviewConfig, OutputConfig, PlannerConfig
from copilot_review.exceptions import GitError
from copilot_review.git import CommitInfo
from copilot_review.runner import (
    ReviewPromptGenerator,
    RunInputs,
    RunResult,
    RunStatus,
)
from copilot_review.vcs import VcsProvider

TIMESTAMP = "2024-05-01T10-20-30-123Z"


def fixed_clock() -> datetime:
    return datetime(2024, 5, 1, 10, 20, 30, 123000, tzinfo=UTC)


@dataclass
class FakeVcs:
    """In-memory VcsProvider."""

    branch: str = "feature/x"
    commits: list[CommitInfo] = field(
        default_factory=lambda: [
            CommitInfo(hash="a1b2c3d", message="feat: add thing"),
            CommitInfo(hash="e4f5a6b", message="fix: tidy"),
        ]
    )
    diffs: dict[str, str] = field(default_factory=dict)
    fail_on: str | None = None
    diff_requests: list[str] = field(default_factory=list)

    def _maybe_fail(self, operation: str) -> None:
        if self.fail_on == operation:
            raise GitError(f"fatal: {operation} failed", operation=operation)

    def current_branch(self) -> str:
        self._maybe_fail("current_branch")
        return self.branch

    def commits_between(self, base: str, head: str) -> list[CommitInfo]:
        self._maybe_fail("commits_between")
        return list(self.commits)

    def changed_files(self, base: str, head: str) -> list[str]:
        self._maybe_fail("changed_files")
        return list(self.diffs)

    def file_diff(self, base: str, head: str, path: str) -> str:
        self.diff_requests.append(path)
        return self.diffs[path]

    def file_content(self, path: str, ref: str = "HEAD") -> str:
        return ""


@pytest.fixture
def workdir(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, clean_env: None
) -> Path:
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setattr(Path, "home", lambda: home)
    return tmp_path


@pytest.fixture
def config(workdir: Path) -> CopilotReviewConfig:
    return CopilotReviewConfig(
        output=OutputConfig(
            directory=workdir / "prompts",
            gitignore_path=workdir / ".gitignore",
        )
    )


@pytest.fixture
def stdout() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def stderr() -> io.StringIO:
    return io.StringIO()


def make_generator(
    vcs: FakeVcs,
    config: CopilotReviewConfig,
    stdout: io.StringIO,
    stderr: io.StringIO | None = None,
) -> ReviewPromptGenerator:
    return ReviewPromptGenerator(
        vcs,
        config,
        console=Console(file=stdout, width=300),
        err_console=Console(
            file=stderr if stderr is not None else io.StringIO(), width=300
        ),
        clock=fixed_clock,
    )


def prompt_names(config: CopilotReviewConfig) -> list[str]:
    directory = config.output.directory
    if not directory.exists():
        return []
    return sorted(p.name for p in directory.iterdir())


def test_fake_satisfies_protocol() -> None:
    assert isinstance(FakeVcs(), VcsProvider)


class TestSuccessfulRun:
    def test_writes_all_prompt_files(
        self, config: CopilotReviewConfig, stdout: io.StringIO
    ) -> None:
        vcs = FakeVcs(diffs={"src/a.py": "+a\n+b", "yarn.lock": "x", "README.md": "+r"})

        result = make_generator(vcs, config, stdout).run(RunInputs(base_branch="main"))

        assert result.status is RunStatus.SUCCESS
        assert result.success
        assert prompt_names(config) == sorted(
            [
                f"summary-{TIMESTAMP}.md",
                f"pr-description-{TIMESTAMP}.md",
                f"batch-1-{TIMESTAMP}.md",
                f"instructions-{TIMESTAMP}.md",
            ]
        )
        assert [p.name for p in result.written] == [
            f"summary-{TIMESTAMP}.md",
            f"pr-description-{TIMESTAMP}.md",
            f"batch-1-{TIMESTAMP}.md",
            f"instructions-{TIMESTAMP}.md",
        ]
        assert result.plan is not None
        assert result.plan.excluded == ("yarn.lock",)

    def test_excluded_files_are_never_diffed(
        self, config: CopilotReviewConfig, stdout: io.StringIO
    ) -> None:
        vcs = FakeVcs(diffs={"yarn.lock": "x", "src/a.py": "+a"})

        make_generator(vcs, config, stdout).run(RunInputs(base_branch="main"))

        assert vcs.diff_requests == ["src/a.py"]

    def test_prompt_content(
        self, config: CopilotReviewConfig, stdout: io.StringIO
    ) -> None:
        vcs = FakeVcs(diffs={"src/a.py": "+a\n+b", "yarn.lock": "x"})

        result = make_generator(vcs, config, stdout).run(RunInputs(base_branch="main"))

        summary, pr, batch, instructions = (
            p.read_text(encoding="utf-8") for p in result.written
        )
        assert "covers 2 commits across 1 batches" in summary
        assert "- **Source Branch**: feature/x" in pr
        assert "- **Target Branch**: main" in pr
        assert "- **Total Files Changed**: 2" in pr
        assert "# Code Review Request - Batch 1/1" in batch
        assert "### File: src/a.py\n```diff\n+a\n+b\n```" in batch
        assert f"- Batches: batch-1-{TIMESTAMP}.md" in instructions

    def test_splits_into_several_batches(
        self, config: CopilotReviewConfig, stdout: io.StringIO
    ) -> None:
        vcs = FakeVcs(diffs={f"src/m{i}.py": "+x" for i in range(7)})

        result = make_generator(vcs, config, stdout).run(RunInputs(base_branch="main"))

        assert result.plan is not None
        assert [len(b) for b in result.plan] == [5, 2]
        assert f"batch-2-{TIMESTAMP}.md" in prompt_names(config)
        assert "📦 Created 2 batches for review" in stdout.getvalue()

    def test_progress_messages(
        self, config: CopilotReviewConfig, stdout: io.StringIO
    ) -> None:
        vcs = FakeVcs(diffs={"src/a.py": "+a"})

        make_generator(vcs, config, stdout).run(RunInputs(base_branch="main"))

        output = stdout.getvalue()
        assert output.startswith("🚀 Starting Copilot Code Review Generator...")
        assert "📊 Comparing branches: feature/x → main" in output
        assert "📝 Found 2 commits to review" in output
        assert "📁 Found 1 changed files" in output
        assert "✅ Code review prompts generated successfully!" in output

    def test_oversized_file_warning(
        self,
        config: CopilotReviewConfig,
        stdout: io.StringIO,
        stderr: io.StringIO,
    ) -> None:
        big = "\n".join(["+x"] * 1001)
        vcs = FakeVcs(diffs={"schema.sql": big, "src/a.py": "+a"})

        result = make_generator(vcs, config, stdout, stderr).run(RunInputs(base_branch="main"))

        assert result.status is RunStatus.SUCCESS
        assert result.plan is not None
        assert [f.path for f in result.plan.oversized] == ["schema.sql"]
        assert "⚠️  Skipping large file: schema.sql (1001 lines)" in stderr.getvalue()

    def test_custom_planner_limits(
        self, workdir: Path, stdout: io.StringIO
    ) -> None:
        config = CopilotReviewConfig(
            planner=PlannerConfig(max_files_per_batch=1),
            output=OutputConfig(
                directory=workdir / "prompts", gitignore_path=workdir / ".gitignore"
            ),
        )
        vcs = FakeVcs(diffs={"a.py": "+a", "b.py": "+b"})

        result = make_generator(vcs, config, stdout).run(RunInputs(base_branch="main"))

        assert result.plan is not None
        assert len(result.plan) == 2


class TestEmptyRuns:
    def test_no_commits(
        self, config: CopilotReviewConfig, stdout: io.StringIO
    ) -> None:
        vcs = FakeVcs(commits=[], diffs={"src/a.py": "+a"})

        result = make_generator(vcs, config, stdout).run(RunInputs(base_branch="main"))

        assert result.status is RunStatus.NO_COMMITS
        assert result.success
        assert result.written == ()
        assert prompt_names(config) == []
        assert vcs.diff_requests == []
        lines = stdout.getvalue().splitlines()
        reason = lines.index("No commits found between main and feature/x")
        assert lines[reason + 1] == "✅ No commits to review. Branches are in sync."

    def test_no_reviewable_files(
        self, config: CopilotReviewConfig, stdout: io.StringIO
    ) -> None:
        vcs = FakeVcs(diffs={"yarn.lock": "x", "dist/app.js": "y"})

        result = make_generator(vcs, config, stdout).run(RunInputs(base_branch="main"))

        assert result.status is RunStatus.NO_REVIEWABLE_FILES
        assert prompt_names(config) == []
        assert "No reviewable files found" in stdout.getvalue()


class TestHousekeeping:
    def test_adds_gitignore_entry(
        self, config: CopilotReviewConfig, stdout: io.StringIO
    ) -> None:
        make_generator(FakeVcs(commits=[]), config, stdout).run(
            RunInputs(base_branch="main")
        )

        assert "code-review-prompts/" in config.output.gitignore_path.read_text()

    def test_skip_gitignore(
        self, config: CopilotReviewConfig, stdout: io.StringIO
    ) -> None:
        make_generator(FakeVcs(commits=[]), config, stdout).run(
            RunInputs(base_branch="main", skip_gitignore=True)
        )

        assert not config.output.gitignore_path.exists()

    def test_cleans_old_prompts(
        self, config: CopilotReviewConfig, stdout: io.StringIO
    ) -> None:
        config.output.directory.mkdir()
        (config.output.directory / "summary-old.md").write_text("old")
        (config.output.directory / "keep.txt").write_text("mine")

        make_generator(FakeVcs(commits=[]), config, stdout).run(
            RunInputs(base_branch="main")
        )

        assert prompt_names(config) == ["keep.txt"]
        assert "🧹 Cleaned up 1 old prompt files" in stdout.getvalue()

    def test_keep_old_prompts(
        self, config: CopilotReviewConfig, stdout: io.StringIO
    ) -> None:
        config.output.directory.mkdir()
        (config.output.directory / "summary-old.md").write_text("old")
        vcs = FakeVcs(diffs={"src/a.py": "+a"})

        make_generator(vcs, config, stdout).run(
            RunInputs(base_branch="main", skip_cleanup=True)
        )

        assert "summary-old.md" in prompt_names(config)
        assert len(prompt_names(config)) == 5

    def test_gitignore_failure_warns_and_continues(
        self, config: CopilotReviewConfig, stdout: io.StringIO, stderr: io.StringIO
    ) -> None:
        config.output.gitignore_path.mkdir()
        vcs = FakeVcs(diffs={"src/a.py": "+a"})

        result = make_generator(vcs, config, stdout, stderr).run(
            RunInputs(base_branch="main")
        )

        assert result.status is RunStatus.SUCCESS
        assert "⚠️  Warning: Could not update .gitignore:" in stderr.getvalue()
        assert "Added" not in stdout.getvalue()

    def test_cleanup_failure_warns_and_continues(
        self,
        config: CopilotReviewConfig,
        stdout: io.StringIO,
        stderr: io.StringIO,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        config.output.directory.mkdir()
        (config.output.directory / "summary-old.md").write_text("old")

        def deny(self: Path, missing_ok: bool = False) -> None:
            raise PermissionError(f"Permission denied: '{self.name}'")

        monkeypatch.setattr(Path, "unlink", deny)
        vcs = FakeVcs(diffs={"src/a.py": "+a"})

        result = make_generator(vcs, config, stdout, stderr).run(
            RunInputs(base_branch="main")
        )

        assert result.status is RunStatus.SUCCESS
        assert (
            "⚠️  Warning: Could not clean up old files: "
            "Permission denied: 'summary-old.md'"
        ) in stderr.getvalue()
        assert "Cleaned up" not in stdout.getvalue()
        assert "summary-old.md" in prompt_names(config)


class TestFailures:
    @pytest.mark.parametrize(
        "operation", ["current_branch", "commits_between", "changed_files"]
    )
    def test_branch_query_failure_is_fatal(
        self, config: CopilotReviewConfig, stdout: io.StringIO, operation: str
    ) -> None:
        vcs = FakeVcs(diffs={"src/a.py": "+a"}, fail_on=operation)

        result = make_generator(vcs, config, stdout).run(RunInputs(base_branch="main"))

        assert result.status is RunStatus.FATAL
        assert not result.success
        assert result.error is not None
        assert result.error.operation == operation
        assert result.message == f"fatal: {operation} failed"
        assert prompt_names(config) == []

    def test_log_context_cleared(
        self, config: CopilotReviewConfig, stdout: io.StringIO
    ) -> None:
        vcs = FakeVcs(fail_on="commits_between")

        make_generator(vcs, config, stdout).run(RunInputs(base_branch="main"))

        assert structlog.contextvars.get_contextvars() == {}


class TestRunResult:
    def test_fatal_requires_error(self) -> None:
        with pytest.raises(ValueError, match="must have an error"):
            RunResult(status=RunStatus.FATAL, message="boom")

    def test_failure_result(self) -> None:
        error = GitError("bad ref", operation="changed_files")

        result = RunResult.failure_result(error)

        assert result.status is RunStatus.FATAL
        assert result.message == "bad ref"
        assert result.error is error

    def test_empty_result_is_success(self) -> None:
        result = RunResult.empty_result(RunStatus.NO_COMMITS, "in sync")

        assert result.success
        assert result.written == ()
