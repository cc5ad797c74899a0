"""Review prompt generation run.

This module sequences one run of the tool: housekeeping, branch comparison,
batch planning, and writing the prompt files. It reports progress on a Rich
console and returns a :class:`RunResult` instead of exiting; the CLI alone
turns results into exit codes.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path

from rich.console import Console

from copilot_review.config import CopilotReviewConfig
from copilot_review.exceptions import GitError
from copilot_review.logging import bind_context, clear_context, get_logger
from copilot_review.output import (
    PromptWriter,
    cleanup_old_prompts,
    ensure_gitignore_entry,
    make_timestamp,
)
from copilot_review.prompts import (
    render_instructions,
    render_pr_description,
    render_review_prompt,
    render_summary,
)
from copilot_review.review import BatchPlan, plan_batches
from copilot_review.vcs import VcsProvider

logger = get_logger(__name__)

__all__ = [
    "ReviewPromptGenerator",
    "RunInputs",
    "RunResult",
    "RunStatus",
]


class RunStatus(str, Enum):
    """Outcome of a run.

    Attributes:
        SUCCESS: Prompt files were written.
        NO_COMMITS: The branches are in sync; nothing was written.
        NO_REVIEWABLE_FILES: Every changed file was excluded or too large.
        FATAL: A branch-level git query failed.
    """

    SUCCESS = "success"
    NO_COMMITS = "no_commits"
    NO_REVIEWABLE_FILES = "no_reviewable_files"
    FATAL = "fatal"


@dataclass(frozen=True, slots=True)
class RunInputs:
    """Options for a single run.

    Attributes:
        base_branch: Branch the current branch is compared against.
        skip_cleanup: Keep prompt files from earlier runs.
        skip_gitignore: Leave the ignore file untouched.
    """

    base_branch: str
    skip_cleanup: bool = False
    skip_gitignore: bool = False


@dataclass(frozen=True, slots=True)
class RunResult:
    """Structured result of a run.

    Example:
        ```python
        result = generator.run(RunInputs(base_branch="main"))
        if result.status is RunStatus.FATAL:
            print(result.error.message)
        ```
    """

    status: RunStatus
    message: str
    written: tuple[Path, ...] = ()
    plan: BatchPlan | None = None
    error: GitError | None = None

    def __post_init__(self) -> None:
        """Validate that fatal results carry their error."""
        if self.status is RunStatus.FATAL and self.error is None:
            raise ValueError("Fatal results must have an error")

    @property
    def success(self) -> bool:
        """True unless the run failed; empty runs count as successful."""
        return self.status is not RunStatus.FATAL

    @classmethod
    def success_result(
        cls, message: str, written: tuple[Path, ...], plan: BatchPlan
    ) -> RunResult:
        return cls(status=RunStatus.SUCCESS, message=message, written=written, plan=plan)

    @classmethod
    def empty_result(
        cls, status: RunStatus, message: str, plan: BatchPlan | None = None
    ) -> RunResult:
        return cls(status=status, message=message, plan=plan)

    @classmethod
    def failure_result(
        cls, error: GitError, written: tuple[Path, ...] = ()
    ) -> RunResult:
        return cls(
            status=RunStatus.FATAL,
            message=error.message,
            written=written,
            error=error,
        )


@dataclass
class _WrittenFiles:
    summary: Path | None = None
    pr_description: Path | None = None
    batches: list[Path] = field(default_factory=list)
    instructions: Path | None = None

    def all(self) -> tuple[Path, ...]:
        paths = [self.summary, self.pr_description, *self.batches, self.instructions]
        return tuple(p for p in paths if p is not None)


class ReviewPromptGenerator:
    """Compares two branches and writes review prompts for the changes.

    Example:
        ```python
        generator = ReviewPromptGenerator(GitRepository(), load_config())
        result = generator.run(RunInputs(base_branch="develop"))
        ```
    """

    def __init__(
        self,
        repository: VcsProvider,
        config: CopilotReviewConfig | None = None,
        console: Console | None = None,
        err_console: Console | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the generator.

        Args:
            repository: Source of branch, commit and diff information.
            config: Settings (defaults to built-in defaults).
            console: Console for progress messages (defaults to stdout).
            err_console: Console for skipped-file warnings (defaults to stderr).
            clock: Returns the current instant; used for file name timestamps.
        """
        self._repository = repository
        self._config = config or CopilotReviewConfig()
        self._console = console or Console()
        self._err_console = err_console or Console(
            stderr=True, quiet=self._console.quiet
        )
        self._clock = clock or (lambda: datetime.now(UTC))
        self._writer = PromptWriter(self._config.output.directory)

    def _say(self, message: str) -> None:
        self._console.print(message, markup=False, highlight=False)

    def _warn(self, message: str) -> None:
        self._err_console.print(message, markup=False, highlight=False)

    def run(self, inputs: RunInputs) -> RunResult:
        """Execute one run.

        Returns:
            RunResult describing what happened. Git failures on branch-level
            queries produce a FATAL result; files already written stay on disk.
        """
        written = _WrittenFiles()
        bind_context(base_branch=inputs.base_branch)
        try:
            return self._run(inputs, written)
        except GitError as e:
            logger.error("run_failed", operation=e.operation, error=e.message)
            return RunResult.failure_result(e, written=written.all())
        finally:
            clear_context()

    def _housekeeping(self, inputs: RunInputs) -> None:
        output = self._config.output

        if not inputs.skip_gitignore:
            try:
                added = ensure_gitignore_entry(
                    output.gitignore_path, output.gitignore_entry
                )
            except OSError as e:
                logger.warning(
                    "gitignore_update_failed",
                    path=str(output.gitignore_path),
                    error=str(e),
                )
                self._warn(f"⚠️  Warning: Could not update .gitignore: {e}")
            else:
                if added:
                    self._say(
                        f"📝 Added '{output.gitignore_entry}' to {output.gitignore_path}"
                    )

        if not inputs.skip_cleanup:
            try:
                removed = cleanup_old_prompts(output.directory)
            except OSError as e:
                logger.warning(
                    "cleanup_failed", directory=str(output.directory), error=str(e)
                )
                self._warn(f"⚠️  Warning: Could not clean up old files: {e}")
            else:
                if removed:
                    self._say(f"🧹 Cleaned up {removed} old prompt files\n")

    def _run(self, inputs: RunInputs, written: _WrittenFiles) -> RunResult:
        self._say("🚀 Starting Copilot Code Review Generator...\n")

        base_branch = inputs.base_branch
        current_branch = self._repository.current_branch()
        bind_context(current_branch=current_branch)

        self._housekeeping(inputs)
        self._say(f"📊 Comparing branches: {current_branch} → {base_branch}\n")

        commits = self._repository.commits_between(base_branch, current_branch)
        changed_files = self._repository.changed_files(base_branch, current_branch)

        if not commits:
            message = f"No commits found between {base_branch} and {current_branch}"
            logger.info("no_commits", changed_files=len(changed_files))
            self._say(message)
            self._say("✅ No commits to review. Branches are in sync.")
            return RunResult.empty_result(RunStatus.NO_COMMITS, message)

        self._say(f"📝 Found {len(commits)} commits to review")
        self._say(f"📁 Found {len(changed_files)} changed files\n")

        plan = plan_batches(
            changed_files,
            lambda path: self._repository.file_diff(base_branch, current_branch, path),
            self._config.planner,
        )
        for skipped in plan.oversized:
            self._warn(f"⚠️  Skipping large file: {skipped.path} ({skipped.lines} lines)")

        if not plan.batches:
            message = "No reviewable files found (all files excluded or too large)"
            self._say(f"✅ {message}")
            return RunResult.empty_result(RunStatus.NO_REVIEWABLE_FILES, message, plan)

        total = len(plan.batches)
        self._say(f"📦 Created {total} batches for review\n")
        logger.info(
            "batches_planned",
            batch_count=total,
            oversized=len(plan.oversized),
            excluded=len(plan.excluded),
        )

        timestamp = make_timestamp(self._clock())

        written.summary = self._writer.save(
            render_summary(commits, total), f"summary-{timestamp}.md"
        )
        self._say(f"📋 Summary saved: {written.summary}")

        written.pr_description = self._writer.save(
            render_pr_description(commits, changed_files, base_branch, current_branch),
            f"pr-description-{timestamp}.md",
        )
        self._say(f"📝 PR Description prompt saved: {written.pr_description}")

        for number, batch in enumerate(plan.batches, start=1):
            path = self._writer.save(
                render_review_prompt(batch, commits, number, total),
                f"batch-{number}-{timestamp}.md",
            )
            written.batches.append(path)
            self._say(f"📄 Batch {number} saved: {path}")

        written.instructions = self._writer.save(
            render_instructions(
                plan.batches,
                written.summary,
                written.batches,
                written.pr_description,
            ),
            f"instructions-{timestamp}.md",
        )
        self._say(f"📖 Instructions saved: {written.instructions}\n")

        self._say("✅ Code review prompts generated successfully!")
        self._say(f"📁 All files saved in: {self._writer.output_dir}/")
        self._say("\n🎯 Next steps:")
        self._say(f"1. Open the instructions file: {written.instructions}")
        self._say("2. Follow the instructions to review each batch")
        self._say("3. Use VS Code Copilot to get detailed feedback")

        return RunResult.success_result(
            f"Generated {len(written.all())} prompt files",
            written.all(),
            plan,
        )
