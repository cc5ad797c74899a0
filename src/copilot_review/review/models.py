"""Data models for review batch planning.

- ChangedFile: one changed path with its diff and line count
- Batch: files grouped for a single review pass
- BatchPlan: the planner's output, including what it left out
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

__all__ = [
    "Batch",
    "BatchPlan",
    "ChangedFile",
    "count_lines",
]


def count_lines(text: str) -> int:
    """Count newline-delimited segments in *text*.

    An empty string counts as one line, and a trailing newline adds a final
    empty segment, so ``"a\\n"`` counts as two.

    Examples:
        >>> count_lines("")
        1
        >>> count_lines("a\\nb\\n")
        3
    """
    return len(text.split("\n"))


@dataclass(frozen=True, slots=True)
class ChangedFile:
    """A path that differs between two refs.

    Attributes:
        path: Repository-relative path with forward slashes.
        diff: Raw diff text (empty if retrieval failed).
        lines: Line count of ``diff`` as computed by :func:`count_lines`.
    """

    path: str
    diff: str
    lines: int

    @classmethod
    def from_diff(cls, path: str, diff: str) -> ChangedFile:
        """Build a ChangedFile, counting the diff's lines."""
        return cls(path=path, diff=diff, lines=count_lines(diff))


@dataclass(frozen=True, slots=True)
class Batch:
    """Files assigned together for one review pass, in discovery order."""

    files: tuple[ChangedFile, ...]

    @property
    def total_lines(self) -> int:
        """Sum of member line counts."""
        return sum(f.lines for f in self.files)

    @property
    def paths(self) -> list[str]:
        return [f.path for f in self.files]

    def __len__(self) -> int:
        return len(self.files)

    def __iter__(self) -> Iterator[ChangedFile]:
        return iter(self.files)


@dataclass(frozen=True, slots=True)
class BatchPlan:
    """Result of planning review batches.

    Attributes:
        batches: Finalized batches in order.
        oversized: Files rejected because their diff exceeded the size ceiling.
        excluded: Paths rejected by the eligibility filter.
    """

    batches: tuple[Batch, ...] = ()
    oversized: tuple[ChangedFile, ...] = field(default_factory=tuple)
    excluded: tuple[str, ...] = field(default_factory=tuple)

    @property
    def planned_files(self) -> list[ChangedFile]:
        """All batched files, concatenated in batch order."""
        return [f for batch in self.batches for f in batch.files]

    def __len__(self) -> int:
        return len(self.batches)

    def __iter__(self) -> Iterator[Batch]:
        return iter(self.batches)

    def __getitem__(self, index: int) -> Batch:
        return self.batches[index]
