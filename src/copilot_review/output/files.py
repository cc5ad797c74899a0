"""Prompt file naming, writing and stale-file cleanup.

All prompt files of one run share a timestamp suffix so they sort together
and can be told apart from earlier runs.
"""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from copilot_review.constants import PROMPT_FILE_PREFIXES
from copilot_review.logging import get_logger
from copilot_review.utils.atomic import atomic_write_text

__all__ = [
    "PromptWriter",
    "cleanup_old_prompts",
    "is_prompt_file",
    "make_timestamp",
]

logger = get_logger(__name__)


def make_timestamp(now: datetime | None = None) -> str:
    """Build a filesystem-safe ISO-8601 timestamp.

    The instant is rendered in UTC with millisecond precision and a ``Z``
    suffix, then ``:`` and ``.`` are replaced with ``-``.

    Args:
        now: Instant to format. Defaults to the current time.

    Example:
        >>> make_timestamp(datetime(2024, 5, 1, 10, 20, 30, 123456, tzinfo=UTC))
        '2024-05-01T10-20-30-123Z'
    """
    instant = (now or datetime.now(UTC)).astimezone(UTC)
    iso = instant.isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return iso.replace(":", "-").replace(".", "-")


def is_prompt_file(name: str) -> bool:
    """Return True if *name* looks like a prompt written by a previous run."""
    return name.startswith(PROMPT_FILE_PREFIXES)


class PromptWriter:
    """Writes prompt files into a single output directory.

    The directory is created on first write.
    """

    def __init__(self, output_dir: Path | str) -> None:
        self._output_dir = Path(output_dir)

    @property
    def output_dir(self) -> Path:
        return self._output_dir

    def save(self, content: str, filename: str) -> Path:
        """Write *content* to ``<output_dir>/<filename>`` atomically.

        Returns:
            Path of the written file.

        Raises:
            OSError: If the file cannot be written.
        """
        path = self._output_dir / filename
        atomic_write_text(path, content)
        logger.debug("prompt_saved", path=str(path), chars=len(content))
        return path


def cleanup_old_prompts(output_dir: Path | str) -> int:
    """Delete prompt files left over from previous runs.

    Only files whose names start with a prompt prefix are removed; anything
    else in the directory is left alone.

    Args:
        output_dir: Directory holding generated prompts.

    Returns:
        Number of files deleted.

    Raises:
        OSError: If the directory cannot be listed or a file cannot be
            deleted. Files removed before the failure stay removed.
    """
    directory = Path(output_dir)
    if not directory.is_dir():
        return 0

    stale = sorted(
        entry
        for entry in directory.iterdir()
        if entry.is_file() and is_prompt_file(entry.name)
    )
    removed = 0
    for entry in stale:
        entry.unlink()
        removed += 1

    if removed:
        logger.info("old_prompts_removed", directory=str(directory), count=removed)
    return removed
