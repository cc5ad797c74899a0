"""Ignore-file maintenance for the prompt output directory."""

from __future__ import annotations

from pathlib import Path

from copilot_review.constants import GITIGNORE_COMMENT
from copilot_review.logging import get_logger

__all__ = ["ensure_gitignore_entry"]

logger = get_logger(__name__)


def ensure_gitignore_entry(gitignore_path: Path | str, entry: str) -> bool:
    """Append *entry* to the ignore file unless it is already there.

    Existing content is preserved. A newline is inserted first when the file
    does not end with one, then the comment line and the entry are appended.
    A missing file is created.

    Args:
        gitignore_path: Path to the ignore file (usually ``.gitignore``).
        entry: Pattern to add (e.g. ``code-review-prompts/``).

    Returns:
        True if the file was changed, False if the entry was already present.

    Raises:
        OSError: If the file cannot be read or written.
    """
    path = Path(gitignore_path)

    content = path.read_text(encoding="utf-8") if path.exists() else ""
    if entry in content:
        return False

    separator = "\n" if content and not content.endswith("\n") else ""
    path.write_text(
        f"{content}{separator}{GITIGNORE_COMMENT}\n{entry}\n",
        encoding="utf-8",
    )

    logger.info("gitignore_entry_added", path=str(path), entry=entry)
    return True
