"""File-type classification for PR description statistics.

Each changed path maps to exactly one :class:`FileCategory`. Rules are
evaluated in order and the first match wins.

The GitHub Actions rule sits after the generic configuration rule, which
already claims every ``.yml``/``.yaml`` path, so workflow files classify as
``Configuration``. The order is kept as is; see DESIGN.md.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable
from enum import Enum

__all__ = [
    "CATEGORY_RULES",
    "FileCategory",
    "classify",
    "count_file_types",
]


class FileCategory(str, Enum):
    """Closed set of file-type labels used in PR descriptions."""

    JAVASCRIPT_TYPESCRIPT = "JavaScript/TypeScript"
    PYTHON = "Python"
    JAVA = "Java"
    GO = "Go"
    RUST = "Rust"
    PHP = "PHP"
    RUBY = "Ruby"
    STYLESHEETS = "Stylesheets"
    HTML = "HTML"
    CONFIGURATION = "Configuration"
    DOCUMENTATION = "Documentation"
    SQL = "SQL"
    SHELL_SCRIPTS = "Shell Scripts"
    DOCKER = "Docker"
    GITHUB_ACTIONS = "GitHub Actions"
    OTHER = "Other"


#: (path, lower-cased extension) -> matched?
_Predicate = Callable[[str, str], bool]


def _extension_in(*extensions: str) -> _Predicate:
    return lambda _path, ext: ext in extensions


def _is_workflow_yaml(path: str, ext: str) -> bool:
    return ext in (".yml", ".yaml") and "github/workflows" in path


CATEGORY_RULES: tuple[tuple[_Predicate, FileCategory], ...] = (
    (_extension_in(".js", ".ts", ".jsx", ".tsx"), FileCategory.JAVASCRIPT_TYPESCRIPT),
    (_extension_in(".py"), FileCategory.PYTHON),
    (_extension_in(".java"), FileCategory.JAVA),
    (_extension_in(".go"), FileCategory.GO),
    (_extension_in(".rs"), FileCategory.RUST),
    (_extension_in(".php"), FileCategory.PHP),
    (_extension_in(".rb"), FileCategory.RUBY),
    (_extension_in(".css", ".scss", ".sass", ".less"), FileCategory.STYLESHEETS),
    (_extension_in(".html", ".htm"), FileCategory.HTML),
    (_extension_in(".json", ".yaml", ".yml", ".xml"), FileCategory.CONFIGURATION),
    (_extension_in(".md", ".txt", ".rst"), FileCategory.DOCUMENTATION),
    (_extension_in(".sql"), FileCategory.SQL),
    (_extension_in(".sh", ".bash", ".zsh"), FileCategory.SHELL_SCRIPTS),
    (_extension_in(".dockerfile"), FileCategory.DOCKER),
    # Unreachable: CONFIGURATION above already matches these extensions.
    (_is_workflow_yaml, FileCategory.GITHUB_ACTIONS),
)


def classify(path: str) -> FileCategory:
    """Classify a path by its extension.

    Args:
        path: Repository-relative path.

    Returns:
        The first matching category, or ``FileCategory.OTHER``.

    Examples:
        >>> classify("src/foo.MD")
        <FileCategory.DOCUMENTATION: 'Documentation'>
        >>> classify("Makefile")
        <FileCategory.OTHER: 'Other'>
    """
    ext = os.path.splitext(path)[1].lower()
    for predicate, category in CATEGORY_RULES:
        if predicate(path, ext):
            return category
    return FileCategory.OTHER


def count_file_types(paths: Iterable[str]) -> list[tuple[FileCategory, int]]:
    """Count paths per category, in the order categories are first seen.

    Example:
        >>> count_file_types(["a.py", "b.md", "c.py"])
        [(<FileCategory.PYTHON: 'Python'>, 2), (<FileCategory.DOCUMENTATION: 'Documentation'>, 1)]
    """
    counts: dict[FileCategory, int] = {}
    for path in paths:
        category = classify(path)
        counts[category] = counts.get(category, 0) + 1
    return list(counts.items())
