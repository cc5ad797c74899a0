from __future__ import annotations

import logging
import os
from collections.abc import Generator
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from git import Repo

if TYPE_CHECKING:
    from click.testing import CliRunner


@pytest.fixture(autouse=True)
def configure_test_logging() -> Generator[None, None, None]:
    """Configure structlog for test environment.

    Runs automatically for all tests so log output goes to stderr at
    WARNING level and never mixes with captured stdout.
    """
    from copilot_review.logging import configure_logging

    configure_logging(level=logging.WARNING)
    yield


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove all COPILOT_REVIEW_ environment variables for clean testing."""
    for key in list(os.environ.keys()):
        if key.startswith("COPILOT_REVIEW_"):
            monkeypatch.delenv(key)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


def _commit_files(repo: Repo, files: dict[str, str], message: str) -> None:
    root = Path(repo.working_tree_dir or ".")
    for rel_path, content in files.items():
        target = root / rel_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content)
    repo.index.add(list(files))
    repo.index.commit(message)


@pytest.fixture
def temp_git_repo(tmp_path: Path) -> Generator[Repo, None, None]:
    """Create a git repository with a ``develop`` and a ``feature/login`` branch.

    ``develop`` holds the initial commit. ``feature/login`` is checked out and
    adds two commits on top of it:

    - ``feat: add login form`` adds ``src/login.py`` (3 lines) and ``yarn.lock``
    - ``docs: describe login`` adds ``docs/login.md`` (1 line)

    Yields:
        The GitPython Repo.
    """
    repo_path = tmp_path / "repo"
    repo_path.mkdir()
    repo = Repo.init(repo_path)

    with repo.config_writer() as writer:
        writer.set_value("user", "email", "test@example.com")
        writer.set_value("user", "name", "Test User")

    _commit_files(repo, {"README.md": "# Test Repo\n"}, "Initial commit")
    repo.git.checkout("-b", "develop")
    repo.git.checkout("-b", "feature/login")

    _commit_files(
        repo,
        {
            "src/login.py": "def login():\n    return True\n\n",
            "yarn.lock": "# lock\n",
        },
        "feat: add login form",
    )
    _commit_files(repo, {"docs/login.md": "Login docs\n"}, "docs: describe login")

    yield repo
