"""copilot-review exception hierarchy.

All exceptions can be imported from this package:
    from copilot_review.exceptions import ConfigError, GitError
"""

from __future__ import annotations

# Base exception
from copilot_review.exceptions.base import CopilotReviewError

# Configuration exceptions
from copilot_review.exceptions.config import ConfigError

# Git-related exceptions
from copilot_review.exceptions.git import (
    GitError,
    GitNotFoundError,
    NotARepositoryError,
)

__all__ = [
    "ConfigError",
    "CopilotReviewError",
    "GitError",
    "GitNotFoundError",
    "NotARepositoryError",
]
