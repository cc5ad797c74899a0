"""VCS abstraction consumed by the review run."""

from __future__ import annotations

from copilot_review.vcs.protocol import VcsProvider

__all__ = ["VcsProvider"]
