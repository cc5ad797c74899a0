"""CLI utilities for copilot-review.

This package provides CLI-specific utilities including exit codes, output
formatting, and error handling.
"""

from __future__ import annotations

from copilot_review.cli.common import cli_error_handler
from copilot_review.cli.context import ExitCode

__all__ = [
    "ExitCode",
    "cli_error_handler",
]
