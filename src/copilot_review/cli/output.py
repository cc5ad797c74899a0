"""Output formatting utilities for the copilot-review CLI."""

from __future__ import annotations

__all__ = [
    "format_error",
]


def format_error(
    message: str, details: list[str] | None = None, suggestion: str | None = None
) -> str:
    """Format an error message with optional details and suggestion.

    Args:
        message: Primary error message.
        details: Optional list of detail lines to include.
        suggestion: Optional suggestion for resolving the error.

    Returns:
        Formatted error string with details and suggestion if provided.

    Example:
        >>> print(format_error(
        ...     "fatal: ambiguous argument 'develop..main'",
        ...     details=["Operation: commits_between"],
        ...     suggestion="Check that the base branch exists",
        ... ))
        Error: fatal: ambiguous argument 'develop..main'
          Operation: commits_between
        Suggestion: Check that the base branch exists
    """
    lines = [f"Error: {message}"]

    if details:
        for detail in details:
            lines.append(f"  {detail}")

    if suggestion:
        lines.append(f"Suggestion: {suggestion}")

    return "\n".join(lines)
