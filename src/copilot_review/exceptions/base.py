from __future__ import annotations


class CopilotReviewError(Exception):
    """Base exception class for all copilot-review errors.

    Every custom exception in the package inherits from this class, so the
    CLI boundary can catch project errors in one place while letting system
    exceptions propagate naturally.

    Attributes:
        message: Human-readable error message describing what went wrong.

    Example:
        ```python
        try:
            generator.run(inputs)
        except CopilotReviewError as e:
            logger.error("run_failed", error=e.message)
            sys.exit(1)
        ```
    """

    def __init__(self, message: str) -> None:
        """Initialize the CopilotReviewError.

        Args:
            message: Human-readable error message.
        """
        self.message = message
        super().__init__(message)
