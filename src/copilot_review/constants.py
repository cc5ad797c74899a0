"""Default values shared across copilot-review.

Planner ceilings, output locations and the stale-file prefixes live here so
that configuration defaults, housekeeping and tests agree on one value.
"""

from __future__ import annotations

# =============================================================================
# Batch planning
# =============================================================================

#: Maximum diff lines for a single file before it is skipped
DEFAULT_MAX_FILE_SIZE: int = 1000

#: Maximum number of files in one review batch
DEFAULT_MAX_FILES_PER_BATCH: int = 5

#: Maximum cumulative diff lines in one review batch
DEFAULT_MAX_TOTAL_LINES: int = 2000

# =============================================================================
# Branches and output
# =============================================================================

#: Base branch compared against when none is given on the command line
DEFAULT_BASE_BRANCH: str = "develop"

#: Directory (relative to the working directory) that receives the prompts
DEFAULT_OUTPUT_DIR: str = "code-review-prompts"

#: Ignore file patched so generated prompts are never committed
DEFAULT_GITIGNORE_PATH: str = ".gitignore"

#: Entry appended to the ignore file
DEFAULT_GITIGNORE_ENTRY: str = f"{DEFAULT_OUTPUT_DIR}/"

#: Comment line written above the ignore entry
GITIGNORE_COMMENT: str = "# Copilot Code Reviewer generated files"

#: File name prefixes of prompts produced by earlier runs
PROMPT_FILE_PREFIXES: tuple[str, ...] = (
    "summary-",
    "pr-description-",
    "batch-",
    "instructions-",
)
