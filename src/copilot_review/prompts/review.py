"""Per-batch code review prompt.

Each batch gets its own prompt listing the commits under review, the files in
the batch with their diffs, and the structured review instructions.
"""

from __future__ import annotations

from collections.abc import Sequence

from copilot_review.git.repository import CommitInfo
from copilot_review.prompts.common import format_commit_list
from copilot_review.review.models import Batch, ChangedFile

__all__ = [
    "REVIEW_INSTRUCTIONS",
    "render_review_prompt",
]

REVIEW_INSTRUCTIONS = """## Review Instructions:
Please provide a comprehensive code review with the following structure:

### 1. **Overall Assessment**
- Brief summary of the changes
- General code quality assessment
- High-level concerns or positive aspects

### 2. **Detailed Review**
For each issue found, provide:
- **Location**: File name and line number(s)
- **Issue**: Clear description of the problem
- **Severity**: 🔴 **MUST FIX** or 🟡 **NITPICK**
- **Current Code**: Show the problematic code
- **Suggested Fix**: Provide improved code example
- **Why This Improves**: Explain the benefits of the suggested change

### 3. **Review Categories**

#### **🔴 Code Quality (MUST FIX)**
- Critical bugs or logic errors
- Security vulnerabilities
- Performance issues that could cause problems
- Code that will break in production

#### **🟡 Code Quality (NITPICK)**
- Code style and formatting
- Minor optimizations
- Code readability improvements
- Best practice suggestions

#### **🔴 Security (MUST FIX)**
- Input validation issues
- Authentication/authorization problems
- Data exposure risks
- SQL injection or XSS vulnerabilities

#### **🟡 Security (NITPICK)**
- Security best practices
- Minor security improvements
- Logging sensitive data

#### **🔴 Performance (MUST FIX)**
- Memory leaks
- Infinite loops
- Blocking operations
- Database N+1 queries

#### **🟡 Performance (NITPICK)**
- Minor optimizations
- Unnecessary computations
- Code efficiency improvements

#### **🔴 Architecture (MUST FIX)**
- Violation of separation of concerns
- Tight coupling issues
- Missing error handling
- Inconsistent patterns

#### **🟡 Architecture (NITPICK)**
- Design pattern suggestions
- Code organization improvements
- Refactoring opportunities

#### **🔴 Testing (MUST FIX)**
- Missing critical tests
- Tests that don't cover edge cases
- Broken or flaky tests

#### **🟡 Testing (NITPICK)**
- Additional test coverage
- Test quality improvements
- Test organization

### 4. **Action Items Summary**
At the end, provide a clear summary with:

#### **🔴 MUST FIX (Critical Issues)**
List all critical issues that must be addressed before merge:
- [ ] **Issue 1**: Brief description with file:line reference
- [ ] **Issue 2**: Brief description with file:line reference

#### **🟡 NITPICK (Optional Improvements)**
List all optional improvements:
- [ ] **Improvement 1**: Brief description with file:line reference
- [ ] **Improvement 2**: Brief description with file:line reference

### 5. **Code Examples Format**
For each issue, use this format:

```markdown
**🔴 MUST FIX - [Category]**
**File**: `filename.js:line-number`
**Issue**: Brief description of the problem

**Current Code:**
```javascript
// Show the problematic code here
const badCode = "example";
```

**Suggested Fix:**
```javascript
// Show the improved code here
const goodCode = "example";
```

**Why This Improves:**
- Explain the specific benefits
- Mention potential issues avoided
- Reference best practices or standards
```

### 6. **Positive Feedback**
Also highlight:
- Good practices implemented
- Well-written code sections
- Creative solutions
- Proper error handling
- Good test coverage

Please provide specific, actionable feedback with clear categorization and code examples for all suggestions."""


def _format_file_section(changed: ChangedFile) -> str:
    return f"\n### File: {changed.path}\n```diff\n{changed.diff}\n```\n"


def render_review_prompt(
    batch: Batch,
    commits: Sequence[CommitInfo],
    batch_number: int,
    total_batches: int,
) -> str:
    """Render the review prompt for one batch.

    Args:
        batch: Files to review in this pass.
        commits: All commits in the compared range.
        batch_number: 1-based position of this batch.
        total_batches: Number of batches in the run.

    Returns:
        Markdown prompt text.
    """
    file_list = "\n".join(
        f"- {changed.path} ({changed.lines} lines changed)" for changed in batch.files
    )
    code_changes = "\n".join(_format_file_section(changed) for changed in batch.files)

    return (
        f"# Code Review Request - Batch {batch_number}/{total_batches}\n"
        "\n"
        "## Context\n"
        "Please review the following code changes. "
        f"This is batch {batch_number} of {total_batches} for the code review.\n"
        "\n"
        "## Commits in this review:\n"
        f"{format_commit_list(commits)}\n"
        "\n"
        "## Files Changed:\n"
        f"{file_list}\n"
        "\n"
        "## Code Changes:\n"
        "\n"
        f"{code_changes}\n"
        "\n"
        f"{REVIEW_INSTRUCTIONS}"
    )
