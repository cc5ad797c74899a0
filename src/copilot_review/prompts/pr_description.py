"""Pull request description prompt.

The prompt gives the assistant the branch pair, commit list, a per-category
file count and the full list of changed paths, followed by the sections the
generated PR description must contain. File statistics cover every changed
path, including those excluded from review batches.
"""

from __future__ import annotations

from collections.abc import Sequence

from copilot_review.git.repository import CommitInfo
from copilot_review.prompts.common import format_bullets, format_commit_list
from copilot_review.review.file_types import count_file_types

__all__ = [
    "PR_DESCRIPTION_INSTRUCTIONS",
    "render_pr_description",
]

PR_DESCRIPTION_INSTRUCTIONS = """## Instructions:
Please generate a professional Pull Request description that includes ALL of the following sections:

### 1. **Title**:
A clear, concise title (max 50 characters)

### 2. **Summary of Changes**:
- **What**: What was changed and why?
- **Why**: Why these changes were necessary
- **Business Value**: What business problem does this solve?

### 3. **Context/Background**:
- **Rally Ticket**: Link to Rally ticket or issue number
- **Business Details**: Relevant business context and requirements
- **Related Issues**: Any related tickets or dependencies

### 4. **Implementation Details**:
- **Walkthrough**: Step-by-step explanation of what was implemented
- **Architecture**: Key architectural decisions made
- **Technical Approach**: How the solution was built
- **Code Structure**: Overview of new/modified components

### 5. **How to Test?**:
- **Manual Testing**: Step-by-step testing instructions
- **Automated Tests**: What tests were added/updated
- **Test Data**: Any special test data or setup required
- **Edge Cases**: Specific scenarios to test

### 6. **Impact Areas**:
- **Performance**: Any performance implications
- **Security**: Security considerations
- **User Experience**: How this affects end users
- **System Integration**: Impact on other systems
- **Data**: Any data migration or schema changes

### 7. **Optional Review Notes**:
- **Code Quality**: Areas that need special attention
- **Design Decisions**: Rationale for specific choices
- **Trade-offs**: Any compromises made and why
- **Future Considerations**: What might need to be addressed later

### 8. **Focus Area for Review**:
- **Critical Sections**: Most important code to review
- **Complex Logic**: Areas with complex business logic
- **New Dependencies**: New libraries or frameworks used
- **Configuration Changes**: Any config or environment changes

### 9. **Backward Compatibility** (Optional):
- **Breaking Changes**: Any breaking changes and migration path
- **API Changes**: Changes to public APIs
- **Database Changes**: Schema or data structure changes
- **Configuration**: Changes to configuration requirements

### 10. **Screenshots** (if applicable):
- **UI Changes**: Screenshots of visual changes
- **Before/After**: Comparison images if relevant
- **Error States**: Screenshots of error handling
- **Mobile/Responsive**: Mobile view screenshots if applicable

### 11. **Additional Sections** (as needed):
- **Dependencies**: New dependencies or version updates
- **Deployment Notes**: Special deployment considerations
- **Monitoring**: Any new monitoring or logging added
- **Documentation**: Documentation that was updated

## Formatting Requirements:
- Use proper markdown formatting
- Include emojis for visual appeal (🎯, 📝, 🔧, 🧪, etc.)
- Use bullet points and numbered lists for clarity
- Include code blocks for technical details
- Use tables for structured information
- Add horizontal rules (---) to separate major sections

Please generate a comprehensive, professional PR description that covers all these areas based on the code changes provided."""


def render_pr_description(
    commits: Sequence[CommitInfo],
    changed_files: Sequence[str],
    base_branch: str,
    current_branch: str,
) -> str:
    """Render the PR description prompt.

    Args:
        commits: Commits in the compared range.
        changed_files: Every changed path, eligible for review or not.
        base_branch: Target branch of the pull request.
        current_branch: Source branch of the pull request.

    Returns:
        Markdown prompt text.
    """
    file_types = "\n".join(
        f"- {category.value}: {count} files"
        for category, count in count_file_types(changed_files)
    )

    return (
        "# Pull Request Description Generator\n"
        "\n"
        "## Context\n"
        "Please generate a comprehensive Pull Request description for the following changes.\n"
        "\n"
        "## Branch Information:\n"
        f"- **Source Branch**: {current_branch}\n"
        f"- **Target Branch**: {base_branch}\n"
        f"- **Total Commits**: {len(commits)}\n"
        f"- **Total Files Changed**: {len(changed_files)}\n"
        "\n"
        "## Commits:\n"
        f"{format_commit_list(commits)}\n"
        "\n"
        "## File Changes Summary:\n"
        f"{file_types}\n"
        "\n"
        "## Changed Files:\n"
        f"{format_bullets(changed_files)}\n"
        "\n"
        f"{PR_DESCRIPTION_INSTRUCTIONS}"
    )
