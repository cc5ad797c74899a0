"""Changed-file eligibility policy.

Decides which changed paths are worth sending to a reviewer. Binary assets,
minified bundles, vendored dependencies, build output, lockfiles, logs and
caches are excluded.
"""

from __future__ import annotations

import re

__all__ = [
    "EXCLUDE_PATTERNS",
    "is_eligible",
]

#: Any match excludes the path. Extension checks ignore case.
EXCLUDE_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\.(png|jpg|jpeg|gif|svg|ico|woff|woff2|ttf|eot)$", re.IGNORECASE),
    re.compile(r"\.(min\.js|min\.css)$", re.IGNORECASE),
    re.compile(r"node_modules"),
    re.compile(r"\.git"),
    re.compile(r"package-lock\.json$"),
    re.compile(r"yarn\.lock$"),
    re.compile(r"\.log$"),
    re.compile(r"\.lock$"),
    re.compile(r"\.cache$"),
    re.compile(r"dist/"),
    re.compile(r"build/"),
    re.compile(r"coverage/"),
)


def is_eligible(path: str) -> bool:
    """Return True if *path* should take part in the review.

    Args:
        path: Repository-relative path.

    Examples:
        >>> is_eligible("src/app.js")
        True
        >>> is_eligible("dist/bundle.js")
        False
        >>> is_eligible("assets/Logo.PNG")
        False
    """
    return not any(pattern.search(path) for pattern in EXCLUDE_PATTERNS)
