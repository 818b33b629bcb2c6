"""README quality heuristic.

Scores a README 0-10 from a handful of structural and keyword checks.
Keyword checks are case-insensitive; structural checks are not.
"""

from __future__ import annotations

import re

MAX_README_SCORE = 10

_HEADING_RE = re.compile(r"^#\s+", re.MULTILINE)

# (points, keywords) — any keyword present earns the points
_KEYWORD_CRITERIA: list[tuple[int, tuple[str, ...]]] = [
    (1, ("install", "setup")),
    (1, ("usage", "example")),
    (1, ("license",)),
]

# (points, literal marker)
_MARKER_CRITERIA: list[tuple[int, str]] = [
    (1, "```"),  # fenced code block
    (1, "!["),  # markdown image
]


def score_readme(content: str | None) -> int:
    """Return the quality score (0-10) for a README's raw text."""
    if not content:
        return 0

    score = 0
    if len(content) > 100:
        score += 2
    if _HEADING_RE.search(content):
        score += 1
    if len(content) > 300:
        score += 1

    lower = content.lower()
    for points, keywords in _KEYWORD_CRITERIA:
        if any(keyword in lower for keyword in keywords):
            score += points

    for points, marker in _MARKER_CRITERIA:
        if marker in content:
            score += points

    return min(score, MAX_README_SCORE)
