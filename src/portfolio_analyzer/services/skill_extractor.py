"""Primary-language distribution across a user's repositories."""

from __future__ import annotations

from collections import Counter
from typing import Sequence

from portfolio_analyzer.domain.entities import Repository
from portfolio_analyzer.services.dimension_scorers import round_half_up


def extract_skills(repos: Sequence[Repository], limit: int = 10) -> dict[str, int]:
    """Return ``{language: percentage}`` ordered by descending share.

    Percentages are relative to *all* repositories, including those without a
    primary language, so they need not sum to 100.  Ties keep the order in
    which the languages were first seen.
    """
    # Counter preserves first-seen order and sorted() is stable
    counts = Counter(r.language for r in repos if r.language)
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)[:limit]

    total = len(repos) or 1
    return {language: round_half_up(count / total * 100) for language, count in ranked}
