"""The five dimension scorers behind the 0-100 portfolio score.

Every scorer is a pure function of the profile and the fork-filtered
repositories.  Intermediate arithmetic stays in floats; values are rounded
(half-up) only when written to the :class:`DimensionScore`.  Scorers that
bucket by time take ``now`` explicitly instead of reading the wall clock.

Maximum points per dimension:

=============  ===
documentation   20
code quality    25
activity        20
impact          20
organization    15
=============  ===
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import Sequence

from portfolio_analyzer.domain.entities import (
    DimensionScore,
    Profile,
    Repository,
    ScoreBreakdown,
)

_SECONDS_PER_DAY = 60 * 60 * 24


# ── Helpers ─────────────────────────────────────────────────────────────────


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (not banker's rounding)."""
    return math.floor(value + 0.5)


def days_since(moment: datetime | None, now: datetime) -> float:
    """Fractional days elapsed since *moment*; ``inf`` if it never happened."""
    if moment is None:
        return math.inf
    return (now - moment).total_seconds() / _SECONDS_PER_DAY


def has_meaningful_description(repo: Repository) -> bool:
    return repo.description is not None and len(repo.description) > 20


def filter_forks(
    repositories: Sequence[Repository], *, use_fork_flag: bool = False
) -> list[Repository]:
    """Drop repositories that look like forks.

    The default heuristic is a substring match on the name, which also
    catches unrelated names such as ``forklift-app``.  With
    *use_fork_flag* the API's explicit fork flag is honoured as well.
    """
    return [
        repo
        for repo in repositories
        if "fork" not in repo.name and not (use_fork_flag and repo.is_fork)
    ]


# ── Dimension scorers ───────────────────────────────────────────────────────


def score_documentation(repos: Sequence[Repository]) -> DimensionScore:
    """README presence (0-10) + mean README quality (0-10)."""
    total = len(repos) or 1
    with_readme = sum(1 for r in repos if r.has_readme)

    presence = with_readme / total * 10
    quality = sum(r.readme_quality for r in repos) / total

    return DimensionScore(
        score=round_half_up(presence + quality),
        breakdown={
            "presence": round_half_up(presence),
            "quality": round_half_up(quality),
            "repos_with_readme": with_readme,
            "total_repos": len(repos),
        },
    )


def score_code_quality(repos: Sequence[Repository], now: datetime) -> DimensionScore:
    """Language diversity, repo structure, average size and push recency."""
    total = len(repos) or 1

    languages = {r.language for r in repos if r.language}
    diversity = min(len(languages) * 2, 8)

    well_structured = sum(1 for r in repos if r.topics or has_meaningful_description(r))
    structure = well_structured / total * 7

    avg_size = sum(r.size for r in repos) / total
    if avg_size > 100:
        size = 5
    elif avg_size > 50:
        size = 3
    else:
        size = 1

    recent = sum(1 for r in repos if days_since(r.pushed_at, now) < 90)
    recency = recent / total * 5

    return DimensionScore(
        score=round_half_up(diversity + structure + size + recency),
        breakdown={
            "diversity": round_half_up(diversity),
            "structure": round_half_up(structure),
            "size": size,
            "recency": round_half_up(recency),
        },
    )


def score_activity(
    profile: Profile, repos: Sequence[Repository], now: datetime
) -> DimensionScore:
    """Account age, public repository count and recent pushes."""
    account_age = days_since(profile.created_at, now)
    if account_age > 365:
        age = 5
    elif account_age > 180:
        age = 3
    else:
        age = 1

    repo_count = min(profile.public_repos / 5, 5)

    pushed_last_month = sum(1 for r in repos if days_since(r.pushed_at, now) < 30)
    recency = min(pushed_last_month / 3 * 10, 10)

    return DimensionScore(
        score=round_half_up(age + repo_count + recency),
        breakdown={
            "age": age,
            "repo_count": round_half_up(repo_count),
            "recency": round_half_up(recency),
        },
    )


def score_impact(profile: Profile, repos: Sequence[Repository]) -> DimensionScore:
    """Stars, followers and the number of non-trivial projects."""
    stars = min(sum(r.stars for r in repos) / 5, 8)
    followers = min(profile.followers / 10, 6)

    complex_projects = sum(
        1 for r in repos if r.stars > 5 or r.forks > 2 or r.size > 1000
    )
    complexity = min(complex_projects / 3 * 6, 6)

    return DimensionScore(
        score=round_half_up(stars + followers + complexity),
        breakdown={
            "stars": round_half_up(stars),
            "followers": round_half_up(followers),
            "complexity": round_half_up(complexity),
        },
    )


def score_organization(repos: Sequence[Repository]) -> DimensionScore:
    """Descriptions, topic tags and naming hygiene."""
    total = len(repos) or 1

    descriptions = sum(1 for r in repos if has_meaningful_description(r)) / total * 5
    topics = sum(1 for r in repos if r.topics) / total * 5
    well_named = sum(
        1
        for r in repos
        if "test" not in r.name and "temp" not in r.name and len(r.name) > 3
    )
    naming = well_named / total * 5

    return DimensionScore(
        score=round_half_up(descriptions + topics + naming),
        breakdown={
            "descriptions": round_half_up(descriptions),
            "topics": round_half_up(topics),
            "naming": round_half_up(naming),
        },
    )


# ── Public API ──────────────────────────────────────────────────────────────


def build_score_breakdown(
    profile: Profile, repos: Sequence[Repository], now: datetime
) -> ScoreBreakdown:
    """Run all five scorers over the (already fork-filtered) repositories."""
    return ScoreBreakdown(
        documentation=score_documentation(repos),
        code_quality=score_code_quality(repos, now),
        activity=score_activity(profile, repos, now),
        impact=score_impact(profile, repos),
        organization=score_organization(repos),
    )
