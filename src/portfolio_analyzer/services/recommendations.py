"""Threshold rules that turn a score breakdown into improvement advice.

Each rule is independent and emits at most one :class:`Recommendation`.
All rules are evaluated, in the order of ``_RULES``, and every match is
returned in that order (not sorted by priority).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Sequence

from portfolio_analyzer.domain.entities import (
    Priority,
    Profile,
    Recommendation,
    RecommendationCategory,
    Repository,
    ScoreBreakdown,
)
from portfolio_analyzer.services.dimension_scorers import days_since

_STALE_AFTER_DAYS = 180
_MAX_STALE_REPOS = 3


@dataclass(frozen=True, slots=True)
class RuleContext:
    """Everything a rule may look at."""

    score: ScoreBreakdown
    profile: Profile
    repos: Sequence[Repository]
    now: datetime


Rule = Callable[[RuleContext], Recommendation | None]


# ── Documentation ───────────────────────────────────────────────────────────


def _missing_readmes(ctx: RuleContext) -> Recommendation | None:
    if ctx.score.documentation.score >= 15:
        return None
    missing = sum(1 for r in ctx.repos if not r.has_readme)
    if not missing:
        return None
    return Recommendation(
        title="Add README Files",
        description=(
            f"{missing} repositories are missing README files. Start with your "
            "most popular repos and add clear documentation including purpose, "
            "installation, and usage instructions."
        ),
        priority=Priority.HIGH,
        category=RecommendationCategory.DOCUMENTATION,
    )


def _weak_readmes(ctx: RuleContext) -> Recommendation | None:
    if ctx.score.documentation.breakdown.get("quality", 0) >= 7:
        return None
    return Recommendation(
        title="Enhance README Quality",
        description=(
            "Improve your README files by adding code examples, screenshots, "
            "installation guides, and contribution guidelines. High-quality "
            "documentation shows professionalism."
        ),
        priority=Priority.MEDIUM,
        category=RecommendationCategory.DOCUMENTATION,
    )


# ── Code ────────────────────────────────────────────────────────────────────


def _narrow_stack(ctx: RuleContext) -> Recommendation | None:
    if ctx.score.code_quality.score >= 18:
        return None
    return Recommendation(
        title="Diversify Technology Stack",
        description=(
            "Learn and showcase projects in different programming languages and "
            "frameworks. This demonstrates versatility and adaptability to recruiters."
        ),
        priority=Priority.MEDIUM,
        category=RecommendationCategory.CODE,
    )


# ── Organization ────────────────────────────────────────────────────────────


def _missing_descriptions(ctx: RuleContext) -> Recommendation | None:
    missing = sum(
        1 for r in ctx.repos if not r.description or len(r.description) < 20
    )
    if not missing:
        return None
    return Recommendation(
        title="Add Repository Descriptions",
        description=(
            f"{missing} repositories lack meaningful descriptions. Add clear, "
            "concise descriptions that explain what each project does and the "
            "problems it solves."
        ),
        priority=Priority.HIGH,
        category=RecommendationCategory.ORGANIZATION,
    )


def _missing_topics(ctx: RuleContext) -> Recommendation | None:
    missing = sum(1 for r in ctx.repos if not r.topics)
    if not missing:
        return None
    return Recommendation(
        title="Add Repository Topics",
        description=(
            f"{missing} repositories lack topic tags. Add relevant topics to "
            "improve discoverability and show technical areas of expertise."
        ),
        priority=Priority.MEDIUM,
        category=RecommendationCategory.ORGANIZATION,
    )


# ── Activity ────────────────────────────────────────────────────────────────


def _low_activity(ctx: RuleContext) -> Recommendation | None:
    if ctx.score.activity.score >= 15:
        return None
    return Recommendation(
        title="Increase Commit Consistency",
        description=(
            "Aim for regular contributions. Even small, consistent updates (2-3 "
            "times per week) signal active learning and dedication to recruiters."
        ),
        priority=Priority.HIGH,
        category=RecommendationCategory.ACTIVITY,
    )


def _stale_repositories(ctx: RuleContext) -> Recommendation | None:
    stale = sum(
        1 for r in ctx.repos if days_since(r.pushed_at, ctx.now) > _STALE_AFTER_DAYS
    )
    if stale <= _MAX_STALE_REPOS:
        return None
    return Recommendation(
        title="Update Stale Repositories",
        description=(
            f"{stale} repositories haven't been updated in over 6 months. Archive "
            "old projects or add recent commits to show active maintenance."
        ),
        priority=Priority.MEDIUM,
        category=RecommendationCategory.ACTIVITY,
    )


# ── Impact ──────────────────────────────────────────────────────────────────


def _low_impact(ctx: RuleContext) -> Recommendation | None:
    if ctx.score.impact.score >= 15:
        return None
    return Recommendation(
        title="Build Showcase Projects",
        description=(
            "Create 2-3 substantial projects that solve real problems. Quality "
            "trumps quantity - focus on projects that demonstrate technical depth "
            "and practical application."
        ),
        priority=Priority.HIGH,
        category=RecommendationCategory.IMPACT,
    )


def _small_network(ctx: RuleContext) -> Recommendation | None:
    if ctx.profile.followers >= 10:
        return None
    return Recommendation(
        title="Build Your Network",
        description=(
            "Engage with the developer community by contributing to open source, "
            "following interesting developers, and sharing your work. A strong "
            "network increases visibility."
        ),
        priority=Priority.LOW,
        category=RecommendationCategory.IMPACT,
    )


_RULES: list[Rule] = [
    _missing_readmes,
    _weak_readmes,
    _narrow_stack,
    _missing_descriptions,
    _low_activity,
    _stale_repositories,
    _low_impact,
    _small_network,
    _missing_topics,
]


# ── Public API ──────────────────────────────────────────────────────────────


def generate_recommendations(
    score: ScoreBreakdown,
    profile: Profile,
    repos: Sequence[Repository],
    now: datetime,
) -> list[Recommendation]:
    """Evaluate every rule and return the matches in rule order."""
    ctx = RuleContext(score=score, profile=profile, repos=repos, now=now)
    return [rec for rule in _RULES if (rec := rule(ctx)) is not None]
