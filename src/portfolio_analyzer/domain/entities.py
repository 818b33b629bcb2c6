"""Domain entities — pure data structures with no external dependencies."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class Priority(str, Enum):
    """How urgently a recommendation should be acted on."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class RecommendationCategory(str, Enum):
    """Score dimension a recommendation is meant to improve."""

    DOCUMENTATION = "documentation"
    CODE = "code"
    ACTIVITY = "activity"
    IMPACT = "impact"
    ORGANIZATION = "organization"


class Rating(str, Enum):
    """Qualitative label derived from the overall score."""

    EXCELLENT = "Excellent"
    GOOD = "Good"
    AVERAGE = "Average"
    NEEDS_IMPROVEMENT = "Needs Improvement"


def rating_for(overall: int) -> Rating:
    """Map an overall score (0-100) onto its qualitative rating."""
    if overall >= 85:
        return Rating.EXCELLENT
    if overall >= 70:
        return Rating.GOOD
    if overall >= 50:
        return Rating.AVERAGE
    return Rating.NEEDS_IMPROVEMENT


@dataclass(frozen=True, slots=True)
class Profile:
    """A GitHub user profile."""

    username: str
    name: str
    bio: str
    public_repos: int
    followers: int
    following: int
    created_at: datetime
    updated_at: datetime
    avatar_url: str = ""
    html_url: str = ""


@dataclass(frozen=True, slots=True)
class Repository:
    """A public repository owned by the analysed user.

    ``has_readme`` / ``readme_quality`` are filled in by the readme stage,
    which returns a new record rather than mutating this one.
    """

    name: str
    full_name: str
    description: str | None
    language: str | None
    stars: int
    forks: int
    watchers: int
    size: int  # KB, as reported by the API
    created_at: datetime
    updated_at: datetime
    pushed_at: datetime | None
    topics: tuple[str, ...] = ()
    html_url: str = ""
    is_fork: bool = False
    has_readme: bool = False
    readme_quality: int = 0
    languages: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not 0 <= self.readme_quality <= 10:
            raise ValueError(f"readme_quality must be within 0-10, got {self.readme_quality}")
        if not self.has_readme and self.readme_quality:
            raise ValueError("readme_quality must be 0 when the repository has no README")
        object.__setattr__(self, "languages", MappingProxyType(dict(self.languages)))


@dataclass(frozen=True, slots=True)
class DimensionScore:
    """One sub-score plus the named contributions that produced it."""

    score: int
    breakdown: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "breakdown", MappingProxyType(dict(self.breakdown)))


@dataclass(frozen=True, slots=True)
class ScoreBreakdown:
    """The five weighted sub-scores making up the 0-100 portfolio score."""

    documentation: DimensionScore  # 0-20
    code_quality: DimensionScore  # 0-25
    activity: DimensionScore  # 0-20
    impact: DimensionScore  # 0-20
    organization: DimensionScore  # 0-15

    @property
    def overall(self) -> int:
        return round(
            self.documentation.score
            + self.code_quality.score
            + self.activity.score
            + self.impact.score
            + self.organization.score
        )

    @property
    def rating(self) -> Rating:
        return rating_for(self.overall)


@dataclass(frozen=True, slots=True)
class Recommendation:
    """An actionable improvement suggestion."""

    title: str
    description: str
    priority: Priority
    category: RecommendationCategory


@dataclass(frozen=True, slots=True)
class AnalysisResult:
    """The final structured output returned to the caller."""

    profile: Profile
    repositories: tuple[Repository, ...]
    score: ScoreBreakdown
    recommendations: tuple[Recommendation, ...]
    skills: Mapping[str, int]  # ranked, highest share first
    analyzed_at: datetime

    def __post_init__(self) -> None:
        object.__setattr__(self, "skills", MappingProxyType(dict(self.skills)))
