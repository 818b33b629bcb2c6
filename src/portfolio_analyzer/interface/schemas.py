"""Pydantic request / response DTOs for the API boundary."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, field_validator

from portfolio_analyzer.domain.entities import (
    AnalysisResult,
    DimensionScore,
    Profile,
    Recommendation,
    Repository,
)


class AnalyzeRequest(BaseModel):
    """Request body for ``POST /analyze``."""

    profile: str

    @field_validator("profile")
    @classmethod
    def _must_not_be_blank(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            msg = "profile must be a GitHub username or profile URL."
            raise ValueError(msg)
        return stripped


class ProfileOut(BaseModel):
    username: str
    name: str
    bio: str
    public_repos: int
    followers: int
    following: int
    created_at: datetime
    updated_at: datetime
    avatar_url: str
    html_url: str

    @classmethod
    def from_domain(cls, profile: Profile) -> ProfileOut:
        return cls(
            username=profile.username,
            name=profile.name,
            bio=profile.bio,
            public_repos=profile.public_repos,
            followers=profile.followers,
            following=profile.following,
            created_at=profile.created_at,
            updated_at=profile.updated_at,
            avatar_url=profile.avatar_url,
            html_url=profile.html_url,
        )


class DimensionOut(BaseModel):
    score: int
    max_score: int
    breakdown: dict[str, int]

    @classmethod
    def from_domain(cls, dimension: DimensionScore, max_score: int) -> DimensionOut:
        return cls(score=dimension.score, max_score=max_score, breakdown=dict(dimension.breakdown))


class ScoreOut(BaseModel):
    overall: int
    rating: str
    documentation: DimensionOut
    code_quality: DimensionOut
    activity: DimensionOut
    impact: DimensionOut
    organization: DimensionOut


class RecommendationOut(BaseModel):
    title: str
    description: str
    priority: str
    category: str

    @classmethod
    def from_domain(cls, rec: Recommendation) -> RecommendationOut:
        return cls(
            title=rec.title,
            description=rec.description,
            priority=rec.priority.value,
            category=rec.category.value,
        )


class SkillOut(BaseModel):
    language: str
    percentage: int


class RepositoryOut(BaseModel):
    name: str
    full_name: str
    description: str | None
    language: str | None
    topics: list[str]
    stars: int
    forks: int
    watchers: int
    size: int
    pushed_at: datetime | None
    html_url: str
    has_readme: bool
    readme_quality: int
    languages: dict[str, int]

    @classmethod
    def from_domain(cls, repo: Repository) -> RepositoryOut:
        return cls(
            name=repo.name,
            full_name=repo.full_name,
            description=repo.description,
            language=repo.language,
            topics=list(repo.topics),
            stars=repo.stars,
            forks=repo.forks,
            watchers=repo.watchers,
            size=repo.size,
            pushed_at=repo.pushed_at,
            html_url=repo.html_url,
            has_readme=repo.has_readme,
            readme_quality=repo.readme_quality,
            languages=dict(repo.languages),
        )


class AnalysisResponse(BaseModel):
    """Successful response from ``POST /analyze``."""

    profile: ProfileOut
    score: ScoreOut
    recommendations: list[RecommendationOut]
    # a list keeps the ranking explicit for JSON consumers
    skills: list[SkillOut]
    repositories: list[RepositoryOut]
    analyzed_at: datetime

    @classmethod
    def from_domain(cls, result: AnalysisResult) -> AnalysisResponse:
        score = result.score
        return cls(
            profile=ProfileOut.from_domain(result.profile),
            score=ScoreOut(
                overall=score.overall,
                rating=score.rating.value,
                documentation=DimensionOut.from_domain(score.documentation, 20),
                code_quality=DimensionOut.from_domain(score.code_quality, 25),
                activity=DimensionOut.from_domain(score.activity, 20),
                impact=DimensionOut.from_domain(score.impact, 20),
                organization=DimensionOut.from_domain(score.organization, 15),
            ),
            recommendations=[RecommendationOut.from_domain(r) for r in result.recommendations],
            skills=[
                SkillOut(language=language, percentage=percentage)
                for language, percentage in result.skills.items()
            ],
            repositories=[RepositoryOut.from_domain(r) for r in result.repositories],
            analyzed_at=result.analyzed_at,
        )


class ErrorResponse(BaseModel):
    """Standard error envelope returned on all failure paths."""

    status: str = "error"
    message: str
