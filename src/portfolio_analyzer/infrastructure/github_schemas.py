"""Pydantic schemas for raw GitHub REST payloads.

Responses are validated here, at the adapter boundary, before any domain
record is built.  Unknown keys are ignored; missing required keys fail.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from portfolio_analyzer.domain.entities import Profile, Repository


class _GitHubPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")


class UserPayload(_GitHubPayload):
    """``GET /users/{username}``"""

    login: str
    name: str | None = None
    bio: str | None = None
    public_repos: int
    followers: int
    following: int
    created_at: datetime
    updated_at: datetime
    avatar_url: str = ""
    html_url: str = ""

    def to_domain(self) -> Profile:
        return Profile(
            username=self.login,
            name=self.name or self.login,
            bio=self.bio or "",
            public_repos=self.public_repos,
            followers=self.followers,
            following=self.following,
            created_at=self.created_at,
            updated_at=self.updated_at,
            avatar_url=self.avatar_url,
            html_url=self.html_url,
        )


class RepoPayload(_GitHubPayload):
    """One element of ``GET /users/{username}/repos``."""

    name: str
    full_name: str
    description: str | None = None
    language: str | None = None
    topics: list[str] = Field(default_factory=list)
    stargazers_count: int
    forks_count: int
    watchers_count: int
    size: int
    created_at: datetime
    updated_at: datetime
    pushed_at: datetime | None = None
    html_url: str = ""
    fork: bool = False

    def to_domain(self) -> Repository:
        return Repository(
            name=self.name,
            full_name=self.full_name,
            description=self.description,
            language=self.language,
            topics=tuple(self.topics),
            stars=self.stargazers_count,
            forks=self.forks_count,
            watchers=self.watchers_count,
            size=self.size,
            created_at=self.created_at,
            updated_at=self.updated_at,
            pushed_at=self.pushed_at,
            html_url=self.html_url,
            is_fork=self.fork,
        )


class ReadmePayload(_GitHubPayload):
    """``GET /repos/{full_name}/readme``

    Files over 1 MB come back with ``encoding: "none"`` and empty
    ``content``; the body is then only reachable through ``download_url``.
    """

    content: str = ""
    encoding: str = "base64"
    download_url: str | None = None
