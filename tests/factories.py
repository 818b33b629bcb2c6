"""Builders for domain records used across the test-suite."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

from portfolio_analyzer.domain.entities import Profile, Repository

NOW = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)


class FixedClock:
    def __init__(self, now: datetime = NOW) -> None:
        self._now = now

    def now(self) -> datetime:
        return self._now


def days_ago(days: float) -> datetime:
    return NOW - timedelta(days=days)


def make_profile(**overrides: Any) -> Profile:
    fields: dict[str, Any] = {
        "username": "octocat",
        "name": "The Octocat",
        "bio": "",
        "public_repos": 8,
        "followers": 20,
        "following": 3,
        "created_at": days_ago(1000),
        "updated_at": days_ago(1),
        "html_url": "https://github.com/octocat",
    }
    fields.update(overrides)
    return Profile(**fields)


def make_repo(name: str = "project-app", **overrides: Any) -> Repository:
    fields: dict[str, Any] = {
        "name": name,
        "full_name": f"octocat/{name}",
        "description": "A perfectly reasonable project description",
        "language": "Python",
        "stars": 0,
        "forks": 0,
        "watchers": 0,
        "size": 120,
        "created_at": days_ago(500),
        "updated_at": days_ago(5),
        "pushed_at": days_ago(5),
        "topics": ("python",),
    }
    fields.update(overrides)
    return Repository(**fields)
