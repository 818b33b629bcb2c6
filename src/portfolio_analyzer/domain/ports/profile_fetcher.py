"""Port: profile fetcher — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol

from portfolio_analyzer.domain.entities import Profile, Repository


class ProfileFetcher(Protocol):
    """Abstract contract for fetching GitHub profile data."""

    async def fetch_profile(self, username: str) -> Profile:
        """Return the user's profile; raise on any upstream failure."""
        ...

    async def fetch_repositories(self, username: str) -> list[Repository]:
        """Return up to 100 public repositories, most recently updated first."""
        ...

    async def fetch_readme(self, full_name: str) -> str | None:
        """Return the decoded README text, or ``None`` when unavailable."""
        ...

    async def fetch_languages(self, full_name: str) -> dict[str, int]:
        """Return language → byte-count mapping from the GitHub Languages API."""
        ...
