"""Domain exception hierarchy.

Each exception maps to a specific HTTP status code at the interface layer.
Inner layers raise these; the outermost error-handler translates them.
"""

from __future__ import annotations


class PortfolioAnalyzerError(Exception):
    """Base exception for the entire application."""


# ── Input validation ────────────────────────────────────────────────────────


class InvalidProfileInputError(PortfolioAnalyzerError):
    """The supplied text is neither a GitHub username nor a profile URL."""


# ── GitHub API errors ───────────────────────────────────────────────────────


class GitHubApiError(PortfolioAnalyzerError):
    """An upstream GitHub failure; carries the HTTP status when there was one."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ProfileNotFoundError(GitHubApiError):
    """The user does not exist (404)."""


class GitHubAccessDeniedError(GitHubApiError):
    """GitHub refused the request (403 without rate-limit exhaustion)."""


class GitHubRateLimitError(GitHubApiError):
    """GitHub API rate limit exceeded (429 / 403 with rate-limit header)."""


class UpstreamNetworkError(GitHubApiError):
    """Transport failure or an unexpected non-2xx response."""


class MalformedResponseError(GitHubApiError):
    """The API payload is missing required fields or has the wrong shape."""


# ── Non-fatal, per-repository errors ────────────────────────────────────────


class ReadmeUnavailableError(PortfolioAnalyzerError):
    """A single repository's README could not be fetched or decoded."""
