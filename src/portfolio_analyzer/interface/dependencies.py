"""FastAPI dependency injection wiring."""

from __future__ import annotations

from functools import lru_cache

import httpx

from portfolio_analyzer.infrastructure.clock import SystemClock
from portfolio_analyzer.infrastructure.config import Settings, get_settings
from portfolio_analyzer.infrastructure.github_rest_adapter import GitHubRestAdapter
from portfolio_analyzer.services.analyze_profile import AnalyzeProfileUseCase

_http_client: httpx.AsyncClient | None = None


async def startup() -> None:
    """Initialise shared resources — called from the lifespan context manager."""
    global _http_client  # noqa: PLW0603

    settings = get_settings()
    _http_client = httpx.AsyncClient(timeout=httpx.Timeout(settings.request_timeout_s))


async def shutdown() -> None:
    """Release shared resources."""
    global _http_client  # noqa: PLW0603

    if _http_client:
        await _http_client.aclose()
        _http_client = None


@lru_cache(maxsize=1)
def _settings() -> Settings:
    return get_settings()


def get_use_case() -> AnalyzeProfileUseCase:
    """Build the use case with injected adapters."""
    settings = _settings()

    assert _http_client is not None, "startup() was not called"

    token = settings.github_token.get_secret_value() if settings.github_token else None
    github_adapter = GitHubRestAdapter(
        client=_http_client,
        token=token,
        base_url=settings.github_api_url,
    )

    return AnalyzeProfileUseCase(
        profile_fetcher=github_adapter,
        clock=SystemClock(),
        readme_sample_size=settings.readme_sample_size,
        readme_concurrency=settings.readme_concurrency,
        use_fork_flag=settings.use_fork_flag,
        fetch_language_breakdown=settings.fetch_language_breakdown,
    )
