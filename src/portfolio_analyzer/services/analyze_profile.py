"""Analyze-profile use case — the main orchestration pipeline.

This is the single entry point for the business logic.  It depends only on
the :class:`ProfileFetcher` and :class:`Clock` ports and the pure scoring
modules.  The interface layer injects concrete adapters at runtime.
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging
from typing import Sequence

from portfolio_analyzer.domain.entities import AnalysisResult, Repository
from portfolio_analyzer.domain.exceptions import PortfolioAnalyzerError
from portfolio_analyzer.domain.ports.clock import Clock
from portfolio_analyzer.domain.ports.profile_fetcher import ProfileFetcher
from portfolio_analyzer.domain.value_objects import GitHubUsername
from portfolio_analyzer.services.dimension_scorers import build_score_breakdown, filter_forks
from portfolio_analyzer.services.readme_scorer import score_readme
from portfolio_analyzer.services.recommendations import generate_recommendations
from portfolio_analyzer.services.skill_extractor import extract_skills

logger = logging.getLogger(__name__)


class AnalyzeProfileUseCase:
    """Orchestrates the full profile → score → recommendations pipeline.

    Parameters
    ----------
    profile_fetcher:
        Adapter that can fetch profiles, repositories and READMEs from GitHub.
    clock:
        Source of "now" for age and recency scoring.
    readme_sample_size:
        How many (fork-filtered) repositories get their README fetched and
        scored.  The rest count as having no README.
    readme_concurrency:
        Maximum number of README requests in flight at once.
    use_fork_flag:
        Also exclude repositories the API flags as forks.
    fetch_language_breakdown:
        Attach per-repository language byte counts to the sampled repositories.
    """

    def __init__(
        self,
        profile_fetcher: ProfileFetcher,
        clock: Clock,
        readme_sample_size: int = 10,
        readme_concurrency: int = 5,
        use_fork_flag: bool = False,
        fetch_language_breakdown: bool = False,
    ) -> None:
        self._fetcher = profile_fetcher
        self._clock = clock
        self._readme_sample_size = readme_sample_size
        self._readme_concurrency = readme_concurrency
        self._use_fork_flag = use_fork_flag
        self._fetch_languages = fetch_language_breakdown

    # ── Public entry point ──────────────────────────────────────────────

    async def execute(self, username_or_url: str) -> AnalysisResult:
        """Run the full pipeline and return the analysis."""
        username = GitHubUsername.from_string(username_or_url)
        logger.info("Analysing profile %s", username)

        # 1. Mandatory fetches — any failure aborts the analysis
        profile = await self._fetcher.fetch_profile(username.value)
        repositories = await self._fetcher.fetch_repositories(username.value)

        # 2. Fork filter, then enrich the leading sample with README data
        originals = filter_forks(repositories, use_fork_flag=self._use_fork_flag)
        sample = originals[: self._readme_sample_size]
        enriched = await self._enrich_repositories(sample)

        by_name = {repo.full_name: repo for repo in enriched}
        originals = [by_name.get(r.full_name, r) for r in originals]
        all_repositories = tuple(by_name.get(r.full_name, r) for r in repositories)

        # 3. Scoring, skills, recommendations
        now = self._clock.now()
        score = build_score_breakdown(profile, originals, now)
        skills = extract_skills(originals)
        recommendations = generate_recommendations(score, profile, originals, now)

        logger.info(
            "Analysed %s: %d/100 (%s) across %d repositories, %d recommendation(s)",
            username,
            score.overall,
            score.rating.value,
            len(originals),
            len(recommendations),
        )

        return AnalysisResult(
            profile=profile,
            repositories=all_repositories,
            score=score,
            recommendations=tuple(recommendations),
            skills=skills,
            analyzed_at=now,
        )

    # ── Concurrent enrichment ───────────────────────────────────────────

    async def _enrich_repositories(
        self, repositories: Sequence[Repository]
    ) -> list[Repository]:
        """Fetch README (and optionally languages) for each repository concurrently."""
        sem = asyncio.Semaphore(self._readme_concurrency)

        async def _enrich_one(repo: Repository) -> Repository:
            async with sem:
                readme = await self._fetch_readme(repo)
                languages = await self._fetch_repo_languages(repo) if self._fetch_languages else {}

            # an empty README counts as missing
            if not readme:
                return dataclasses.replace(
                    repo, has_readme=False, readme_quality=0, languages=languages
                )
            return dataclasses.replace(
                repo,
                has_readme=True,
                readme_quality=score_readme(readme),
                languages=languages,
            )

        return list(await asyncio.gather(*(_enrich_one(repo) for repo in repositories)))

    async def _fetch_readme(self, repo: Repository) -> str | None:
        try:
            return await self._fetcher.fetch_readme(repo.full_name)
        except PortfolioAnalyzerError:
            logger.debug("README unavailable for %s — scoring as absent", repo.full_name, exc_info=True)
            return None
        except Exception:
            logger.warning("README fetch failed for %s — scoring as absent", repo.full_name, exc_info=True)
            return None

    async def _fetch_repo_languages(self, repo: Repository) -> dict[str, int]:
        try:
            return await self._fetcher.fetch_languages(repo.full_name)
        except PortfolioAnalyzerError:
            logger.debug("Languages unavailable for %s — leaving empty", repo.full_name, exc_info=True)
            return {}
        except Exception:
            logger.warning("Language fetch failed for %s — leaving empty", repo.full_name, exc_info=True)
            return {}
