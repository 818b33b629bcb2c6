"""GitHub REST API adapter — implements the ProfileFetcher port."""

from __future__ import annotations

import base64
import binascii
import logging
from datetime import datetime, timezone
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from portfolio_analyzer.domain.entities import Profile, Repository
from portfolio_analyzer.domain.exceptions import (
    GitHubAccessDeniedError,
    GitHubRateLimitError,
    MalformedResponseError,
    PortfolioAnalyzerError,
    ProfileNotFoundError,
    ReadmeUnavailableError,
    UpstreamNetworkError,
)
from portfolio_analyzer.infrastructure.github_schemas import (
    ReadmePayload,
    RepoPayload,
    UserPayload,
)

logger = logging.getLogger(__name__)

_GITHUB_API = "https://api.github.com"
_REPOS_PER_PAGE = 100

_repo_list = TypeAdapter(list[RepoPayload])
_language_bytes = TypeAdapter(dict[str, int])


class GitHubRestAdapter:
    """Concrete ProfileFetcher backed by the GitHub v3 REST API."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        token: str | None = None,
        base_url: str = _GITHUB_API,
    ) -> None:
        self._client = client
        self._base_url = base_url.rstrip("/")
        self._api_headers: dict[str, str] = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": "portfolio-analyzer/1.0",
        }
        if token:
            self._api_headers["Authorization"] = f"Bearer {token}"

    async def fetch_profile(self, username: str) -> Profile:
        """GET /users/{username} → Profile."""
        resp = await self._api_get(f"/users/{username}")
        data = self._json(resp)
        try:
            return UserPayload.model_validate(data).to_domain()
        except ValidationError as exc:
            raise MalformedResponseError(
                f"Unexpected profile payload for '{username}': {exc}"
            ) from exc

    async def fetch_repositories(self, username: str) -> list[Repository]:
        """GET /users/{username}/repos?sort=updated&per_page=100 → [Repository]."""
        resp = await self._api_get(
            f"/users/{username}/repos",
            params={"sort": "updated", "per_page": str(_REPOS_PER_PAGE)},
        )
        data = self._json(resp)
        try:
            payloads = _repo_list.validate_python(data)
        except ValidationError as exc:
            raise MalformedResponseError(
                f"Unexpected repository list payload for '{username}': {exc}"
            ) from exc
        return [payload.to_domain() for payload in payloads]

    async def fetch_readme(self, full_name: str) -> str | None:
        """GET /repos/{full_name}/readme → decoded text, or None on any failure."""
        try:
            resp = await self._api_get(f"/repos/{full_name}/readme")
            try:
                payload = ReadmePayload.model_validate(self._json(resp))
            except ValidationError as exc:
                raise ReadmeUnavailableError(
                    f"Unexpected README payload for {full_name}"
                ) from exc
            if payload.encoding == "none" and payload.download_url:
                return await self._fetch_raw(full_name, payload.download_url)
            return self._decode_readme(full_name, payload)
        except PortfolioAnalyzerError:
            logger.debug("No README for %s — returning None", full_name, exc_info=True)
            return None

    async def fetch_languages(self, full_name: str) -> dict[str, int]:
        """GET /repos/{full_name}/languages → {lang: bytes}."""
        try:
            resp = await self._api_get(f"/repos/{full_name}/languages")
            return _language_bytes.validate_python(self._json(resp))
        except (PortfolioAnalyzerError, ValidationError):
            logger.debug(
                "Failed to fetch languages for %s — returning empty", full_name, exc_info=True
            )
            return {}

    # ── Helpers ─────────────────────────────────────────────────────────

    async def _fetch_raw(self, full_name: str, download_url: str) -> str:
        """Fetch a README too large for the contents API from its download URL."""
        try:
            resp = await self._client.get(
                download_url,
                headers={"User-Agent": self._api_headers["User-Agent"]},
            )
        except httpx.HTTPError as exc:
            raise ReadmeUnavailableError(
                f"Network error fetching README for {full_name}: {exc}"
            ) from exc
        if resp.status_code != 200:
            raise ReadmeUnavailableError(
                f"{download_url} returned HTTP {resp.status_code} for {full_name}"
            )
        return resp.text

    @staticmethod
    def _decode_readme(full_name: str, payload: ReadmePayload) -> str:
        if payload.encoding != "base64":
            raise ReadmeUnavailableError(
                f"Unsupported README encoding '{payload.encoding}' for {full_name}"
            )
        try:
            raw = base64.b64decode(payload.content)
        except (binascii.Error, ValueError) as exc:
            raise ReadmeUnavailableError(f"Undecodable README for {full_name}") from exc
        return raw.decode("utf-8", errors="replace")

    @staticmethod
    def _json(resp: httpx.Response) -> Any:
        try:
            return resp.json()
        except ValueError as exc:
            raise MalformedResponseError(
                f"GitHub API returned invalid JSON for {resp.request.url}",
                status_code=resp.status_code,
            ) from exc

    async def _api_get(
        self,
        endpoint: str,
        params: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Perform a GitHub API GET request with error translation."""
        url = f"{self._base_url}{endpoint}"
        try:
            resp = await self._client.get(
                url, headers=self._api_headers, params=params
            )
        except httpx.HTTPError as exc:
            raise UpstreamNetworkError(
                f"Network error fetching {url}: {exc}"
            ) from exc

        if resp.status_code == 200:
            return resp

        if resp.status_code == 404:
            raise ProfileNotFoundError(
                f"Not found: {endpoint}. Make sure the GitHub username is correct.",
                status_code=404,
            )

        if resp.status_code == 403:
            remaining = resp.headers.get("x-ratelimit-remaining", "")
            if remaining == "0":
                reset_raw = resp.headers.get("x-ratelimit-reset", "")
                try:
                    reset_str = datetime.fromtimestamp(int(reset_raw), tz=timezone.utc).strftime(
                        "%Y-%m-%d %H:%M:%S UTC"
                    )
                except (ValueError, OSError):
                    reset_str = reset_raw or "unknown"
                raise GitHubRateLimitError(
                    f"GitHub API rate limit exceeded. Resets at {reset_str}. "
                    "Set the GITHUB_TOKEN environment variable to increase the limit.",
                    status_code=403,
                )
            raise GitHubAccessDeniedError(
                f"GitHub denied access to {endpoint}.", status_code=403
            )

        if resp.status_code == 429:
            raise GitHubRateLimitError(
                "GitHub API rate limit exceeded (HTTP 429).", status_code=429
            )

        raise UpstreamNetworkError(
            f"GitHub API returned HTTP {resp.status_code} for {url}",
            status_code=resp.status_code,
        )
