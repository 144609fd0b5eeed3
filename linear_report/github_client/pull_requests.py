"""GitHub pull request URL extraction and detail fetching."""

import asyncio
import logging
import os
import re
import time
from collections.abc import Awaitable, Callable, Iterable

import httpx
from pydantic import ValidationError

from .models import GitHubPrUrl, GitHubPullResponse, PrDetails

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"
# Only github.com pull request links are followed
GITHUB_PR_URL_PATTERN = re.compile(
    r"https?://(?:www\.)?github\.com/([a-zA-Z0-9_.-]+)/([a-zA-Z0-9_.-]+)/pull/(\d+)"
    r"(?=[/?)\s]|$)"
)
# Unauthenticated GitHub allows 60 requests/hour; one per ~1.1s keeps bursts safe
UNAUTHENTICATED_MIN_INTERVAL = 1.1
REQUEST_TIMEOUT = 15.0


def extract_github_pr_urls(text: str | None) -> list[GitHubPrUrl]:
    """Extract unique GitHub pull request references from text.

    Example:
        >>> extract_github_pr_urls("See https://github.com/octo/repo/pull/12 ")
        [GitHubPrUrl(owner='octo', repo='repo', number=12)]
    """
    if not text:
        return []

    seen: set[str] = set()
    result = []
    for match in GITHUB_PR_URL_PATTERN.finditer(text):
        url = GitHubPrUrl(
            owner=match.group(1), repo=match.group(2), number=int(match.group(3))
        )
        if url.key in seen:
            continue
        seen.add(url.key)
        result.append(url)
    return result


class RateLimiter:
    """Enforces a minimum interval between successive requests.

    Owned by a single fetcher instance; nothing is shared process-wide.
    """

    def __init__(
        self,
        min_interval: float = UNAUTHENTICATED_MIN_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._last_request: float | None = None

    async def wait(self) -> None:
        """Sleep until ``min_interval`` has passed since the previous call."""
        if self._last_request is not None:
            elapsed = self._clock() - self._last_request
            if elapsed < self.min_interval:
                await self._sleep(self.min_interval - elapsed)
        self._last_request = self._clock()


class GitHubPrFetcher:
    """Fetches pull request titles and bodies from the GitHub REST API.

    Failures never raise: a pull request that cannot be fetched is skipped so
    the summary can proceed without it.
    """

    def __init__(
        self,
        token: str | None = None,
        rate_limiter: RateLimiter | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize fetcher.

        Args:
            token: GitHub token. If None, reads GITHUB_API_KEY env var; when
                absent requests are unauthenticated and rate limited.
            rate_limiter: Limiter for unauthenticated requests
            transport: Optional httpx transport (used by tests)
        """
        self.token = (token or os.getenv("GITHUB_API_KEY") or "").strip() or None
        self.rate_limiter = rate_limiter or RateLimiter()
        self._transport = transport
        self.headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": "linear-report/0.1.0",
        }
        if self.token:
            self.headers["Authorization"] = f"Bearer {self.token}"

    async def fetch_pr_details(self, url: GitHubPrUrl) -> PrDetails | None:
        """Fetch one pull request.

        Returns:
            PrDetails, or None on HTTP errors, network errors or an
            unexpected response shape
        """
        if not self.token:
            await self.rate_limiter.wait()

        api_url = f"{GITHUB_API_URL}/repos/{url.owner}/{url.repo}/pulls/{url.number}"
        try:
            async with httpx.AsyncClient(
                transport=self._transport, timeout=REQUEST_TIMEOUT
            ) as client:
                response = await client.get(api_url, headers=self.headers)
                response.raise_for_status()
                parsed = GitHubPullResponse.model_validate(response.json())
        except httpx.HTTPStatusError as e:
            logger.debug("Skipping %s: HTTP %s", url.key, e.response.status_code)
            return None
        except httpx.HTTPError as e:
            logger.debug("Skipping %s: %s", url.key, e)
            return None
        except (ValueError, ValidationError):
            logger.debug("Skipping %s: unexpected response", url.key)
            return None

        return PrDetails(
            owner=url.owner,
            repo=url.repo,
            number=url.number,
            title=parsed.title,
            body=parsed.body,
        )

    async def fetch_pr_details_from_text(
        self, text_blocks: Iterable[str | None]
    ) -> list[PrDetails]:
        """Fetch details for every unique pull request referenced in the text blocks.

        Requests are made one at a time; failed fetches are left out.
        """
        seen: set[str] = set()
        unique = []
        for text in text_blocks:
            for url in extract_github_pr_urls(text):
                if url.key in seen:
                    continue
                seen.add(url.key)
                unique.append(url)

        results = []
        for url in unique:
            details = await self.fetch_pr_details(url)
            if details is not None:
                results.append(details)
        return results
