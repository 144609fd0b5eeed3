"""GitHub client package for pull request context."""

from .models import GitHubPrUrl, PrDetails
from .pull_requests import GitHubPrFetcher, RateLimiter, extract_github_pr_urls

__all__ = [
    "GitHubPrFetcher",
    "GitHubPrUrl",
    "PrDetails",
    "RateLimiter",
    "extract_github_pr_urls",
]
