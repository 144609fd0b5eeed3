"""Pydantic models for GitHub pull request data.

API Reference: https://docs.github.com/en/rest/pulls/pulls#get-a-pull-request
"""

from pydantic import BaseModel, ConfigDict, Field


class GitHubPrUrl(BaseModel):
    """Components of a ``github.com/{owner}/{repo}/pull/{number}`` URL."""

    model_config = ConfigDict(frozen=True)

    owner: str = Field(..., description="Repository owner (user or organization)")
    repo: str = Field(..., description="Repository name")
    number: int = Field(..., description="Pull request number")

    @property
    def key(self) -> str:
        """Unique reference, e.g. ``octo/repo#12``."""
        return f"{self.owner}/{self.repo}#{self.number}"


class GitHubPullResponse(BaseModel):
    """Subset of the GitHub pull request response used for summaries."""

    title: str = Field(..., description="Pull request title")
    body: str | None = Field(None, description="Pull request description in markdown")


class PrDetails(BaseModel):
    """Fetched pull request details."""

    owner: str = Field(..., description="Repository owner")
    repo: str = Field(..., description="Repository name")
    number: int = Field(..., description="Pull request number")
    title: str = Field(..., description="Pull request title")
    body: str | None = Field(None, description="Pull request description")

    def summary_line(self) -> str:
        """One-line reference used in summarization prompts."""
        return f"{self.owner}/{self.repo}#{self.number}: {self.title}"
