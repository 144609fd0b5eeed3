"""Plain-language ticket summaries from a local Ollama model via PydanticAI."""

import asyncio
import logging
import os
from collections.abc import Sequence
from typing import Any

from openai import APIError
from pydantic import BaseModel, Field
from pydantic_ai import Agent
from pydantic_ai.exceptions import AgentRunError

from ..github_client.models import PrDetails
from ..tickets.models import Ticket
from .prompts import TICKET_SUMMARY_INSTRUCTIONS

logger = logging.getLogger(__name__)

DEFAULT_OLLAMA_BASE_URL = "http://localhost:11434"
DEFAULT_OLLAMA_MODEL = "qwen2.5:1.5b"
DEFAULT_TIMEOUT_SECONDS = 60.0


class SummarizerError(RuntimeError):
    """A ticket could not be summarized."""


class OllamaConfig(BaseModel):
    """Connection and concurrency settings for the local model."""

    base_url: str = Field(DEFAULT_OLLAMA_BASE_URL, description="Ollama server URL")
    model: str = Field(DEFAULT_OLLAMA_MODEL, description="Ollama model name")
    concurrency: int = Field(1, ge=1, description="Tickets summarized in parallel")
    timeout_seconds: float = Field(
        DEFAULT_TIMEOUT_SECONDS, gt=0, description="Timeout per ticket"
    )


class SummarizationInput(BaseModel):
    """Technical content of one ticket plus related pull request context."""

    identifier: str = Field(..., description="Ticket identifier, e.g. ENG-123")
    title: str = Field(..., description="Ticket title")
    description: str | None = Field(None, description="Ticket description")
    labels: list[str] = Field(default_factory=list, description="Label names")
    pr_summaries: list[str] = Field(
        default_factory=list, description="One line per related pull request"
    )


def load_ollama_config() -> OllamaConfig:
    """Load Ollama settings from environment variables.

    OLLAMA_BASE_URL, OLLAMA_SUMMARY_MODEL and OLLAMA_CONCURRENCY; a missing,
    non-numeric or non-positive concurrency falls back to 1.
    """
    base_url = (os.getenv("OLLAMA_BASE_URL") or "").strip() or DEFAULT_OLLAMA_BASE_URL
    model = (os.getenv("OLLAMA_SUMMARY_MODEL") or "").strip() or DEFAULT_OLLAMA_MODEL

    concurrency = 1
    raw_concurrency = (os.getenv("OLLAMA_CONCURRENCY") or "").strip()
    if raw_concurrency:
        try:
            concurrency = max(1, int(raw_concurrency))
        except ValueError:
            concurrency = 1

    return OllamaConfig(base_url=base_url, model=model, concurrency=concurrency)


def build_summarization_prompt(ticket: SummarizationInput) -> str:
    """Build the per-ticket prompt from technical content and PR context."""
    parts = [f"Ticket [{ticket.identifier}]: {ticket.title}"]
    if ticket.description:
        parts.append(f"Description: {ticket.description}")
    if ticket.labels:
        parts.append(f"Labels: {', '.join(ticket.labels)}")
    if ticket.pr_summaries:
        parts.append("Related PR(s):")
        parts.append("\n".join(f"- {summary}" for summary in ticket.pr_summaries))

    context = "\n".join(parts)
    return f"{context}\n\nSummary:"


def create_summary_agent(config: OllamaConfig) -> Agent[None, str]:
    """Create a text agent backed by Ollama's OpenAI-compatible endpoint."""
    from pydantic_ai.models.openai import OpenAIChatModel
    from pydantic_ai.providers.ollama import OllamaProvider

    model = OpenAIChatModel(
        config.model,
        provider=OllamaProvider(base_url=f"{config.base_url.rstrip('/')}/v1"),
    )
    return Agent(model, output_type=str, instructions=TICKET_SUMMARY_INSTRUCTIONS)


class OllamaSummarizer:
    """Summarizes tickets one prompt at a time with bounded concurrency."""

    def __init__(self, config: OllamaConfig | None = None, agent: Any = None):
        """Initialize summarizer.

        Args:
            config: Ollama settings; loaded from the environment when None
            agent: PydanticAI agent to use instead of the Ollama-backed one
        """
        self.config = config or load_ollama_config()
        self._agent = agent

    @property
    def agent(self) -> Any:
        """Lazy-loaded summary agent."""
        if self._agent is None:
            self._agent = create_summary_agent(self.config)
        return self._agent

    async def generate(self, prompt: str) -> str:
        """Run one prompt through the model.

        Raises:
            SummarizerError: On model errors, timeouts or an empty answer
        """
        try:
            result = await asyncio.wait_for(
                self.agent.run(prompt), timeout=self.config.timeout_seconds
            )
        except asyncio.TimeoutError as e:
            raise SummarizerError(
                f"Ollama did not answer within {self.config.timeout_seconds:.0f}s"
            ) from e
        except (AgentRunError, APIError) as e:
            raise SummarizerError(f"Ollama request failed: {e}") from e

        output = result.output
        if not isinstance(output, str) or not output.strip():
            raise SummarizerError("Ollama returned an invalid response")
        return output.strip()

    async def summarize_ticket(self, ticket: SummarizationInput) -> str:
        """Summarize a single ticket."""
        return await self.generate(build_summarization_prompt(ticket))

    async def summarize_tickets(
        self, tickets: Sequence[SummarizationInput]
    ) -> list[str]:
        """Summarize tickets concurrently, returning summaries in input order.

        Raises:
            SummarizerError: If any ticket fails; the caller decides on a fallback
        """
        semaphore = asyncio.Semaphore(self.config.concurrency)

        async def summarize_with_limit(ticket: SummarizationInput) -> str:
            async with semaphore:
                logger.debug("Summarizing %s", ticket.identifier)
                return await self.summarize_ticket(ticket)

        return list(await asyncio.gather(*(summarize_with_limit(t) for t in tickets)))


def ticket_to_summarization_input(
    ticket: Ticket, pull_requests: Sequence[PrDetails] = ()
) -> SummarizationInput:
    """Build the summarizer input for a ticket and its referenced pull requests."""
    return SummarizationInput(
        identifier=ticket.identifier or ticket.id,
        title=ticket.title,
        description=ticket.description,
        labels=[label.name for label in ticket.labels],
        pr_summaries=[pr.summary_line() for pr in pull_requests],
    )
