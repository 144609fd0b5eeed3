"""AI summarization of report tickets."""

from .summarizer import (
    OllamaConfig,
    OllamaSummarizer,
    SummarizationInput,
    SummarizerError,
    build_summarization_prompt,
    load_ollama_config,
    ticket_to_summarization_input,
)

__all__ = [
    "OllamaConfig",
    "OllamaSummarizer",
    "SummarizationInput",
    "SummarizerError",
    "build_summarization_prompt",
    "load_ollama_config",
    "ticket_to_summarization_input",
]
