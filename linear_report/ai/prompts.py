"""Prompt templates for ticket summarization."""

TICKET_SUMMARY_INSTRUCTIONS = """Summarize this technical ticket in 2-3 short \
sentences for a non-technical stakeholder. Use plain language, focus on \
business outcomes and user impact. Avoid jargon.

Answer with the summary text only."""
