"""Shared CLI option definitions so shorthand flags stay consistent."""

import typer

from ..storage.manager import DEFAULT_OUTPUT_DIR

MONTH_OPTION = typer.Option(
    None,
    "--month",
    "-m",
    help="Report month as YYYY-MM or MM-YYYY (defaults to the previous month)",
)

OUTPUT_OPTION = typer.Option(
    DEFAULT_OUTPUT_DIR, "--output", "-o", help="Directory for generated reports"
)

YES_OPTION = typer.Option(
    False, "--yes", "-y", help="Skip the confirmation prompt for the default month"
)

AI_SUMMARY_OPTION = typer.Option(
    False,
    "--ai-summary",
    help="Also write a plain-language summary produced by a local Ollama model",
)
