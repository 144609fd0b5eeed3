"""CLI command for generating monthly Linear reports."""

import asyncio
from collections.abc import Sequence

import typer
from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm
from rich.table import Table

from ..ai.summarizer import (
    OllamaSummarizer,
    SummarizerError,
    ticket_to_summarization_input,
)
from ..config import LinearConfig
from ..github_client.pull_requests import GitHubPrFetcher
from ..linear_client.client import LinearAPIError
from ..reports.generator import (
    build_report_summary,
    generate_ai_summary_report,
    generate_non_technical_report,
    generate_technical_report,
)
from ..reports.models import ReportData
from ..storage.manager import ReportWriter
from ..tickets.aggregator import fetch_user_tickets_for_month
from ..tickets.models import Ticket
from ..utils.date_parser import (
    format_api_timestamp,
    format_month_display,
    get_previous_month,
    parse_month_string,
)
from ..utils.errors import to_user_friendly_error, validate_output_dir
from .options import AI_SUMMARY_OPTION, MONTH_OPTION, OUTPUT_OPTION, YES_OPTION

console = Console()


def generate(
    month: str | None = MONTH_OPTION,
    output: str = OUTPUT_OPTION,
    yes: bool = YES_OPTION,
    ai_summary: bool = AI_SUMMARY_OPTION,
) -> None:
    """Generate technical and plain-language reports for one month.

    Uses the tickets of the API key's user, or of LINEAR_ASSIGNEE_EMAIL when
    set (for bot or integration keys).

    Examples:
        linear-report generate
        linear-report generate --month 2026-01
        linear-report generate -m 01-2026 -o ./reports --ai-summary
    """
    try:
        validate_output_dir(output)
    except ValueError as e:
        console.print(f"❌ Error: {e}")
        raise typer.Exit(1)

    config = LinearConfig()
    try:
        config.validate()
    except ValueError as e:
        console.print(f"❌ Error: {e}")
        raise typer.Exit(1)

    if month:
        try:
            year, month_number = parse_month_string(month)
        except ValueError as e:
            console.print(f"❌ Error: {e}")
            raise typer.Exit(1)
    else:
        year, month_number = get_previous_month()
        display = format_month_display(year, month_number)
        if not yes and not Confirm.ask(
            f"Generate report for {display} {year}?", default=True
        ):
            console.print("Report generation cancelled.")
            return

    asyncio.run(
        run_report_generation(config, year, month_number, output, ai_summary=ai_summary)
    )


async def run_report_generation(
    config: LinearConfig,
    year: int,
    month: int,
    output_dir: str,
    ai_summary: bool = False,
) -> None:
    """Fetch tickets, render reports and write them to ``output_dir``.

    Raises:
        typer.Exit: With code 1 when fetching or writing fails
    """
    display = format_month_display(year, month)
    console.print(f"🔍 Fetching Linear tickets for {display} {year}...")
    if config.assignee_email:
        console.print(f"👤 Using assignee {config.assignee_email}")

    assert config.api_key is not None  # guaranteed by config.validate()
    try:
        tickets = await fetch_user_tickets_for_month(
            config.api_key, year, month, config.assignee_email
        )
    except (LinearAPIError, ValueError) as e:
        message = escape(to_user_friendly_error(e))
        console.print(f"❌ Failed to fetch Linear tickets: {message}")
        raise typer.Exit(1)

    if not tickets:
        console.print(f"No tickets found for {display} {year}.")
        return

    console.print(f"✅ Found {len(tickets)} tickets")
    console.print(build_ticket_table(tickets))

    data = ReportData(
        month=display,
        year=year,
        tickets=tickets,
        summary=build_report_summary(tickets),
    )
    technical = generate_technical_report(data)
    non_technical = generate_non_technical_report(data)

    ai_summary_content = None
    if ai_summary:
        ai_summary_content = await build_ai_summary(data)

    writer = ReportWriter(output_dir)
    paths = writer.build_paths(year, month)
    try:
        written = writer.write_reports(
            paths, technical, non_technical, ai_summary_content
        )
    except OSError as e:
        message = escape(to_user_friendly_error(e))
        console.print(f"❌ Failed to write reports: {message}")
        raise typer.Exit(1)

    for path in written:
        console.print(f"📄 {path}")
    console.print(f"✨ Successfully generated {len(written)} reports!")


def build_ticket_table(tickets: Sequence[Ticket]) -> Table:
    """Build the console table listing fetched tickets."""
    table = Table(title="Tickets")
    table.add_column("Ticket", style="cyan")
    table.add_column("Title", style="white")
    table.add_column("Status", style="green")
    table.add_column("Updated", style="yellow")

    for ticket in tickets:
        title = ticket.title[:50] + "..." if len(ticket.title) > 50 else ticket.title
        table.add_row(
            ticket.identifier or ticket.id,
            escape(title),
            escape(ticket.state.name),
            format_api_timestamp(ticket.updated_at),
        )
    return table


async def build_ai_summary(data: ReportData) -> str | None:
    """Summarize every ticket with the local model.

    Returns:
        The AI summary report, or None when summarization failed; the
        standard reports are written either way
    """
    console.print("🤖 Generating AI summary...")
    fetcher = GitHubPrFetcher()
    inputs = []
    for ticket in data.tickets:
        pull_requests = await fetcher.fetch_pr_details_from_text([ticket.description])
        inputs.append(ticket_to_summarization_input(ticket, pull_requests))

    try:
        summaries = await OllamaSummarizer().summarize_tickets(inputs)
    except SummarizerError as e:
        console.print(
            f"⚠️  AI summary skipped: {escape(to_user_friendly_error(e))}. "
            "Check that Ollama is running."
        )
        return None

    return generate_ai_summary_report(data, summaries)
