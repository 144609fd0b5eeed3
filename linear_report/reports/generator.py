"""Technical and non-technical report formatting."""

import re
from collections.abc import Sequence

from ..tickets.models import Ticket
from ..utils.date_parser import format_api_timestamp
from .models import ReportData, ReportSummary

SEPARATOR = "=" * 50
TECHNICAL_DESCRIPTION_LIMIT = 200
PLAIN_DESCRIPTION_LIMIT = 150
ELLIPSIS = "..."

NEWLINE_PATTERN = re.compile(r"\r?\n")
# Lightweight markdown removed from plain-language descriptions
MARKUP_PATTERNS = [
    (re.compile(r"#{1,6}\s"), ""),
    (re.compile(r"\*\*([^*]+)\*\*"), r"\1"),
    (re.compile(r"\*([^*]+)\*"), r"\1"),
    (re.compile(r"`([^`]+)`"), r"\1"),
]


def build_report_summary(tickets: Sequence[Ticket]) -> ReportSummary:
    """Count tickets by status and activities by type.

    Every activity entry is counted, so ``by_activity_type`` can add up to more
    than the number of tickets.
    """
    by_status: dict[str, int] = {}
    by_activity_type: dict[str, int] = {}

    for ticket in tickets:
        by_status[ticket.state.name] = by_status.get(ticket.state.name, 0) + 1
        for activity in ticket.activities:
            by_activity_type[activity.type] = by_activity_type.get(activity.type, 0) + 1

    return ReportSummary(
        total_tickets=len(tickets),
        by_status=by_status,
        by_activity_type=by_activity_type,
    )


def truncate(text: str, limit: int) -> str:
    """Cut text to ``limit`` characters, appending an ellipsis when cut."""
    if len(text) <= limit:
        return text
    return text[:limit] + ELLIPSIS


def collapse_newlines(text: str) -> str:
    """Replace each line break with a single space."""
    return NEWLINE_PATTERN.sub(" ", text)


def strip_markup(text: str) -> str:
    """Remove heading, emphasis and inline-code markers and join lines.

    Example:
        >>> strip_markup("**Fixed** the `login` flow")
        'Fixed the login flow'
    """
    plain = text
    for pattern, replacement in MARKUP_PATTERNS:
        plain = pattern.sub(replacement, plain)
    return collapse_newlines(plain)


def _format_counts(counts: dict[str, int]) -> str:
    return ", ".join(f"{key}: {value}" for key, value in counts.items())


def format_ticket_technical(ticket: Ticket) -> str:
    """Format one ticket block for the technical report."""
    lines = [f"[{ticket.identifier or ticket.id}] {ticket.title}"]
    lines.append(f"  Status: {ticket.state.name} ({ticket.state.type})")
    if ticket.description:
        description = collapse_newlines(ticket.description)
        lines.append(
            f"  Description: {truncate(description, TECHNICAL_DESCRIPTION_LIMIT)}"
        )
    if ticket.labels:
        lines.append(f"  Labels: {', '.join(label.name for label in ticket.labels)}")
    if ticket.assignee and ticket.assignee.name:
        assignee = ticket.assignee.name
        if ticket.assignee.email:
            assignee += f" ({ticket.assignee.email})"
        lines.append(f"  Assignee: {assignee}")
    lines.append(f"  Updated: {format_api_timestamp(ticket.updated_at)}")
    lines.append("")
    return "\n".join(lines)


def format_ticket_non_technical(ticket: Ticket) -> str:
    """Format one ticket block for the plain-language report."""
    lines = [f"• {ticket.title}"]
    if ticket.description:
        plain = strip_markup(ticket.description).strip()
        if plain:
            lines.append(f"  {truncate(plain, PLAIN_DESCRIPTION_LIMIT)}")
    lines.append(f"  Status: {ticket.state.name}")
    lines.append("")
    return "\n".join(lines)


def generate_technical_report(data: ReportData) -> str:
    """Generate the technical summary report.

    Lists aggregate counts followed by one block per ticket with identifier,
    status name and type, truncated description, labels, assignee and last
    update time.
    """
    lines = [
        f"TECHNICAL SUMMARY - {data.month} {data.year}",
        SEPARATOR,
        "",
        f"Total tickets: {data.summary.total_tickets}",
        f"By status: {_format_counts(data.summary.by_status)}",
        f"By activity: {_format_counts(data.summary.by_activity_type)}",
        "",
        "--- TICKETS ---",
        "",
    ]
    lines.extend(format_ticket_technical(ticket) for ticket in data.tickets)
    return "\n".join(lines)


def generate_non_technical_report(data: ReportData) -> str:
    """Generate the plain-language work summary report.

    Intentionally less detailed than the technical report: no identifiers,
    state types or markup.
    """
    lines = [
        f"WORK SUMMARY - {data.month} {data.year}",
        SEPARATOR,
        "",
        f"Completed {data.summary.total_tickets} items this month.",
        "",
        "--- KEY DELIVERABLES ---",
        "",
    ]
    lines.extend(format_ticket_non_technical(ticket) for ticket in data.tickets)
    return "\n".join(lines)


def generate_ai_summary_report(data: ReportData, summaries: Sequence[str]) -> str:
    """Generate the plain-language report from per-ticket model summaries.

    ``summaries`` must line up with ``data.tickets``.
    """
    if len(summaries) != len(data.tickets):
        raise ValueError(
            f"Expected {len(data.tickets)} summaries, got {len(summaries)}"
        )

    lines = [
        f"AI SUMMARY - {data.month} {data.year}",
        SEPARATOR,
        "",
        f"Completed {data.summary.total_tickets} items this month.",
        "",
        "--- KEY DELIVERABLES ---",
        "",
    ]
    for ticket, summary in zip(data.tickets, summaries):
        lines.append(f"• {ticket.title}")
        lines.append(f"  {collapse_newlines(summary.strip())}")
        lines.append("")
    return "\n".join(lines)
