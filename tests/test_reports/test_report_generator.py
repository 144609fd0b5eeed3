"""Tests for report summary and text rendering."""

from collections.abc import Callable
from datetime import datetime, timezone

import pytest

from linear_report.reports.generator import (
    build_report_summary,
    generate_ai_summary_report,
    generate_non_technical_report,
    generate_technical_report,
    strip_markup,
    truncate,
)
from linear_report.reports.models import ReportData, ReportSummary
from linear_report.tickets.models import Ticket, TicketState


def report_data(tickets: list[Ticket], month: str = "01. January") -> ReportData:
    return ReportData(
        month=month,
        year=2026,
        tickets=tickets,
        summary=build_report_summary(tickets),
    )


class TestBuildReportSummary:
    """Test aggregate counts."""

    def test_empty(self) -> None:
        """Test an empty list yields zero counts."""
        assert build_report_summary([]) == ReportSummary(
            total_tickets=0, by_status={}, by_activity_type={}
        )

    def test_counts(self, make_ticket: Callable[..., Ticket]) -> None:
        """Test statuses count tickets and activity types count entries."""
        tickets = [
            make_ticket("a", state_name="Done", activities=["assigned", "updated"]),
            make_ticket("b", state_name="Done", activities=["updated"]),
            make_ticket("c", state_name="In Progress", activities=["updated", "updated"]),
        ]

        summary = build_report_summary(tickets)

        assert summary.total_tickets == 3
        assert summary.by_status == {"Done": 2, "In Progress": 1}
        assert summary.by_activity_type == {"assigned": 1, "updated": 4}
        assert sum(summary.by_status.values()) == summary.total_tickets
        assert sum(summary.by_activity_type.values()) == sum(
            len(ticket.activities) for ticket in tickets
        )


class TestTextHelpers:
    """Test truncation and markup stripping."""

    def test_truncate_long(self) -> None:
        """Test long text is cut and marked."""
        assert truncate("x" * 10, 4) == "xxxx..."

    def test_truncate_at_limit(self) -> None:
        """Test text at the limit is unchanged."""
        assert truncate("x" * 4, 4) == "xxxx"

    def test_strip_markup(self) -> None:
        """Test emphasis and inline code markers are removed."""
        assert strip_markup("**Fixed** the `login` flow") == "Fixed the login flow"

    def test_strip_headings_and_newlines(self) -> None:
        """Test heading markers are dropped and lines are joined."""
        assert strip_markup("## Summary\nUpdated *docs*") == "Summary Updated docs"


class TestTechnicalReport:
    """Test the technical report."""

    def test_header_and_counts(self, sample_ticket: Ticket) -> None:
        """Test the header and aggregate section."""
        report = generate_technical_report(report_data([sample_ticket]))

        lines = report.split("\n")
        assert lines[0] == "TECHNICAL SUMMARY - 01. January 2026"
        assert lines[1] == "=" * 50
        assert "Total tickets: 1" in lines
        assert "By status: Done: 1" in lines
        assert "By activity: assigned: 1, updated: 1" in lines
        assert "--- TICKETS ---" in lines

    def test_ticket_block(self, sample_ticket: Ticket) -> None:
        """Test every ticket field line."""
        report = generate_technical_report(report_data([sample_ticket]))

        assert "[ENG-123] Fix login redirect" in report
        assert "  Status: Done (completed)" in report
        assert "  Description: **Fixed** the `login` flow for SSO users" in report
        assert "  Labels: bug" in report
        assert "  Assignee: Alex Doe (alex@example.com)" in report
        assert "  Updated: 2026-01-20T12:00:00.000Z" in report

    def test_description_truncated_to_200(
        self, make_ticket: Callable[..., Ticket]
    ) -> None:
        """Test a 250 character description renders 200 characters and an ellipsis."""
        ticket = make_ticket(description="d" * 250)

        report = generate_technical_report(report_data([ticket]))

        assert f"  Description: {'d' * 200}..." in report.split("\n")

    def test_short_description_unchanged(
        self, make_ticket: Callable[..., Ticket]
    ) -> None:
        """Test a 200 character description has no ellipsis."""
        ticket = make_ticket(description="d" * 200)

        report = generate_technical_report(report_data([ticket]))

        assert f"  Description: {'d' * 200}" in report.split("\n")
        assert "..." not in report

    def test_optional_lines_omitted(self, make_ticket: Callable[..., Ticket]) -> None:
        """Test description, labels and assignee lines are skipped when absent."""
        report = generate_technical_report(report_data([make_ticket()]))

        assert "Description:" not in report
        assert "Labels:" not in report
        assert "Assignee:" not in report

    def test_identifier_falls_back_to_id(
        self, make_ticket: Callable[..., Ticket]
    ) -> None:
        """Test the id is shown when there is no identifier."""
        report = generate_technical_report(
            report_data([make_ticket("uuid-1", identifier=None, title="No ident")])
        )

        assert "[uuid-1] No ident" in report

    def test_assignee_without_email(self, sample_ticket: Ticket) -> None:
        """Test the bare assignee name is shown without email."""
        assert sample_ticket.assignee is not None
        ticket = sample_ticket.model_copy(
            update={"assignee": sample_ticket.assignee.model_copy(update={"email": ""})}
        )

        report = generate_technical_report(report_data([ticket]))

        assert "  Assignee: Alex Doe" in report.split("\n")

    def test_is_deterministic(self, sample_ticket: Ticket) -> None:
        """Test identical input renders identical output."""
        data = report_data([sample_ticket])
        assert generate_technical_report(data) == generate_technical_report(data)


class TestNonTechnicalReport:
    """Test the plain-language report."""

    def test_header(self, sample_ticket: Ticket) -> None:
        """Test the header and summary sentence."""
        report = generate_non_technical_report(report_data([sample_ticket]))

        lines = report.split("\n")
        assert lines[0] == "WORK SUMMARY - 01. January 2026"
        assert lines[1] == "=" * 50
        assert "Completed 1 items this month." in lines
        assert "--- KEY DELIVERABLES ---" in lines

    def test_ticket_block(self, sample_ticket: Ticket) -> None:
        """Test the bullet, plain description and status."""
        report = generate_non_technical_report(report_data([sample_ticket]))

        lines = report.split("\n")
        assert "• Fix login redirect" in lines
        assert "  Fixed the login flow for SSO users" in lines
        assert "  Status: Done" in lines

    def test_hides_technical_details(self, sample_ticket: Ticket) -> None:
        """Test identifiers, state types and markup never appear."""
        report = generate_non_technical_report(report_data([sample_ticket]))

        assert "ENG-123" not in report
        assert "completed" not in report
        assert "**" not in report
        assert "`" not in report

    def test_description_truncated_to_150(
        self, make_ticket: Callable[..., Ticket]
    ) -> None:
        """Test long plain descriptions are cut at 150 characters."""
        report = generate_non_technical_report(
            report_data([make_ticket(description="p" * 180)])
        )

        assert f"  {'p' * 150}..." in report.split("\n")

    def test_markup_not_counted_towards_limit(
        self, make_ticket: Callable[..., Ticket]
    ) -> None:
        """Test the limit applies to the stripped text."""
        description = "**" + "p" * 148 + "**"

        report = generate_non_technical_report(
            report_data([make_ticket(description=description)])
        )

        assert f"  {'p' * 148}" in report.split("\n")

    def test_surrounding_whitespace_not_counted_towards_limit(
        self, make_ticket: Callable[..., Ticket]
    ) -> None:
        """Test the description is trimmed before the 150 character cut."""
        description = "   " + "p" * 150 + "   "

        report = generate_non_technical_report(
            report_data([make_ticket(description=description)])
        )

        assert f"  {'p' * 150}" in report.split("\n")
        assert "..." not in report

    def test_markup_only_description_skipped(
        self, make_ticket: Callable[..., Ticket]
    ) -> None:
        """Test a description that is empty once stripped adds no line."""
        report = generate_non_technical_report(
            report_data([make_ticket(title="Bare", description="## ")])
        )

        lines = report.split("\n")
        bullet = lines.index("• Bare")
        assert lines[bullet + 1] == "  Status: Done"


class TestEndToEndScenario:
    """Test rendering of a single minimal ticket through both reports."""

    @pytest.fixture
    def data(self) -> ReportData:
        """Report data for one E2E ticket."""
        now = datetime(2026, 1, 15, tzinfo=timezone.utc)
        ticket = Ticket(
            id="e2e-1",
            identifier="E2E-1",
            title="E2E Test Ticket",
            description="Test description for E2E",
            state=TicketState(name="Done"),
            created_at=now,
            updated_at=now,
        )
        return report_data([ticket])

    def test_technical(self, data: ReportData) -> None:
        """Test the technical report header and ticket line."""
        report = generate_technical_report(data)

        assert "TECHNICAL SUMMARY - 01. January 2026" in report
        assert "[E2E-1] E2E Test Ticket" in report

    def test_non_technical(self, data: ReportData) -> None:
        """Test the work summary header and bullet."""
        report = generate_non_technical_report(data)

        assert "WORK SUMMARY - 01. January 2026" in report
        assert "• E2E Test Ticket" in report


class TestAiSummaryReport:
    """Test the AI summary report."""

    def test_pairs_summaries_with_tickets(
        self, make_ticket: Callable[..., Ticket]
    ) -> None:
        """Test each ticket is followed by its summary."""
        data = report_data(
            [make_ticket("a", title="First"), make_ticket("b", title="Second")]
        )

        report = generate_ai_summary_report(
            data, ["Made sign-in faster.\n", "Fixed\nexports."]
        )

        lines = report.split("\n")
        assert lines[0] == "AI SUMMARY - 01. January 2026"
        assert "Completed 2 items this month." in lines
        first = lines.index("• First")
        assert lines[first + 1] == "  Made sign-in faster."
        second = lines.index("• Second")
        assert lines[second + 1] == "  Fixed exports."

    def test_mismatched_lengths(self, make_ticket: Callable[..., Ticket]) -> None:
        """Test summaries must match the ticket count."""
        with pytest.raises(ValueError, match="Expected 1 summaries"):
            generate_ai_summary_report(report_data([make_ticket()]), [])
