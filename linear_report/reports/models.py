"""Pydantic models for report data."""

from pydantic import BaseModel, Field

from ..tickets.models import Ticket


class ReportSummary(BaseModel):
    """Aggregate counts over a ticket list."""

    total_tickets: int = Field(0, description="Number of tickets in the report")
    by_status: dict[str, int] = Field(
        default_factory=dict, description="Ticket count per state name"
    )
    by_activity_type: dict[str, int] = Field(
        default_factory=dict,
        description="Activity count per type; can exceed the ticket count",
    )


class ReportData(BaseModel):
    """Everything the report renderers need."""

    month: str = Field(..., description="Display month, e.g. '01. January'")
    year: int = Field(..., description="Calendar year")
    tickets: list[Ticket] = Field(default_factory=list)
    summary: ReportSummary = Field(default_factory=ReportSummary)
