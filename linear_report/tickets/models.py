"""Pydantic models for report tickets.

A Ticket is the normalized, immutable snapshot of a Linear issue that the
report pipeline works with. It is produced once per run by the aggregator.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ActivityType = Literal["assigned", "updated", "commented"]


class TicketModel(BaseModel):
    """Base for ticket models: immutable once constructed."""

    model_config = ConfigDict(frozen=True)


class TicketActivity(TicketModel):
    """One synthesized activity entry on a ticket."""

    type: ActivityType = Field(..., description="Kind of activity")
    date: datetime = Field(..., description="When the activity happened")


class TicketState(TicketModel):
    """Workflow state with safe defaults for missing data."""

    name: str = Field("Unknown", description="State name, e.g. 'Done'")
    type: str = Field("unknown", description="State category, e.g. 'completed'")


class TicketAssignee(TicketModel):
    """Ticket assignee."""

    id: str = Field(..., description="User UUID")
    name: str = Field(..., description="Display name")
    email: str = Field("", description="Email address, empty when unknown")


class TicketCreator(TicketModel):
    """Ticket creator."""

    id: str = Field("", description="User UUID, empty when unknown")
    name: str = Field("Unknown", description="Display name")


class TicketLabel(TicketModel):
    """Ticket label."""

    id: str = Field(..., description="Label UUID")
    name: str = Field(..., description="Label name")


class Ticket(TicketModel):
    """Work item fetched from Linear, normalized for reporting."""

    id: str = Field(..., description="Issue UUID, unique within one result")
    identifier: str | None = Field(None, description="Human identifier, e.g. ENG-123")
    title: str = Field(..., description="Issue title")
    description: str | None = Field(None, description="Markdown description")
    state: TicketState = Field(default_factory=TicketState)
    assignee: TicketAssignee | None = Field(None, description="Current assignee")
    creator: TicketCreator = Field(default_factory=TicketCreator)
    labels: list[TicketLabel] = Field(
        default_factory=list, description="Attached labels, never null"
    )
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")
    completed_at: datetime | None = Field(None, description="Completion timestamp")
    activities: list[TicketActivity] = Field(
        default_factory=list, description="Synthesized activity entries, never null"
    )
