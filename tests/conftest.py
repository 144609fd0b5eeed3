"""Test configuration and fixtures."""

from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

import pytest

from linear_report.tickets.models import (
    Ticket,
    TicketActivity,
    TicketAssignee,
    TicketLabel,
    TicketState,
)


def make_issue_node(
    issue_id: str = "issue-1",
    *,
    identifier: str | None = "ENG-1",
    title: str = "Test Issue",
    description: str | None = "Test description",
    created_at: str = "2026-01-02T09:00:00.000Z",
    updated_at: str = "2026-01-15T12:00:00.000Z",
    started_at: str | None = None,
    completed_at: str | None = None,
    assignee: dict[str, Any] | None = None,
    creator: dict[str, Any] | None = None,
    state: dict[str, Any] | None = None,
    labels: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    """Build a raw issue node shaped like Linear's GraphQL response."""
    return {
        "id": issue_id,
        "identifier": identifier,
        "title": title,
        "description": description,
        "createdAt": created_at,
        "updatedAt": updated_at,
        "startedAt": started_at,
        "completedAt": completed_at,
        "assignee": assignee,
        "creator": creator,
        "state": state if state is not None else {"name": "Done", "type": "completed"},
        "labels": {"nodes": labels or []},
    }


@pytest.fixture
def issue_node() -> Callable[..., dict[str, Any]]:
    """Factory for raw Linear issue nodes."""
    return make_issue_node


@pytest.fixture
def sample_ticket() -> Ticket:
    """A fully populated ticket."""
    updated = datetime(2026, 1, 20, 12, 0, 0, tzinfo=timezone.utc)
    return Ticket(
        id="issue-1",
        identifier="ENG-123",
        title="Fix login redirect",
        description="**Fixed** the `login` flow\nfor SSO users",
        state=TicketState(name="Done", type="completed"),
        assignee=TicketAssignee(id="user-1", name="Alex Doe", email="alex@example.com"),
        labels=[TicketLabel(id="label-1", name="bug")],
        created_at=datetime(2026, 1, 5, 8, 0, 0, tzinfo=timezone.utc),
        updated_at=updated,
        activities=[
            TicketActivity(type="assigned", date=updated),
            TicketActivity(type="updated", date=updated),
        ],
    )


@pytest.fixture
def make_ticket() -> Callable[..., Ticket]:
    """Factory for minimal tickets."""

    def _make(
        ticket_id: str = "issue-1",
        *,
        identifier: str | None = "ENG-1",
        title: str = "Test Ticket",
        description: str | None = None,
        state_name: str = "Done",
        updated_day: int = 15,
        activities: list[str] | None = None,
    ) -> Ticket:
        updated = datetime(2026, 1, updated_day, 12, 0, 0, tzinfo=timezone.utc)
        return Ticket(
            id=ticket_id,
            identifier=identifier,
            title=title,
            description=description,
            state=TicketState(name=state_name, type="completed"),
            created_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
            updated_at=updated,
            activities=[
                TicketActivity(type=activity, date=updated)  # type: ignore[arg-type]
                for activity in (activities if activities is not None else ["updated"])
            ],
        )

    return _make
