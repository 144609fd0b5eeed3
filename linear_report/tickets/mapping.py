"""Projection of Linear issue records onto report tickets."""

from ..linear_client.models import LinearIssue
from .models import (
    Ticket,
    TicketActivity,
    TicketAssignee,
    TicketCreator,
    TicketLabel,
    TicketState,
)


def map_issue_to_ticket(issue: LinearIssue, user_id: str | None) -> Ticket:
    """Convert a validated Linear issue to a Ticket.

    Missing relations fall back to defaults instead of failing. Activities are
    synthesized: ``assigned`` when ``user_id`` is the assignee, then always one
    ``updated`` entry, both dated at the issue's last update.

    Args:
        issue: Issue node from the Linear API
        user_id: Id of the user the report is for

    Returns:
        Ticket snapshot
    """
    assignee = issue.assignee
    is_assigned = bool(user_id) and assignee is not None and assignee.id == user_id

    activities = []
    if is_assigned:
        activities.append(TicketActivity(type="assigned", date=issue.updated_at))
    activities.append(TicketActivity(type="updated", date=issue.updated_at))

    ticket_assignee = None
    if assignee is not None and assignee.id:
        ticket_assignee = TicketAssignee(
            id=assignee.id,
            name=assignee.name or "",
            email=assignee.email or "",
        )

    state = issue.state
    creator = issue.creator
    labels = issue.labels.nodes if issue.labels else []

    return Ticket(
        id=issue.id,
        identifier=issue.identifier,
        title=issue.title,
        description=issue.description,
        state=TicketState(
            name=(state.name if state and state.name else "Unknown"),
            type=(state.type if state and state.type else "unknown"),
        ),
        assignee=ticket_assignee,
        creator=TicketCreator(
            id=(creator.id if creator and creator.id else ""),
            name=(creator.name if creator and creator.name else "Unknown"),
        ),
        labels=[
            TicketLabel(id=label.id or "", name=label.name)
            for label in labels
            if label.name
        ],
        created_at=issue.created_at,
        updated_at=issue.updated_at,
        completed_at=issue.completed_at,
        activities=activities,
    )
