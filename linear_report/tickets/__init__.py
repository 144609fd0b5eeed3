"""Ticket aggregation and normalization."""

from .aggregator import (
    TicketAggregator,
    fetch_user_tickets_for_month,
    sort_tickets,
    user_worked_on_issue,
)
from .mapping import map_issue_to_ticket
from .models import (
    Ticket,
    TicketActivity,
    TicketAssignee,
    TicketCreator,
    TicketLabel,
    TicketState,
)

__all__ = [
    "Ticket",
    "TicketActivity",
    "TicketAssignee",
    "TicketCreator",
    "TicketLabel",
    "TicketState",
    "TicketAggregator",
    "fetch_user_tickets_for_month",
    "map_issue_to_ticket",
    "sort_tickets",
    "user_worked_on_issue",
]
