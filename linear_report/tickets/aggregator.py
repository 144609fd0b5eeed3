"""Aggregation of the tickets a user worked on during a month.

Two mutually exclusive strategies:

- Assignee mode (an assignee email is given, e.g. when the API key belongs to
  a bot or integration): issues assigned to that email and started or updated
  in the month.
- Viewer mode: issues assigned to, created by, or delegated to the principal
  behind the API key, fetched concurrently.

Both narrow the candidates with ``user_worked_on_issue`` because an issue
merely updated in the month, possibly by someone else, is not the user's work.
"""

import asyncio
import logging
from typing import TYPE_CHECKING

from ..linear_client.client import LinearClient
from ..linear_client.models import LinearIssue
from ..linear_client.pagination import iter_pages
from ..linear_client.queries import (
    VIEWER_ISSUE_RELATIONS,
    build_assignee_issue_filter,
    build_user_comment_filter,
)
from ..utils.date_parser import MonthRange, get_month_range
from .mapping import map_issue_to_ticket
from .models import Ticket

if TYPE_CHECKING:
    from ..linear_client.models import IssuePage

logger = logging.getLogger(__name__)


def user_worked_on_issue(
    issue: LinearIssue,
    user_id: str,
    month_range: MonthRange,
    commented_issue_ids: set[str],
) -> bool:
    """Decide whether a user actually worked on an issue during the month.

    True when the user created the issue, the issue was started inside the
    range, or the user commented on it inside the range.
    """
    creator_id = issue.creator.id if issue.creator else None
    if user_id and creator_id == user_id:
        return True
    if month_range.contains(issue.started_at):
        return True
    return issue.id in commented_issue_ids


def sort_tickets(tickets: list[Ticket]) -> list[Ticket]:
    """Order tickets by last update, oldest first."""
    return sorted(tickets, key=lambda ticket: ticket.updated_at)


class TicketAggregator:
    """Collects, filters and de-duplicates a user's tickets for one month."""

    def __init__(self, client: LinearClient):
        """Initialize aggregator with a Linear client.

        Args:
            client: Authenticated LinearClient instance
        """
        self.client = client

    async def fetch_for_month(
        self, year: int, month: int, assignee_email: str | None = None
    ) -> list[Ticket]:
        """Fetch the tickets worked on in a month, sorted by ``updated_at``.

        Args:
            year: Calendar year
            month: Calendar month (1-12)
            assignee_email: When set (after trimming), use assignee mode for
                this email instead of the API key's viewer

        Returns:
            Distinct tickets, oldest update first

        Raises:
            ViewerResolutionError: If viewer mode cannot resolve the viewer
            LinearAPIError: If any underlying query fails
        """
        month_range = get_month_range(year, month)
        email = (assignee_email or "").strip()

        if email:
            logger.info(
                "Fetching tickets assigned to %s for %d-%02d", email, year, month
            )
            tickets = await self._fetch_assignee_tickets(email, month_range)
        else:
            logger.info("Fetching viewer tickets for %d-%02d", year, month)
            tickets = await self._fetch_viewer_tickets(month_range)

        return sort_tickets(list(tickets.values()))

    async def fetch_commented_issue_ids(
        self, email: str, month_range: MonthRange
    ) -> set[str]:
        """Get ids of issues ``email`` commented on inside the month."""
        comment_filter = build_user_comment_filter(email, month_range)
        issue_ids: set[str] = set()

        async for page in iter_pages(
            lambda after: self.client.comments(comment_filter, after=after)
        ):
            for comment in page.nodes:
                if comment.issue_id:
                    issue_ids.add(comment.issue_id)

        logger.debug("Found %d commented issues for %s", len(issue_ids), email)
        return issue_ids

    async def _fetch_assignee_tickets(
        self, email: str, month_range: MonthRange
    ) -> dict[str, Ticket]:
        commented_issue_ids = await self.fetch_commented_issue_ids(email, month_range)
        issue_filter = build_assignee_issue_filter(email, month_range)

        tickets: dict[str, Ticket] = {}
        # Captured from the first issue that carries an assignee
        user_id: str | None = None

        async for page in iter_pages(
            lambda after: self.client.issues(issue_filter, after=after)
        ):
            for issue in page.nodes:
                assignee_id = issue.assignee.id if issue.assignee else None
                if not user_id:
                    user_id = assignee_id

                if not user_worked_on_issue(
                    issue, user_id or assignee_id or "", month_range, commented_issue_ids
                ):
                    continue

                tickets[issue.id] = map_issue_to_ticket(issue, assignee_id)

        return tickets

    async def _fetch_viewer_tickets(self, month_range: MonthRange) -> dict[str, Ticket]:
        viewer = await self.client.get_viewer()
        commented_issue_ids = (
            await self.fetch_commented_issue_ids(viewer.email, month_range)
            if viewer.email
            else set()
        )

        groups = await asyncio.gather(
            *(
                self._collect_viewer_group(
                    relation, viewer.id, month_range, commented_issue_ids
                )
                for relation in VIEWER_ISSUE_RELATIONS
            )
        )

        # Each group accumulated privately; merge sequentially
        tickets: dict[str, Ticket] = {}
        for group in groups:
            for ticket in group:
                tickets[ticket.id] = ticket
        return tickets

    async def _collect_viewer_group(
        self,
        relation: str,
        viewer_id: str,
        month_range: MonthRange,
        commented_issue_ids: set[str],
    ) -> list[Ticket]:
        """Drain one viewer relation and keep the issues worked on in the month."""

        async def fetch_page(after: str | None) -> "IssuePage":
            return await self.client.viewer_issues(relation, after=after)

        tickets: list[Ticket] = []
        async for page in iter_pages(fetch_page):
            for issue in page.nodes:
                in_month = month_range.contains(
                    issue.updated_at
                ) or month_range.contains(issue.started_at)
                if not in_month:
                    continue
                if not user_worked_on_issue(
                    issue, viewer_id, month_range, commented_issue_ids
                ):
                    continue
                tickets.append(map_issue_to_ticket(issue, viewer_id))

        logger.debug("Kept %d issues from viewer %s", len(tickets), relation)
        return tickets


async def fetch_user_tickets_for_month(
    api_key: str,
    year: int,
    month: int,
    assignee_email: str | None = None,
) -> list[Ticket]:
    """Fetch all tickets the user worked on in a month.

    Opens a LinearClient for ``api_key`` for the duration of the call. See
    ``TicketAggregator.fetch_for_month`` for the selection rules.

    Args:
        api_key: Linear API key
        year: Calendar year
        month: Calendar month (1-12)
        assignee_email: Optional assignee email selecting assignee mode

    Returns:
        Distinct tickets sorted by ``updated_at`` ascending
    """
    async with LinearClient(api_key) as client:
        return await TicketAggregator(client).fetch_for_month(
            year, month, assignee_email
        )
