"""Linear GraphQL API client using httpx."""

import logging
import os
from types import TracebackType
from typing import Any

import httpx
from pydantic import ValidationError

from .models import (
    CommentPage,
    IssuePage,
    LinearComment,
    LinearIssue,
    LinearViewer,
    PageInfo,
)
from .queries import (
    COMMENTS_QUERY,
    ISSUES_QUERY,
    VIEWER_QUERY,
    build_viewer_issues_query,
)

logger = logging.getLogger(__name__)

LINEAR_API_URL = "https://api.linear.app"
PAGE_SIZE = 50


class LinearAPIError(RuntimeError):
    """A Linear request failed at the transport or GraphQL level."""


class ViewerResolutionError(LinearAPIError):
    """The principal behind the API key could not be resolved."""


class LinearClient:
    """Async Linear GraphQL client with cursor pagination.

    Every connection query returns a single page; callers request the next
    page explicitly by passing the previous page's ``end_cursor`` as
    ``after``. Pages of one query must be requested in order.
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        base_url: str = LINEAR_API_URL,
        page_size: int = PAGE_SIZE,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize Linear client with authentication.

        Args:
            api_key: Linear personal API key. If None, reads from
                LINEAR_API_KEY env var.
            base_url: API root; the GraphQL endpoint is ``/graphql``
            page_size: Number of nodes requested per page
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.api_key = api_key or os.getenv("LINEAR_API_KEY")
        if not self.api_key:
            raise ValueError(
                "Linear API key is required. Set LINEAR_API_KEY environment variable."
            )

        self.page_size = page_size
        self._http = httpx.AsyncClient(
            base_url=base_url,
            headers={
                # Personal API keys are sent without a Bearer prefix
                "Authorization": self.api_key,
                "Content-Type": "application/json",
                "User-Agent": "linear-report/0.1.0",
            },
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "LinearClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._http.aclose()

    async def graphql(
        self, query: str, variables: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """Execute a GraphQL query and return its ``data`` object.

        Raises:
            LinearAPIError: On network errors, non-2xx responses, GraphQL
                ``errors`` arrays or responses without a data object
        """
        body: dict[str, Any] = {"query": query}
        if variables:
            body["variables"] = variables

        try:
            response = await self._http.post("/graphql", json=body)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            raise LinearAPIError(
                f"Linear API request failed: {e.response.status_code} "
                f"{e.response.reason_phrase}"
            ) from e
        except httpx.HTTPError as e:
            raise LinearAPIError(f"Linear API request failed: {e}") from e
        except ValueError as e:
            raise LinearAPIError("Linear API returned invalid JSON") from e

        if not isinstance(payload, dict):
            raise LinearAPIError("Unexpected response from Linear API")

        errors = payload.get("errors")
        if errors and isinstance(errors, list):
            first = errors[0]
            message = (
                first.get("message", "GraphQL error")
                if isinstance(first, dict)
                else "GraphQL error"
            )
            raise LinearAPIError(f"Linear GraphQL error: {message}")

        data = payload.get("data")
        if not isinstance(data, dict):
            raise LinearAPIError("Linear API response has no data")
        return data

    async def get_viewer(self) -> LinearViewer:
        """Get the user the API key belongs to.

        Raises:
            ViewerResolutionError: If the viewer query fails or returns nothing
        """
        try:
            data = await self.graphql(VIEWER_QUERY)
        except LinearAPIError as e:
            raise ViewerResolutionError(
                f"Failed to fetch current user from Linear: {e}"
            ) from e

        viewer = data.get("viewer")
        if not isinstance(viewer, dict):
            raise ViewerResolutionError("Failed to fetch current user from Linear")

        try:
            return LinearViewer.model_validate(viewer)
        except ValidationError as e:
            raise ViewerResolutionError(
                "Failed to fetch current user from Linear: malformed viewer"
            ) from e

    async def issues(
        self, issue_filter: dict[str, Any], after: str | None = None
    ) -> IssuePage:
        """Fetch one page of issues matching an IssueFilter."""
        variables = {"filter": issue_filter, "first": self.page_size, "after": after}
        data = await self.graphql(ISSUES_QUERY, variables)
        page = self._parse_issue_page(data.get("issues"))
        logger.debug(
            "Fetched %d issues (after=%s, has_next=%s)",
            len(page.nodes),
            after,
            page.page_info.has_next_page,
        )
        return page

    async def viewer_issues(self, relation: str, after: str | None = None) -> IssuePage:
        """Fetch one page of a viewer relation (assigned/created/delegated issues)."""
        query = build_viewer_issues_query(relation)
        data = await self.graphql(query, {"first": self.page_size, "after": after})
        viewer = data.get("viewer")
        if not isinstance(viewer, dict):
            raise ViewerResolutionError("Failed to fetch current user from Linear")
        page = self._parse_issue_page(viewer.get(relation))
        logger.debug(
            "Fetched %d viewer %s (after=%s, has_next=%s)",
            len(page.nodes),
            relation,
            after,
            page.page_info.has_next_page,
        )
        return page

    async def comments(
        self, comment_filter: dict[str, Any], after: str | None = None
    ) -> CommentPage:
        """Fetch one page of comments matching a CommentFilter."""
        variables = {"filter": comment_filter, "first": self.page_size, "after": after}
        data = await self.graphql(COMMENTS_QUERY, variables)
        connection = data.get("comments")
        nodes = self._connection_nodes(connection)

        comments = []
        for node in nodes:
            try:
                comments.append(LinearComment.model_validate(node))
            except ValidationError as e:
                logger.warning("Skipping malformed comment node: %s", e)

        return CommentPage(nodes=comments, page_info=self._page_info(connection))

    def _parse_issue_page(self, connection: Any) -> IssuePage:
        """Convert a raw issue connection into an IssuePage.

        Nodes that fail validation are rejected individually so one sparse
        record cannot fail the whole fetch.
        """
        issues = []
        for node in self._connection_nodes(connection):
            try:
                issues.append(LinearIssue.model_validate(node))
            except ValidationError as e:
                node_id = node.get("id") if isinstance(node, dict) else None
                logger.warning(
                    "Skipping malformed issue node %s: %s", node_id or "<unknown>", e
                )

        return IssuePage(nodes=issues, page_info=self._page_info(connection))

    def _connection_nodes(self, connection: Any) -> list[Any]:
        if not isinstance(connection, dict):
            raise LinearAPIError("Unexpected connection shape in Linear response")
        nodes = connection.get("nodes", [])
        if not isinstance(nodes, list):
            raise LinearAPIError("Unexpected nodes format in Linear response")
        return nodes

    def _page_info(self, connection: dict[str, Any]) -> PageInfo:
        raw = connection.get("pageInfo")
        if not isinstance(raw, dict):
            return PageInfo()
        return PageInfo.model_validate(raw)
