"""Pydantic models for Linear GraphQL data structures.

These models map directly to the node shapes returned by Linear's GraphQL API
and validate them at the boundary. Relation fields are optional because the
API returns ``null`` for unset relations.
API Reference: https://developers.linear.app/docs/graphql/working-with-the-graphql-api
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class LinearModel(BaseModel):
    """Base for Linear API records: camelCase aliases, immutable."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class LinearUser(LinearModel):
    """Linear user as embedded in issue relations (assignee/creator)."""

    id: str | None = Field(None, description="User UUID")
    name: str | None = Field(None, description="Display name")
    email: str | None = Field(None, description="Email address")


class LinearViewer(LinearModel):
    """The authenticated principal behind the API key.

    Maps to the GraphQL ``viewer`` query.
    """

    id: str = Field(..., description="User UUID")
    name: str | None = Field(None, description="Display name")
    email: str | None = Field(None, description="Email address")


class LinearState(LinearModel):
    """Workflow state of an issue.

    Types: backlog, unstarted, started, completed, canceled, triage.
    """

    name: str | None = Field(None, description="State name, e.g. 'In Progress'")
    type: str | None = Field(None, description="State category, e.g. 'started'")


class LinearLabel(LinearModel):
    """Issue label. Incomplete labels are dropped during ticket mapping."""

    id: str | None = Field(None, description="Label UUID")
    name: str | None = Field(None, description="Label name")


class LinearLabelConnection(LinearModel):
    """Labels connection (``labels { nodes { ... } }``)."""

    nodes: list[LinearLabel] = Field(default_factory=list)


class LinearIssue(LinearModel):
    """Linear issue node.

    ``id``, ``title`` and the creation/update timestamps are required; nodes
    without them are rejected by the client.
    """

    id: str = Field(..., description="Issue UUID")
    identifier: str | None = Field(None, description="Human identifier, e.g. ENG-123")
    title: str = Field(..., description="Issue title")
    description: str | None = Field(None, description="Markdown description")
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")
    started_at: datetime | None = Field(None, alias="startedAt")
    completed_at: datetime | None = Field(None, alias="completedAt")
    assignee: LinearUser | None = Field(None, description="Current assignee")
    creator: LinearUser | None = Field(None, description="Issue creator")
    state: LinearState | None = Field(None, description="Workflow state")
    labels: LinearLabelConnection | None = Field(None, description="Attached labels")


class LinearIssueRef(LinearModel):
    """Minimal issue reference embedded in other nodes."""

    id: str = Field(..., description="Issue UUID")


class LinearComment(LinearModel):
    """Comment node, reduced to what is needed to find commented issues."""

    id: str = Field(..., description="Comment UUID")
    issue: LinearIssueRef | None = Field(None, description="Parent issue")
    issue_id_field: str | None = Field(None, alias="issueId")
    created_at: datetime | None = Field(None, alias="createdAt")

    @property
    def issue_id(self) -> str | None:
        """Parent issue id, from ``issueId`` or the ``issue`` relation."""
        if self.issue_id_field:
            return self.issue_id_field
        return self.issue.id if self.issue else None


class PageInfo(LinearModel):
    """Relay-style pagination info."""

    has_next_page: bool = Field(False, alias="hasNextPage")
    end_cursor: str | None = Field(None, alias="endCursor")


class IssuePage(LinearModel):
    """One page of an issue connection."""

    nodes: list[LinearIssue] = Field(default_factory=list)
    page_info: PageInfo = Field(default_factory=PageInfo, alias="pageInfo")


class CommentPage(LinearModel):
    """One page of a comment connection."""

    nodes: list[LinearComment] = Field(default_factory=list)
    page_info: PageInfo = Field(default_factory=PageInfo, alias="pageInfo")
