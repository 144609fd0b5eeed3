"""Linear GraphQL documents and filter building."""

from typing import Any

from ..utils.date_parser import MonthRange

# Fields needed to project an issue onto a report ticket
ISSUE_FIELDS = """
    id identifier title description
    createdAt updatedAt startedAt completedAt
    assignee { id name email }
    creator { id name }
    state { name type }
    labels { nodes { id name } }
"""

PAGE_INFO_FIELDS = "pageInfo { hasNextPage endCursor }"

VIEWER_QUERY = """
query Viewer {
    viewer { id name email }
}
"""

ISSUES_QUERY = f"""
query Issues($filter: IssueFilter, $first: Int, $after: String) {{
    issues(filter: $filter, first: $first, after: $after) {{
        nodes {{ {ISSUE_FIELDS} }}
        {PAGE_INFO_FIELDS}
    }}
}}
"""

COMMENTS_QUERY = f"""
query Comments($filter: CommentFilter, $first: Int, $after: String) {{
    comments(filter: $filter, first: $first, after: $after) {{
        nodes {{ id createdAt issue {{ id }} }}
        {PAGE_INFO_FIELDS}
    }}
}}
"""

# Viewer relations that scope issues to the authenticated user
VIEWER_ISSUE_RELATIONS = ("assignedIssues", "createdIssues", "delegatedIssues")


def build_viewer_issues_query(relation: str) -> str:
    """Build the query for one viewer-scoped issue relation.

    Args:
        relation: One of VIEWER_ISSUE_RELATIONS

    Returns:
        GraphQL query string taking ``$first`` and ``$after``

    Raises:
        ValueError: If the relation is not a known viewer issue relation
    """
    if relation not in VIEWER_ISSUE_RELATIONS:
        raise ValueError(
            f"Unknown viewer relation '{relation}'. "
            f"Expected one of: {', '.join(VIEWER_ISSUE_RELATIONS)}"
        )
    return f"""
query ViewerIssues($first: Int, $after: String) {{
    viewer {{
        {relation}(first: $first, after: $after) {{
            nodes {{ {ISSUE_FIELDS} }}
            {PAGE_INFO_FIELDS}
        }}
    }}
}}
"""


def build_assignee_issue_filter(email: str, month_range: MonthRange) -> dict[str, Any]:
    """Build an IssueFilter for issues assigned to ``email`` and active in the month.

    An issue is active when it was started or updated inside the range.

    Example:
        >>> build_assignee_issue_filter("bot@example.com", get_month_range(2026, 1))
        {"assignee": {"email": {"eq": "bot@example.com"}},
         "or": [{"startedAt": {...}}, {"updatedAt": {...}}]}
    """
    date_range = month_range.to_filter()
    return {
        "assignee": {"email": {"eq": email}},
        "or": [
            {"startedAt": date_range},
            {"updatedAt": date_range},
        ],
    }


def build_user_comment_filter(email: str, month_range: MonthRange) -> dict[str, Any]:
    """Build a CommentFilter for comments written by ``email`` inside the month."""
    return {
        "user": {"email": {"eq": email}},
        "createdAt": month_range.to_filter(),
    }
