"""Linear client package for API interaction."""

from .client import LinearAPIError, LinearClient, ViewerResolutionError
from .models import (
    CommentPage,
    IssuePage,
    LinearComment,
    LinearIssue,
    LinearLabel,
    LinearState,
    LinearUser,
    LinearViewer,
    PageInfo,
)
from .pagination import iter_pages
from .queries import build_assignee_issue_filter, build_user_comment_filter

__all__ = [
    "LinearClient",
    "LinearAPIError",
    "ViewerResolutionError",
    "LinearUser",
    "LinearViewer",
    "LinearState",
    "LinearLabel",
    "LinearIssue",
    "LinearComment",
    "PageInfo",
    "IssuePage",
    "CommentPage",
    "iter_pages",
    "build_assignee_issue_filter",
    "build_user_comment_filter",
]
