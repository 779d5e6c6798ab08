"""GitHub client package for API interaction."""

from .auth import GitHubAuthOptions
from .client import GitHubClient
from .models import (
    CommentContext,
    GitHubIssue,
    GitHubLabel,
    GitHubUser,
    IssueReference,
    parse_html_url,
)
from .search import QueryConflictError, build_search_query, search_order

__all__ = [
    "GitHubAuthOptions",
    "GitHubClient",
    "GitHubUser",
    "GitHubLabel",
    "GitHubIssue",
    "IssueReference",
    "CommentContext",
    "QueryConflictError",
    "build_search_query",
    "parse_html_url",
    "search_order",
]
