"""Pydantic models for GitHub data structures.

These models map to the subset of GitHub's REST API issue search results the
commenter needs.
API Reference: https://docs.github.com/en/rest/search/search#search-issues-and-pull-requests
"""

import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

# Example: https://github.com/batterseapower/pinyin-toolkit/issues/132
HTML_URL_PATTERN = re.compile(r".+/(.+)/(.+)/(issues|pull)/(\d+)")


class GitHubUser(BaseModel):
    """GitHub user model representing a user account.

    Maps to GitHub REST API User object.
    API Reference: https://docs.github.com/en/rest/users/users
    """

    login: str = Field(..., description="GitHub username/login (string)")
    id: int = Field(..., description="Unique user identifier (integer)")


class GitHubLabel(BaseModel):
    """GitHub label model representing repository labels.

    Maps to GitHub REST API Label object.
    API Reference: https://docs.github.com/en/rest/issues/labels
    """

    name: str = Field(..., description="Name of the label (string)")
    color: str = Field(
        "", description="Hexadecimal color code without leading # (string)"
    )
    description: str | None = Field(
        None, description="Short description of the label (string, max 100 characters)"
    )


class GitHubIssue(BaseModel):
    """An issue or pull request returned by the search API.

    Maps to GitHub REST API Issue object.
    API Reference: https://docs.github.com/en/rest/issues/issues
    """

    number: int = Field(..., description="Issue number within the repository (integer)")
    title: str = Field(..., description="Short description/title of the issue (string)")
    html_url: str = Field(..., description="Web URL of the issue or pull request")
    state: str = Field(..., description="Current state: 'open', 'closed' (string)")
    locked: bool = Field(False, description="Whether the conversation is locked")
    body: str | None = Field(
        None, description="Detailed description of the issue in markdown (string)"
    )
    user: GitHubUser = Field(..., description="Creator/author of the issue")
    assignees: list[GitHubUser] = Field(
        default_factory=list, description="Users assigned to the issue"
    )
    labels: list[GitHubLabel] = Field(
        default_factory=list, description="Array of labels attached to the issue"
    )
    created_at: datetime | None = Field(
        None, description="Timestamp of issue creation (ISO 8601)"
    )
    updated_at: datetime | None = Field(
        None, description="Timestamp of last issue update (ISO 8601)"
    )
    is_pull_request: bool = Field(
        False, description="True when the search hit is a pull request"
    )


class IssueReference(BaseModel):
    """Location of an issue parsed from its web URL."""

    org: str = Field(..., description="GitHub organization or user owning the repo")
    repo: str = Field(..., description="GitHub repository name")
    number: int = Field(..., description="Issue or pull request number")

    def __str__(self) -> str:
        return f"{self.org}/{self.repo}#{self.number}"


class CommentContext(BaseModel):
    """Per-issue values available when producing a comment."""

    model_config = ConfigDict(frozen=True)

    number: int = Field(..., description="Issue number")
    org: str = Field(..., description="GitHub organization")
    repo: str = Field(..., description="GitHub repository")
    issue: GitHubIssue = Field(..., description="Complete search result")


def parse_html_url(url: str) -> IssueReference:
    """Extract org, repo and number from an issue or pull request URL.

    Args:
        url: Web URL such as https://github.com/org/repo/issues/123

    Returns:
        IssueReference for the URL

    Raises:
        ValueError: If the URL is not an issue or pull request URL
    """
    match = HTML_URL_PATTERN.fullmatch(url)
    if match is None:
        raise ValueError(f"failed to parse: {url}")
    org, repo, _, number = match.groups()
    return IssueReference(org=org, repo=repo, number=int(number))
