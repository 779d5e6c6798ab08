"""Test configuration and fixtures."""

from collections.abc import Callable

import pytest

from gh_commenter.github_client.models import GitHubIssue, GitHubLabel, GitHubUser


class FakeGitHubClient:
    """In-memory stand-in for GitHubClient recording every call."""

    def __init__(self, issues: list[GitHubIssue] | None = None) -> None:
        self.issues = list(issues or [])
        self.search_error: Exception | None = None
        self.failing_numbers: set[int] = set()
        self.searches: list[tuple[str, str, str | None, bool]] = []
        self.comments: list[tuple[str, str, int, str]] = []

    def find_issues_with_org(
        self, org: str, query: str, sort: str | None, ascending: bool
    ) -> list[GitHubIssue]:
        self.searches.append((org, query, sort, ascending))
        if self.search_error is not None:
            raise self.search_error
        return list(self.issues)

    def create_comment(self, org: str, repo: str, number: int, comment: str) -> None:
        if number in self.failing_numbers:
            raise RuntimeError("403 Forbidden")
        self.comments.append((org, repo, number, comment))


@pytest.fixture
def make_issue() -> Callable[..., GitHubIssue]:
    """Build GitHubIssue objects with sensible defaults."""

    def _make(
        number: int = 1,
        html_url: str | None = None,
        title: str = "Test issue",
        **kwargs,
    ) -> GitHubIssue:
        return GitHubIssue(
            number=number,
            title=title,
            html_url=html_url or f"https://github.com/test-org/test-repo/issues/{number}",
            state=kwargs.pop("state", "open"),
            user=kwargs.pop("user", GitHubUser(login="octocat", id=1)),
            labels=kwargs.pop("labels", [GitHubLabel(name="bug", color="d73a4a")]),
            **kwargs,
        )

    return _make


@pytest.fixture
def fake_client() -> FakeGitHubClient:
    """Provide an empty fake GitHub client."""
    return FakeGitHubClient()
