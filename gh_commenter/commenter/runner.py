"""Batch runner: search once, then comment on each match up to a ceiling."""

import random
from typing import Protocol

from pydantic import BaseModel, Field
from rich.console import Console

from ..github_client.models import CommentContext, GitHubIssue, parse_html_url
from .templates import Commenter

console = Console()


class IssueCommentClient(Protocol):
    """GitHub capabilities the runner depends on."""

    def find_issues_with_org(
        self, org: str, query: str, sort: str | None, ascending: bool
    ) -> list[GitHubIssue]: ...

    def create_comment(
        self, org: str, repo: str, number: int, comment: str
    ) -> None: ...


class RunOutcome(BaseModel):
    """Result of one commenter run."""

    matched: int = Field(0, description="Number of search results")
    visited: int = Field(0, description="Results processed before the ceiling")
    commented: int = Field(0, description="Comments successfully submitted")
    problems: list[str] = Field(
        default_factory=list, description="Failure messages in processing order"
    )

    @property
    def succeeded(self) -> bool:
        return not self.problems


class CommenterError(Exception):
    """Base class for run failures."""


class CommenterSearchError(CommenterError):
    """The search request failed; no issues were processed."""


class CommenterRunError(CommenterError):
    """One or more issues could not be commented on."""

    def __init__(self, outcome: RunOutcome):
        self.outcome = outcome
        super().__init__(
            f"encountered {len(outcome.problems)} failures: {outcome.problems}"
        )


def _record(outcome: RunOutcome, message: str) -> None:
    console.print(message, style="red", markup=False, highlight=False)
    outcome.problems.append(message)


def run_commenter(
    client: IssueCommentClient,
    org: str,
    query: str,
    sort: str | None,
    ascending: bool,
    randomize: bool,
    commenter: Commenter,
    ceiling: int,
    rng: random.Random | None = None,
) -> RunOutcome:
    """Comment on the issues matching query.

    A failure on one issue is recorded and the remaining issues are still
    processed. The ceiling limits issues visited, failed ones included.

    Args:
        client: GitHub client used to search and comment
        org: Organization to search on behalf of
        query: Complete GitHub search query
        sort: Sort field or None for best match
        ascending: Sort ascending instead of descending
        randomize: Shuffle matches before applying the ceiling
        commenter: Function producing the comment for an issue
        ceiling: Maximum number of issues to visit, 0 for no limit
        rng: Random source for the shuffle

    Returns:
        RunOutcome with no problems

    Raises:
        CommenterSearchError: If the search request fails
        CommenterRunError: If any issue could not be commented on
    """
    console.print(f"Searching: {query}", markup=False, highlight=False)
    try:
        issues = client.find_issues_with_org(org, query, sort, ascending)
    except Exception as e:
        raise CommenterSearchError(f"search failed: {e}") from e

    outcome = RunOutcome(matched=len(issues))
    console.print(f"Found {len(issues)} matches")
    if randomize:
        (rng or random).shuffle(issues)

    for issue in issues:
        if ceiling > 0 and outcome.visited == ceiling:
            console.print(f"Stopping at --ceiling={ceiling} of {len(issues)} results")
            break
        outcome.visited += 1

        console.print(
            f"Matched {issue.html_url} ({issue.title})", markup=False, highlight=False
        )
        try:
            ref = parse_html_url(issue.html_url)
        except ValueError as e:
            _record(outcome, f"Failed to parse {issue.html_url}: {e}")
            continue

        context = CommentContext(
            number=ref.number, org=ref.org, repo=ref.repo, issue=issue
        )
        try:
            comment = commenter(context)
        except Exception as e:
            _record(outcome, f"Failed to create comment for {ref}: {e}")
            continue

        try:
            client.create_comment(ref.org, ref.repo, ref.number, comment)
        except Exception as e:
            _record(outcome, f"Failed to apply comment to {ref}: {e}")
            continue

        outcome.commented += 1
        console.print(f"Commented on {issue.html_url}", markup=False, highlight=False)

    if outcome.problems:
        raise CommenterRunError(outcome)
    return outcome
