"""GitHub API client using PyGitHub."""

import logging
import time

from github import Auth, Github, GithubIntegration
from github.GithubException import RateLimitExceededException, UnknownObjectException
from github.Issue import Issue
from github.Label import Label
from github.NamedUser import NamedUser
from github.Repository import Repository
from rich.console import Console

from .auth import GitHubAuthOptions
from .models import GitHubIssue, GitHubLabel, GitHubUser

console = Console()
logger = logging.getLogger(__name__)

SEARCH_ATTEMPTS = 3
RATE_LIMIT_WAIT_SECONDS = 60


class GitHubClient:
    """GitHub API client with rate limiting, authentication and a dry-run mode.

    In dry-run mode searches hit the API but comments are only reported.
    """

    def __init__(
        self,
        auth: GitHubAuthOptions,
        dry_run: bool = True,
        org: str | None = None,
    ):
        """Initialize GitHub client with authentication.

        Args:
            auth: Token or GitHub App credentials
            dry_run: Report mutations instead of performing them
            org: Organization whose GitHub App installation is used. Required
                with GitHub App credentials.
        """
        self.auth = auth
        self.dry_run = dry_run
        self.org = org

        if auth.uses_app_auth:
            if not org:
                raise ValueError("GitHub App authentication requires an organization")
            self.github = self._installation_client(org)
        else:
            self.github = Github(
                auth=Auth.Token(auth.resolve_token()), base_url=auth.endpoint
            )

    def _installation_client(self, org: str) -> Github:
        """Build a client authenticated as the GitHub App installation of org."""
        app_auth = Auth.AppAuth(self.auth.app_id, self.auth.read_private_key())
        integration = GithubIntegration(auth=app_auth, base_url=self.auth.endpoint)
        installation = integration.get_org_installation(org)
        return integration.get_github_for_installation(installation.id)

    def _check_rate_limit(self) -> None:
        """Check rate limit and sleep if necessary."""
        try:
            rate_limit = self.github.get_rate_limit()
            remaining = rate_limit.rate.remaining
            logger.debug("GitHub API rate limit: %s requests remaining", remaining)

            if remaining < 10:
                reset_time = rate_limit.rate.reset.timestamp()
                sleep_time = reset_time - time.time() + 1
                console.print(
                    f"Rate limit low, sleeping for {sleep_time:.1f} seconds..."
                )
                time.sleep(sleep_time)

        except Exception as e:
            # Not critical, the request itself reports exhaustion
            logger.debug("Could not check rate limit: %s", e)

    def _convert_user(self, github_user: NamedUser) -> GitHubUser:
        """Convert PyGitHub user to our model."""
        return GitHubUser(login=github_user.login, id=github_user.id)

    def _convert_label(self, github_label: Label) -> GitHubLabel:
        """Convert PyGitHub label to our model."""
        return GitHubLabel(
            name=github_label.name,
            color=github_label.color or "",
            description=github_label.description,
        )

    def _convert_issue(self, github_issue: Issue) -> GitHubIssue:
        """Convert PyGitHub issue to our model."""
        return GitHubIssue(
            number=github_issue.number,
            title=github_issue.title,
            html_url=github_issue.html_url,
            state=github_issue.state,
            locked=bool(github_issue.locked),
            body=github_issue.body,
            user=self._convert_user(github_issue.user),
            assignees=[self._convert_user(u) for u in github_issue.assignees],
            labels=[self._convert_label(label) for label in github_issue.labels],
            created_at=github_issue.created_at,
            updated_at=github_issue.updated_at,
            is_pull_request=github_issue.pull_request is not None,
        )

    def get_repository(self, org: str, repo: str) -> Repository:
        """Get repository object."""
        try:
            return self.github.get_repo(f"{org}/{repo}")
        except UnknownObjectException:
            raise ValueError(f"Repository {org}/{repo} not found")

    def find_issues_with_org(
        self,
        org: str,
        query: str,
        sort: str | None = None,
        ascending: bool = False,
    ) -> list[GitHubIssue]:
        """Search issues and pull requests.

        Args:
            org: Organization the search is made on behalf of. With GitHub App
                credentials this must be the organization the client was
                built for.
            query: Complete GitHub search query
            sort: Sort field (comments, created, updated) or None for best match
            ascending: Sort ascending instead of descending

        Returns:
            List of GitHubIssue objects in search order
        """
        if org and self.org and org != self.org:
            raise ValueError(
                f"Client is authenticated for {self.org}, cannot search as {org}"
            )

        self._check_rate_limit()

        kwargs = {}
        if sort:
            kwargs["sort"] = sort
            kwargs["order"] = "asc" if ascending else "desc"

        for attempt in range(1, SEARCH_ATTEMPTS + 1):
            try:
                return [
                    self._convert_issue(github_issue)
                    for github_issue in self.github.search_issues(query, **kwargs)
                ]
            except RateLimitExceededException:
                if attempt == SEARCH_ATTEMPTS:
                    raise
                console.print("Rate limit exceeded, waiting...")
                time.sleep(RATE_LIMIT_WAIT_SECONDS)
        return []

    def create_comment(self, org: str, repo: str, number: int, comment: str) -> None:
        """Add a comment to an issue or pull request.

        Comment creation is attempted once; rate limiting is reported to the
        caller like any other API error.

        Args:
            org: Organization name
            repo: Repository name
            number: Issue or pull request number
            comment: Comment text to add

        Raises:
            ValueError: If repository or issue not found
            Exception: For other API errors, including RateLimitExceededException
        """
        if self.dry_run:
            console.print(f"[dim]Dry run: not commenting on {org}/{repo}#{number}[/dim]")
            logger.debug("Dry run comment for %s/%s#%s:\n%s", org, repo, number, comment)
            return

        self._check_rate_limit()

        try:
            repository = self.get_repository(org, repo)
            github_issue = repository.get_issue(number)
            github_issue.create_comment(comment)
        except UnknownObjectException:
            raise ValueError(f"Issue #{number} not found in {org}/{repo}")
