"""CLI command appending a comment to every issue matching a search."""

import logging
from typing import NoReturn

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from ..commenter.runner import CommenterError, run_commenter
from ..commenter.templates import CommentTemplateError, make_commenter
from ..github_client.auth import GitHubAuthOptions
from ..github_client.client import GitHubClient
from ..github_client.search import (
    QueryConflictError,
    build_search_query,
    search_order,
)
from ..utils.duration import format_duration, parse_duration
from .options import (
    APP_ID_OPTION,
    APP_PRIVATE_KEY_PATH_OPTION,
    CEILING_OPTION,
    COMMENT_OPTION,
    CONFIRM_OPTION,
    ENDPOINT_OPTION,
    INCLUDE_ARCHIVED_OPTION,
    INCLUDE_CLOSED_OPTION,
    INCLUDE_LOCKED_OPTION,
    ORG_OPTION,
    QUERY_OPTION,
    RANDOM_OPTION,
    TEMPLATE_OPTION,
    TOKEN_OPTION,
    TOKEN_PATH_OPTION,
    UPDATED_OPTION,
    VERBOSE_OPTION,
)

console = Console()


def _fail(message: str) -> NoReturn:
    console.print(f"❌ [red]Error: {escape(message)}[/red]")
    raise typer.Exit(1)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


def comment_on_issues(
    org: str = ORG_OPTION,
    query: str = QUERY_OPTION,
    updated: str = UPDATED_OPTION,
    include_archived: bool = INCLUDE_ARCHIVED_OPTION,
    include_closed: bool = INCLUDE_CLOSED_OPTION,
    include_locked: bool = INCLUDE_LOCKED_OPTION,
    confirm: bool = CONFIRM_OPTION,
    comment: str = COMMENT_OPTION,
    use_template: bool = TEMPLATE_OPTION,
    ceiling: int = CEILING_OPTION,
    random_order: bool = RANDOM_OPTION,
    token: str | None = TOKEN_OPTION,
    token_path: str | None = TOKEN_PATH_OPTION,
    app_id: str | None = APP_ID_OPTION,
    app_private_key_path: str | None = APP_PRIVATE_KEY_PATH_OPTION,
    endpoint: str = ENDPOINT_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Append a comment to GitHub issues matching a search query.

    Runs in dry-run mode unless --confirm is set: matches and the comments
    that would be posted are reported, but nothing is changed. Archived,
    closed and locked issues, and issues updated within --updated, are
    excluded unless requested. At most --ceiling issues are processed.

    Examples:
        # Preview which stale bugs would be pinged
        uv run gh-commenter comment --org myorg \
            --query "org:myorg is:issue label:bug" --updated 30d \
            --comment "Is this still happening?"

        # Ping the assignee of five random stale issues
        uv run gh-commenter comment --query "repo:myorg/myrepo is:issue" \
            --template --comment "@{{ issue.user.login }} any update?" \
            --random --ceiling 5 --confirm
    """
    _configure_logging(verbose)

    if not query:
        _fail("empty --query")

    try:
        min_updated = parse_duration(updated)
    except ValueError as e:
        _fail(f"Invalid --updated: {e}")

    auth = GitHubAuthOptions(
        token=token,
        token_path=token_path,
        app_id=app_id,
        app_private_key_path=app_private_key_path,
        endpoint=endpoint,
    )
    if not auth.has_credentials():
        _fail("no github authentication options specified")
    if auth.uses_app_auth and not org:
        _fail("using github app id requires using --org flag")
    if not comment:
        _fail("empty --comment")

    try:
        auth.validate()
    except ValueError as e:
        _fail(f"validating github options: {e}")

    try:
        commenter = make_commenter(comment, use_template)
    except CommentTemplateError as e:
        _fail(f"Bad --comment: {e}")

    try:
        search_query = build_search_query(
            query,
            include_archived=include_archived,
            include_closed=include_closed,
            include_locked=include_locked,
            min_updated=min_updated,
        )
    except QueryConflictError as e:
        _fail(f"Bad query {query!r}: {e}")

    try:
        client = GitHubClient(auth, dry_run=not confirm, org=org or None)
    except Exception as e:
        _fail(f"Failed to construct GitHub client: {e}")

    if confirm:
        console.print("⚠️  [yellow]Comments will be posted to GitHub[/yellow]")
    else:
        console.print(
            "🔒 [blue]Dry run: no comments will be posted "
            "(use --confirm to post them)[/blue]"
        )
    if min_updated:
        console.print(
            f"Only matching issues unmodified for at least {format_duration(min_updated)}"
        )

    sort, ascending = search_order(min_updated)
    try:
        outcome = run_commenter(
            client,
            org,
            search_query,
            sort,
            ascending,
            random_order,
            commenter,
            ceiling,
        )
    except CommenterError as e:
        _fail(f"Failed run: {e}")

    action = "commented" if confirm else "would be commented"
    console.print(
        f"✅ [green]Processed {outcome.visited} of {outcome.matched} matches "
        f"({outcome.commented} {action})[/green]"
    )
