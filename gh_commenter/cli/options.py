"""Standardized CLI option definitions.

This module keeps option names, defaults and help text in one place so the
flags documented for the commenter stay consistent.
"""

import typer

from ..commenter.templates import TEMPLATE_HELP
from ..github_client.auth import DEFAULT_ENDPOINT

# Search options
ORG_OPTION = typer.Option(
    "",
    "--org",
    "-o",
    help="GitHub organization (required when using GitHub App credentials)",
)

QUERY_OPTION = typer.Option(
    "",
    "--query",
    "-q",
    help="See https://help.github.com/articles/searching-issues-and-pull-requests/",
)

UPDATED_OPTION = typer.Option(
    "2h",
    "--updated",
    help="Filter to issues unmodified for at least this long (e.g. 2h, 7d), 0 to disable",
)

INCLUDE_ARCHIVED_OPTION = typer.Option(
    False, "--include-archived", help="Match archived issues if set"
)

INCLUDE_CLOSED_OPTION = typer.Option(
    False, "--include-closed", help="Match closed issues if set"
)

INCLUDE_LOCKED_OPTION = typer.Option(
    False, "--include-locked", help="Match locked issues if set"
)

# Behavior options
CONFIRM_OPTION = typer.Option(
    False, "--confirm", help="Mutate GitHub if set, otherwise only report"
)

COMMENT_OPTION = typer.Option(
    "",
    "--comment",
    "-c",
    help="Append the following comment to matching issues",
)

TEMPLATE_OPTION = typer.Option(False, "--template", help=TEMPLATE_HELP)

CEILING_OPTION = typer.Option(
    3, "--ceiling", min=0, help="Maximum number of issues to modify, 0 for infinite"
)

RANDOM_OPTION = typer.Option(
    False, "--random", help="Choose random issues to comment on from the query"
)

VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Enable debug logging")

# Authentication options
TOKEN_OPTION = typer.Option(
    None, "--token", "-t", help="GitHub API token (defaults to GITHUB_TOKEN env var)"
)

TOKEN_PATH_OPTION = typer.Option(
    None, "--github-token-path", help="Path to a file containing a GitHub token"
)

APP_ID_OPTION = typer.Option(
    None, "--github-app-id", help="GitHub App ID used instead of a token"
)

APP_PRIVATE_KEY_PATH_OPTION = typer.Option(
    None,
    "--github-app-private-key-path",
    help="Path to the GitHub App private key (PEM)",
)

ENDPOINT_OPTION = typer.Option(
    DEFAULT_ENDPOINT, "--github-endpoint", help="GitHub API base URL"
)
