"""Search-and-comment batch processing."""

from .runner import (
    CommenterError,
    CommenterRunError,
    CommenterSearchError,
    IssueCommentClient,
    RunOutcome,
    run_commenter,
)
from .templates import TEMPLATE_HELP, CommentTemplateError, make_commenter

__all__ = [
    "CommenterError",
    "CommenterRunError",
    "CommenterSearchError",
    "CommentTemplateError",
    "IssueCommentClient",
    "RunOutcome",
    "TEMPLATE_HELP",
    "make_commenter",
    "run_commenter",
]
