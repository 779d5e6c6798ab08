"""Comment producers: a fixed string or a Jinja2 template per issue."""

from collections.abc import Callable

from jinja2 import Environment, StrictUndefined, TemplateError

from ..github_client.models import CommentContext

TEMPLATE_HELP = """Treat --comment as a Jinja2 template.
Valid placeholders:
    {{ org }} - github org
    {{ repo }} - github repo
    {{ number }} - issue number
Advanced:
    {{ issue.user.login }} - github account
    {{ issue.title }}
    {{ issue.state }}
    {{ issue.html_url }}
    {{ issue.assignees }} - list of assigned users (.login)
    {{ issue.labels }} - list of applied labels (.name)
"""

Commenter = Callable[[CommentContext], str]


class CommentTemplateError(ValueError):
    """Raised when a comment template cannot be compiled or rendered."""


def make_commenter(comment: str, use_template: bool = False) -> Commenter:
    """Build the function producing the comment for each issue.

    Args:
        comment: Literal comment, or template source when use_template is set
        use_template: Render comment as a Jinja2 template per issue

    Returns:
        Function mapping a CommentContext to comment text

    Raises:
        CommentTemplateError: If the template has a syntax error
    """
    if not use_template:
        return lambda _context: comment

    environment = Environment(undefined=StrictUndefined, keep_trailing_newline=True)
    try:
        template = environment.from_string(comment)
    except TemplateError as e:
        raise CommentTemplateError(f"invalid comment template: {e}") from e

    def render(context: CommentContext) -> str:
        try:
            return template.render(
                number=context.number,
                org=context.org,
                repo=context.repo,
                issue=context.issue,
            )
        except TemplateError as e:
            raise CommentTemplateError(f"failed to render comment: {e}") from e

    return render
