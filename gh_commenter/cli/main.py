"""Main CLI entry point."""

import typer
from dotenv import load_dotenv
from rich.console import Console

from .comment import comment_on_issues

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(
    name="gh-commenter",
    help="Append a comment to GitHub issues matching a search query",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()


app.command(name="comment", context_settings={"help_option_names": ["-h", "--help"]})(
    comment_on_issues
)


@app.command(context_settings={"help_option_names": ["-h", "--help"]})
def version() -> None:
    """Show version information."""
    from gh_commenter import __version__

    console.print(f"GitHub Commenter v{__version__}")


if __name__ == "__main__":
    app()
