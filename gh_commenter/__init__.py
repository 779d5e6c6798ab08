"""Search GitHub issues and append a comment to each match."""

__version__ = "0.1.0"
