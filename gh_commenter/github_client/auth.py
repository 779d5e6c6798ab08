"""Authentication options for the GitHub client."""

import os
from pathlib import Path
from urllib.parse import urlparse

DEFAULT_ENDPOINT = "https://api.github.com"


class GitHubAuthOptions:
    """Token or GitHub App credentials used to build a GitHub client."""

    def __init__(
        self,
        token: str | None = None,
        token_path: str | None = None,
        app_id: str | None = None,
        app_private_key_path: str | None = None,
        endpoint: str = DEFAULT_ENDPOINT,
    ) -> None:
        """Initialize authentication options.

        Args:
            token: GitHub personal access token. If None, the token path and
                then the GITHUB_TOKEN env var are used.
            token_path: File containing a GitHub token
            app_id: GitHub App ID
            app_private_key_path: PEM private key of the GitHub App
            endpoint: GitHub API base URL
        """
        self.token = token
        self.env_token = os.getenv("GITHUB_TOKEN")
        self.token_path = token_path
        self.app_id = app_id
        self.app_private_key_path = app_private_key_path
        self.endpoint = endpoint

    @property
    def uses_app_auth(self) -> bool:
        """Whether GitHub App credentials are configured."""
        return bool(self.app_id)

    def has_credentials(self) -> bool:
        """Check if any authentication method is configured."""
        if self.app_id:
            return True
        return bool(self.token or self.token_path or self.env_token)

    def validate(self) -> None:
        """Validate configuration and raise error if invalid."""
        if self.token and self.token_path:
            raise ValueError("--token and --github-token-path are mutually exclusive")
        if self.app_id and (self.token_path or self.token):
            raise ValueError(
                "GitHub token and GitHub App credentials are mutually exclusive"
            )
        if self.app_id and not self.app_private_key_path:
            raise ValueError("--github-app-id requires --github-app-private-key-path")
        if self.app_private_key_path and not self.app_id:
            raise ValueError("--github-app-private-key-path requires --github-app-id")

        for path in (self.token_path, self.app_private_key_path):
            if path and not Path(path).is_file():
                raise ValueError(f"File {path} does not exist")

        parsed = urlparse(self.endpoint)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"Invalid GitHub endpoint: {self.endpoint}")

    def resolve_token(self) -> str:
        """Return the configured token, reading the token file if needed."""
        if self.token_path:
            token = Path(self.token_path).read_text().strip()
        else:
            token = self.token or self.env_token or ""
        if not token:
            raise ValueError(
                "GitHub token is required. Set GITHUB_TOKEN environment variable."
            )
        return token

    def read_private_key(self) -> str:
        """Return the GitHub App private key contents."""
        if not self.app_private_key_path:
            raise ValueError("GitHub App private key path is not configured")
        return Path(self.app_private_key_path).read_text()
