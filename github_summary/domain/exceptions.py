"""Errors raised while building user summaries."""
from typing import Optional


NOT_FOUND_STATUS = 404


class GitHubSummaryError(Exception):
    """Base class for all summary errors."""

    def __init__(self, username: str, message: str):
        super().__init__(message)
        self.username = username


class GitHubApiAccessError(GitHubSummaryError):
    """An upstream call to the GitHub API failed.

    Carries the username the call was made for and the HTTP status returned by
    GitHub. `status` is None when the request never produced a response
    (connection failure, timeout).
    """

    def __init__(self, username: str, message: str, status: Optional[int] = None):
        super().__init__(username, message)
        self.status = status

    @property
    def is_not_found(self) -> bool:
        """True when GitHub authoritatively reported the resource missing."""
        return self.status == NOT_FOUND_STATUS


class GitHubUserNotFoundError(GitHubSummaryError):
    """The requested user does not exist in GitHub."""

    def __init__(self, username: str):
        super().__init__(username, f"User not found in GitHub: {username}")
