"""GitHub API interface (port) for fetching user and repository data.

This is the anti-corruption layer that shields the domain from GitHub API specifics.
"""
from abc import ABC, abstractmethod
from github_summary.domain.models import RepositoryPage, UserProfile


class IGitHubClient(ABC):
    """Abstract interface for GitHub API operations."""

    @abstractmethod
    async def fetch_user(self, login: str) -> UserProfile:
        """Fetch the profile of a single user.

        Args:
            login: GitHub login, used as given

        Raises:
            GitHubApiAccessError: On any transport error or non-2xx response
        """
        pass

    @abstractmethod
    async def fetch_repository_page(self, login: str, page_number: int) -> RepositoryPage:
        """Fetch one page of a user's repositories, sorted by name.

        Args:
            login: GitHub login, used as given
            page_number: 1-based page to fetch

        Raises:
            GitHubApiAccessError: On any transport error or non-2xx response
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections."""
        pass
