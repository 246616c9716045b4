"""User summary service orchestrating GitHub fetches and the fallback cache."""
import logging
from typing import Optional
from github_summary.application.pagination import fetch_all_repositories
from github_summary.application.summary_builder import build_summary
from github_summary.domain.cache_interface import ISummaryCache
from github_summary.domain.exceptions import GitHubApiAccessError, GitHubUserNotFoundError
from github_summary.domain.github_interface import IGitHubClient
from github_summary.domain.models import UserSummary


logger = logging.getLogger(__name__)


class UserSummaryService:
    """Application service producing consolidated GitHub user summaries.

    Fresh summaries are written to the cache. When GitHub fails for any reason
    other than reporting the user missing, the last cached summary is served
    instead if one exists.
    """

    def __init__(
        self,
        github_client: IGitHubClient,
        cache: ISummaryCache,
        max_repository_pages: Optional[int] = None
    ):
        """Initialize summary service.

        Args:
            github_client: GitHub API client implementation
            cache: Fallback cache implementation
            max_repository_pages: Optional ceiling on repository pages per user
        """
        self._github_client = github_client
        self._cache = cache
        self._max_repository_pages = max_repository_pages

    async def get_user_summary(self, username: str) -> UserSummary:
        """Fetch and summarize a GitHub user and their repositories.

        Args:
            username: GitHub username in any letter case

        Returns:
            A fresh summary, or the cached one if GitHub is unavailable

        Raises:
            GitHubUserNotFoundError: GitHub reports the user does not exist
            GitHubApiAccessError: GitHub failed and nothing is cached
        """
        # GitHub logins are case insensitive; the lowercase form is our identity and cache key
        username = username.lower()

        try:
            try:
                profile = await self._github_client.fetch_user(username)
            except GitHubApiAccessError as e:
                if e.is_not_found:
                    raise GitHubUserNotFoundError(username) from e
                raise

            repositories = await fetch_all_repositories(
                self._github_client, username, max_pages=self._max_repository_pages
            )
        except GitHubApiAccessError as e:
            logger.warning(
                f"Error accessing github api for user {username}. message: {e}. "
                f"Attempting to fall back to cached version of response."
            )
            cached = self._cache.lookup(username)
            if cached is None:
                logger.warning(f"Cached response not found for user {username}.")
                raise
            logger.warning(f"Returning cached response for user {username}.")
            return cached

        summary = build_summary(profile, repositories, user_name=username)
        self._cache.store(username, summary)
        return summary

    async def close(self) -> None:
        """Close connections."""
        await self._github_client.close()
