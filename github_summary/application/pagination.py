"""Walks a user's paginated repository listing."""
import logging
from typing import List, Optional
from github_summary.domain.github_interface import IGitHubClient
from github_summary.domain.models import RepositoryRef


logger = logging.getLogger(__name__)


async def fetch_all_repositories(
    github_client: IGitHubClient,
    login: str,
    max_pages: Optional[int] = None
) -> List[RepositoryRef]:
    """Fetch every repository page for a user, following Link continuation.

    Starts at page 1 and keeps requesting the next page for as long as GitHub
    reports one. Repositories are returned in the order GitHub served them.
    Any GitHubApiAccessError aborts the walk and propagates; pages fetched so
    far are discarded.

    Args:
        github_client: GitHub API client implementation
        login: GitHub login, used as given
        max_pages: Optional ceiling on pages requested. None walks until
            GitHub stops announcing a next page.

    Returns:
        All repositories across all pages
    """
    repositories: List[RepositoryRef] = []
    page_number = 1

    while True:
        page = await github_client.fetch_repository_page(login, page_number)
        repositories.extend(page.repositories)

        if not page.has_next_page:
            break

        if max_pages is not None and page_number >= max_pages:
            logger.warning(
                f"Stopping repository listing for {login} after {page_number} pages; "
                f"GitHub still reports more pages"
            )
            break

        page_number += 1

    return repositories
