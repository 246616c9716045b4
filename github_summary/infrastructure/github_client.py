"""GitHub REST API client implementation."""
import asyncio
import logging
from typing import Any, Dict, Optional, Tuple
import aiohttp
from github_summary.domain.exceptions import GitHubApiAccessError
from github_summary.domain.github_interface import IGitHubClient
from github_summary.domain.models import RepositoryPage, RepositoryRef, UserProfile


logger = logging.getLogger(__name__)


DEFAULT_API_URL = "https://api.github.com"


def has_next_page(link_header: Optional[str]) -> bool:
    """Return True if a Link header advertises a `next` relation.

    GitHub formats the header as
    `<https://api.github.com/...?page=2>; rel="next", <...>; rel="last"`.
    Parsing is deliberately loose: quotes around the relation are optional and
    any relation value containing "next" counts.
    """
    if not link_header:
        return False

    for segment in link_header.split(","):
        for parameter in segment.split(";")[1:]:
            key, _, value = parameter.partition("=")
            if key.strip().lower() != "rel":
                continue
            if "next" in value.strip().strip('"\''):
                return True
    return False


class GitHubRestClient(IGitHubClient):
    """GitHub REST API client backed by a shared aiohttp session.

    Implements the IGitHubClient port. Every failure, whether an HTTP error
    status or a transport problem, is reported as a GitHubApiAccessError tagged
    with the login the call was made for. No retries are attempted.
    """

    def __init__(self, base_url: str = DEFAULT_API_URL, timeout_seconds: float = 30.0):
        """Initialize GitHub client.

        Args:
            base_url: Root of the GitHub REST API
            timeout_seconds: Total time allowed per request
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._session: Optional[aiohttp.ClientSession] = None

    async def _init_session(self) -> aiohttp.ClientSession:
        """Initialize the HTTP session (lazy initialization)."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=self._timeout,
                headers={"Accept": "application/vnd.github+json"}
            )
        return self._session

    async def _get(
        self,
        login: str,
        path: str,
        params: Optional[Dict[str, str]] = None
    ) -> Tuple[Any, Optional[str]]:
        """Issue a GET request and return the decoded body and Link header.

        Raises:
            GitHubApiAccessError: On transport errors, non-2xx statuses or
                undecodable bodies
        """
        session = await self._init_session()
        url = f"{self._base_url}{path}"

        try:
            async with session.get(url, params=params) as response:
                if not 200 <= response.status < 300:
                    raise GitHubApiAccessError(
                        login,
                        f"{response.status} {response.reason} on GET {path}",
                        status=response.status
                    )
                try:
                    body = await response.json(content_type=None)
                except ValueError as e:
                    raise GitHubApiAccessError(
                        login,
                        f"Invalid JSON body on GET {path}: {e}",
                        status=response.status
                    ) from e
                return body, response.headers.get("Link")
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise GitHubApiAccessError(
                login,
                f"Error calling GET {path}: {e!r}"
            ) from e

    async def fetch_user(self, login: str) -> UserProfile:
        """Fetch a user profile from `/users/{login}`."""
        body, _ = await self._get(login, f"/users/{login}")
        try:
            return UserProfile.from_api(body)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise GitHubApiAccessError(
                login, f"Unexpected user payload for {login}: {e!r}", status=200
            ) from e

    async def fetch_repository_page(self, login: str, page_number: int) -> RepositoryPage:
        """Fetch one page of `/users/{login}/repos` sorted by name.

        The page carries whether the Link header announced another page.
        """
        body, link_header = await self._get(
            login,
            f"/users/{login}/repos",
            params={"sort": "name", "page": str(page_number)}
        )
        if not isinstance(body, list):
            raise GitHubApiAccessError(
                login, f"Unexpected repository payload for {login}", status=200
            )
        try:
            repositories = tuple(RepositoryRef.from_api(item) for item in body)
        except (KeyError, TypeError) as e:
            raise GitHubApiAccessError(
                login, f"Unexpected repository payload for {login}: {e!r}", status=200
            ) from e

        logger.info(
            f"Fetched {len(repositories)} repositories for {login} (page {page_number})"
        )
        return RepositoryPage(repositories=repositories, has_next_page=has_next_page(link_header))

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session:
            await self._session.close()
            self._session = None
