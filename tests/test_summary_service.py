"""Tests for the user summary service."""
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock
import pytest
from github_summary.application.summary_builder import build_summary
from github_summary.application.summary_service import UserSummaryService
from github_summary.domain.cache_interface import ISummaryCache
from github_summary.domain.exceptions import GitHubApiAccessError, GitHubUserNotFoundError
from github_summary.domain.github_interface import IGitHubClient
from github_summary.domain.models import RepositoryPage, RepositoryRef, UserProfile, UserSummary
from github_summary.infrastructure.summary_cache import TTLSummaryCache


OCTOCAT = UserProfile(
    login="octocat",
    name="The Octocat",
    avatar_url="https://avatars.githubusercontent.com/u/583231?v=4",
    url="https://api.github.com/users/octocat",
    created_at=datetime(2011, 1, 25, 18, 44, 36, tzinfo=timezone.utc),
    location="San Francisco"
)
REPOS = (
    RepositoryRef(name="boysenberry-repo-1", url="https://api.github.com/repos/octocat/boysenberry-repo-1"),
    RepositoryRef(name="git-consortium", url="https://api.github.com/repos/octocat/git-consortium"),
)
PRIOR_FLAKY = UserSummary(
    user_name="flaky",
    display_name="Flaky McFlakeface",
    avatar="http://flaky/avatar",
    geo_location="Nowhere",
    email="flaky@example.org",
    url="https://api.github.com/users/flaky",
    created_at=datetime(2015, 3, 1, tzinfo=timezone.utc),
    repos=(RepositoryRef(name="old-repo", url="https://api.github.com/repos/flaky/old-repo"),)
)


def access_error(username, status):
    return GitHubApiAccessError(username, f"{status} on GET /users/{username}", status=status)


@pytest.fixture
def github_client():
    client = AsyncMock(spec=IGitHubClient)
    client.fetch_user.return_value = OCTOCAT
    client.fetch_repository_page.return_value = RepositoryPage(repositories=REPOS, has_next_page=False)
    return client


@pytest.fixture
def cache():
    return TTLSummaryCache()


@pytest.fixture
def service(github_client, cache):
    return UserSummaryService(github_client=github_client, cache=cache)


async def test_fresh_summary_is_returned_and_cached(service, github_client, cache):
    """Test the happy path: profile and one page of repositories."""
    summary = await service.get_user_summary("octocat")

    assert summary == build_summary(OCTOCAT, REPOS)
    assert len(summary.repos) == 2
    github_client.fetch_repository_page.assert_awaited_once_with("octocat", 1)
    assert cache.lookup("octocat") == summary


async def test_username_is_normalized(service, github_client, cache):
    """Test that mixed case input is lowercased for upstream calls and the cache key."""
    summary = await service.get_user_summary("OctoCat")

    github_client.fetch_user.assert_awaited_once_with("octocat")
    github_client.fetch_repository_page.assert_awaited_once_with("octocat", 1)
    assert summary.user_name == "octocat"
    assert cache.lookup("octocat") == summary
    assert cache.lookup("OctoCat") is None


async def test_user_not_found(service, github_client, cache):
    """Test that a 404 profile raises not found and skips repository calls."""
    github_client.fetch_user.side_effect = access_error("ghost", 404)

    with pytest.raises(GitHubUserNotFoundError) as excinfo:
        await service.get_user_summary("ghost")

    assert excinfo.value.username == "ghost"
    assert str(excinfo.value) == "User not found in GitHub: ghost"
    github_client.fetch_repository_page.assert_not_awaited()
    assert len(cache) == 0


async def test_user_not_found_ignores_cache(github_client):
    """Test that a cached entry never masks a 404."""
    cache = MagicMock(spec=ISummaryCache)
    cache.lookup.return_value = PRIOR_FLAKY
    github_client.fetch_user.side_effect = access_error("flaky", 404)
    service = UserSummaryService(github_client=github_client, cache=cache)

    with pytest.raises(GitHubUserNotFoundError):
        await service.get_user_summary("flaky")

    cache.lookup.assert_not_called()
    cache.store.assert_not_called()


async def test_profile_failure_falls_back_to_cache(github_client):
    """Test that a 500 on the profile call serves the cached summary unchanged."""
    cache = MagicMock(spec=ISummaryCache)
    cache.lookup.return_value = PRIOR_FLAKY
    github_client.fetch_user.side_effect = access_error("flaky", 500)
    service = UserSummaryService(github_client=github_client, cache=cache)

    summary = await service.get_user_summary("flaky")

    assert summary is PRIOR_FLAKY
    cache.lookup.assert_called_once_with("flaky")
    cache.store.assert_not_called()


async def test_profile_failure_without_cache_propagates(service, github_client, cache):
    """Test that the original error surfaces when nothing is cached."""
    error = access_error("flaky", 500)
    github_client.fetch_user.side_effect = error

    with pytest.raises(GitHubApiAccessError) as excinfo:
        await service.get_user_summary("flaky")

    assert excinfo.value is error
    assert excinfo.value.username == "flaky"
    assert excinfo.value.status == 500
    assert len(cache) == 0


async def test_repository_failure_falls_back_to_cache(service, github_client, cache):
    """Test that a failing repository page uses the same fallback path."""
    cache.store("flaky", PRIOR_FLAKY)
    github_client.fetch_user.return_value = UserProfile(login="flaky", name="Flaky Today")
    github_client.fetch_repository_page.side_effect = access_error("flaky", 503)

    summary = await service.get_user_summary("Flaky")

    assert summary == PRIOR_FLAKY
    assert cache.lookup("flaky") == PRIOR_FLAKY


async def test_repository_not_found_is_not_authoritative(service, github_client):
    """Test that only a profile 404 means not found."""
    github_client.fetch_repository_page.side_effect = access_error("octocat", 404)

    with pytest.raises(GitHubApiAccessError):
        await service.get_user_summary("octocat")


async def test_transport_failure_falls_back(service, github_client, cache):
    """Test that errors without a status are treated like server errors."""
    cache.store("octocat", PRIOR_FLAKY)
    github_client.fetch_user.side_effect = GitHubApiAccessError("octocat", "timed out")

    assert await service.get_user_summary("octocat") == PRIOR_FLAKY


async def test_fresh_fetch_replaces_cached_entry(service, cache):
    """Test that a successful fetch overwrites an older cache entry."""
    stale = build_summary(UserProfile(login="octocat", name="Old Name"), [])
    cache.store("octocat", stale)

    summary = await service.get_user_summary("octocat")

    assert cache.lookup("octocat") == summary
    assert summary.display_name == "The Octocat"


async def test_repository_pages_are_concatenated(github_client, cache):
    """Test that the service walks every repository page."""
    github_client.fetch_repository_page.side_effect = [
        RepositoryPage(repositories=REPOS[:1], has_next_page=True),
        RepositoryPage(repositories=REPOS[1:], has_next_page=False),
    ]
    service = UserSummaryService(github_client=github_client, cache=cache)

    summary = await service.get_user_summary("octocat")

    assert summary.repos == REPOS
    assert github_client.fetch_repository_page.await_count == 2


async def test_close_closes_client(service, github_client):
    await service.close()

    github_client.close.assert_awaited_once()


async def test_renamed_user_keeps_requested_identity(service, github_client, cache):
    """Test that a profile served under a new login is keyed by the requested name."""
    github_client.fetch_user.return_value = UserProfile(login="NewName", name="Renamed User")

    summary = await service.get_user_summary("OldName")

    assert summary.user_name == "oldname"
    assert cache.lookup("oldname") == summary
    assert cache.lookup("newname") is None
