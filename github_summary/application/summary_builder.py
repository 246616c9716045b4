"""Builds a user summary from a profile and its repositories."""
from typing import Iterable, Optional
from github_summary.domain.models import RepositoryRef, UserProfile, UserSummary


def build_summary(
    profile: UserProfile,
    repositories: Iterable[RepositoryRef],
    user_name: Optional[str] = None
) -> UserSummary:
    """Map a fetched profile and repository list onto a UserSummary.

    Repository order is preserved. The inputs are left untouched.

    Args:
        profile: Profile returned by GitHub
        repositories: Repositories in the order GitHub served them
        user_name: Normalized login the summary is requested and cached
            under. Defaults to the lowercase profile login.
    """
    return UserSummary(
        user_name=user_name if user_name is not None else profile.login.lower(),
        display_name=profile.name,
        avatar=profile.avatar_url,
        geo_location=profile.location,
        email=profile.email,
        url=profile.url,
        created_at=profile.created_at,
        repos=tuple(RepositoryRef(name=repo.name, url=repo.url) for repo in repositories)
    )
