"""Domain models representing GitHub users, repositories and summaries."""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple


# Format used for summary timestamps, e.g. "Tue, 25 Jan 2011 18:44:36 GMT"
SUMMARY_TIMESTAMP_FORMAT = "%a, %d %b %Y %H:%M:%S GMT"


def parse_github_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO 8601 timestamp as returned by the GitHub REST API."""
    if not value:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


@dataclass(frozen=True)
class UserProfile:
    """Immutable GitHub user profile as fetched from the upstream API."""
    login: str
    name: Optional[str] = None
    email: Optional[str] = None
    avatar_url: Optional[str] = None
    url: Optional[str] = None
    created_at: Optional[datetime] = None
    location: Optional[str] = None

    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> 'UserProfile':
        """Build a profile from a `/users/{login}` response body.

        Unknown fields are ignored.
        """
        login = payload["login"]
        if not isinstance(login, str):
            raise TypeError(f"login must be a string, got {type(login).__name__}")
        return cls(
            login=login,
            name=payload.get("name"),
            email=payload.get("email"),
            avatar_url=payload.get("avatar_url"),
            url=payload.get("url"),
            created_at=parse_github_timestamp(payload.get("created_at")),
            location=payload.get("location")
        )


@dataclass(frozen=True)
class RepositoryRef:
    """Reference to a single repository owned by a user."""
    name: str
    url: str

    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> 'RepositoryRef':
        return cls(name=payload["name"], url=payload["url"])


@dataclass(frozen=True)
class RepositoryPage:
    """One page of a user's repository listing."""
    repositories: Tuple[RepositoryRef, ...]
    has_next_page: bool


@dataclass(frozen=True)
class UserSummary:
    """Consolidated view of a user and all of their repositories.

    This is the unit returned to callers and stored in the fallback cache.
    `user_name` is always the normalized (lowercase) login.
    """
    user_name: str
    display_name: Optional[str]
    avatar: Optional[str]
    geo_location: Optional[str]
    email: Optional[str]
    url: Optional[str]
    created_at: Optional[datetime]
    repos: Tuple[RepositoryRef, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the JSON shape exposed by the HTTP API."""
        created_at = None
        if self.created_at is not None:
            moment = self.created_at
            if moment.tzinfo is None:
                moment = moment.replace(tzinfo=timezone.utc)
            created_at = moment.astimezone(timezone.utc).strftime(SUMMARY_TIMESTAMP_FORMAT)
        return {
            "userName": self.user_name,
            "displayName": self.display_name,
            "avatar": self.avatar,
            "geoLocation": self.geo_location,
            "email": self.email,
            "url": self.url,
            "createdAt": created_at,
            "repos": [{"name": repo.name, "url": repo.url} for repo in self.repos]
        }
