"""Summary cache interface (port) used as a fallback when GitHub is unavailable."""
from abc import ABC, abstractmethod
from typing import Optional
from github_summary.domain.models import UserSummary


class ISummaryCache(ABC):
    """Abstract interface for the user summary fallback cache.

    Reads never populate the cache; entries only appear through `store`.
    """

    @abstractmethod
    def lookup(self, username: str) -> Optional[UserSummary]:
        """Return the cached summary for a normalized username, or None."""
        pass

    @abstractmethod
    def store(self, username: str, summary: UserSummary) -> None:
        """Insert or replace the summary for a normalized username.

        Resets the entry's expiration clock.
        """
        pass
