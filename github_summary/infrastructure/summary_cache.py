"""In-memory fallback cache for user summaries."""
import logging
import threading
import time
from typing import Callable, Optional
from cachetools import TTLCache
from github_summary.domain.cache_interface import ISummaryCache
from github_summary.domain.models import UserSummary


logger = logging.getLogger(__name__)


DEFAULT_MAX_SIZE = 1000
DEFAULT_EXPIRE_AFTER_WRITE = 60 * 60.0


class TTLSummaryCache(ISummaryCache):
    """Size and time bounded summary cache.

    Entries expire a fixed number of seconds after they were last written.
    When the cache is full the least recently used entry is evicted. The
    underlying TTLCache is not thread safe, so all access goes through a lock.
    """

    def __init__(
        self,
        max_size: int = DEFAULT_MAX_SIZE,
        expire_after_write: float = DEFAULT_EXPIRE_AFTER_WRITE,
        timer: Callable[[], float] = time.monotonic
    ):
        """Initialize the cache.

        Args:
            max_size: Maximum number of summaries held
            expire_after_write: Seconds an entry lives after being stored
            timer: Clock used for expiration, injectable for tests
        """
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        if expire_after_write <= 0:
            raise ValueError("expire_after_write must be positive")
        self._cache: TTLCache = TTLCache(maxsize=max_size, ttl=expire_after_write, timer=timer)
        self._lock = threading.Lock()

    def lookup(self, username: str) -> Optional[UserSummary]:
        with self._lock:
            return self._cache.get(username)

    def store(self, username: str, summary: UserSummary) -> None:
        with self._lock:
            self._cache[username] = summary
        logger.debug(f"Cached summary for {username}")

    def __len__(self) -> int:
        """Number of live entries, for diagnostics and tests."""
        with self._lock:
            self._cache.expire()
            return len(self._cache)
