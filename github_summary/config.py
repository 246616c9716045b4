"""Environment driven configuration for the summary service."""
import os
import re
from dataclasses import dataclass
from typing import Optional
from dotenv import load_dotenv


_DURATION_PATTERN = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*(ms|s|m|h|d)?\s*$")
_DURATION_UNITS = {"ms": 0.001, "s": 1, "m": 60, "h": 3600, "d": 86400}


def parse_duration(value: str) -> float:
    """Parse a duration such as "60m", "30s" or "90" into seconds.

    A bare number is taken as seconds.
    """
    match = _DURATION_PATTERN.match(value)
    if not match:
        raise ValueError(f"Invalid duration: {value!r}")
    amount, unit = match.groups()
    return float(amount) * _DURATION_UNITS[unit or "s"]


def _positive_int(name: str, value: str) -> int:
    number = int(value)
    if number < 1:
        raise ValueError(f"{name} must be a positive integer, got {value!r}")
    return number


def _page_limit(value: str) -> Optional[int]:
    """Empty or zero means unbounded."""
    if not value.strip():
        return None
    number = int(value)
    if number < 0:
        raise ValueError(f"MAX_REPOSITORY_PAGES must not be negative, got {value!r}")
    return number or None


@dataclass(frozen=True)
class Settings:
    """Effective runtime settings."""
    github_api_url: str = "https://api.github.com"
    cache_max_size: int = 1000
    cache_expire_after_write: float = 60 * 60.0
    request_timeout: float = 30.0
    max_repository_pages: Optional[int] = None
    server_host: str = "0.0.0.0"
    server_port: int = 8080
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> 'Settings':
        """Build settings from environment variables.

        Raises:
            ValueError: If a variable holds an invalid value
        """
        return cls(
            github_api_url=os.getenv("GITHUB_API_URL", "https://api.github.com").rstrip("/"),
            cache_max_size=_positive_int(
                "SUMMARY_CACHE_MAX_SIZE", os.getenv("SUMMARY_CACHE_MAX_SIZE", "1000")
            ),
            cache_expire_after_write=parse_duration(
                os.getenv("SUMMARY_CACHE_EXPIRE_AFTER_WRITE", "60m")
            ),
            request_timeout=parse_duration(os.getenv("GITHUB_REQUEST_TIMEOUT", "30s")),
            max_repository_pages=_page_limit(os.getenv("MAX_REPOSITORY_PAGES", "")),
            server_host=os.getenv("SERVER_HOST", "0.0.0.0"),
            server_port=int(os.getenv("SERVER_PORT", "8080")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper()
        )


def load_settings() -> Settings:
    """Load `.env` (or `env`) into the environment, then read settings."""
    load_dotenv('.env') or load_dotenv('env')
    return Settings.from_env()
