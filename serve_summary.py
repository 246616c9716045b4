"""Main entry point for the GitHub user summary service.

Wires the infrastructure components into the application service and serves
the HTTP API.
"""
import logging
from aiohttp import web
from github_summary.api.app import create_app
from github_summary.application.summary_service import UserSummaryService
from github_summary.config import Settings, load_settings
from github_summary.infrastructure.github_client import GitHubRestClient
from github_summary.infrastructure.summary_cache import TTLSummaryCache


logger = logging.getLogger(__name__)


def build_service(settings: Settings) -> UserSummaryService:
    """Create the summary service from settings."""
    github_client = GitHubRestClient(
        base_url=settings.github_api_url,
        timeout_seconds=settings.request_timeout
    )
    cache = TTLSummaryCache(
        max_size=settings.cache_max_size,
        expire_after_write=settings.cache_expire_after_write
    )
    return UserSummaryService(
        github_client=github_client,
        cache=cache,
        max_repository_pages=settings.max_repository_pages
    )


def main():
    """Start the HTTP server."""
    settings = load_settings()

    logging.basicConfig(
        level=settings.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    logger.info(
        f"Starting GitHub user summary service against {settings.github_api_url} "
        f"(cache size {settings.cache_max_size}, "
        f"expire after {settings.cache_expire_after_write:.0f}s)"
    )

    app = create_app(build_service(settings))
    web.run_app(app, host=settings.server_host, port=settings.server_port)


if __name__ == "__main__":
    main()
