"""Fetch a single GitHub user summary and print it as JSON."""
import asyncio
import json
import logging
import sys
from github_summary.api.app import USERNAME_PATTERN
from github_summary.config import load_settings
from github_summary.domain.exceptions import GitHubSummaryError
from serve_summary import build_service


async def fetch(username: str) -> int:
    """Print the summary for a user; return the process exit code."""
    if not USERNAME_PATTERN.match(username):
        print(f"❌ Username provided was invalid: {username!r}", file=sys.stderr)
        return 2

    service = build_service(load_settings())
    try:
        summary = await service.get_user_summary(username)
    except GitHubSummaryError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1
    finally:
        await service.close()

    print(json.dumps(summary.to_dict(), indent=2))
    return 0


def main():
    if len(sys.argv) != 2:
        print("Usage: python scripts/fetch_summary.py <username>", file=sys.stderr)
        sys.exit(2)

    logging.basicConfig(
        level=logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    sys.exit(asyncio.run(fetch(sys.argv[1])))


if __name__ == "__main__":
    main()
