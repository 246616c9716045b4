"""HTTP surface for the user summary service."""
import logging
import re
from typing import Any, Dict
from aiohttp import web
from github_summary.application.summary_service import UserSummaryService
from github_summary.domain.exceptions import GitHubApiAccessError, GitHubUserNotFoundError


logger = logging.getLogger(__name__)


SUMMARY_SERVICE = web.AppKey("summary_service", UserSummaryService)

# GitHub usernames: alphanumerics and single hyphens, 1-39 characters
USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,37}[a-zA-Z0-9])?$")


def problem_response(status: int, title: str, detail: str, **properties: Any) -> web.Response:
    """Build an RFC 7807 problem detail response."""
    body: Dict[str, Any] = {
        "type": "about:blank",
        "title": title,
        "status": status,
        "detail": detail,
    }
    body.update(properties)
    return web.json_response(body, status=status, content_type="application/problem+json")


@web.middleware
async def error_middleware(request: web.Request, handler) -> web.StreamResponse:
    """Translate summary errors into problem detail responses."""
    try:
        return await handler(request)
    except web.HTTPException:
        raise
    except GitHubUserNotFoundError as e:
        logger.warning(
            f"Request was made with user that was not found in GitHub. userName: {e.username}."
        )
        return problem_response(404, "User not found in GitHub", str(e), userName=e.username)
    except GitHubApiAccessError as e:
        logger.error(f"Error accessing GitHub API for user {e.username}.", exc_info=True)
        return problem_response(500, "Error accessing GitHub API", str(e), userName=e.username)
    except Exception as e:
        logger.error("Unexpected exception occurred while handling request.", exc_info=True)
        return problem_response(
            500, "Unexpected exception occurred while handling request.", str(e)
        )


async def get_user_summary(request: web.Request) -> web.Response:
    """GET /userSummary/v1/{username}"""
    username = request.match_info["username"]
    if not USERNAME_PATTERN.match(username):
        logger.info(f"Request was made with invalid parameters. username: {username!r}.")
        return problem_response(
            400,
            "Request parameters were invalid.",
            "Username provided was invalid.",
            uri=request.path
        )

    logger.debug(f"Received github summary API request for user {username}.")
    summary = await request.app[SUMMARY_SERVICE].get_user_summary(username)
    logger.debug(f"Returning github summary response for user {username}.")
    return web.json_response(summary.to_dict())


async def _close_service(app: web.Application) -> None:
    await app[SUMMARY_SERVICE].close()


def create_app(service: UserSummaryService) -> web.Application:
    """Create the aiohttp application serving user summaries."""
    app = web.Application(middlewares=[error_middleware])
    app[SUMMARY_SERVICE] = service
    app.router.add_get("/userSummary/v1/{username}", get_user_summary)
    app.on_cleanup.append(_close_service)
    return app
