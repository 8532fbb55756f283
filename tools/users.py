from typing import Any
import logging
from core.client import get_client  # type: ignore
from core.errors import InvalidFilterError
from core.formatter import format_channel, format_user, format_users
from core.models import validate_paging
from utils import dump_error, dump_result  # type: ignore

logger = logging.getLogger(__name__)

MAX_USERS_PER_PAGE = 200


async def get_users(limit: int = 100, page: int = 0) -> str:
    """List users with pagination.

    Args:
        limit: Users per page (default 100, max 200).
        page: Zero-based page index.
    """
    try:
        validate_paging(page or 0, limit or 0)
        limit = min(limit or 100, MAX_USERS_PER_PAGE)
        page = page or 0
        envelope = await get_client().get_users(limit, page)
        return dump_result(format_users(envelope, page, limit))
    except InvalidFilterError as e:
        logger.warning(f"Rejected get_users arguments: {e}")
        return dump_error(e)
    except Exception as e:
        logger.exception("Error listing users")
        return dump_error(e)


async def get_user_profile(user_id: str) -> str:
    """Return the public profile fields of one user."""
    try:
        user = await get_client().get_user_profile(user_id)
        return dump_result(format_user(user))
    except Exception as e:
        logger.exception(f"Error getting user profile {user_id}")
        return dump_error(e)


async def get_me() -> str:
    """Return the profile of the account the server authenticates as."""
    try:
        return dump_result(format_user(await get_client().get_me()))
    except Exception as e:
        logger.exception("Error getting current user")
        return dump_error(e)


async def create_direct_message(user_id: str) -> str:
    """Open (or reuse) the direct message channel with another user."""
    try:
        channel = await get_client().create_direct_message_channel(user_id)
        return dump_result(format_channel(channel))
    except Exception as e:
        logger.exception(f"Error creating direct message channel with {user_id}")
        return dump_error(e)


def get_tools() -> dict[str, Any]:
    return {
        "mattermost_get_users": {
            "func": get_users,
            "title": "List users",
            "description": "Get a list of users in the Mattermost workspace with pagination",
        },
        "mattermost_get_user_profile": {
            "func": get_user_profile,
            "title": "Get user profile",
            "description": "Get detailed profile information for a user",
        },
        "mattermost_get_me": {
            "func": get_me,
            "title": "Get current user",
            "description": "Get the profile of the authenticated Mattermost user",
        },
        "mattermost_create_direct_message": {
            "func": create_direct_message,
            "title": "Create direct message",
            "description": "Open a direct message channel with another user; use the returned channel id with mattermost_post_message",
        },
    }
