from typing import Any
import logging
from core.client import get_client  # type: ignore
from core.formatter import format_channel, format_channels, format_post_history
from core.errors import InvalidFilterError
from core.models import FilterSet, validate_paging
from utils import dump_error, dump_result  # type: ignore

logger = logging.getLogger(__name__)

MAX_CHANNELS_PER_PAGE = 200


async def list_channels(limit: int = 100, page: int = 0) -> str:
    """List public channels of the configured team, one page at a time.

    Args:
        limit: Channels per page (default 100, max 200).
        page: Zero-based page index.
    """
    try:
        validate_paging(page or 0, limit or 0)
        limit = min(limit or 100, MAX_CHANNELS_PER_PAGE)
        page = page or 0
        envelope = await get_client().get_channels(limit, page)
        return dump_result(format_channels(envelope, page, limit))
    except InvalidFilterError as e:
        logger.warning(f"Rejected list_channels arguments: {e}")
        return dump_error(e)
    except Exception as e:
        logger.exception("Error listing channels")
        return dump_error(e)


async def list_my_channels(limit: int = 100, page: int = 0) -> str:
    """List channels the authenticated user belongs to, including private channels and DMs."""
    try:
        validate_paging(page or 0, limit or 0)
        limit = min(limit or 100, MAX_CHANNELS_PER_PAGE)
        page = page or 0
        envelope = await get_client().get_my_channels(limit, page)
        return dump_result(format_channels(envelope, page, limit))
    except InvalidFilterError as e:
        logger.warning(f"Rejected list_my_channels arguments: {e}")
        return dump_error(e)
    except Exception as e:
        logger.exception("Error listing user channels")
        return dump_error(e)


async def get_channel(channel_id: str) -> str:
    """Return id, name, type, purpose and header of one channel."""
    try:
        channel = await get_client().get_channel(channel_id)
        return dump_result(format_channel(channel))
    except Exception as e:
        logger.exception(f"Error getting channel {channel_id}")
        return dump_error(e)


async def get_channel_history(
    channel_id: str,
    limit: int = 30,
    page: int = 0,
    since_date: str | None = None,
    before_post_id: str | None = None,
    after_post_id: str | None = None,
    get_all: bool = False,
    max_posts: int | None = None,
) -> str:
    """Get messages from a channel, newest first.

    Args:
        channel_id: The channel to read.
        limit: Messages per page (default 30). 0 fetches every message, like get_all.
        page: Zero-based page index; ignored when fetching everything.
        since_date: ISO 8601 date or datetime; only messages created at or after it.
        before_post_id: Only messages before this post.
        after_post_id: Only messages after this post.
        get_all: Walk every page and return one combined list.
        max_posts: Upper bound on messages returned when fetching everything.
            Rejected unless get_all is set or limit is 0.
    """
    page = page or 0
    try:
        validate_paging(page, limit or 0)
        get_all = bool(get_all) or limit == 0
        if max_posts is not None and not get_all:
            raise InvalidFilterError("max_posts only applies when get_all is true or limit is 0")
        filters = FilterSet.from_tool_args(since_date, before_post_id, after_post_id)
        client = get_client()
        if get_all:
            result = await client.get_all_posts_for_channel(channel_id, filters, max_posts=max_posts)
        else:
            result = await client.get_posts_for_channel(channel_id, limit, page, filters)
        return dump_result(
            format_post_history(
                result,
                get_all=get_all,
                page=page,
                per_page=limit,
                since_date=since_date,
                before_post_id=before_post_id,
                after_post_id=after_post_id,
            )
        )
    except InvalidFilterError as e:
        logger.warning(f"Rejected channel history arguments for {channel_id}: {e}")
        return dump_error(e)
    except Exception as e:
        logger.exception(f"Error getting channel history for {channel_id}")
        return dump_error(e)


def get_tools() -> dict[str, Any]:
    return {
        "mattermost_list_channels": {
            "func": list_channels,
            "title": "List channels",
            "description": "List public channels in the Mattermost workspace with pagination",
        },
        "mattermost_list_my_channels": {
            "func": list_my_channels,
            "title": "List my channels",
            "description": "List channels the authenticated user is a member of, including private channels and direct messages",
        },
        "mattermost_get_channel": {
            "func": get_channel,
            "title": "Get channel",
            "description": "Get details of a single Mattermost channel by id",
        },
        "mattermost_get_channel_history": {
            "func": get_channel_history,
            "title": "Get channel history",
            "description": "Get recent messages from a Mattermost channel. Set get_all (or limit 0) to page through the whole history, optionally capped by max_posts",
        },
    }
