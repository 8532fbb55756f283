from typing import Any
import logging
from core.client import get_client  # type: ignore
from core.formatter import format_post, format_thread
from utils import dump_error, dump_result  # type: ignore

logger = logging.getLogger(__name__)


async def post_message(channel_id: str, message: str) -> str:
    """Create a new post in a channel."""
    if not message:
        return dump_error("message must not be empty")
    try:
        post = await get_client().create_post(channel_id, message)
        return dump_result(format_post(post))
    except Exception as e:
        logger.exception(f"Error posting to channel {channel_id}")
        return dump_error(e)


async def reply_to_thread(channel_id: str, post_id: str, message: str) -> str:
    """Reply in the thread rooted at `post_id`."""
    if not message:
        return dump_error("message must not be empty")
    try:
        post = await get_client().create_post(channel_id, message, root_id=post_id)
        return dump_result(format_post(post))
    except Exception as e:
        logger.exception(f"Error replying to thread {post_id}")
        return dump_error(e)


async def get_thread(post_id: str) -> str:
    """Return every post of the thread containing `post_id`, oldest first."""
    try:
        thread = await get_client().get_post_thread(post_id)
        return dump_result(format_thread(thread))
    except Exception as e:
        logger.exception(f"Error getting thread {post_id}")
        return dump_error(e)


def get_tools() -> dict[str, Any]:
    return {
        "mattermost_post_message": {
            "func": post_message,
            "title": "Post message",
            "description": "Post a new message to a Mattermost channel",
        },
        "mattermost_reply_to_thread": {
            "func": reply_to_thread,
            "title": "Reply to thread",
            "description": "Reply to a specific message thread in Mattermost",
        },
        "mattermost_get_thread": {
            "func": get_thread,
            "title": "Get thread",
            "description": "Get all replies in a message thread, oldest first",
        },
    }
