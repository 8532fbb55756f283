from typing import Any
import logging
from core.client import get_client  # type: ignore
from utils import dump_error, dump_result  # type: ignore

logger = logging.getLogger(__name__)


async def add_reaction(post_id: str, emoji_name: str) -> str:
    """Add an emoji reaction to a post.

    Args:
        post_id: The post to react to.
        emoji_name: Emoji name without colons, e.g. "thumbsup".
    """
    emoji_name = (emoji_name or "").strip().strip(":")
    if not emoji_name:
        return dump_error("emoji_name must not be empty")
    try:
        reaction = await get_client().add_reaction(post_id, emoji_name)
        return dump_result(
            {
                "post_id": reaction.get("post_id"),
                "user_id": reaction.get("user_id"),
                "emoji_name": reaction.get("emoji_name"),
            }
        )
    except Exception as e:
        logger.exception(f"Error adding reaction to {post_id}")
        return dump_error(e)


def get_tools() -> dict[str, Any]:
    return {
        "mattermost_add_reaction": {
            "func": add_reaction,
            "title": "Add reaction",
            "description": "Add an emoji reaction to a Mattermost message",
        }
    }
