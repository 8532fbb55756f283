"""Reduced-field projections returned by the tools. No I/O happens here."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union

from core.models import AggregateResult, Page

CHANNEL_FIELDS = ("id", "name", "display_name", "type", "purpose", "header", "total_msg_count")
USER_FIELDS = ("id", "username", "first_name", "last_name", "nickname", "email", "position", "roles")


def format_timestamp(millis: Any) -> Optional[str]:
    """Epoch milliseconds -> ``2025-12-18T10:00:00.000Z``."""
    if millis is None or isinstance(millis, bool):
        return None
    dt = datetime.fromtimestamp(int(millis) / 1000, tz=timezone.utc)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_post(post: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": post.get("id"),
        "user_id": post.get("user_id"),
        "message": post.get("message"),
        "create_at": format_timestamp(post.get("create_at")),
        "reply_count": post.get("reply_count"),
        "root_id": post.get("root_id") or None,
    }


def _project(entity: Dict[str, Any], fields: tuple) -> Dict[str, Any]:
    return {name: entity.get(name) for name in fields}


def format_channel(channel: Dict[str, Any]) -> Dict[str, Any]:
    return _project(channel, CHANNEL_FIELDS)


def format_user(user: Dict[str, Any]) -> Dict[str, Any]:
    return _project(user, USER_FIELDS)


def format_post_history(
    result: Union[Page, AggregateResult],
    *,
    get_all: bool,
    page: Optional[int] = None,
    per_page: Optional[int] = None,
    since_date: Optional[str] = None,
    before_post_id: Optional[str] = None,
    after_post_id: Optional[str] = None,
) -> Dict[str, Any]:
    """Shape a page or an aggregate for the channel history tool.

    Aggregation consumed the cursors, so in that mode ``has_next``/``has_prev``
    are always false and ``page``/``per_page`` are null.
    """
    posts = [format_post(result.items[post_id]) for post_id in result.order]
    paged = isinstance(result, Page) and not get_all
    return {
        "posts": posts,
        "total_posts": len(posts),
        "has_next": paged and bool(result.next),
        "has_prev": paged and bool(result.prev),
        "page": None if get_all else page,
        "per_page": None if get_all else per_page,
        "filters": {
            "since_date": since_date or None,
            "before_post_id": before_post_id or None,
            "after_post_id": after_post_id or None,
            "get_all": get_all,
        },
    }


def format_thread(result: Page) -> Dict[str, Any]:
    """Thread posts oldest first; the server lists them newest first."""
    posts = [format_post(result.items[post_id]) for post_id in result.order]
    posts.sort(key=lambda p: p["create_at"] or "")
    return {"posts": posts, "total_posts": len(posts)}


def format_channels(envelope: Dict[str, Any], page: int, per_page: int) -> Dict[str, Any]:
    return {
        "channels": [format_channel(c) for c in envelope["channels"]],
        "total_count": envelope.get("total_count") or 0,
        "page": page,
        "per_page": per_page,
    }


def format_users(envelope: Dict[str, Any], page: int, per_page: int) -> Dict[str, Any]:
    return {
        "users": [format_user(u) for u in envelope["users"]],
        "total_count": envelope.get("total_count") or 0,
        "page": page,
        "per_page": per_page,
    }
