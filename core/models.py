"""Data shapes shared by the fetcher, the aggregator and the formatter."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from core.errors import InvalidFilterError, ShapeError

DATE_FORMAT_HINT = "Use ISO 8601 format (e.g., '2025-12-18' or '2025-12-18T10:00:00Z')"


@dataclass
class Page:
    """One upstream round trip worth of posts.

    ``order`` lists post ids newest first, ``items`` maps every one of them to
    its post body. ``next``/``prev`` are the upstream cursor ids, ``None`` when
    the server sent an empty string.
    """

    order: List[str] = field(default_factory=list)
    items: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    next: Optional[str] = None
    prev: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Any) -> "Page":
        if not isinstance(payload, dict):
            raise ShapeError(f"Expected a post list object, got {type(payload).__name__}")
        order = payload.get("order")
        posts = payload.get("posts") or {}
        if not isinstance(order, list) or not isinstance(posts, dict):
            raise ShapeError("Post list is missing its 'order' list or 'posts' mapping")
        if len(set(order)) != len(order):
            raise ShapeError("Post list 'order' contains duplicate ids")
        missing = [post_id for post_id in order if post_id not in posts]
        if missing:
            raise ShapeError(f"Post list 'order' references unknown post ids: {missing[:5]}")
        return cls(
            order=list(order),
            items=dict(posts),
            next=payload.get("next_post_id") or None,
            prev=payload.get("prev_post_id") or None,
        )


@dataclass
class AggregateResult:
    """Union of every page fetched for one call. Carries no cursors."""

    order: List[str] = field(default_factory=list)
    items: Dict[str, Dict[str, Any]] = field(default_factory=dict)


@dataclass(frozen=True)
class FilterSet:
    """Bounds applied identically to every page request of one run.

    since: epoch milliseconds, inclusive lower bound on create time.
    before / after: post ids, exclusive bounds.
    """

    since: Optional[int] = None
    before: Optional[str] = None
    after: Optional[str] = None

    def to_params(self) -> Dict[str, str]:
        params: Dict[str, str] = {}
        if self.since is not None:
            params["since"] = str(self.since)
        if self.before:
            params["before"] = self.before
        if self.after:
            params["after"] = self.after
        return params

    @classmethod
    def from_tool_args(
        cls,
        since_date: Optional[str] = None,
        before_post_id: Optional[str] = None,
        after_post_id: Optional[str] = None,
    ) -> "FilterSet":
        since = parse_since_date(since_date) if since_date else None
        return cls(since=since, before=before_post_id or None, after=after_post_id or None)


def parse_since_date(value: str) -> int:
    """Convert an ISO 8601 date or datetime into epoch milliseconds.

    Values without an offset are read as UTC.
    """
    text = str(value).strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise InvalidFilterError(f"Invalid date format: {value}. {DATE_FORMAT_HINT}") from None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return int(parsed.timestamp() * 1000)


def validate_paging(page: int, per_page: int) -> None:
    """Reject negative page indexes and page sizes before they reach the server."""
    if page < 0:
        raise InvalidFilterError(f"page must be zero or positive, got {page}")
    if per_page < 0:
        raise InvalidFilterError(f"limit must be zero or positive, got {per_page}")
