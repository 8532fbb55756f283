"""Single-page fetching and auto-pagination of post lists.

Post lists come back as ``{"order": [...], "posts": {...}, "next_post_id",
"prev_post_id"}``. ``aggregate_all`` walks pages 0, 1, 2, ... with the widest
page the server accepts and merges them into one ``AggregateResult``.

Pages are fetched one after another: whether page ``n + 1`` is requested
depends on how many ids page ``n`` returned.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Union

from core.errors import InvalidFilterError
from core.http import RequestFn, ensure_ok, query_params
from core.models import AggregateResult, FilterSet, Page
from core.normalizer import normalize

logger = logging.getLogger(__name__)

MAX_PER_PAGE = 200


async def fetch_page(
    request: RequestFn,
    path: str,
    page: int,
    per_page: int,
    filters: Optional[FilterSet] = None,
    kind: Optional[str] = None,
    action: str = "get page",
) -> Union[Page, Dict[str, Any]]:
    """Issue one page request.

    With ``kind=None`` the body is read as a post list and a ``Page`` is
    returned; with ``kind="channels"`` or ``"users"`` the body goes through the
    normalizer and the envelope is returned. Non-2xx raises ``UpstreamError``.
    """
    params = query_params(page, per_page, filters.to_params() if filters else None)
    response = await request(path, params=params)
    body = ensure_ok(response, action)
    if kind is None:
        return Page.from_payload(body)
    return normalize(body, kind)


class PostAccumulator:
    """Running union of pages for exactly one ``aggregate_all`` call."""

    def __init__(self, max_items: Optional[int] = None):
        self.max_items = max_items
        self._order: list[str] = []
        self._collected = 0
        self._seen: set[str] = set()
        self._items: Dict[str, Dict[str, Any]] = {}

    def __len__(self) -> int:
        return len(self._order)

    @property
    def full(self) -> bool:
        # every returned id counts toward the cap, repeats included
        return self.max_items is not None and self._collected >= self.max_items

    def merge(self, page: Page) -> int:
        """Add a page; return how many ids were not seen before."""
        # item bodies: last write wins; order: first occurrence keeps its slot
        self._items.update(page.items)
        self._collected += len(page.order)
        added = 0
        for post_id in page.order:
            if post_id not in self._seen:
                self._seen.add(post_id)
                self._order.append(post_id)
                added += 1
        return added

    def finalize(self) -> AggregateResult:
        order = self._order if self.max_items is None else self._order[: self.max_items]
        return AggregateResult(order=list(order), items={pid: self._items[pid] for pid in order})


async def aggregate_all(
    request: RequestFn,
    path: str,
    filters: Optional[FilterSet] = None,
    max_items: Optional[int] = None,
    per_page: int = MAX_PER_PAGE,
    action: str = "get posts",
) -> AggregateResult:
    """Fetch every page of a post list and merge them.

    Stops on an empty page, on a page shorter than ``per_page``, on a full
    page that adds no new ids, or once ``max_items`` ids are collected (the
    result is cut to at most that many).
    ``max_items=None`` means no cap. Any failing page aborts the whole run.
    """
    if max_items is not None and max_items < 0:
        raise InvalidFilterError(f"max_items must be zero or positive, got {max_items}")

    acc = PostAccumulator(max_items)
    if acc.full:
        return acc.finalize()

    page_index = 0
    while True:
        page = await fetch_page(request, path, page_index, per_page, filters, action=action)
        returned = len(page.order)
        logger.debug(f"Fetched {path} page {page_index}: {returned} ids")
        if returned == 0:
            break

        added = acc.merge(page)
        page_index += 1

        if returned < per_page or acc.full:
            break
        if added == 0:
            # the server served a page we already have; paging no longer advances
            logger.warning(f"{path} page {page_index - 1} repeated earlier ids; stopping")
            break

    result = acc.finalize()
    logger.info(f"Aggregated {len(result.order)} posts from {path} over {page_index} page(s)")
    return result
