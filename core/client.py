"""Authenticated access to the Mattermost REST API (v4).

``MattermostClient.request`` is the only place that touches the network. The
pagination core (``core.pagination``) receives it as a plain callable, so it
never sees the token or the base URL.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from core.config import get_config  # type: ignore
from core.errors import ConfigError
from core.http import HttpResponse, decode_response, ensure_ok
from core.models import AggregateResult, FilterSet, Page
from core.pagination import aggregate_all, fetch_page
from utils.endpoints import get_base_url, get_path

logger = logging.getLogger(__name__)


class MattermostClient:
    def __init__(
        self,
        base_url: str,
        token: str,
        team_id: Optional[str] = None,
        timeout: float = 30.0,
        http_client: Optional[httpx.AsyncClient] = None,
        api_paths: Optional[Dict[str, str]] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.team_id = team_id
        self._paths_config = {"api_paths": api_paths or {}}
        self._http = http_client or httpx.AsyncClient(timeout=timeout)
        self._headers = {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        }

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]] = None) -> "MattermostClient":
        cfg = config if config is not None else (get_config() or {})
        token = cfg.get("token")
        if not token:
            raise ConfigError("'token' must be set in config.yaml or MATTERMOST_TOKEN")
        return cls(
            base_url=get_base_url(cfg),
            token=token,
            team_id=cfg.get("team_id"),
            timeout=float(cfg.get("request_timeout") or 30.0),
            api_paths=cfg.get("api_paths"),
        )

    async def aclose(self) -> None:
        await self._http.aclose()

    def _path(self, key: str, **params: str) -> str:
        return get_path(key, self._paths_config, **params)

    def _team_id(self) -> str:
        if not self.team_id:
            raise ConfigError("'team_id' must be set in config.yaml or MATTERMOST_TEAM_ID")
        return self.team_id

    async def request(
        self,
        path: str,
        params: Optional[Dict[str, str]] = None,
        method: str = "GET",
        body: Any = None,
    ) -> HttpResponse:
        """Send one authenticated request. Transport failures raise ``httpx.HTTPError``."""
        url = f"{self.base_url}{path}"
        logger.info(f"{method} {url} params={params or {}}")
        resp = await self._http.request(method, url, params=params, json=body, headers=self._headers)
        response = decode_response(resp)
        if response.ok:
            logger.debug(f"{method} {url} -> {response.status} {response.reason}")
        else:
            logger.warning(f"{method} {url} -> {response.status} {response.reason}: {response.body}")
        return response

    async def _get(self, path: str, action: str) -> Any:
        return ensure_ok(await self.request(path), action)

    async def _post(self, path: str, body: Any, action: str) -> Any:
        return ensure_ok(await self.request(path, method="POST", body=body), action)

    # Channels

    async def get_channels(self, limit: int = 100, page: int = 0) -> Dict[str, Any]:
        path = self._path("team_channels", team_id=self._team_id())
        return await fetch_page(self.request, path, page, limit, kind="channels", action="get channels")

    async def get_my_channels(self, limit: int = 100, page: int = 0) -> Dict[str, Any]:
        path = self._path("my_channels")
        return await fetch_page(self.request, path, page, limit, kind="channels", action="get user channels")

    async def get_channel(self, channel_id: str) -> Dict[str, Any]:
        return await self._get(self._path("channel", channel_id=channel_id), "get channel")

    async def create_direct_message_channel(self, other_user_id: str) -> Dict[str, Any]:
        me = await self.get_me()
        return await self._post(
            self._path("direct_channel"), [me["id"], other_user_id], "create direct message channel"
        )

    # Posts

    async def get_posts_for_channel(
        self,
        channel_id: str,
        limit: int = 30,
        page: int = 0,
        filters: Optional[FilterSet] = None,
    ) -> Page:
        path = self._path("channel_posts", channel_id=channel_id)
        return await fetch_page(self.request, path, page, limit, filters, action="get posts")

    async def get_all_posts_for_channel(
        self,
        channel_id: str,
        filters: Optional[FilterSet] = None,
        max_posts: Optional[int] = None,
    ) -> AggregateResult:
        path = self._path("channel_posts", channel_id=channel_id)
        return await aggregate_all(self.request, path, filters, max_items=max_posts, action="get posts")

    async def get_post(self, post_id: str) -> Dict[str, Any]:
        return await self._get(self._path("post", post_id=post_id), "get post")

    async def get_post_thread(self, post_id: str) -> Page:
        body = await self._get(self._path("post_thread", post_id=post_id), "get post thread")
        return Page.from_payload(body)

    async def create_post(self, channel_id: str, message: str, root_id: Optional[str] = None) -> Dict[str, Any]:
        body = {"channel_id": channel_id, "message": message, "root_id": root_id or ""}
        return await self._post(self._path("posts"), body, "create post")

    # Reactions

    async def add_reaction(self, post_id: str, emoji_name: str) -> Dict[str, Any]:
        me = await self.get_me()
        body = {"user_id": me["id"], "post_id": post_id, "emoji_name": emoji_name}
        return await self._post(self._path("reactions"), body, "add reaction")

    # Users

    async def get_users(self, limit: int = 100, page: int = 0) -> Dict[str, Any]:
        return await fetch_page(self.request, self._path("users"), page, limit, kind="users", action="get users")

    async def get_user_profile(self, user_id: str) -> Dict[str, Any]:
        return await self._get(self._path("user", user_id=user_id), "get user profile")

    async def get_me(self) -> Dict[str, Any]:
        return await self._get(self._path("me"), "get current user")


_client: Optional[MattermostClient] = None


def get_client() -> MattermostClient:
    """Process-wide client built from configuration on first use."""
    global _client
    if _client is None:
        _client = MattermostClient.from_config()
    return _client


async def close_client() -> None:
    """Close the process-wide client, if one was built. The next get_client() builds a fresh one."""
    global _client
    if _client is not None:
        client, _client = _client, None
        await client.aclose()
