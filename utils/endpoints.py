from typing import Any, Dict, Optional

from core.config import get_config  # type: ignore
from core.errors import ConfigError

# Path templates relative to the API root (e.g. https://chat.example.com/api/v4).
# config.yaml may override any of them under `api_paths`.
DEFAULT_API_PATHS = {
    "team_channels": "/teams/{team_id}/channels",
    "my_channels": "/users/me/channels",
    "channel": "/channels/{channel_id}",
    "channel_posts": "/channels/{channel_id}/posts",
    "direct_channel": "/channels/direct",
    "posts": "/posts",
    "post": "/posts/{post_id}",
    "post_thread": "/posts/{post_id}/thread",
    "reactions": "/reactions",
    "users": "/users",
    "user": "/users/{user_id}",
    "me": "/users/me",
}


def get_base_url(config: Optional[Dict[str, Any]] = None) -> str:
    _cfg = config if config is not None else (get_config() or {})
    base_url = str(_cfg.get("mattermost_url") or "").rstrip("/")
    if not base_url:
        raise ConfigError("'mattermost_url' must be set in config.yaml or MATTERMOST_URL")
    return base_url


def get_path(key: str, config: Optional[Dict[str, Any]] = None, **params: str) -> str:
    """Resolve the path template for `key` and fill in its placeholders."""
    _cfg = config if config is not None else (get_config() or {})
    template = (_cfg.get("api_paths") or {}).get(key) or DEFAULT_API_PATHS.get(key)
    if not template:
        raise ConfigError(f"Missing API path for key '{key}' under 'api_paths'")
    try:
        return template.format(**params)
    except KeyError as e:
        raise ConfigError(f"API path '{key}' needs parameter {e}") from None

