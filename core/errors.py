"""Exception types raised by the Mattermost client and its pagination core.

Transport failures are not wrapped: they surface as ``httpx.HTTPError``.
"""
import json
from typing import Any


class MattermostError(Exception):
    """Base class for every error raised by this package."""


class ConfigError(MattermostError):
    """Required configuration (base URL, token, team id) is missing."""


class InvalidFilterError(MattermostError):
    """Caller input was rejected before any request was made."""


class ShapeError(MattermostError):
    """An upstream payload had neither of the shapes we know how to read."""


class UpstreamError(MattermostError):
    """The server answered with a non-success HTTP status."""

    def __init__(self, status: int, reason: str, body: Any, action: str = "complete request"):
        self.status = status
        self.reason = reason
        self.body = body
        self.action = action
        text = body if isinstance(body, str) else json.dumps(body, ensure_ascii=False, default=str)
        super().__init__(f"Failed to {action}: {status} {reason} - {text}")
