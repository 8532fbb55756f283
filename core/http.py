"""The request seam between the pagination core and the network.

The core is handed a ``RequestFn``; it never builds URLs or auth headers.
"""
from typing import Any, Awaitable, Callable, Dict, NamedTuple, Optional

import httpx

from core.errors import UpstreamError
from utils.response_utils import robust_parse_text


class HttpResponse(NamedTuple):
    status: int
    reason: str
    body: Any  # decoded JSON, or the raw text when it would not decode

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


RequestFn = Callable[..., Awaitable[HttpResponse]]
"""``await request(path, params=None, method="GET", body=None) -> HttpResponse``"""


def decode_response(resp: httpx.Response) -> HttpResponse:
    """Read the body once and keep it with the status line."""
    text = resp.text
    body: Any = robust_parse_text(text) if text else None
    return HttpResponse(status=resp.status_code, reason=resp.reason_phrase, body=body)


def ensure_ok(response: HttpResponse, action: str) -> Any:
    """Return the body of a 2xx response, raise ``UpstreamError`` otherwise."""
    if not response.ok:
        raise UpstreamError(response.status, response.reason, response.body, action)
    return response.body


def query_params(page: int, per_page: int, extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
    params = {"page": str(page), "per_page": str(per_page)}
    if extra:
        params.update(extra)
    return params
