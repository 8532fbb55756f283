"""Helpers for response bodies coming in and tool payloads going out.

`robust_parse_text` turns an HTTP body into Python data:
- Normal JSON (json.loads)
- NDJSON (one JSON value per line; a list, or the single value)
- Text starting with a JSON value followed by noise (json.JSONDecoder().raw_decode)
- Anything else is returned as the original text

Mattermost error pages are sometimes HTML from a proxy, so the raw text fallback
matters: it ends up inside `UpstreamError.body` untouched.

`dump_result` / `dump_error` render what every tool handler returns.
"""
from __future__ import annotations

import json
from typing import Any


def robust_parse_text(text: str) -> Any:
    """Parse `text` as JSON if at all possible, otherwise return it unchanged."""
    try:
        return json.loads(text)
    except ValueError:
        pass

    lines = [ln for ln in text.splitlines() if ln.strip()]
    if len(lines) > 1:
        try:
            return [json.loads(ln) for ln in lines]
        except ValueError:
            pass

    try:
        obj, _ = json.JSONDecoder().raw_decode(text.lstrip())
        return obj
    except ValueError:
        pass

    return text


def dump_result(data: Any) -> str:
    """Serialize a successful tool payload."""
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


def dump_error(error: BaseException | str) -> str:
    """Serialize a failure payload. Always an object with an `error` key."""
    message = error if isinstance(error, str) else (str(error) or type(error).__name__)
    return json.dumps({"error": message}, ensure_ascii=False)
