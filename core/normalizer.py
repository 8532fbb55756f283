"""Bring collection responses into one envelope shape.

The server answers ``/teams/{id}/channels`` and ``/users`` with a bare JSON
array, while some deployments (and ``include_total_count`` queries) wrap the
list in an object with a count. Callers only ever see the wrapped form::

    {"channels": [...], "total_count": 12}

Every collection kind gets an entry in ``ENVELOPE_FIELDS``; call sites should
not inspect payload shapes themselves.
"""
from typing import Any, Dict

from core.errors import ShapeError

ENVELOPE_FIELDS: Dict[str, str] = {
    "channels": "channels",
    "users": "users",
}


def normalize(raw: Any, kind: str) -> Dict[str, Any]:
    """Return the canonical envelope for ``raw``.

    A bare list is wrapped and counted. An object that already carries the list
    field and an integer ``total_count`` is returned as is (same object).
    Anything else raises ``ShapeError``.
    """
    try:
        field = ENVELOPE_FIELDS[kind]
    except KeyError:
        raise ValueError(f"No envelope registered for resource kind '{kind}'") from None

    if isinstance(raw, list):
        return {field: raw, "total_count": len(raw)}

    if isinstance(raw, dict):
        items = raw.get(field)
        count = raw.get("total_count")
        if isinstance(items, list) and isinstance(count, int) and not isinstance(count, bool):
            return raw
        raise ShapeError(
            f"Unexpected {kind} envelope: expected '{field}' list and integer 'total_count', "
            f"got keys {sorted(raw.keys())}"
        )

    raise ShapeError(f"Unexpected {kind} payload of type {type(raw).__name__}")
