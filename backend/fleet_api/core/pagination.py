"""Cursor & Page Helpers — pure pieces of cursor-based pagination.

Invariants:
    - A cursor is an opaque URL-safe token encoding the last id of a page
    - decode_cursor(encode_cursor(n)) == n for every non-negative int n
    - Malformed cursors raise ValidationError (never a 500)
    - build_page emits "next" iff more_results is True and a cursor exists

Design Decisions:
    - Keyset cursor (last id) over offset: stable under inserts at the tail,
      O(page) instead of O(offset) in the store
    - Cursor is versioned ("v") so the encoding can change without breaking old links
"""

import base64
import binascii
import json
from urllib.parse import urlencode

from fleet_api.core.errors import ValidationError

CURSOR_VERSION = 1


def encode_cursor(last_id: int) -> str:
    raw = json.dumps({"v": CURSOR_VERSION, "after": last_id}, separators=(",", ":"))
    return base64.urlsafe_b64encode(raw.encode("utf-8")).decode("ascii").rstrip("=")


def decode_cursor(cursor: str) -> int:
    """Return the id the next page starts after."""
    padded = cursor + "=" * (-len(cursor) % 4)
    try:
        payload = json.loads(base64.urlsafe_b64decode(padded.encode("ascii")))
    except (binascii.Error, ValueError, UnicodeError):
        raise ValidationError("Invalid pagination cursor", field="cursor")
    if (
        not isinstance(payload, dict)
        or payload.get("v") != CURSOR_VERSION
        or not isinstance(payload.get("after"), int)
        or isinstance(payload.get("after"), bool)
        or payload["after"] < 0
    ):
        raise ValidationError("Invalid pagination cursor", field="cursor")
    return payload["after"]


def next_link(base_url: str, path: str, cursor: str) -> str:
    return f"{base_url.rstrip('/')}{path}?{urlencode({'cursor': cursor})}"


def build_page(
    total: int, data: list[dict], next_url: str | None = None,
) -> dict:
    """Assemble the paged collection body."""
    page = {"totalEntities": total, "data": data}
    if next_url:
        page["next"] = next_url
    return page
