"""Media Type Enforcement — JSON-only request bodies and responses.

Invariants:
    - Missing Accept header means "anything", so JSON is acceptable
    - Content-Type parameters (charset etc.) are ignored when matching
"""

_JSON_ACCEPT_RANGES = frozenset({"application/json", "application/*", "*/*"})


def _media_type(value: str) -> str:
    return value.split(";", 1)[0].strip().lower()


def accepts_json(accept_header: str | None) -> bool:
    """True when a client with this Accept header can receive JSON."""
    if not accept_header or not accept_header.strip():
        return True
    ranges = {_media_type(part) for part in accept_header.split(",")}
    return bool(ranges & _JSON_ACCEPT_RANGES)


def is_json_content(content_type: str | None) -> bool:
    if not content_type:
        return False
    return _media_type(content_type) == "application/json"
