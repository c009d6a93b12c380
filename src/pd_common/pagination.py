"""Opaque cursor pagination shared by the wallet and game history listings.

Listings are newest-first by BIGSERIAL id; the cursor carries the last id seen.
"""

import base64
import json

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 100


def cursor_encode(last_id: int) -> str:
    """Encode a BIGINT primary key into an opaque Base64 cursor string."""
    payload = json.dumps({"id": last_id})
    return base64.b64encode(payload.encode()).decode()


def cursor_decode(cursor: str | None) -> int | None:
    """Decode a cursor string back to the last seen id. Returns None on error."""
    if cursor is None:
        return None
    try:
        payload = json.loads(base64.b64decode(cursor.encode()).decode())
        return int(payload["id"])
    except (ValueError, KeyError, TypeError):
        return None
