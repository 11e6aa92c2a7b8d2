"""Opaque Base64 cursors for keyset pagination.

Transactions page on their BIGSERIAL id; bets page on (created_at, id)
because their UUID keys are not sequential.
"""

import base64
import json
from datetime import datetime


def _encode(payload: dict[str, object]) -> str:
    return base64.b64encode(json.dumps(payload).encode()).decode()


def _decode(cursor: str) -> dict[str, object]:
    data = json.loads(base64.b64decode(cursor.encode()).decode())
    if not isinstance(data, dict):
        raise ValueError("cursor payload must be an object")
    return data


def id_cursor_encode(last_id: int) -> str:
    return _encode({"id": last_id})


def id_cursor_decode(cursor: str | None) -> int | None:
    """Decode to the last seen id. Malformed cursors restart from the first page."""
    if cursor is None:
        return None
    try:
        return int(_decode(cursor)["id"])  # type: ignore[call-overload]
    except (ValueError, KeyError, TypeError):
        return None


def ts_cursor_encode(created_at: datetime, last_id: str) -> str:
    return _encode({"ts": created_at.isoformat(), "id": last_id})


def ts_cursor_decode(cursor: str | None) -> tuple[datetime | None, str | None]:
    if cursor is None:
        return None, None
    try:
        data = _decode(cursor)
        return datetime.fromisoformat(str(data["ts"])), str(data["id"])
    except (ValueError, KeyError, TypeError):
        return None, None
