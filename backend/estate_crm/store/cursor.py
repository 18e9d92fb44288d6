"""
Opaque keyset cursors.

A cursor is the URL-safe base64 encoding of ``[ordering value, id]`` for the
last row of a page. Comparing on the pair keeps rows with equal timestamps
from being skipped or repeated across pages.
"""
import base64
import binascii
import json
from datetime import datetime
from typing import Tuple

from .errors import InvalidCursorError
from .mapping import as_utc


def encode_cursor(value: datetime, record_id: str) -> str:
    payload = json.dumps([as_utc(value).isoformat(), record_id], separators=(",", ":"))
    return base64.urlsafe_b64encode(payload.encode("utf-8")).decode("ascii").rstrip("=")


def decode_cursor(token: str) -> Tuple[datetime, str]:
    """
    Decode a cursor produced by encode_cursor.

    Raises:
        InvalidCursorError: the token is not a cursor this service issued
    """
    padded = token + "=" * (-len(token) % 4)
    try:
        value, record_id = json.loads(base64.urlsafe_b64decode(padded.encode("ascii")))
        return as_utc(value), str(record_id)
    except (binascii.Error, UnicodeError, ValueError, TypeError) as exc:
        raise InvalidCursorError(f"Invalid cursor: {token}") from exc
