"""
Translation between application records and persistence rows.

Records use camelCase keys ("imageUrl", "lastContacted"); rows use snake_case
columns ("image_url", "last_contacted"). Timestamps are normalized to
timezone-aware UTC datetimes on the way in.
"""
import re
from datetime import date, datetime, timezone
from typing import Any, Dict, Iterable, Optional

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def to_snake(name: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def as_utc(value: Any) -> Optional[datetime]:
    """
    Coerce a timestamp-like value to an aware UTC datetime.

    Accepts datetimes, dates and ISO-8601 strings (including a trailing "Z").
    Naive values are taken to be UTC.
    """
    if value is None:
        return None
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        value = datetime.fromisoformat(text)
    elif isinstance(value, date) and not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)
    if not isinstance(value, datetime):
        raise TypeError(f"Cannot interpret {value!r} as a timestamp")
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_row(record: Dict[str, Any]) -> Dict[str, Any]:
    """Rename record keys to column names."""
    return {to_snake(key): value for key, value in record.items()}


def from_row(row: Dict[str, Any], datetime_fields: Iterable[str] = ()) -> Dict[str, Any]:
    """Rename column names to record keys and parse timestamp fields."""
    record = {to_camel(key): value for key, value in row.items()}
    for name in datetime_fields:
        if record.get(name) is not None:
            record[name] = as_utc(record[name])
    return record
