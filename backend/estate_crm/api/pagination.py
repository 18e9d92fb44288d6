"""
Pagination helper for list endpoints.

Derives a bounded page size and an opaque cursor from query parameters.
"""
import math
from dataclasses import dataclass
from typing import Optional
from fastapi import Query

DEFAULT_LIMIT = 20
MAX_LIMIT = 100


@dataclass
class Pagination:
    cursor: Optional[str]
    limit: int


def parse_limit(raw: Optional[str]) -> int:
    """
    Bound a raw limit parameter to 1..MAX_LIMIT.

    Absent or blank -> DEFAULT_LIMIT. Otherwise the value is read as a number
    and truncated toward zero; anything non-numeric counts as 0 and is lifted
    to the minimum of 1.
    """
    if raw is None or raw.strip() == "":
        return DEFAULT_LIMIT
    try:
        number = float(raw)
    except ValueError:
        number = 0.0
    value = int(number) if math.isfinite(number) else 0
    return max(1, min(MAX_LIMIT, value))


# PUBLIC_INTERFACE
def get_pagination(
    cursor: Optional[str] = Query(None, description="Opaque cursor from a previous page"),
    limit: Optional[str] = Query(None, description="Page size, 1-100 (default 20)"),
) -> Pagination:
    """Dependency returning the cursor and bounded limit for a list request."""
    return Pagination(cursor=cursor or None, limit=parse_limit(limit))
