"""
Query cache for the UI pages.

Results are stored under tuple keys such as ("clients",) or
("pipeline-clients",). Invalidating a key drops every entry whose key starts
with it, so ("clients",) also clears ("clients", "page-2").
"""
import logging
from typing import Any, Callable, Dict, Tuple, Union

logger = logging.getLogger(__name__)

QueryKey = Tuple[str, ...]


def _key(key: Union[str, QueryKey]) -> QueryKey:
    return (key,) if isinstance(key, str) else tuple(key)


class QueryCache:
    """In-process cache of query results keyed by logical resource name."""

    def __init__(self):
        self._entries: Dict[QueryKey, Any] = {}

    def __contains__(self, key) -> bool:
        return _key(key) in self._entries

    def fetch(self, key: Union[str, QueryKey], loader: Callable[[], Any]) -> Any:
        """Return the cached value for key, loading and storing it on a miss."""
        key = _key(key)
        if key in self._entries:
            return self._entries[key]
        value = loader()
        self._entries[key] = value
        return value

    def invalidate(self, *keys: Union[str, QueryKey]) -> int:
        """
        Drop every entry whose key starts with one of the given prefixes.

        Returns:
            int: number of entries removed
        """
        prefixes = [_key(k) for k in keys]
        stale = [
            cached for cached in self._entries
            if any(cached[:len(prefix)] == prefix for prefix in prefixes)
        ]
        for cached in stale:
            del self._entries[cached]
        if stale:
            logger.debug(f"Invalidated {len(stale)} cached queries for {prefixes}")
        return len(stale)
