"""
In-process key-value store.

Records live in a dict keyed by id with a separate id index, mirroring an
indexed key-value backend. Suited to development and tests; nothing persists
beyond the process.
"""
import copy
from datetime import datetime
from typing import Dict, List, Optional, Sequence, Tuple

from .base import EntityDefinition, EntityStore, Record, utcnow
from .mapping import as_utc


class MemoryStore(EntityStore):
    """EntityStore backed by a Python dict."""

    def __init__(self, definition: EntityDefinition):
        super().__init__(definition)
        self._records: Dict[str, Record] = {}
        self._index: List[str] = []

    def get(self, record_id: str) -> Record:
        record = self._records.get(record_id)
        if record is None:
            raise self._not_found(record_id)
        return copy.deepcopy(record)

    def update(self, record_id: str, changes: Record) -> Record:
        record = self._records.get(record_id)
        if record is None:
            raise self._not_found(record_id)
        record.update(self._normalize(changes))
        record["id"] = record_id
        record["updatedAt"] = utcnow()
        return copy.deepcopy(record)

    def delete(self, record_id: str) -> bool:
        if self._records.pop(record_id, None) is None:
            return False
        self._index.remove(record_id)
        return True

    def count(self) -> int:
        return len(self._index)

    def _sort_key(self, record: Record) -> Tuple[datetime, str]:
        return record[self.definition.order_field], record["id"]

    def _fetch_page(self, after: Optional[Tuple[datetime, str]], size: int) -> List[Record]:
        rows = sorted((self._records[i] for i in self._index), key=self._sort_key, reverse=True)
        if after is not None:
            rows = [r for r in rows if self._sort_key(r) < after]
        return [copy.deepcopy(r) for r in rows[:size]]

    def _insert(self, record: Record) -> Record:
        record = self._normalize(record)
        if record["id"] not in self._records:
            self._index.append(record["id"])
        self._records[record["id"]] = record
        return copy.deepcopy(record)

    def _insert_many(self, records: Sequence[Record]) -> None:
        for record in records:
            self._insert(record)

    def _normalize(self, record: Record) -> Record:
        record = copy.deepcopy(record)
        for name in self.definition.datetime_fields:
            if record.get(name) is not None:
                record[name] = as_utc(record[name])
        return record
