"""
Storage interface shared by every backend.

An EntityStore performs create/read/update/delete/list against one table for
one entity type. Records cross this boundary in application shape: camelCase
keys, timezone-aware datetimes for timestamp fields.
"""
import logging
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from .cursor import decode_cursor, encode_cursor
from .errors import NotFoundError

logger = logging.getLogger(__name__)

Record = Dict[str, Any]


@dataclass
class Page:
    """One page of a keyset-paginated listing."""
    items: List[Record]
    next: Optional[str] = None


@dataclass(frozen=True)
class EntityDefinition:
    """
    Static description of an entity type.

    Attributes:
        name: singular entity name, used in messages ("client")
        resource: plural resource name, used for routes and tables ("clients")
        order_field: record field the listing is ordered by, descending
        datetime_fields: record fields holding timestamps
        seed: factory returning the example records inserted into an empty table
    """
    name: str
    resource: str
    order_field: str = "createdAt"
    datetime_fields: Tuple[str, ...] = ("createdAt", "updatedAt")
    seed: Callable[[], List[Record]] = field(default=list, compare=False)

    @property
    def table(self) -> str:
        return self.resource


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class EntityStore(ABC):
    """CRUD + keyset listing for one entity type."""

    def __init__(self, definition: EntityDefinition):
        self.definition = definition

    # PUBLIC_INTERFACE
    def list(self, cursor: Optional[str] = None, limit: int = 20) -> Page:
        """
        List records ordered by the definition's ordering field, newest first.

        Fetches limit + 1 rows; when the extra row exists the page is cut to
        limit and a cursor pointing at the last included row is returned.
        """
        after = decode_cursor(cursor) if cursor else None
        rows = self._fetch_page(after, limit + 1)
        if len(rows) > limit:
            rows = rows[:limit]
            last = rows[-1]
            return Page(items=rows, next=encode_cursor(last[self.definition.order_field], last["id"]))
        return Page(items=rows, next=None)

    # PUBLIC_INTERFACE
    def create(self, data: Record) -> Record:
        """Insert a record, assigning an id and timestamps when absent."""
        record = self._stamp_new(data)
        return self._insert(record)

    # PUBLIC_INTERFACE
    def ensure_seed(self) -> int:
        """
        Insert the example rows when the table is empty.

        Returns:
            int: number of rows inserted
        """
        if self.count() > 0:
            return 0
        now = utcnow()
        rows = []
        # Earlier seed rows get later timestamps so they list first.
        for offset, data in enumerate(self.definition.seed()):
            record = dict(data)
            record.setdefault("createdAt", now - timedelta(seconds=offset))
            rows.append(self._stamp_new(record))
        if rows:
            self._insert_many(rows)
            logger.info(f"Seeded {len(rows)} {self.definition.resource}")
        return len(rows)

    @abstractmethod
    def get(self, record_id: str) -> Record:
        """Return one record or raise NotFoundError."""

    @abstractmethod
    def update(self, record_id: str, changes: Record) -> Record:
        """Apply only the supplied fields; raise NotFoundError when missing."""

    @abstractmethod
    def delete(self, record_id: str) -> bool:
        """Hard delete. Returns False when no record had the id."""

    @abstractmethod
    def count(self) -> int:
        """Number of stored records."""

    @abstractmethod
    def _fetch_page(self, after: Optional[Tuple[datetime, str]], size: int) -> List[Record]:
        """Rows strictly before ``after`` in (order value, id) descending order."""

    @abstractmethod
    def _insert(self, record: Record) -> Record:
        """Persist a fully stamped record and return it as stored."""

    @abstractmethod
    def _insert_many(self, records: Sequence[Record]) -> None:
        """Persist several stamped records at once."""

    def _stamp_new(self, data: Record) -> Record:
        now = utcnow()
        record = dict(data)
        if not record.get("id"):
            record["id"] = str(uuid.uuid4())
        record.setdefault("createdAt", now)
        record["updatedAt"] = now
        if self.definition.order_field not in record or record[self.definition.order_field] is None:
            record[self.definition.order_field] = now
        return record

    def _not_found(self, record_id: str) -> NotFoundError:
        return NotFoundError(self.definition.name, record_id)
