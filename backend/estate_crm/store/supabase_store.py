"""
Supabase store.

Talks to the Supabase REST endpoint through the supabase-py client. The
client is created once by the store factory and passed in; every table
operation goes through the PostgREST query builder.
"""
import json
import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence, Tuple, cast

import httpx
from postgrest.exceptions import APIError
from supabase import Client, create_client

from .base import EntityDefinition, EntityStore, Record, utcnow
from .errors import StoreError
from .mapping import as_utc, from_row, to_row, to_snake

logger = logging.getLogger(__name__)


class JSONEncoder(json.JSONEncoder):
    """JSON encoder for datetime and Decimal values."""

    def default(self, o):
        if isinstance(o, (datetime, date)):
            return o.isoformat()
        if isinstance(o, Decimal):
            return float(o)
        return super().default(o)


def connect(url: str, key: str) -> Client:
    """Create the Supabase client shared by all stores."""
    return create_client(url, key)


def _quote(value: str) -> str:
    # PostgREST accepts double-quoted values inside or()/and() filters.
    return '"' + value.replace('"', '\\"') + '"'


class SupabaseStore(EntityStore):
    """EntityStore for one Supabase table."""

    def __init__(self, definition: EntityDefinition, client: Client):
        super().__init__(definition)
        self.client = client

    def get(self, record_id: str) -> Record:
        rows = self._execute("fetch", lambda t: t.select("*").eq("id", record_id))
        if not rows:
            raise self._not_found(record_id)
        return self._to_record(rows[0])

    def update(self, record_id: str, changes: Record) -> Record:
        payload = self._serialize({**to_row(changes), "updated_at": utcnow()})
        payload.pop("id", None)
        rows = self._execute("update", lambda t: t.update(payload).eq("id", record_id))
        if not rows:
            raise self._not_found(record_id)
        return self._to_record(rows[0])

    def delete(self, record_id: str) -> bool:
        rows = self._execute("delete", lambda t: t.delete().eq("id", record_id))
        return bool(rows)

    def count(self) -> int:
        try:
            response = self.client.table(self.definition.table).select("id", count="exact").limit(1).execute()
        except (APIError, httpx.HTTPError) as exc:
            raise self._store_error("count", exc) from exc
        if response.count is not None:
            return response.count
        return len(response.data or [])

    def _fetch_page(self, after: Optional[Tuple[datetime, str]], size: int) -> List[Record]:
        column = to_snake(self.definition.order_field)

        def build(table):
            query = table.select("*")
            if after is not None:
                value, last_id = after
                stamp = _quote(as_utc(value).isoformat())
                query = query.or_(
                    f"{column}.lt.{stamp},and({column}.eq.{stamp},id.lt.{_quote(last_id)})"
                )
            return query.order(column, desc=True).order("id", desc=True).limit(size)

        return [self._to_record(row) for row in self._execute("list", build)]

    def _insert(self, record: Record) -> Record:
        rows = self._execute("create", lambda t: t.insert(self._serialize(to_row(record))))
        if not rows:
            raise StoreError(f"Failed to create {self.definition.name}: no row returned")
        return self._to_record(rows[0])

    def _insert_many(self, records: Sequence[Record]) -> None:
        payload = [self._serialize(to_row(r)) for r in records]
        self._execute("seed", lambda t: t.insert(payload))

    def _execute(self, operation: str, build) -> List[Dict[str, Any]]:
        try:
            response = build(self.client.table(self.definition.table)).execute()
        except (APIError, httpx.HTTPError) as exc:
            raise self._store_error(operation, exc) from exc
        return cast(List[Dict[str, Any]], response.data or [])

    def _serialize(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return cast(Dict[str, Any], json.loads(json.dumps(payload, cls=JSONEncoder)))

    def _to_record(self, row: Dict[str, Any]) -> Record:
        return from_row(row, self.definition.datetime_fields)

    def _store_error(self, operation: str, exc: Exception) -> StoreError:
        logger.error(f"Supabase {operation} on '{self.definition.table}' failed: {exc}")
        return StoreError(f"Failed to {operation} {self.definition.name}: {exc}")
