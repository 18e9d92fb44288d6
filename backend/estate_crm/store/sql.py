"""
Relational store backed by SQLAlchemy.

Works against any SQLAlchemy URL (Postgres in production, SQLite for local
runs and tests). Each operation opens its own session from the injected
DatabaseManager.
"""
import logging
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from sqlalchemy import and_, func, or_
from sqlalchemy.exc import SQLAlchemyError

from ..database.connection import DatabaseManager
from .base import EntityDefinition, EntityStore, Record, utcnow
from .errors import StoreError
from .mapping import from_row, to_row, to_snake

logger = logging.getLogger(__name__)


class SqlStore(EntityStore):
    """EntityStore for one ORM model."""

    def __init__(self, definition: EntityDefinition, db: DatabaseManager, model):
        super().__init__(definition)
        self.db = db
        self.model = model
        self._columns = {column.name for column in model.__table__.columns}

    def get(self, record_id: str) -> Record:
        with self.db.session() as session:
            try:
                row = session.get(self.model, record_id)
            except SQLAlchemyError as exc:
                raise self._store_error("fetch", exc) from exc
            if row is None:
                raise self._not_found(record_id)
            return self._to_record(row)

    def update(self, record_id: str, changes: Record) -> Record:
        with self.db.session() as session:
            try:
                row = session.get(self.model, record_id)
                if row is None:
                    raise self._not_found(record_id)
                for column, value in self._to_columns(changes).items():
                    if column != "id":
                        setattr(row, column, value)
                row.updated_at = utcnow()
                session.commit()
                session.refresh(row)
                return self._to_record(row)
            except SQLAlchemyError as exc:
                session.rollback()
                raise self._store_error("update", exc) from exc

    def delete(self, record_id: str) -> bool:
        with self.db.session() as session:
            try:
                row = session.get(self.model, record_id)
                if row is None:
                    return False
                session.delete(row)
                session.commit()
                return True
            except SQLAlchemyError as exc:
                session.rollback()
                raise self._store_error("delete", exc) from exc

    def count(self) -> int:
        with self.db.session() as session:
            try:
                return session.query(func.count(self.model.id)).scalar() or 0
            except SQLAlchemyError as exc:
                raise self._store_error("count", exc) from exc

    def _fetch_page(self, after: Optional[Tuple[datetime, str]], size: int) -> List[Record]:
        order_column = getattr(self.model, to_snake(self.definition.order_field))
        with self.db.session() as session:
            try:
                query = session.query(self.model)
                if after is not None:
                    value, last_id = after
                    query = query.filter(or_(
                        order_column < value,
                        and_(order_column == value, self.model.id < last_id),
                    ))
                rows = query.order_by(order_column.desc(), self.model.id.desc()).limit(size).all()
            except SQLAlchemyError as exc:
                raise self._store_error("list", exc) from exc
            return [self._to_record(row) for row in rows]

    def _insert(self, record: Record) -> Record:
        with self.db.session() as session:
            row = self.model(**self._to_columns(record))
            try:
                session.add(row)
                session.commit()
                session.refresh(row)
            except SQLAlchemyError as exc:
                session.rollback()
                raise self._store_error("create", exc) from exc
            return self._to_record(row)

    def _insert_many(self, records: Sequence[Record]) -> None:
        with self.db.session() as session:
            try:
                session.add_all([self.model(**self._to_columns(r)) for r in records])
                session.commit()
            except SQLAlchemyError as exc:
                session.rollback()
                raise self._store_error("seed", exc) from exc

    def _to_columns(self, record: Record) -> Record:
        return {k: v for k, v in to_row(record).items() if k in self._columns}

    def _to_record(self, row) -> Record:
        values = {column: getattr(row, column) for column in self._columns}
        return from_row(values, self.definition.datetime_fields)

    def _store_error(self, operation: str, exc: Exception) -> StoreError:
        logger.error(f"Failed to {operation} {self.definition.resource}: {exc}")
        return StoreError(f"Failed to {operation} {self.definition.name}: {exc}")
