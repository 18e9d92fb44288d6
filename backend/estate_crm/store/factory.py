"""
Store construction.

Builds one EntityStore per entity type for the backend named in Settings.
The resulting Stores bundle is created once at startup and injected into
request handlers; nothing here is cached at module level.
"""
import logging
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from ..config import Settings
from ..database import models
from ..database.connection import DatabaseManager
from .base import EntityDefinition, EntityStore
from .entities import ALL_ENTITIES, CLIENTS, CONTRACTS, PROPERTIES, TRANSACTIONS
from .memory import MemoryStore

logger = logging.getLogger(__name__)

RESOURCES = tuple(d.resource for d in ALL_ENTITIES)

SQL_MODELS = {
    CLIENTS.resource: models.Client,
    PROPERTIES.resource: models.Property,
    TRANSACTIONS.resource: models.Transaction,
    CONTRACTS.resource: models.Contract,
}


@dataclass
class Stores:
    """One store per resource, plus an optional teardown hook."""
    clients: EntityStore
    properties: EntityStore
    transactions: EntityStore
    contracts: EntityStore
    backend: str = "memory"
    on_close: Optional[Callable[[], None]] = None

    def by_resource(self, resource: str) -> EntityStore:
        if resource not in RESOURCES:
            raise KeyError(f"Unknown resource '{resource}'")
        return getattr(self, resource)

    def all(self) -> Dict[str, EntityStore]:
        return {d.resource: self.by_resource(d.resource) for d in ALL_ENTITIES}

    def close(self):
        if self.on_close is not None:
            self.on_close()


def _bundle(make: Callable[[EntityDefinition], EntityStore], backend: str, on_close=None) -> Stores:
    return Stores(
        clients=make(CLIENTS),
        properties=make(PROPERTIES),
        transactions=make(TRANSACTIONS),
        contracts=make(CONTRACTS),
        backend=backend,
        on_close=on_close,
    )


def memory_stores() -> Stores:
    return _bundle(MemoryStore, "memory")


def sql_stores(db: DatabaseManager) -> Stores:
    from .sql import SqlStore

    db.init_db()
    return _bundle(lambda d: SqlStore(d, db, SQL_MODELS[d.resource]), "sql", on_close=db.dispose)


def supabase_stores(client) -> Stores:
    from .supabase_store import SupabaseStore

    return _bundle(lambda d: SupabaseStore(d, client), "supabase")


# PUBLIC_INTERFACE
def build_stores(settings: Settings) -> Stores:
    """
    Build the stores for the configured backend.

    Raises:
        ConfigurationError: the backend is unknown or lacks credentials
    """
    settings.validate()
    logger.info(f"Using '{settings.store_backend}' store backend")
    if settings.store_backend == "memory":
        return memory_stores()
    if settings.store_backend == "sql":
        return sql_stores(DatabaseManager(settings.database_url, echo=settings.sql_echo))
    from .supabase_store import connect

    return supabase_stores(connect(settings.supabase_url, settings.supabase_key))
