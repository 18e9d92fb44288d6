"""
Entity storage: one polymorphic interface with memory, SQL and Supabase backends.
"""
from .base import EntityDefinition, EntityStore, Page, Record
from .errors import CrmError, InvalidCursorError, NotFoundError, StoreError
from .factory import Stores, build_stores

__all__ = [
    "EntityDefinition", "EntityStore", "Page", "Record",
    "CrmError", "InvalidCursorError", "NotFoundError", "StoreError",
    "Stores", "build_stores",
]
