"""
Error taxonomy for the store layer.

The route layer maps StoreError and InvalidCursorError to 400 and
NotFoundError to 404.
"""


class CrmError(Exception):
    """Base class for errors surfaced to the route layer."""


class StoreError(CrmError):
    """The backing store failed or rejected the operation."""


class NotFoundError(CrmError):
    """No record exists with the requested id."""

    def __init__(self, entity: str, record_id: str):
        self.entity = entity
        self.record_id = record_id
        super().__init__(f"{entity.capitalize()} '{record_id}' not found")


class InvalidCursorError(CrmError):
    """The pagination cursor could not be decoded."""
