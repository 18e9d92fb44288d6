"""
Request dependencies.

The stores, settings and UI data layer are attached to app.state at startup
and handed to handlers through these functions.
"""
from fastapi import Request

from ..config import Settings
from ..store import Stores
from ..ui import CrmData


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


# PUBLIC_INTERFACE
def get_stores(request: Request) -> Stores:
    """Return the stores built for this application."""
    stores = getattr(request.app.state, "stores", None)
    if stores is None:
        raise RuntimeError("Stores are not initialized; application startup did not complete")
    return stores


def get_crm_data(request: Request) -> CrmData:
    crm_data = getattr(request.app.state, "crm_data", None)
    if crm_data is None:
        raise RuntimeError("UI data layer is not initialized; application startup did not complete")
    return crm_data
