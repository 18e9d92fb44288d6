"""
Client management API routes.

Provides endpoints for client CRUD operations. A client's status also
places it on the sales pipeline board, so writes here drop the cached
pipeline view as well.
"""
import logging
from fastapi import APIRouter, Depends

from ...config import Settings
from ...schemas.client import ClientCreateRequest, ClientResponse, ClientUpdateRequest
from ...schemas.common import ApiResponse, DeleteResult, PageData
from ...store import NotFoundError, Stores
from ...store.base import utcnow
from ...ui import CrmData
from ..deps import get_crm_data, get_settings, get_stores
from ..pagination import Pagination, get_pagination
from ..responses import ok

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/clients", tags=["Clients"])


# PUBLIC_INTERFACE
@router.get("", response_model=ApiResponse[PageData[ClientResponse]],
            summary="List clients",
            description="List clients newest first using cursor pagination.")
async def list_clients(
    page: Pagination = Depends(get_pagination),
    stores: Stores = Depends(get_stores),
    settings: Settings = Depends(get_settings),
):
    """
    List clients.

    Seeds the example clients into an empty table when AUTO_SEED is on.
    """
    if settings.auto_seed:
        stores.clients.ensure_seed()
    result = stores.clients.list(page.cursor, page.limit)
    return ok(PageData[ClientResponse](
        items=[ClientResponse.model_validate(r) for r in result.items],
        next=result.next,
    ))


# PUBLIC_INTERFACE
@router.post("", response_model=ApiResponse[ClientResponse],
             summary="Create new client",
             description="Create a client. The contact timestamp is set to now.")
async def create_client(
    request: ClientCreateRequest,
    stores: Stores = Depends(get_stores),
    crm: CrmData = Depends(get_crm_data),
):
    record = request.to_record()
    record["lastContacted"] = utcnow()
    client = stores.clients.create(record)
    crm.invalidate("clients")
    logger.info(f"Created client {client['id']}")
    return ok(ClientResponse.model_validate(client))


# PUBLIC_INTERFACE
@router.get("/{client_id}", response_model=ApiResponse[ClientResponse],
            summary="Get client details")
async def get_client(client_id: str, stores: Stores = Depends(get_stores)):
    return ok(ClientResponse.model_validate(stores.clients.get(client_id)))


# PUBLIC_INTERFACE
@router.put("/{client_id}", response_model=ApiResponse[ClientResponse],
            summary="Update client",
            description="Update the supplied client fields; omitted fields are left unchanged.")
async def update_client(
    client_id: str,
    request: ClientUpdateRequest,
    stores: Stores = Depends(get_stores),
    crm: CrmData = Depends(get_crm_data),
):
    client = stores.clients.update(client_id, request.to_record(partial=True))
    crm.invalidate("clients")
    return ok(ClientResponse.model_validate(client))


# PUBLIC_INTERFACE
@router.delete("/{client_id}", response_model=ApiResponse[DeleteResult],
               summary="Delete client",
               description="Permanently delete a client. Contracts that reference it are kept.")
async def delete_client(
    client_id: str,
    stores: Stores = Depends(get_stores),
    crm: CrmData = Depends(get_crm_data),
):
    if not stores.clients.delete(client_id):
        raise NotFoundError("client", client_id)
    crm.invalidate("clients")
    logger.info(f"Deleted client {client_id}")
    return ok(DeleteResult(id=client_id, deleted=True))
