"""
Property listing API routes.
"""
import logging
from fastapi import APIRouter, Depends

from ...config import Settings
from ...schemas.common import ApiResponse, DeleteResult, PageData
from ...schemas.property import PropertyCreateRequest, PropertyResponse, PropertyUpdateRequest
from ...store import NotFoundError, Stores
from ...ui import CrmData
from ..deps import get_crm_data, get_settings, get_stores
from ..pagination import Pagination, get_pagination
from ..responses import ok

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/properties", tags=["Properties"])


# PUBLIC_INTERFACE
@router.get("", response_model=ApiResponse[PageData[PropertyResponse]],
            summary="List properties",
            description="List property listings newest first using cursor pagination.")
async def list_properties(
    page: Pagination = Depends(get_pagination),
    stores: Stores = Depends(get_stores),
    settings: Settings = Depends(get_settings),
):
    if settings.auto_seed:
        stores.properties.ensure_seed()
    result = stores.properties.list(page.cursor, page.limit)
    return ok(PageData[PropertyResponse](
        items=[PropertyResponse.model_validate(r) for r in result.items],
        next=result.next,
    ))


# PUBLIC_INTERFACE
@router.post("", response_model=ApiResponse[PropertyResponse],
             summary="Create property listing")
async def create_property(
    request: PropertyCreateRequest,
    stores: Stores = Depends(get_stores),
    crm: CrmData = Depends(get_crm_data),
):
    prop = stores.properties.create(request.to_record())
    crm.invalidate("properties")
    logger.info(f"Created property {prop['id']}")
    return ok(PropertyResponse.model_validate(prop))


# PUBLIC_INTERFACE
@router.get("/{property_id}", response_model=ApiResponse[PropertyResponse],
            summary="Get property details")
async def get_property(property_id: str, stores: Stores = Depends(get_stores)):
    return ok(PropertyResponse.model_validate(stores.properties.get(property_id)))


# PUBLIC_INTERFACE
@router.put("/{property_id}", response_model=ApiResponse[PropertyResponse],
            summary="Update property listing",
            description="Update the supplied listing fields; omitted fields are left unchanged.")
async def update_property(
    property_id: str,
    request: PropertyUpdateRequest,
    stores: Stores = Depends(get_stores),
    crm: CrmData = Depends(get_crm_data),
):
    prop = stores.properties.update(property_id, request.to_record(partial=True))
    crm.invalidate("properties")
    return ok(PropertyResponse.model_validate(prop))


# PUBLIC_INTERFACE
@router.delete("/{property_id}", response_model=ApiResponse[DeleteResult],
               summary="Delete property listing")
async def delete_property(
    property_id: str,
    stores: Stores = Depends(get_stores),
    crm: CrmData = Depends(get_crm_data),
):
    if not stores.properties.delete(property_id):
        raise NotFoundError("property", property_id)
    crm.invalidate("properties")
    logger.info(f"Deleted property {property_id}")
    return ok(DeleteResult(id=property_id, deleted=True))
