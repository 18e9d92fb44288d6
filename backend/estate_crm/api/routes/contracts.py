"""
Contract API routes.

Contracts reference a property and a client by id. References are not
checked on write; dangling ones show up as "N/A" in the UI.
"""
import logging
from fastapi import APIRouter, Depends

from ...config import Settings
from ...schemas.common import ApiResponse, DeleteResult, PageData
from ...schemas.contract import ContractCreateRequest, ContractResponse, ContractUpdateRequest
from ...store import NotFoundError, Stores
from ...ui import CrmData
from ..deps import get_crm_data, get_settings, get_stores
from ..pagination import Pagination, get_pagination
from ..responses import ok

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/contracts", tags=["Contracts"])


# PUBLIC_INTERFACE
@router.get("", response_model=ApiResponse[PageData[ContractResponse]],
            summary="List contracts",
            description="List contracts newest first using cursor pagination.")
async def list_contracts(
    page: Pagination = Depends(get_pagination),
    stores: Stores = Depends(get_stores),
    settings: Settings = Depends(get_settings),
):
    if settings.auto_seed:
        stores.contracts.ensure_seed()
    result = stores.contracts.list(page.cursor, page.limit)
    return ok(PageData[ContractResponse](
        items=[ContractResponse.model_validate(r) for r in result.items],
        next=result.next,
    ))


# PUBLIC_INTERFACE
@router.post("", response_model=ApiResponse[ContractResponse],
             summary="Create contract")
async def create_contract(
    request: ContractCreateRequest,
    stores: Stores = Depends(get_stores),
    crm: CrmData = Depends(get_crm_data),
):
    contract = stores.contracts.create(request.to_record())
    crm.invalidate("contracts")
    logger.info(f"Created contract {contract['id']}")
    return ok(ContractResponse.model_validate(contract))


# PUBLIC_INTERFACE
@router.get("/{contract_id}", response_model=ApiResponse[ContractResponse],
            summary="Get contract details")
async def get_contract(contract_id: str, stores: Stores = Depends(get_stores)):
    return ok(ContractResponse.model_validate(stores.contracts.get(contract_id)))


# PUBLIC_INTERFACE
@router.put("/{contract_id}", response_model=ApiResponse[ContractResponse],
            summary="Update contract",
            description="Update the supplied contract fields. Send signingDate as null to clear it.")
async def update_contract(
    contract_id: str,
    request: ContractUpdateRequest,
    stores: Stores = Depends(get_stores),
    crm: CrmData = Depends(get_crm_data),
):
    contract = stores.contracts.update(contract_id, request.to_record(partial=True))
    crm.invalidate("contracts")
    return ok(ContractResponse.model_validate(contract))


# PUBLIC_INTERFACE
@router.delete("/{contract_id}", response_model=ApiResponse[DeleteResult],
               summary="Delete contract")
async def delete_contract(
    contract_id: str,
    stores: Stores = Depends(get_stores),
    crm: CrmData = Depends(get_crm_data),
):
    if not stores.contracts.delete(contract_id):
        raise NotFoundError("contract", contract_id)
    crm.invalidate("contracts")
    logger.info(f"Deleted contract {contract_id}")
    return ok(DeleteResult(id=contract_id, deleted=True))
