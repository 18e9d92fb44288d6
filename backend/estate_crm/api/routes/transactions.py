"""
Accounting ledger API routes.

Transactions are listed by their ledger date, newest first. The amount sign
and the Income/Expense type are stored exactly as submitted; a disagreement
between the two is logged but not rejected.
"""
import logging
from fastapi import APIRouter, Depends

from ...config import Settings
from ...schemas.common import ApiResponse, DeleteResult, PageData
from ...schemas.transaction import (
    TransactionCreateRequest, TransactionResponse, TransactionUpdateRequest,
    sign_agrees_with_type,
)
from ...store import NotFoundError, Record, Stores
from ...ui import CrmData
from ..deps import get_crm_data, get_settings, get_stores
from ..pagination import Pagination, get_pagination
from ..responses import ok

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/transactions", tags=["Transactions"])


def _check_sign(transaction: Record):
    if not sign_agrees_with_type(transaction["amount"], transaction["type"]):
        logger.warning(
            f"Transaction {transaction['id']} amount {transaction['amount']} "
            f"disagrees with type {transaction['type']}"
        )


# PUBLIC_INTERFACE
@router.get("", response_model=ApiResponse[PageData[TransactionResponse]],
            summary="List transactions",
            description="List ledger transactions by date, newest first, using cursor pagination.")
async def list_transactions(
    page: Pagination = Depends(get_pagination),
    stores: Stores = Depends(get_stores),
    settings: Settings = Depends(get_settings),
):
    if settings.auto_seed:
        stores.transactions.ensure_seed()
    result = stores.transactions.list(page.cursor, page.limit)
    return ok(PageData[TransactionResponse](
        items=[TransactionResponse.model_validate(r) for r in result.items],
        next=result.next,
    ))


# PUBLIC_INTERFACE
@router.post("", response_model=ApiResponse[TransactionResponse],
             summary="Record transaction",
             description="Record a ledger transaction. Amount must be non-zero.")
async def create_transaction(
    request: TransactionCreateRequest,
    stores: Stores = Depends(get_stores),
    crm: CrmData = Depends(get_crm_data),
):
    transaction = stores.transactions.create(request.to_record())
    crm.invalidate("transactions")
    _check_sign(transaction)
    return ok(TransactionResponse.model_validate(transaction))


# PUBLIC_INTERFACE
@router.get("/{transaction_id}", response_model=ApiResponse[TransactionResponse],
            summary="Get transaction details")
async def get_transaction(transaction_id: str, stores: Stores = Depends(get_stores)):
    return ok(TransactionResponse.model_validate(stores.transactions.get(transaction_id)))


# PUBLIC_INTERFACE
@router.put("/{transaction_id}", response_model=ApiResponse[TransactionResponse],
            summary="Update transaction")
async def update_transaction(
    transaction_id: str,
    request: TransactionUpdateRequest,
    stores: Stores = Depends(get_stores),
    crm: CrmData = Depends(get_crm_data),
):
    transaction = stores.transactions.update(transaction_id, request.to_record(partial=True))
    crm.invalidate("transactions")
    _check_sign(transaction)
    return ok(TransactionResponse.model_validate(transaction))


# PUBLIC_INTERFACE
@router.delete("/{transaction_id}", response_model=ApiResponse[DeleteResult],
               summary="Delete transaction")
async def delete_transaction(
    transaction_id: str,
    stores: Stores = Depends(get_stores),
    crm: CrmData = Depends(get_crm_data),
):
    if not stores.transactions.delete(transaction_id):
        raise NotFoundError("transaction", transaction_id)
    crm.invalidate("transactions")
    return ok(DeleteResult(id=transaction_id, deleted=True))
