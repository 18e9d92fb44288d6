"""
Pydantic schemas for API request/response validation.

Provides camelCase request and response models for clients, properties,
transactions and contracts, plus the shared response envelope.
"""
from .client import ClientCreateRequest, ClientResponse, ClientStatus, ClientUpdateRequest
from .contract import ContractCreateRequest, ContractResponse, ContractStatus, ContractUpdateRequest
from .property import PropertyCreateRequest, PropertyResponse, PropertyStatus, PropertyUpdateRequest
from .transaction import (
    TransactionCategory, TransactionCreateRequest, TransactionResponse,
    TransactionType, TransactionUpdateRequest,
)

# Request/response models per resource, shared by the API routes and UI forms.
RESOURCE_SCHEMAS = {
    "clients": (ClientCreateRequest, ClientUpdateRequest, ClientResponse),
    "properties": (PropertyCreateRequest, PropertyUpdateRequest, PropertyResponse),
    "transactions": (TransactionCreateRequest, TransactionUpdateRequest, TransactionResponse),
    "contracts": (ContractCreateRequest, ContractUpdateRequest, ContractResponse),
}
