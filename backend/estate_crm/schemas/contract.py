"""
Contract schemas.

propertyId and clientId are free references; existence of the referenced
records is not checked.
"""
import enum
from datetime import datetime
from typing import Optional
from pydantic import Field

from .common import CamelModel, RecordPayload, Timestamp


class ContractStatus(str, enum.Enum):
    DRAFT = "Draft"
    SENT = "Sent"
    SIGNED = "Signed"
    EXPIRED = "Expired"


class ContractCreateRequest(RecordPayload):
    """Contract creation request schema."""
    property_id: str = Field(..., min_length=1, description="Referenced property ID")
    client_id: str = Field(..., min_length=1, description="Referenced client ID")
    status: ContractStatus = Field(..., description="Draft, Sent, Signed or Expired")
    expiry_date: Timestamp = Field(..., description="Expiry date")
    amount: float = Field(..., gt=0, description="Contract amount")
    signing_date: Optional[Timestamp] = Field(None, description="Signing date")


class ContractUpdateRequest(RecordPayload):
    """Contract update request schema. signingDate may be cleared with null."""
    property_id: str = Field(None, min_length=1)
    client_id: str = Field(None, min_length=1)
    status: ContractStatus = Field(None)
    expiry_date: Timestamp = Field(None)
    amount: float = Field(None, gt=0)
    signing_date: Optional[Timestamp] = Field(None)


class ContractResponse(CamelModel):
    """Contract response schema."""
    id: str
    property_id: str
    client_id: str
    status: ContractStatus
    signing_date: Optional[datetime] = None
    expiry_date: datetime
    amount: float
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
