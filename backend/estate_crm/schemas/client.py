"""
Client-related Pydantic schemas.

Defines request/response models for client CRUD. Client status also places
the client on the sales pipeline board.
"""
import enum
from datetime import datetime
from typing import Optional
from pydantic import Field

from .common import CamelModel, Email, RecordPayload


class ClientStatus(str, enum.Enum):
    """Client lifecycle status values."""
    LEAD = "Lead"
    ACTIVE = "Active"
    INACTIVE = "Inactive"


class ClientCreateRequest(RecordPayload):
    """Client creation request schema."""
    name: str = Field(..., min_length=2, description="Client name")
    email: Email = Field(..., description="Contact email")
    phone: str = Field(..., min_length=10, description="Contact phone")
    status: ClientStatus = Field(..., description="Lead, Active or Inactive")


class ClientUpdateRequest(RecordPayload):
    """Client update request schema. Only provided fields are applied."""
    name: str = Field(None, min_length=2, description="Client name")
    email: Email = Field(None, description="Contact email")
    phone: str = Field(None, min_length=10, description="Contact phone")
    status: ClientStatus = Field(None, description="Lead, Active or Inactive")


class ClientResponse(CamelModel):
    """Client response schema."""
    id: str = Field(..., description="Client ID")
    name: str = Field(..., description="Client name")
    email: str = Field(..., description="Contact email")
    phone: str = Field(..., description="Contact phone")
    status: ClientStatus = Field(..., description="Client status")
    last_contacted: Optional[datetime] = Field(None, description="Last contact timestamp")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")
