"""
Property listing schemas.
"""
import enum
from datetime import datetime
from typing import Optional
from pydantic import Field

from .common import CamelModel, RecordPayload, WebUrl


class PropertyStatus(str, enum.Enum):
    """Listing status values."""
    FOR_SALE = "For Sale"
    SOLD = "Sold"
    PENDING = "Pending"


class PropertyCreateRequest(RecordPayload):
    """Property creation request schema. Numeric fields accept numeric strings."""
    name: str = Field(..., min_length=5, description="Listing title")
    address: str = Field(..., min_length=10, description="Street address")
    price: float = Field(..., gt=0, description="Asking price")
    status: PropertyStatus = Field(..., description="For Sale, Sold or Pending")
    image_url: WebUrl = Field(..., description="Listing image URL")
    bedrooms: int = Field(..., ge=0, description="Number of bedrooms")
    bathrooms: int = Field(..., ge=0, description="Number of bathrooms")
    sqft: int = Field(..., gt=0, description="Floor area in square feet")


class PropertyUpdateRequest(RecordPayload):
    """Property update request schema."""
    name: str = Field(None, min_length=5)
    address: str = Field(None, min_length=10)
    price: float = Field(None, gt=0)
    status: PropertyStatus = Field(None)
    image_url: WebUrl = Field(None)
    bedrooms: int = Field(None, ge=0)
    bathrooms: int = Field(None, ge=0)
    sqft: int = Field(None, gt=0)


class PropertyResponse(CamelModel):
    """Property response schema."""
    id: str
    name: str
    address: str
    price: float
    status: PropertyStatus
    image_url: str
    bedrooms: int
    bathrooms: int
    sqft: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
