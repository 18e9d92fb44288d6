"""
Ledger transaction schemas.

A transaction carries both a signed amount and an Income/Expense type. The
two are stored as given; sign_agrees_with_type reports when they disagree.
"""
import enum
from datetime import datetime
from typing import Optional
from pydantic import Field, field_validator

from .common import CamelModel, RecordPayload, Timestamp


class TransactionCategory(str, enum.Enum):
    COMMISSION = "Commission"
    EXPENSE = "Expense"
    MARKETING = "Marketing"
    OTHER = "Other"


class TransactionType(str, enum.Enum):
    INCOME = "Income"
    EXPENSE = "Expense"


def sign_agrees_with_type(amount: float, kind: str) -> bool:
    """Positive amounts are expected on Income rows, negative on Expense rows."""
    if kind == TransactionType.INCOME.value:
        return amount > 0
    if kind == TransactionType.EXPENSE.value:
        return amount < 0
    return True


def _non_zero(value):
    if value is not None and value == 0:
        raise ValueError("Amount cannot be zero")
    return value


class TransactionCreateRequest(RecordPayload):
    """Transaction creation request schema."""
    date: Timestamp = Field(..., description="ISO 8601 date or datetime")
    description: str = Field(..., min_length=3, description="Free-text description")
    category: TransactionCategory = Field(..., description="Ledger category")
    amount: float = Field(..., description="Signed amount; positive for income")
    type: TransactionType = Field(..., description="Income or Expense")

    @field_validator("amount")
    @classmethod
    def amount_not_zero(cls, value):
        return _non_zero(value)


class TransactionUpdateRequest(RecordPayload):
    """Transaction update request schema."""
    date: Timestamp = Field(None)
    description: str = Field(None, min_length=3)
    category: TransactionCategory = Field(None)
    amount: float = Field(None)
    type: TransactionType = Field(None)

    @field_validator("amount")
    @classmethod
    def amount_not_zero(cls, value):
        return _non_zero(value)


class TransactionResponse(CamelModel):
    """Transaction response schema."""
    id: str
    date: datetime
    description: str
    category: TransactionCategory
    amount: float
    type: TransactionType
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
