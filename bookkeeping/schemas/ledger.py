"""
Pydantic schemas for ledgers.

These define the API contract: what data comes in and what
goes out. They are separate from the database models because
the API shape and the storage shape often differ.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from bookkeeping.models.enums import BalanceType


class LedgerCreate(BaseModel):
    """Request to create a new ledger."""
    name: str = Field(min_length=1, max_length=100)
    group_id: int
    contact_id: int | None = None
    opening_balance: Decimal = Field(
        default=Decimal("0.00"), ge=0, decimal_places=2
    )
    opening_balance_type: BalanceType = BalanceType.DEBIT


class LedgerUpdate(BaseModel):
    """Partial update. Only fields present in the request are changed."""
    name: str | None = Field(default=None, min_length=1, max_length=100)
    group_id: int | None = None
    contact_id: int | None = None
    opening_balance: Decimal | None = Field(default=None, ge=0, decimal_places=2)
    opening_balance_type: BalanceType | None = None


class LedgerResponse(BaseModel):
    """Ledger in API responses."""
    id: int
    name: str
    group_id: int
    contact_id: int | None
    opening_balance: Decimal
    opening_balance_type: BalanceType
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
