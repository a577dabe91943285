"""
Pydantic schemas for transaction entries.

A request carries the entry header plus two or more lines.
total_amount and entry_number are never accepted from the
client; the service derives them.
"""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field


# --- Request Schemas ---

class TransactionLineCreate(BaseModel):
    """A single line: a debit and/or credit against one ledger."""
    ledger_id: int
    debit_amount: Decimal = Field(default=Decimal("0.00"), ge=0, decimal_places=2)
    credit_amount: Decimal = Field(default=Decimal("0.00"), ge=0, decimal_places=2)
    description: str | None = None


class TransactionCreate(BaseModel):
    """A complete entry: lines whose debits and credits must balance."""
    entry_date: date
    description: str = Field(min_length=1)
    lines: list[TransactionLineCreate] = Field(min_length=2)


# --- Response Schemas ---

class TransactionDetailResponse(BaseModel):
    id: int
    entry_id: int
    ledger_id: int
    debit_amount: Decimal
    credit_amount: Decimal
    description: str | None

    model_config = {"from_attributes": True}


class TransactionEntryResponse(BaseModel):
    id: int
    entry_number: str
    entry_date: date
    description: str
    total_amount: Decimal
    is_correction: bool
    original_entry_id: int | None
    created_at: datetime
    updated_at: datetime
    details: list[TransactionDetailResponse]

    model_config = {"from_attributes": True}
