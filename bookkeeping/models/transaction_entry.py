"""
Transaction entry model.

An entry is one dated accounting event made up of two or more
detail lines. Entries are never edited in place: a mistake is
fixed by posting a correction entry that points back to the
original through original_entry_id.

entry_number is unique at the database level, so two concurrent
creations can never end up sharing a number.
"""

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import (
    String, Text, Date, DateTime, Numeric, Boolean, ForeignKey,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookkeeping.models.base import Base


class TransactionEntry(Base):
    __tablename__ = "transaction_entries"

    id: Mapped[int] = mapped_column(primary_key=True)
    entry_number: Mapped[str] = mapped_column(
        String(40), unique=True, nullable=False, index=True
    )
    entry_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    # Cached sum of the detail debits, recomputed on write
    total_amount: Mapped[Decimal] = mapped_column(
        Numeric(15, 2), nullable=False
    )
    is_correction: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, index=True
    )
    original_entry_id: Mapped[int | None] = mapped_column(
        ForeignKey("transaction_entries.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    # The entry owns its lines: they are inserted and deleted with it
    details: Mapped[list["TransactionDetail"]] = relationship(
        back_populates="entry",
        cascade="all, delete-orphan",
        order_by="TransactionDetail.id",
    )
    original_entry: Mapped["TransactionEntry | None"] = relationship(
        remote_side=[id], back_populates="corrections"
    )
    corrections: Mapped[list["TransactionEntry"]] = relationship(
        back_populates="original_entry"
    )

    def __repr__(self) -> str:
        kind = "correction " if self.is_correction else ""
        return (
            f"<TransactionEntry {kind}{self.entry_number} "
            f"{self.entry_date} {self.total_amount}>"
        )
