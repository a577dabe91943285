"""
Ledger model (chart of accounts).

Every account in the books is a ledger. Transaction detail lines
are posted against ledgers; the ledger itself only stores its
opening balance. Current balances are always derived from the
detail lines.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    String, DateTime, Numeric, ForeignKey, CheckConstraint,
    Enum as SAEnum,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookkeeping.models.base import Base
from bookkeeping.models.enums import BalanceType


class Ledger(Base):
    """
    A single account.

    opening_balance_type fixes the sign convention for every
    balance computed on this ledger: a debit-type ledger grows
    with debits, a credit-type ledger grows with credits.
    """

    __tablename__ = "ledgers"
    __table_args__ = (
        CheckConstraint(
            "opening_balance >= 0", name="ck_ledgers_opening_balance_non_negative"
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    group_id: Mapped[int] = mapped_column(
        ForeignKey("groups.id"), nullable=False, index=True
    )
    contact_id: Mapped[int | None] = mapped_column(
        ForeignKey("contacts.id"), nullable=True, index=True
    )
    opening_balance: Mapped[Decimal] = mapped_column(
        Numeric(15, 2), nullable=False, default=Decimal("0.00")
    )
    opening_balance_type: Mapped[BalanceType] = mapped_column(
        SAEnum(
            BalanceType,
            name="balance_type_enum",
            values_callable=lambda e: [m.value for m in e],
            create_constraint=True,
        ),
        nullable=False,
        default=BalanceType.DEBIT,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    group: Mapped["Group"] = relationship(back_populates="ledgers")
    contact: Mapped["Contact | None"] = relationship(back_populates="ledgers")
    details: Mapped[list["TransactionDetail"]] = relationship(
        back_populates="ledger"
    )

    def __repr__(self) -> str:
        return (
            f"<Ledger {self.name} "
            f"{self.opening_balance} {self.opening_balance_type.value}>"
        )
