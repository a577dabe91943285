"""
Transaction detail model.

One line of an entry: a debit and/or credit against a single
ledger. A line may carry both amounts; the only balance rule is
entry-level (sum of debits equals sum of credits), enforced by
TransactionService, not here.
"""

from decimal import Decimal

from sqlalchemy import Text, Numeric, ForeignKey, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookkeeping.models.base import Base


class TransactionDetail(Base):
    __tablename__ = "transaction_details"
    __table_args__ = (
        CheckConstraint(
            "debit_amount >= 0", name="ck_transaction_details_debit_non_negative"
        ),
        CheckConstraint(
            "credit_amount >= 0", name="ck_transaction_details_credit_non_negative"
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    entry_id: Mapped[int] = mapped_column(
        ForeignKey("transaction_entries.id"), nullable=False, index=True
    )
    ledger_id: Mapped[int] = mapped_column(
        ForeignKey("ledgers.id"), nullable=False, index=True
    )
    debit_amount: Mapped[Decimal] = mapped_column(
        Numeric(15, 2), nullable=False, default=Decimal("0.00")
    )
    credit_amount: Mapped[Decimal] = mapped_column(
        Numeric(15, 2), nullable=False, default=Decimal("0.00")
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    entry: Mapped["TransactionEntry"] = relationship(back_populates="details")
    ledger: Mapped["Ledger"] = relationship(back_populates="details")

    def __repr__(self) -> str:
        return (
            f"<TransactionDetail ledger={self.ledger_id} "
            f"Dr {self.debit_amount} Cr {self.credit_amount}>"
        )
