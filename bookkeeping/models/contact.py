"""
Contact model.

A customer or supplier. A contact may be linked to any number
of ledgers (e.g. a debtor ledger per customer).
"""

from datetime import datetime

from sqlalchemy import String, Text, DateTime, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookkeeping.models.base import Base
from bookkeeping.models.enums import ContactType


class Contact(Base):
    __tablename__ = "contacts"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    contact_type: Mapped[ContactType] = mapped_column(
        SAEnum(
            ContactType,
            name="contact_type_enum",
            values_callable=lambda e: [m.value for m in e],
            create_constraint=True,
        ),
        nullable=False,
    )
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    ledgers: Mapped[list["Ledger"]] = relationship(back_populates="contact")

    def __repr__(self) -> str:
        return f"<Contact {self.name} ({self.contact_type.value})>"
