"""
Ledger group model.

Groups classify ledgers (Assets, Sales, Expenses, ...) and may
nest under a parent group. The parent is referenced by id only;
a group does not own its children.
"""

from datetime import datetime

from sqlalchemy import String, Text, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookkeeping.models.base import Base


class Group(Base):
    __tablename__ = "groups"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    parent_group_id: Mapped[int | None] = mapped_column(
        ForeignKey("groups.id"), nullable=True, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    parent_group: Mapped["Group | None"] = relationship(
        remote_side=[id], back_populates="sub_groups"
    )
    sub_groups: Mapped[list["Group"]] = relationship(
        back_populates="parent_group"
    )
    ledgers: Mapped[list["Ledger"]] = relationship(back_populates="group")

    def __repr__(self) -> str:
        return f"<Group {self.name}>"
