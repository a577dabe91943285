"""
Append-only history of writes to the books.

Rows are keyed by entry id and entry number rather than by a
foreign key, so the history of a deleted entry stays readable.
"""

from datetime import datetime

from sqlalchemy import String, DateTime, Text, Integer, Index
from sqlalchemy.orm import Mapped, mapped_column

from bookkeeping.models.base import Base


class AuditLog(Base):
    __tablename__ = "audit_log"
    __table_args__ = (
        Index("ix_audit_log_event_created", "event_type", "created_at"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    # ENTRY_CREATED, ENTRY_CORRECTED or ENTRY_DELETED
    event_type: Mapped[str] = mapped_column(String(50), nullable=False)
    entry_id: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)
    entry_number: Mapped[str | None] = mapped_column(String(40), nullable=True)
    # JSON snapshot of the entry at the time of the event
    details: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False
    )
