"""
Financial year model.

At most one financial year is active at a time. The service
layer switches the active year inside one unit of work; the
partial unique index below rejects a second active row even if
two requests race.
"""

from datetime import date, datetime

from sqlalchemy import (
    String, Date, DateTime, Boolean, Index, CheckConstraint, text,
)
from sqlalchemy.orm import Mapped, mapped_column

from bookkeeping.models.base import Base


class FinancialYear(Base):
    __tablename__ = "financial_years"
    __table_args__ = (
        CheckConstraint(
            "end_date >= start_date", name="ck_financial_years_date_order"
        ),
        Index(
            "uq_financial_years_single_active",
            "is_active",
            unique=True,
            sqlite_where=text("is_active"),
            postgresql_where=text("is_active"),
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    def __repr__(self) -> str:
        flag = " active" if self.is_active else ""
        return f"<FinancialYear {self.name} {self.start_date}..{self.end_date}{flag}>"
