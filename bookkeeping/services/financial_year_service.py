"""
Financial year service.

Exactly one financial year may be active. Switching the active
year clears every flag and then sets the target, inside the
caller's unit of work, so no reader ever sees two active years
once the commit lands. The partial unique index on is_active
backs this up if two switches race.
"""

import logging

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from bookkeeping.exceptions import NotFoundError, ValidationError
from bookkeeping.models.financial_year import FinancialYear
from bookkeeping.schemas.financial_year import FinancialYearCreate

logger = logging.getLogger(__name__)


class FinancialYearService:

    def __init__(self, db: Session):
        self.db = db

    def _deactivate_all(self) -> None:
        self.db.execute(
            update(FinancialYear)
            .where(FinancialYear.is_active.is_(True))
            .values(is_active=False)
        )

    def create_financial_year(self, request: FinancialYearCreate) -> FinancialYear:
        if request.end_date < request.start_date:
            raise ValidationError("end_date must not be before start_date")

        if request.is_active:
            self._deactivate_all()

        year = FinancialYear(
            name=request.name,
            start_date=request.start_date,
            end_date=request.end_date,
            is_active=request.is_active,
        )
        self.db.add(year)
        self.db.flush()
        logger.info("Created financial year %s (%s)", year.id, year.name)
        return year

    def get_financial_year(self, year_id: int) -> FinancialYear:
        year = self.db.get(FinancialYear, year_id)
        if not year:
            raise NotFoundError(f"Financial year {year_id} not found")
        return year

    def list_financial_years(self) -> list[FinancialYear]:
        years = self.db.execute(
            select(FinancialYear).order_by(FinancialYear.start_date, FinancialYear.id)
        ).scalars().all()
        return list(years)

    def get_active_financial_year(self) -> FinancialYear | None:
        """Return the active financial year, or None if none is active."""
        return self.db.execute(
            select(FinancialYear).where(FinancialYear.is_active.is_(True))
        ).scalar_one_or_none()

    def set_active_financial_year(self, year_id: int) -> FinancialYear:
        """Make year_id the only active financial year."""
        year = self.get_financial_year(year_id)

        self._deactivate_all()
        self.db.flush()
        year.is_active = True
        self.db.flush()
        logger.info("Activated financial year %s (%s)", year.id, year.name)
        return year

    def delete_financial_year(self, year_id: int) -> None:
        year = self.get_financial_year(year_id)
        self.db.delete(year)
        self.db.flush()
        logger.info("Deleted financial year %s", year_id)
