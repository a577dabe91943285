"""
Tests for the FinancialYearService.
"""

from datetime import date

import pytest

from bookkeeping.exceptions import NotFoundError
from bookkeeping.schemas.financial_year import FinancialYearCreate
from bookkeeping.services.financial_year_service import FinancialYearService


def create_year(db_session, name, start_year, is_active=False):
    year = FinancialYearService(db_session).create_financial_year(FinancialYearCreate(
        name=name,
        start_date=date(start_year, 4, 1),
        end_date=date(start_year + 1, 3, 31),
        is_active=is_active,
    ))
    db_session.commit()
    return year


class TestFinancialYears:

    def test_no_active_year(self, db_session):
        create_year(db_session, "FY 2023-24", 2023)
        assert FinancialYearService(db_session).get_active_financial_year() is None

    def test_activate(self, db_session):
        year = create_year(db_session, "FY 2023-24", 2023)
        service = FinancialYearService(db_session)

        service.set_active_financial_year(year.id)
        db_session.commit()

        assert service.get_active_financial_year().id == year.id

    def test_only_one_active(self, db_session):
        first = create_year(db_session, "FY 2023-24", 2023, is_active=True)
        second = create_year(db_session, "FY 2024-25", 2024)
        service = FinancialYearService(db_session)

        service.set_active_financial_year(second.id)
        db_session.commit()
        db_session.refresh(first)

        active = [y for y in service.list_financial_years() if y.is_active]
        assert [y.id for y in active] == [second.id]
        assert first.is_active is False

    def test_creating_active_year_deactivates_others(self, db_session):
        create_year(db_session, "FY 2023-24", 2023, is_active=True)
        newer = create_year(db_session, "FY 2024-25", 2024, is_active=True)

        service = FinancialYearService(db_session)
        assert service.get_active_financial_year().id == newer.id

    def test_reactivating_active_year(self, db_session):
        year = create_year(db_session, "FY 2023-24", 2023, is_active=True)
        service = FinancialYearService(db_session)

        service.set_active_financial_year(year.id)
        db_session.commit()

        assert service.get_active_financial_year().id == year.id

    def test_activate_unknown_year(self, db_session):
        with pytest.raises(NotFoundError):
            FinancialYearService(db_session).set_active_financial_year(9999)

    def test_end_before_start_rejected_by_schema(self):
        with pytest.raises(ValueError):
            FinancialYearCreate(
                name="Backwards",
                start_date=date(2024, 3, 31),
                end_date=date(2023, 4, 1),
            )

    def test_delete(self, db_session):
        year = create_year(db_session, "FY 2023-24", 2023)
        service = FinancialYearService(db_session)

        service.delete_financial_year(year.id)
        db_session.commit()

        assert service.list_financial_years() == []
