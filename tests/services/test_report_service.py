"""
Tests for the ReportService and the balance helpers.

Every report is derived from posted lines, so each test posts a
small set of entries and checks the numbers that come back.
"""

from datetime import date
from decimal import Decimal

import pytest

from bookkeeping.exceptions import NotFoundError, ValidationError
from bookkeeping.models.enums import BalanceType, ReportPeriod
from bookkeeping.schemas.group import GroupCreate
from bookkeeping.schemas.ledger import LedgerCreate
from bookkeeping.schemas.transaction import TransactionCreate, TransactionLineCreate
from bookkeeping.services.group_service import GroupService
from bookkeeping.services.ledger_service import LedgerService
from bookkeeping.services.report_service import (
    ReportService,
    derive_closing_balance,
    period_start,
)
from bookkeeping.services.transaction_service import TransactionService


def post(db_session, debit_ledger, credit_ledger, amount, entry_date, description="Entry"):
    entry = TransactionService(db_session).create_entry(TransactionCreate(
        entry_date=entry_date,
        description=description,
        lines=[
            TransactionLineCreate(ledger_id=debit_ledger.id, debit_amount=Decimal(amount)),
            TransactionLineCreate(ledger_id=credit_ledger.id, credit_amount=Decimal(amount)),
        ],
    ))
    db_session.commit()
    return entry


def setup_books(db_session):
    """
    Helper: Cash (opening 10000 debit), Sales and Rent.

    Posts a 5000 cash sale on Jan 10 and a 3000 rent payment
    on Jan 20, leaving Cash at 12000 debit.
    """
    groups = GroupService(db_session)
    assets = groups.create_group(GroupCreate(name="Assets"))
    income = groups.create_group(GroupCreate(name="Income"))
    expenses = groups.create_group(GroupCreate(name="Expenses"))

    ledgers = LedgerService(db_session)
    cash = ledgers.create_ledger(LedgerCreate(
        name="Cash",
        group_id=assets.id,
        opening_balance=Decimal("10000.00"),
        opening_balance_type=BalanceType.DEBIT,
    ))
    sales = ledgers.create_ledger(LedgerCreate(name="Sales", group_id=income.id))
    rent = ledgers.create_ledger(LedgerCreate(name="Rent", group_id=expenses.id))
    db_session.commit()

    post(db_session, cash, sales, "5000.00", date(2024, 1, 10), "Cash sale")
    post(db_session, rent, cash, "3000.00", date(2024, 1, 20), "Rent paid")
    return cash, sales, rent


def row_for(rows, ledger):
    return next(r for r in rows if r.ledger_id == ledger.id)


# --- Pure helpers ---

class TestDeriveClosingBalance:

    def test_debit_ledger_grows_with_debits(self):
        closing = derive_closing_balance(
            Decimal("10000"), BalanceType.DEBIT, Decimal("5000"), Decimal("3000")
        )
        assert closing.amount == Decimal("12000")
        assert closing.balance_type == BalanceType.DEBIT

    def test_credit_ledger_grows_with_credits(self):
        closing = derive_closing_balance(
            Decimal("100"), BalanceType.CREDIT, Decimal("0"), Decimal("50")
        )
        assert closing.amount == Decimal("150")
        assert closing.balance_type == BalanceType.CREDIT

    def test_negative_debit_flips_to_credit(self):
        closing = derive_closing_balance(
            Decimal("100"), BalanceType.DEBIT, Decimal("0"), Decimal("250")
        )
        assert closing.signed == Decimal("-150")
        assert closing.amount == Decimal("150")
        assert closing.balance_type == BalanceType.CREDIT

    def test_negative_credit_flips_to_debit(self):
        closing = derive_closing_balance(
            Decimal("0"), BalanceType.CREDIT, Decimal("40"), Decimal("0")
        )
        assert closing.amount == Decimal("40")
        assert closing.balance_type == BalanceType.DEBIT

    def test_zero_keeps_polarity(self):
        closing = derive_closing_balance(
            Decimal("0"), BalanceType.CREDIT, Decimal("0"), Decimal("0")
        )
        assert closing.amount == Decimal("0")
        assert closing.balance_type == BalanceType.CREDIT


class TestPeriodStart:

    def test_daily(self):
        assert period_start(date(2024, 1, 17), ReportPeriod.DAILY) == date(2024, 1, 17)

    def test_weekly_starts_monday(self):
        # 2024-01-17 is a Wednesday
        assert period_start(date(2024, 1, 17), ReportPeriod.WEEKLY) == date(2024, 1, 15)

    def test_monthly(self):
        assert period_start(date(2024, 1, 17), ReportPeriod.MONTHLY) == date(2024, 1, 1)


# --- Reports ---

class TestTrialBalance:

    def test_closing_balances(self, db_session):
        cash, sales, rent = setup_books(db_session)

        report = ReportService(db_session).trial_balance(date(2024, 1, 31))

        cash_row = row_for(report.rows, cash)
        assert cash_row.total_debit == Decimal("5000.00")
        assert cash_row.total_credit == Decimal("3000.00")
        assert cash_row.closing_balance == Decimal("12000.00")
        assert cash_row.closing_balance_type == BalanceType.DEBIT

        sales_row = row_for(report.rows, sales)
        assert sales_row.closing_balance == Decimal("5000.00")
        assert sales_row.closing_balance_type == BalanceType.CREDIT

        assert report.total_debit_balance == Decimal("15000.00")
        assert report.total_credit_balance == Decimal("5000.00")

    def test_later_entries_are_excluded(self, db_session):
        cash, _, _ = setup_books(db_session)

        report = ReportService(db_session).trial_balance(date(2024, 1, 15))

        cash_row = row_for(report.rows, cash)
        assert cash_row.total_credit == Decimal("0")
        assert cash_row.closing_balance == Decimal("15000.00")

    def test_as_on_date_is_inclusive(self, db_session):
        cash, _, _ = setup_books(db_session)

        report = ReportService(db_session).trial_balance(date(2024, 1, 20))

        assert row_for(report.rows, cash).closing_balance == Decimal("12000.00")

    def test_idle_ledgers_are_listed(self, db_session):
        setup_books(db_session)
        group = GroupService(db_session).create_group(GroupCreate(name="Other"))
        idle = LedgerService(db_session).create_ledger(
            LedgerCreate(name="Suspense", group_id=group.id)
        )
        db_session.commit()

        report = ReportService(db_session).trial_balance(date(2024, 1, 31))

        idle_row = row_for(report.rows, idle)
        assert idle_row.closing_balance == Decimal("0")
        assert [r.ledger_name for r in report.rows] == ["Cash", "Rent", "Sales", "Suspense"]

    def test_reads_are_repeatable(self, db_session):
        setup_books(db_session)
        service = ReportService(db_session)

        first = service.trial_balance(date(2024, 1, 31))
        second = service.trial_balance(date(2024, 1, 31))

        assert first == second


class TestLedgerReport:

    def test_single_ledger(self, db_session):
        cash, _, _ = setup_books(db_session)

        rows = ReportService(db_session).ledger_report(
            date(2024, 1, 1), date(2024, 1, 31), ledger_id=cash.id
        )

        assert [r.entry_date for r in rows] == [date(2024, 1, 10), date(2024, 1, 20)]
        assert rows[0].debit_amount == Decimal("5000.00")
        assert rows[1].credit_amount == Decimal("3000.00")
        assert all(r.opening_balance == Decimal("10000.00") for r in rows)

    def test_by_group(self, db_session):
        _, sales, _ = setup_books(db_session)

        rows = ReportService(db_session).ledger_report(
            date(2024, 1, 1), date(2024, 1, 31), group_id=sales.group_id
        )

        assert {r.ledger_name for r in rows} == {"Sales"}

    def test_all_ledgers(self, db_session):
        setup_books(db_session)

        rows = ReportService(db_session).ledger_report(date(2024, 1, 1), date(2024, 1, 31))

        assert len(rows) == 4

    def test_boundaries_are_inclusive(self, db_session):
        cash, _, _ = setup_books(db_session)

        rows = ReportService(db_session).ledger_report(
            date(2024, 1, 10), date(2024, 1, 10), ledger_id=cash.id
        )

        assert len(rows) == 1

    def test_unknown_ledger(self, db_session):
        with pytest.raises(NotFoundError):
            ReportService(db_session).ledger_report(
                date(2024, 1, 1), date(2024, 1, 31), ledger_id=9999
            )

    def test_end_before_start(self, db_session):
        with pytest.raises(ValidationError):
            ReportService(db_session).ledger_report(date(2024, 2, 1), date(2024, 1, 1))


class TestDaybook:

    def test_rows_in_date_order(self, db_session):
        setup_books(db_session)

        report = ReportService(db_session).daybook(date(2024, 1, 1), date(2024, 1, 31))

        assert [r.entry_date for r in report.rows] == [
            date(2024, 1, 10), date(2024, 1, 10),
            date(2024, 1, 20), date(2024, 1, 20),
        ]
        assert report.summary is None

    def test_monthly_summary(self, db_session):
        cash, sales, _ = setup_books(db_session)
        post(db_session, cash, sales, "250.00", date(2024, 2, 5))

        report = ReportService(db_session).daybook(
            date(2024, 1, 1), date(2024, 2, 29),
            period=ReportPeriod.MONTHLY, day_summary=True,
        )

        assert [s.period_start for s in report.summary] == [date(2024, 1, 1), date(2024, 2, 1)]
        january = report.summary[0]
        assert january.entry_count == 2
        assert january.total_debit == Decimal("8000.00")
        assert january.total_credit == Decimal("8000.00")
        assert report.summary[1].entry_count == 1

    def test_end_before_start(self, db_session):
        with pytest.raises(ValidationError):
            ReportService(db_session).daybook(date(2024, 2, 1), date(2024, 1, 1))


class TestProfitAndLoss:

    def test_income_and_expenses(self, db_session):
        _, sales, rent = setup_books(db_session)

        report = ReportService(db_session).profit_and_loss(date(2024, 1, 1), date(2024, 1, 31))

        assert [line.ledger_name for line in report.income] == ["Sales"]
        assert report.income[0].amount == Decimal("5000.00")
        assert report.income[0].group_name == "Income"
        rent_line = next(line for line in report.expenses if line.ledger_id == rent.id)
        assert rent_line.amount == Decimal("3000.00")

    def test_totals_identity(self, db_session):
        setup_books(db_session)

        report = ReportService(db_session).profit_and_loss(date(2024, 1, 1), date(2024, 1, 31))

        assert report.net_profit == report.total_income - report.total_expenses
        if report.net_profit < 0:
            assert report.net_loss == -report.net_profit
        else:
            assert report.net_loss == Decimal("0")

    def test_opening_balances_are_ignored(self, db_session):
        setup_books(db_session)

        report = ReportService(db_session).profit_and_loss(date(2024, 3, 1), date(2024, 3, 31))

        assert report.income == []
        assert report.expenses == []
        assert report.net_profit == Decimal("0")

    def test_window_limits_movement(self, db_session):
        setup_books(db_session)

        report = ReportService(db_session).profit_and_loss(date(2024, 1, 1), date(2024, 1, 15))

        assert report.total_income == Decimal("5000.00")
        assert [line.ledger_name for line in report.expenses] == ["Cash"]

    def test_end_before_start(self, db_session):
        with pytest.raises(ValidationError):
            ReportService(db_session).profit_and_loss(date(2024, 2, 1), date(2024, 1, 1))


class TestBalanceSheet:

    def test_assets_and_liabilities(self, db_session):
        cash, sales, rent = setup_books(db_session)

        report = ReportService(db_session).balance_sheet(date(2024, 1, 31))

        assert {line.ledger_id for line in report.assets} == {cash.id, rent.id}
        assert [line.ledger_id for line in report.liabilities] == [sales.id]
        assert report.total_assets == Decimal("15000.00")
        assert report.total_liabilities == Decimal("5000.00")
        assert report.difference == Decimal("10000.00")

    def test_immaterial_balances_are_omitted(self, db_session):
        group = GroupService(db_session).create_group(GroupCreate(name="Assets"))
        ledgers = LedgerService(db_session)
        ledgers.create_ledger(LedgerCreate(
            name="Petty", group_id=group.id, opening_balance=Decimal("0.01"),
        ))
        ledgers.create_ledger(LedgerCreate(name="Empty", group_id=group.id))
        kept = ledgers.create_ledger(LedgerCreate(
            name="Float", group_id=group.id, opening_balance=Decimal("0.02"),
        ))
        db_session.commit()

        report = ReportService(db_session).balance_sheet(date(2024, 1, 31))

        assert [line.ledger_id for line in report.assets] == [kept.id]
        assert report.liabilities == []
