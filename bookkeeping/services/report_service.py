"""
Report service: read-only accounting reports.

Balances are never stored. Every report derives its numbers
from the posted detail lines at query time:

- movement:  sum of debits and credits per ledger over a window
- closing:   opening balance adjusted by the movement, expressed
             as a magnitude plus a debit/credit polarity

Sums are accumulated in Decimal on the Python side so no report
ever goes through binary floating point. Reports never write,
so they can run alongside entry creation without coordination.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal
from typing import NamedTuple

from sqlalchemy import select
from sqlalchemy.orm import Session

from bookkeeping.exceptions import NotFoundError
from bookkeeping.models.enums import BalanceType, ReportPeriod
from bookkeeping.models.group import Group
from bookkeeping.models.ledger import Ledger
from bookkeeping.models.transaction_detail import TransactionDetail
from bookkeeping.models.transaction_entry import TransactionEntry
from bookkeeping.schemas.report import (
    BalanceSheet,
    DaybookReport,
    DaybookRow,
    DaybookSummaryRow,
    LedgerReportRow,
    ProfitAndLoss,
    ReportPeriodRange,
    StatementLine,
    TrialBalance,
    TrialBalanceRow,
)
from bookkeeping.services.validation import require_date_range

logger = logging.getLogger(__name__)

ZERO = Decimal("0.00")
# Balances at or below this magnitude are left off the balance sheet
MATERIALITY_THRESHOLD = Decimal("0.01")


@dataclass
class Movement:
    """Debit and credit totals for one ledger over a window."""

    total_debit: Decimal = ZERO
    total_credit: Decimal = ZERO


class ClosingBalance(NamedTuple):
    signed: Decimal
    amount: Decimal
    balance_type: BalanceType


def derive_closing_balance(
    opening_balance: Decimal,
    balance_type: BalanceType,
    total_debit: Decimal,
    total_credit: Decimal,
) -> ClosingBalance:
    """
    Apply movement to an opening balance.

    A debit-type ledger grows with debits, a credit-type ledger
    with credits. When the result goes negative the polarity
    flips: a debit ledger that is net negative is reported as a
    credit balance of the absolute value, and vice versa.
    """
    if balance_type == BalanceType.DEBIT:
        signed = opening_balance + total_debit - total_credit
    else:
        signed = opening_balance + total_credit - total_debit

    closing_type = balance_type if signed >= 0 else balance_type.opposite()
    return ClosingBalance(signed=signed, amount=abs(signed), balance_type=closing_type)


def period_start(day: date, period: ReportPeriod) -> date:
    """First day of the bucket that contains day. Weeks start on Monday."""
    if period == ReportPeriod.WEEKLY:
        return day - timedelta(days=day.weekday())
    if period == ReportPeriod.MONTHLY:
        return day.replace(day=1)
    return day


class ReportService:

    def __init__(self, db: Session):
        self.db = db

    # --- Shared aggregation ---

    def get_movements(
        self, end_date: date, start_date: date | None = None
    ) -> dict[int, Movement]:
        """
        Sum debits and credits per ledger for entries dated on or
        before end_date (and on or after start_date, if given).

        Ledgers without qualifying lines are absent from the result.
        """
        stmt = (
            select(
                TransactionDetail.ledger_id,
                TransactionDetail.debit_amount,
                TransactionDetail.credit_amount,
            )
            .join(TransactionEntry, TransactionDetail.entry_id == TransactionEntry.id)
            .where(TransactionEntry.entry_date <= end_date)
        )
        if start_date is not None:
            stmt = stmt.where(TransactionEntry.entry_date >= start_date)

        movements: dict[int, Movement] = defaultdict(Movement)
        for ledger_id, debit, credit in self.db.execute(stmt):
            movement = movements[ledger_id]
            movement.total_debit += debit or ZERO
            movement.total_credit += credit or ZERO
        return dict(movements)

    def _ledgers_with_groups(self) -> list[tuple[Ledger, str]]:
        rows = self.db.execute(
            select(Ledger, Group.name)
            .join(Group, Ledger.group_id == Group.id)
            .order_by(Group.name, Ledger.name, Ledger.id)
        ).all()
        return [(ledger, group_name) for ledger, group_name in rows]

    # --- Reports ---

    def trial_balance(self, as_on_date: date) -> TrialBalance:
        """
        Closing balance of every ledger as of a date.

        All ledgers appear, including ones with no activity and
        a zero opening balance.
        """
        movements = self.get_movements(end_date=as_on_date)
        ledgers = self.db.execute(
            select(Ledger).order_by(Ledger.name, Ledger.id)
        ).scalars().all()

        rows = []
        total_debit_balance = ZERO
        total_credit_balance = ZERO
        for ledger in ledgers:
            movement = movements.get(ledger.id, Movement())
            closing = derive_closing_balance(
                ledger.opening_balance,
                ledger.opening_balance_type,
                movement.total_debit,
                movement.total_credit,
            )
            if closing.balance_type == BalanceType.DEBIT:
                total_debit_balance += closing.amount
            else:
                total_credit_balance += closing.amount

            rows.append(TrialBalanceRow(
                ledger_id=ledger.id,
                ledger_name=ledger.name,
                opening_balance=ledger.opening_balance,
                balance_type=ledger.opening_balance_type,
                total_debit=movement.total_debit,
                total_credit=movement.total_credit,
                closing_balance=closing.amount,
                closing_balance_type=closing.balance_type,
            ))

        logger.debug("Trial balance as on %s: %d ledgers", as_on_date, len(rows))
        return TrialBalance(
            as_on_date=as_on_date,
            rows=rows,
            total_debit_balance=total_debit_balance,
            total_credit_balance=total_credit_balance,
        )

    def ledger_report(
        self,
        start_date: date,
        end_date: date,
        ledger_id: int | None = None,
        group_id: int | None = None,
    ) -> list[LedgerReportRow]:
        """
        Line-level detail for one ledger, one group, or all ledgers.

        A projection of the posted lines; no balance math applied.
        """
        require_date_range(start_date, end_date)
        if ledger_id is not None and self.db.get(Ledger, ledger_id) is None:
            raise NotFoundError(f"Ledger {ledger_id} not found")
        if group_id is not None and self.db.get(Group, group_id) is None:
            raise NotFoundError(f"Group {group_id} not found")

        stmt = (
            select(TransactionDetail, TransactionEntry, Ledger)
            .join(TransactionEntry, TransactionDetail.entry_id == TransactionEntry.id)
            .join(Ledger, TransactionDetail.ledger_id == Ledger.id)
            .where(
                TransactionEntry.entry_date >= start_date,
                TransactionEntry.entry_date <= end_date,
            )
            .order_by(
                Ledger.name,
                Ledger.id,
                TransactionEntry.entry_date,
                TransactionEntry.entry_number,
                TransactionDetail.id,
            )
        )
        if ledger_id is not None:
            stmt = stmt.where(Ledger.id == ledger_id)
        if group_id is not None:
            stmt = stmt.where(Ledger.group_id == group_id)

        rows = [
            LedgerReportRow(
                entry_id=entry.id,
                entry_number=entry.entry_number,
                entry_date=entry.entry_date,
                description=entry.description,
                ledger_id=ledger.id,
                ledger_name=ledger.name,
                opening_balance=ledger.opening_balance,
                balance_type=ledger.opening_balance_type,
                debit_amount=detail.debit_amount,
                credit_amount=detail.credit_amount,
                detail_description=detail.description,
            )
            for detail, entry, ledger in self.db.execute(stmt)
        ]
        logger.debug("Ledger report %s..%s: %d rows", start_date, end_date, len(rows))
        return rows

    def daybook(
        self,
        start_date: date,
        end_date: date,
        period: ReportPeriod = ReportPeriod.DAILY,
        day_summary: bool = False,
    ) -> DaybookReport:
        """
        Chronological listing of every posted line in a window.

        With day_summary, the same rows are also bucketed by
        period for presentation.
        """
        require_date_range(start_date, end_date)

        stmt = (
            select(TransactionEntry, TransactionDetail, Ledger.name)
            .join(TransactionDetail, TransactionDetail.entry_id == TransactionEntry.id)
            .join(Ledger, TransactionDetail.ledger_id == Ledger.id)
            .where(
                TransactionEntry.entry_date >= start_date,
                TransactionEntry.entry_date <= end_date,
            )
            .order_by(
                TransactionEntry.entry_date,
                TransactionEntry.entry_number,
                TransactionDetail.id,
            )
        )
        rows = [
            DaybookRow(
                entry_id=entry.id,
                entry_number=entry.entry_number,
                entry_date=entry.entry_date,
                description=entry.description,
                total_amount=entry.total_amount,
                ledger_name=ledger_name,
                debit_amount=detail.debit_amount,
                credit_amount=detail.credit_amount,
            )
            for entry, detail, ledger_name in self.db.execute(stmt)
        ]

        summary = self._summarize(rows, period) if day_summary else None
        logger.debug("Daybook %s..%s: %d rows", start_date, end_date, len(rows))
        return DaybookReport(
            start_date=start_date,
            end_date=end_date,
            period=period,
            rows=rows,
            summary=summary,
        )

    @staticmethod
    def _summarize(
        rows: list[DaybookRow], period: ReportPeriod
    ) -> list[DaybookSummaryRow]:
        buckets: dict[date, dict] = {}
        for row in rows:
            key = period_start(row.entry_date, period)
            bucket = buckets.setdefault(key, {
                "entry_ids": set(),
                "total_debit": ZERO,
                "total_credit": ZERO,
            })
            bucket["entry_ids"].add(row.entry_id)
            bucket["total_debit"] += row.debit_amount
            bucket["total_credit"] += row.credit_amount

        return [
            DaybookSummaryRow(
                period_start=key,
                entry_count=len(bucket["entry_ids"]),
                total_debit=bucket["total_debit"],
                total_credit=bucket["total_credit"],
            )
            for key, bucket in sorted(buckets.items())
        ]

    def profit_and_loss(self, start_date: date, end_date: date) -> ProfitAndLoss:
        """
        Flow statement over a window.

        Opening balances are excluded. A ledger with net credit
        movement is income, net debit movement is expense, and a
        ledger with no net movement is left out. The ledger's group
        is only used for display.
        """
        require_date_range(start_date, end_date)
        movements = self.get_movements(end_date=end_date, start_date=start_date)

        income = []
        expenses = []
        total_income = ZERO
        total_expenses = ZERO
        for ledger, group_name in self._ledgers_with_groups():
            movement = movements.get(ledger.id)
            if movement is None:
                continue
            net = movement.total_credit - movement.total_debit
            if net == 0:
                continue

            line = StatementLine(
                ledger_id=ledger.id,
                ledger_name=ledger.name,
                group_name=group_name,
                amount=abs(net),
            )
            if net > 0:
                income.append(line)
                total_income += net
            else:
                expenses.append(line)
                total_expenses += -net

        net_profit = total_income - total_expenses
        logger.debug(
            "P&L %s..%s: income=%s expenses=%s",
            start_date, end_date, total_income, total_expenses,
        )
        return ProfitAndLoss(
            period=ReportPeriodRange(start_date=start_date, end_date=end_date),
            income=income,
            expenses=expenses,
            total_income=total_income,
            total_expenses=total_expenses,
            net_profit=net_profit,
            net_loss=-net_profit if net_profit < 0 else ZERO,
        )

    def balance_sheet(self, as_on_date: date) -> BalanceSheet:
        """
        Point-in-time statement of closing balances.

        A ledger whose closing polarity is debit is an asset,
        credit is a liability. Immaterial balances are omitted.
        A non-zero difference means the books do not balance; it
        is reported, not raised.
        """
        movements = self.get_movements(end_date=as_on_date)

        assets = []
        liabilities = []
        total_assets = ZERO
        total_liabilities = ZERO
        for ledger, group_name in self._ledgers_with_groups():
            movement = movements.get(ledger.id, Movement())
            closing = derive_closing_balance(
                ledger.opening_balance,
                ledger.opening_balance_type,
                movement.total_debit,
                movement.total_credit,
            )
            if closing.amount <= MATERIALITY_THRESHOLD:
                continue

            line = StatementLine(
                ledger_id=ledger.id,
                ledger_name=ledger.name,
                group_name=group_name,
                amount=closing.amount,
            )
            if closing.balance_type == BalanceType.DEBIT:
                assets.append(line)
                total_assets += closing.amount
            else:
                liabilities.append(line)
                total_liabilities += closing.amount

        logger.debug(
            "Balance sheet as on %s: assets=%s liabilities=%s",
            as_on_date, total_assets, total_liabilities,
        )
        return BalanceSheet(
            as_on_date=as_on_date,
            assets=assets,
            liabilities=liabilities,
            total_assets=total_assets,
            total_liabilities=total_liabilities,
            difference=total_assets - total_liabilities,
        )
