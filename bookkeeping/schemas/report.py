"""
Pydantic schemas for accounting reports.

Reports are plain structured records. Every amount is a Decimal
with two fractional digits.
"""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel

from bookkeeping.models.enums import BalanceType, ReportPeriod


# --- Daybook ---

class DaybookRow(BaseModel):
    entry_id: int
    entry_number: str
    entry_date: date
    description: str
    total_amount: Decimal
    ledger_name: str
    debit_amount: Decimal
    credit_amount: Decimal

    model_config = {"from_attributes": True}


class DaybookSummaryRow(BaseModel):
    period_start: date
    entry_count: int
    total_debit: Decimal
    total_credit: Decimal

    model_config = {"from_attributes": True}


class DaybookReport(BaseModel):
    start_date: date
    end_date: date
    period: ReportPeriod
    rows: list[DaybookRow]
    summary: list[DaybookSummaryRow] | None = None

    model_config = {"from_attributes": True}


# --- Ledger report ---

class LedgerReportRow(BaseModel):
    entry_id: int
    entry_number: str
    entry_date: date
    description: str
    ledger_id: int
    ledger_name: str
    opening_balance: Decimal
    balance_type: BalanceType
    debit_amount: Decimal
    credit_amount: Decimal
    detail_description: str | None

    model_config = {"from_attributes": True}


# --- Trial balance ---

class TrialBalanceRow(BaseModel):
    ledger_id: int
    ledger_name: str
    opening_balance: Decimal
    balance_type: BalanceType
    total_debit: Decimal
    total_credit: Decimal
    closing_balance: Decimal
    closing_balance_type: BalanceType

    model_config = {"from_attributes": True}


class TrialBalance(BaseModel):
    as_on_date: date
    rows: list[TrialBalanceRow]
    total_debit_balance: Decimal
    total_credit_balance: Decimal

    model_config = {"from_attributes": True}


# --- Profit & loss and balance sheet ---

class StatementLine(BaseModel):
    ledger_id: int
    ledger_name: str
    group_name: str
    amount: Decimal

    model_config = {"from_attributes": True}


class ReportPeriodRange(BaseModel):
    start_date: date
    end_date: date

    model_config = {"from_attributes": True}


class ProfitAndLoss(BaseModel):
    period: ReportPeriodRange
    income: list[StatementLine]
    expenses: list[StatementLine]
    total_income: Decimal
    total_expenses: Decimal
    net_profit: Decimal
    net_loss: Decimal

    model_config = {"from_attributes": True}


class BalanceSheet(BaseModel):
    as_on_date: date
    assets: list[StatementLine]
    liabilities: list[StatementLine]
    total_assets: Decimal
    total_liabilities: Decimal
    difference: Decimal

    model_config = {"from_attributes": True}
