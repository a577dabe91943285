"""
Report API endpoints.

All report endpoints are read-only GETs. A window whose end is
before its start is rejected with 400; an empty window simply
produces empty or zero results.
"""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from bookkeeping.exceptions import NotFoundError
from bookkeeping.models.base import get_db
from bookkeeping.models.enums import ReportPeriod
from bookkeeping.services.report_service import ReportService
from bookkeeping.schemas.report import (
    BalanceSheet,
    DaybookReport,
    LedgerReportRow,
    ProfitAndLoss,
    TrialBalance,
)

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get("/daybook", response_model=DaybookReport)
def get_daybook(
    start_date: date = Query(...),
    end_date: date = Query(...),
    period: ReportPeriod = Query(default=ReportPeriod.DAILY),
    day_summary: bool = Query(default=False),
    db: Session = Depends(get_db),
):
    """Every posted line in the window, in date and entry-number order."""
    service = ReportService(db)
    try:
        return service.daybook(start_date, end_date, period, day_summary)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/ledger", response_model=list[LedgerReportRow])
def get_ledger_report(
    start_date: date = Query(...),
    end_date: date = Query(...),
    ledger_id: int | None = Query(default=None),
    group_id: int | None = Query(default=None),
    db: Session = Depends(get_db),
):
    """Posted lines for one ledger, one group, or every ledger."""
    service = ReportService(db)
    try:
        return service.ledger_report(start_date, end_date, ledger_id, group_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/trial-balance", response_model=TrialBalance)
def get_trial_balance(
    as_on_date: date = Query(...),
    db: Session = Depends(get_db),
):
    """Closing balance of every ledger as of a date."""
    return ReportService(db).trial_balance(as_on_date)


@router.get("/profit-loss", response_model=ProfitAndLoss)
def get_profit_and_loss(
    start_date: date = Query(...),
    end_date: date = Query(...),
    db: Session = Depends(get_db),
):
    """Income and expenses from net movement over a window."""
    service = ReportService(db)
    try:
        return service.profit_and_loss(start_date, end_date)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/balance-sheet", response_model=BalanceSheet)
def get_balance_sheet(
    as_on_date: date = Query(...),
    db: Session = Depends(get_db),
):
    """Assets and liabilities as of a date."""
    return ReportService(db).balance_sheet(as_on_date)
