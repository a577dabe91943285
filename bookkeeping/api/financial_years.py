"""
Financial year API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from bookkeeping.exceptions import NotFoundError
from bookkeeping.models.base import get_db
from bookkeeping.services.financial_year_service import FinancialYearService
from bookkeeping.schemas.common import DeleteResponse
from bookkeeping.schemas.financial_year import (
    FinancialYearCreate,
    FinancialYearResponse,
)

router = APIRouter(prefix="/financial-years", tags=["Financial Years"])


@router.post("", response_model=FinancialYearResponse, status_code=201)
def create_financial_year(
    request: FinancialYearCreate,
    db: Session = Depends(get_db),
):
    """Create a financial year. Creating it active deactivates the others."""
    service = FinancialYearService(db)
    try:
        year = service.create_financial_year(request)
        db.commit()
        return year
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))


@router.get("", response_model=list[FinancialYearResponse])
def list_financial_years(db: Session = Depends(get_db)):
    return FinancialYearService(db).list_financial_years()


@router.get("/active", response_model=FinancialYearResponse | None)
def get_active_financial_year(db: Session = Depends(get_db)):
    """The active financial year, or null when none is active."""
    return FinancialYearService(db).get_active_financial_year()


@router.post("/{year_id}/activate", response_model=FinancialYearResponse)
def set_active_financial_year(
    year_id: int,
    db: Session = Depends(get_db),
):
    """Make this the only active financial year."""
    service = FinancialYearService(db)
    try:
        year = service.set_active_financial_year(year_id)
        db.commit()
        return year
    except NotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{year_id}", response_model=DeleteResponse)
def delete_financial_year(
    year_id: int,
    db: Session = Depends(get_db),
):
    service = FinancialYearService(db)
    try:
        service.delete_financial_year(year_id)
        db.commit()
        return DeleteResponse(success=True)
    except NotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
