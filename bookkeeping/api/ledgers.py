"""
Ledger API endpoints.

These endpoints expose ledger master data to HTTP clients.
The API layer handles HTTP concerns (status codes, response
formatting) and delegates all business logic to LedgerService.
"""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from bookkeeping.exceptions import NotFoundError
from bookkeeping.models.base import get_db
from bookkeeping.services.ledger_service import LedgerService
from bookkeeping.schemas.common import DeleteResponse
from bookkeeping.schemas.ledger import (
    LedgerCreate,
    LedgerResponse,
    LedgerUpdate,
)

router = APIRouter(prefix="/ledgers", tags=["Ledgers"])


@router.post("", response_model=LedgerResponse, status_code=201)
def create_ledger(
    request: LedgerCreate,
    db: Session = Depends(get_db),
):
    """
    Create a new ledger.

    The group (and contact, if given) must exist before a
    ledger can be created under it.
    """
    service = LedgerService(db)
    try:
        ledger = service.create_ledger(request)
        db.commit()
        return ledger
    except NotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))


@router.get("", response_model=list[LedgerResponse])
def list_ledgers(db: Session = Depends(get_db)):
    return LedgerService(db).list_ledgers()


@router.get("/search", response_model=list[LedgerResponse])
def search_ledgers(
    query: str = Query(min_length=1),
    limit: int = Query(default=10, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    db: Session = Depends(get_db),
):
    return LedgerService(db).search_ledgers(query, limit, offset)


@router.get("/{ledger_id}", response_model=LedgerResponse)
def get_ledger(
    ledger_id: int,
    db: Session = Depends(get_db),
):
    service = LedgerService(db)
    try:
        return service.get_ledger(ledger_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/{ledger_id}", response_model=LedgerResponse)
def update_ledger(
    ledger_id: int,
    request: LedgerUpdate,
    db: Session = Depends(get_db),
):
    """Update the fields present in the request body."""
    service = LedgerService(db)
    try:
        ledger = service.update_ledger(ledger_id, request)
        db.commit()
        return ledger
    except NotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{ledger_id}", response_model=DeleteResponse)
def delete_ledger(
    ledger_id: int,
    db: Session = Depends(get_db),
):
    """Delete a ledger. Ledgers with posted lines are kept."""
    service = LedgerService(db)
    try:
        service.delete_ledger(ledger_id)
        db.commit()
        return DeleteResponse(success=True)
    except NotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
