"""
Transaction entry API endpoints.

The API layer is thin: it maps service errors to status codes
and owns the commit. A failed write is rolled back in full, so
an entry is never visible without all of its lines.
"""

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from bookkeeping.exceptions import NotFoundError
from bookkeeping.models.base import get_db
from bookkeeping.services.transaction_service import TransactionService
from bookkeeping.schemas.common import DeleteResponse
from bookkeeping.schemas.transaction import (
    TransactionCreate,
    TransactionEntryResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/transactions", tags=["Transactions"])


@router.post("", response_model=TransactionEntryResponse, status_code=201)
def create_transaction(
    request: TransactionCreate,
    db: Session = Depends(get_db),
):
    """
    Post a balanced entry.

    Total debits must equal total credits and every line must
    name an existing ledger. Nothing is written otherwise.
    """
    service = TransactionService(db)
    try:
        entry = service.create_entry(request)
        db.commit()
        return entry
    except ValueError as e:
        logger.warning("Rejected entry: %s", e)
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))


@router.get("", response_model=list[TransactionEntryResponse])
def list_transactions(db: Session = Depends(get_db)):
    """List all entries, newest first."""
    return TransactionService(db).list_entries()


@router.get("/range", response_model=list[TransactionEntryResponse])
def list_transactions_by_date_range(
    start_date: date = Query(...),
    end_date: date = Query(...),
    db: Session = Depends(get_db),
):
    """List entries dated within an inclusive window."""
    service = TransactionService(db)
    try:
        return service.list_entries_by_date_range(start_date, end_date)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/{entry_id}", response_model=TransactionEntryResponse)
def get_transaction(
    entry_id: int,
    db: Session = Depends(get_db),
):
    """Get one entry with its lines."""
    service = TransactionService(db)
    try:
        return service.get_entry(entry_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post(
    "/{entry_id}/correct",
    response_model=TransactionEntryResponse,
    status_code=201,
)
def correct_transaction(
    entry_id: int,
    request: TransactionCreate,
    db: Session = Depends(get_db),
):
    """
    Post a correction entry for an existing entry.

    The original is kept as-is for the audit trail.
    """
    service = TransactionService(db)
    try:
        entry = service.correct_entry(entry_id, request)
        db.commit()
        return entry
    except NotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        logger.warning("Rejected entry: %s", e)
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{entry_id}", response_model=DeleteResponse)
def delete_transaction(
    entry_id: int,
    db: Session = Depends(get_db),
):
    """Delete an entry and all of its lines."""
    service = TransactionService(db)
    try:
        service.delete_entry(entry_id)
        db.commit()
        return DeleteResponse(success=True)
    except NotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
