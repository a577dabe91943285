"""
Contact API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from bookkeeping.exceptions import NotFoundError
from bookkeeping.models.base import get_db
from bookkeeping.services.contact_service import ContactService
from bookkeeping.schemas.common import DeleteResponse
from bookkeeping.schemas.contact import (
    ContactCreate,
    ContactResponse,
    ContactUpdate,
)

router = APIRouter(prefix="/contacts", tags=["Contacts"])


@router.post("", response_model=ContactResponse, status_code=201)
def create_contact(
    request: ContactCreate,
    db: Session = Depends(get_db),
):
    """Create a new customer or supplier."""
    service = ContactService(db)
    contact = service.create_contact(request)
    db.commit()
    return contact


@router.get("", response_model=list[ContactResponse])
def list_contacts(db: Session = Depends(get_db)):
    return ContactService(db).list_contacts()


@router.get("/search", response_model=list[ContactResponse])
def search_contacts(
    query: str = Query(min_length=1),
    limit: int = Query(default=10, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    db: Session = Depends(get_db),
):
    return ContactService(db).search_contacts(query, limit, offset)


@router.get("/{contact_id}", response_model=ContactResponse)
def get_contact(
    contact_id: int,
    db: Session = Depends(get_db),
):
    service = ContactService(db)
    try:
        return service.get_contact(contact_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/{contact_id}", response_model=ContactResponse)
def update_contact(
    contact_id: int,
    request: ContactUpdate,
    db: Session = Depends(get_db),
):
    service = ContactService(db)
    try:
        contact = service.update_contact(contact_id, request)
        db.commit()
        return contact
    except NotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{contact_id}", response_model=DeleteResponse)
def delete_contact(
    contact_id: int,
    db: Session = Depends(get_db),
):
    service = ContactService(db)
    try:
        service.delete_contact(contact_id)
        db.commit()
        return DeleteResponse(success=True)
    except NotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
