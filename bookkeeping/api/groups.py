"""
Group API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from bookkeeping.exceptions import NotFoundError
from bookkeeping.models.base import get_db
from bookkeeping.services.group_service import GroupService
from bookkeeping.schemas.common import DeleteResponse
from bookkeeping.schemas.group import GroupCreate, GroupResponse, GroupUpdate

router = APIRouter(prefix="/groups", tags=["Groups"])


@router.post("", response_model=GroupResponse, status_code=201)
def create_group(
    request: GroupCreate,
    db: Session = Depends(get_db),
):
    """Create a group, optionally under an existing parent group."""
    service = GroupService(db)
    try:
        group = service.create_group(request)
        db.commit()
        return group
    except NotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))


@router.get("", response_model=list[GroupResponse])
def list_groups(db: Session = Depends(get_db)):
    return GroupService(db).list_groups()


@router.get("/search", response_model=list[GroupResponse])
def search_groups(
    query: str = Query(min_length=1),
    limit: int = Query(default=10, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    db: Session = Depends(get_db),
):
    return GroupService(db).search_groups(query, limit, offset)


@router.get("/{group_id}", response_model=GroupResponse)
def get_group(
    group_id: int,
    db: Session = Depends(get_db),
):
    service = GroupService(db)
    try:
        return service.get_group(group_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/{group_id}", response_model=GroupResponse)
def update_group(
    group_id: int,
    request: GroupUpdate,
    db: Session = Depends(get_db),
):
    """
    Update the fields present in the request body.

    Moving a group under one of its own descendants is rejected.
    """
    service = GroupService(db)
    try:
        group = service.update_group(group_id, request)
        db.commit()
        return group
    except NotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{group_id}", response_model=DeleteResponse)
def delete_group(
    group_id: int,
    db: Session = Depends(get_db),
):
    service = GroupService(db)
    try:
        service.delete_group(group_id)
        db.commit()
        return DeleteResponse(success=True)
    except NotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
