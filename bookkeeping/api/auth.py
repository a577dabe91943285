"""
Authentication API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from bookkeeping.models.base import get_db
from bookkeeping.services.auth_service import AuthService
from bookkeeping.schemas.auth import (
    LoginRequest,
    LoginResponse,
    UserCreate,
    UserResponse,
)

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/register", response_model=UserResponse, status_code=201)
def register(
    request: UserCreate,
    db: Session = Depends(get_db),
):
    service = AuthService(db)
    try:
        user = service.register(request)
        db.commit()
        return user
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/login", response_model=LoginResponse)
def login(
    request: LoginRequest,
    db: Session = Depends(get_db),
):
    """
    Check a username and password.

    A wrong username or password is a normal response with
    success=false, not an HTTP error.
    """
    return AuthService(db).login(request)
