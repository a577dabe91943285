"""
Auth service: user registration and password login.

Login failures return the same generic message whether the
username or the password was wrong.
"""

import logging

from sqlalchemy import select, or_
from sqlalchemy.orm import Session

from bookkeeping.exceptions import ValidationError
from bookkeeping.models.user import User
from bookkeeping.schemas.auth import LoginRequest, LoginResponse, UserCreate, UserResponse
from bookkeeping.security import hash_password, verify_password

logger = logging.getLogger(__name__)

LOGIN_FAILED_MESSAGE = "Invalid username or password"


class AuthService:

    def __init__(self, db: Session):
        self.db = db

    def register(self, request: UserCreate) -> User:
        """Create a user. Raises ValidationError if username or email is taken."""
        existing = self.db.execute(
            select(User).where(
                or_(User.username == request.username, User.email == request.email)
            )
        ).scalars().first()
        if existing:
            raise ValidationError("Username or email already registered")

        user = User(
            username=request.username,
            email=request.email,
            password_hash=hash_password(request.password),
        )
        self.db.add(user)
        self.db.flush()
        logger.info("Registered user %s", user.username)
        return user

    def login(self, request: LoginRequest) -> LoginResponse:
        user = self.db.execute(
            select(User).where(User.username == request.username)
        ).scalar_one_or_none()

        if user is None or not verify_password(request.password, user.password_hash):
            logger.warning("Failed login for %r", request.username)
            return LoginResponse(success=False, message=LOGIN_FAILED_MESSAGE)

        return LoginResponse(success=True, user=UserResponse.model_validate(user))
