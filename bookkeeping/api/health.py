"""
Liveness and database reachability probe.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from bookkeeping.config import get_settings
from bookkeeping.models.base import get_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

SERVICE_NAME = "bookkeeping-service"


def _database_reachable(db: Session) -> bool:
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.warning("Database probe failed", exc_info=True)
        return False
    return True


@router.get("/health")
def health_check(db: Session = Depends(get_db)):
    """
    Report whether the app is up and the database answers.

    An unreachable database degrades the status but the endpoint
    itself still answers 200.
    """
    settings = get_settings()
    reachable = _database_reachable(db)
    return {
        "status": "healthy" if reachable else "degraded",
        "service": SERVICE_NAME,
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "database": "healthy" if reachable else "unhealthy",
    }
