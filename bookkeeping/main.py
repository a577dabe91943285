"""
Bookkeeping Service: FastAPI application.

This is the entry point for the application.
All routers are registered here.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from bookkeeping.config import get_settings
from bookkeeping.logging_config import setup_logging

settings = get_settings()
setup_logging(settings.LOG_LEVEL)

from bookkeeping.api.auth import router as auth_router  # noqa: E402
from bookkeeping.api.contacts import router as contacts_router  # noqa: E402
from bookkeeping.api.financial_years import router as financial_years_router  # noqa: E402
from bookkeeping.api.groups import router as groups_router  # noqa: E402
from bookkeeping.api.health import router as health_router  # noqa: E402
from bookkeeping.api.ledgers import router as ledgers_router  # noqa: E402
from bookkeeping.api.reports import router as reports_router  # noqa: E402
from bookkeeping.api.transactions import router as transactions_router  # noqa: E402
from bookkeeping.models.base import init_db  # noqa: E402


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create missing tables on startup."""
    init_db()
    yield


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Double-entry bookkeeping: ledgers, entries and accounting reports",
    lifespan=lifespan,
)

# Register routers
app.include_router(health_router)
app.include_router(auth_router)
app.include_router(groups_router)
app.include_router(contacts_router)
app.include_router(ledgers_router)
app.include_router(financial_years_router)
app.include_router(transactions_router)
app.include_router(reports_router)
