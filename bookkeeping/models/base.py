"""
Engine, session factory and declarative base.

Requests borrow a session through get_db(). The session never
commits on its own: routers commit after a service call
succeeds, so an entry and its lines are written together.
"""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from bookkeeping.config import get_settings


def build_engine(database_url: str) -> Engine:
    """
    Create an engine for database_url.

    SQLite connections are bound to the thread that opened them,
    while FastAPI runs sync endpoints in a thread pool, so the
    check is switched off for SQLite URLs.
    """
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(database_url, pool_pre_ping=True, connect_args=connect_args)


def build_session_factory(bind: Engine) -> sessionmaker:
    return sessionmaker(bind=bind, autocommit=False, autoflush=False)


engine = build_engine(get_settings().DATABASE_URL)
SessionLocal = build_session_factory(engine)


class Base(DeclarativeBase):
    pass


def init_db(bind: Engine | None = None) -> None:
    """Create any missing tables for all registered models."""
    # Importing the package registers every model on Base.metadata
    import bookkeeping.models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)


def get_db():
    """Yield a request-scoped session and always close it afterwards."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
