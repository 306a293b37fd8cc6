"""
Database configuration and session management for SQLAlchemy.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from moodjournal.core.config import get_settings

DATABASE_URL = get_settings().database_url

# Engine & Session
_connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(DATABASE_URL, connect_args=_connect_args)
SessionLocal = sessionmaker(
    autocommit=False, autoflush=False, expire_on_commit=False, bind=engine
)

# Declarative Base
Base = declarative_base()


# Import all models to register them with the Base metadata
import moodjournal.auth.models  # noqa: E402, F401
import moodjournal.profiles.models  # noqa: E402, F401
import moodjournal.journals.models  # noqa: E402, F401
import moodjournal.analysis.models  # noqa: E402, F401


# Dependency for FastAPI Routes
def get_db():
    """
    Yields a database session for use in FastAPI dependency injection.
    Ensures the session is closed after the request lifecycle.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_session_factory() -> sessionmaker:
    """
    Returns the session factory used by background tasks, which outlive the
    request-scoped session yielded by `get_db`.
    """
    return SessionLocal
