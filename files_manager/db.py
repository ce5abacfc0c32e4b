# Filename: files_manager/db.py
import logging

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine, Session
from .config import settings

logger = logging.getLogger(__name__)

DATABASE_URL = settings.database_url


def make_engine(url: str):
    """Create an engine; in-memory SQLite shares a single connection."""
    kwargs = {}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    return create_engine(url, echo=False, **kwargs)


engine = make_engine(DATABASE_URL)


def init_db() -> None:
    """Create DB tables and storage dirs"""
    settings.storage_path.mkdir(parents=True, exist_ok=True)
    SQLModel.metadata.create_all(engine)


def get_session():
    """Yield a DB session (dependency)."""
    with Session(engine) as session:
        yield session


def is_alive(session: Session) -> bool:
    try:
        session.connection().execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.exception("Database ping failed")
        return False
    return True
