"""Database engine, session factory and FastAPI session dependency."""

import logging
from collections.abc import Generator

from sqlalchemy import create_engine, text
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from contact_directory.core.config import settings

logger = logging.getLogger(__name__)

engine = create_engine(settings.DATABASE_URL, pool_pre_ping=True, echo=settings.DEBUG)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class Base(DeclarativeBase):
    pass


def get_db() -> Generator[Session, None, None]:
    """Yield a session for the duration of a request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_connection() -> None:
    """Open a connection and run a trivial query.

    Raises whatever the driver raises when the database is unreachable.
    """
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
    logger.info("Database connected: %s", engine.url.render_as_string(hide_password=True))


def init_db() -> None:
    """Create missing tables for all registered models."""
    import contact_directory.models  # noqa: F401 — register models with Base.metadata

    Base.metadata.create_all(bind=engine)
