"""Database connection and session management."""

from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from coopdues.config import get_settings


def is_memory_sqlite(url: str) -> bool:
    """Whether ``url`` names an in-memory SQLite database."""
    # bare "sqlite://" is in-memory too
    return url.startswith("sqlite") and (
        url.rstrip("/") == "sqlite:" or ":memory:" in url or "mode=memory" in url
    )


def create_db_engine(url: str, echo: bool = False) -> Engine:
    """Create the engine for a database URL.

    In-memory SQLite lives inside a single connection, so it uses StaticPool.
    File SQLite keeps the default pool: each session checks out its own
    connection and its own transaction.
    """
    if is_memory_sqlite(url):
        return create_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    if url.startswith("sqlite"):
        return create_engine(url, echo=echo, connect_args={"check_same_thread": False})
    return create_engine(url, echo=echo, pool_pre_ping=True)


DATABASE_URL = get_settings().database_url
engine = create_db_engine(DATABASE_URL, echo=get_settings().database_echo)

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Get database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


__all__ = [
    "engine",
    "SessionLocal",
    "create_db_engine",
    "get_db",
    "is_memory_sqlite",
]
