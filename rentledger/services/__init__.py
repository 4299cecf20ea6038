"""Database engine and per-request session factory."""

from typing import Generator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from rentledger.config import settings


def is_memory_sqlite(url: str) -> bool:
    """True for sqlite URLs that point at a private in-memory database."""
    if not url.startswith("sqlite"):
        return False
    # "sqlite://" with no path is in-memory too
    return url.endswith(":memory:") or url.rstrip("/").endswith(":")


def create_db_engine(url: str, echo: bool = False) -> Engine:
    """Build the engine for a connection string.

    In-memory SQLite only exists inside one connection, so it gets StaticPool.
    File SQLite and server databases get a regular pool: every session owns
    its connection and therefore its own transaction.

    Args:
        url: SQLAlchemy connection string
        echo: Log SQL statements

    Returns:
        Engine
    """
    if is_memory_sqlite(url):
        return create_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    if url.startswith("sqlite"):
        # Sessions move between the request threadpool and the scheduler thread
        return create_engine(url, echo=echo, connect_args={"check_same_thread": False})
    return create_engine(url, echo=echo, pool_pre_ping=True)


engine = create_db_engine(settings.database_url, echo=settings.database_echo)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Yield a session for one request and close it afterwards."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


__all__ = [
    "engine",
    "SessionLocal",
    "create_db_engine",
    "is_memory_sqlite",
    "get_db",
]
