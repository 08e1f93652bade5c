"""SQLAlchemy setup for the local result cache table."""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool


class Base(DeclarativeBase):
    pass


def create_cache_engine(url: str) -> Engine:
    """Create an engine for the cache database.

    In-memory SQLite needs a single shared connection, otherwise every
    new connection sees an empty database.
    """
    if url.startswith("sqlite") and ":memory:" in url:
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    if url.startswith("sqlite"):
        return create_engine(url, connect_args={"check_same_thread": False})
    return create_engine(url)


def init_db(engine: Engine) -> None:
    """Create tables if they don't exist."""
    # Registers CacheRecord on Base.metadata
    from civicpulse.models.cache_record import CacheRecord  # noqa: F401

    Base.metadata.create_all(engine)
