"""
Database configuration and session management for async SQLAlchemy.

The engine is created on first use so the in-memory backend never needs a
database driver.
"""
from typing import Optional
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncSession, async_sessionmaker

from domain.config import get_database_config

# Import all models to ensure they're registered in the same registry
# This must happen before creating the tables
from infrastructure.db.models import Base, DecisionModel  # noqa: F401

_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker] = None


def get_engine() -> AsyncEngine:
    """Create the async engine from DATABASE_URL (or DB_* components) on first call."""
    global _engine
    if _engine is None:
        config = get_database_config()
        _engine = create_async_engine(
            config.url,
            echo=config.echo,  # Set DB_ECHO=true for SQL query logging
            future=True,
            pool_pre_ping=True,
        )
    return _engine


def get_session_factory() -> async_sessionmaker:
    global _session_factory
    if _session_factory is None:
        _session_factory = async_sessionmaker(
            get_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
            autocommit=False,
            autoflush=False,
        )
    return _session_factory


async def create_tables(engine: Optional[AsyncEngine] = None) -> None:
    """Create the decisions table (and its unique constraint) if it does not exist."""
    engine = engine or get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None

