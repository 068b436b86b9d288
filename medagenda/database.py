"""Database configuration and connection management.

Each service owns a single-file SQLite database accessed through the
async ``aiosqlite`` driver.
"""

from collections.abc import AsyncGenerator
from pathlib import Path
from typing import Any

from sqlalchemy import MetaData, event, text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from medagenda.config import settings
from medagenda.models import registry_metadata, scheduling_metadata


def create_engine_for(url: str) -> AsyncEngine:
    """Create an async engine with SQLite connection settings applied."""
    engine = create_async_engine(url, echo=settings.debug)
    event.listen(engine.sync_engine, "connect", set_sqlite_pragma)
    return engine


def set_sqlite_pragma(dbapi_conn: Any, connection_record: Any) -> None:
    """Set database connection parameters."""
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def ensure_database_dir(url: str) -> None:
    """Create the parent directory of a file-based SQLite database."""
    database = make_url(url).database
    if database and database != ":memory:":
        Path(database).parent.mkdir(parents=True, exist_ok=True)


# Scheduling service
scheduling_engine: AsyncEngine = create_engine_for(settings.scheduling_database_url)
SchedulingSessionLocal = async_sessionmaker(
    scheduling_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

# Registry service
registry_engine: AsyncEngine = create_engine_for(settings.registry_database_url)
RegistrySessionLocal = async_sessionmaker(
    registry_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_scheduling_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency for getting scheduling database sessions."""
    async with SchedulingSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def get_registry_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency for getting registry database sessions."""
    async with RegistrySessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def create_schema(engine: AsyncEngine, metadata: MetaData) -> None:
    """Create all tables of ``metadata`` that do not exist yet."""
    ensure_database_dir(str(engine.url))
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)


async def init_scheduling_db() -> None:
    """Create the scheduling schema."""
    await create_schema(scheduling_engine, scheduling_metadata)


async def init_registry_db() -> None:
    """Create the registry schema."""
    await create_schema(registry_engine, registry_metadata)


async def check_database_connection(engine: AsyncEngine) -> bool:
    """Check if database connection is healthy."""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except Exception:
        return False
