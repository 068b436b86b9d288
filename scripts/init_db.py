"""Script to initialize the scheduling and registry databases."""

import asyncio

from medagenda.database import (
    init_registry_db,
    init_scheduling_db,
    registry_engine,
    scheduling_engine,
)


async def init_db() -> None:
    """Initialize both databases by creating all tables."""
    await init_registry_db()
    await init_scheduling_db()

    await registry_engine.dispose()
    await scheduling_engine.dispose()

    print("✓ Databases initialized successfully!")


if __name__ == "__main__":
    asyncio.run(init_db())
