"""Specialty service for registry operations."""

import structlog
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from medagenda.models.specialties import specialties
from medagenda.schemas.specialties import SpecialtyCreate, SpecialtyUpdate

logger = structlog.get_logger(__name__)


class SpecialtyService:
    """Service for specialty operations."""

    async def create_specialty(self, db: AsyncSession, data: SpecialtyCreate) -> dict:
        """Create a new specialty."""
        query = specialties.insert().values(name=data.name).returning(specialties)
        result = await db.execute(query)
        specialty = result.mappings().one()
        await db.commit()

        logger.info("specialty_created", specialty_id=specialty["id"])
        return dict(specialty)

    async def get_specialty_by_id(self, db: AsyncSession, specialty_id: int) -> dict | None:
        """Get an active specialty by ID."""
        query = select(specialties).where(
            specialties.c.id == specialty_id,
            specialties.c.is_active.is_(True),
        )
        result = await db.execute(query)
        specialty = result.mappings().first()
        return dict(specialty) if specialty else None

    async def get_specialties(self, db: AsyncSession) -> list[dict]:
        """Get all active specialties."""
        query = (
            select(specialties)
            .where(specialties.c.is_active.is_(True))
            .order_by(specialties.c.name)
        )
        result = await db.execute(query)
        return [dict(s) for s in result.mappings().all()]

    async def update_specialty(
        self, db: AsyncSession, specialty_id: int, data: SpecialtyUpdate
    ) -> dict | None:
        """Update specialty information."""
        if await self.get_specialty_by_id(db, specialty_id) is None:
            return None

        query = (
            update(specialties)
            .where(specialties.c.id == specialty_id)
            .values(**data.model_dump(exclude={"id"}, exclude_none=True))
            .returning(specialties)
        )
        result = await db.execute(query)
        specialty = result.mappings().first()
        await db.commit()
        return dict(specialty) if specialty else None

    async def soft_delete_specialty(self, db: AsyncSession, specialty_id: int) -> bool:
        """Soft delete a specialty. Returns False if it does not exist."""
        query = (
            update(specialties)
            .where(specialties.c.id == specialty_id, specialties.c.is_active.is_(True))
            .values(is_active=False)
        )
        result = await db.execute(query)
        await db.commit()
        return result.rowcount > 0
