"""Clinic service for business logic."""

import structlog
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from medagenda.models.clinics import clinics
from medagenda.schemas.clinics import ClinicCreate, ClinicUpdate

logger = structlog.get_logger(__name__)


class ClinicService:
    """Service for clinic operations."""

    async def create_clinic(self, db: AsyncSession, clinic_data: ClinicCreate) -> dict:
        """Create a new clinic."""
        clinic_query = (
            clinics.insert()
            .values(
                name=clinic_data.name,
                address=clinic_data.address,
            )
            .returning(clinics)
        )

        result = await db.execute(clinic_query)
        clinic = result.mappings().first()

        if not clinic:
            raise ValueError("Failed to create clinic")

        await db.commit()

        logger.info("clinic_created", clinic_id=clinic["id"])
        return dict(clinic)

    async def get_clinic_by_id(self, db: AsyncSession, clinic_id: int) -> dict | None:
        """Get an active clinic by ID."""
        query = select(clinics).where(clinics.c.id == clinic_id, clinics.c.is_active.is_(True))

        result = await db.execute(query)
        clinic = result.mappings().first()

        return dict(clinic) if clinic else None

    async def get_clinics(self, db: AsyncSession) -> list[dict]:
        """Get all active clinics."""
        query = select(clinics).where(clinics.c.is_active.is_(True)).order_by(clinics.c.name)

        result = await db.execute(query)
        return [dict(c) for c in result.mappings().all()]

    async def update_clinic(
        self, db: AsyncSession, clinic_id: int, clinic_data: ClinicUpdate
    ) -> dict | None:
        """Update clinic information."""
        existing = await self.get_clinic_by_id(db, clinic_id)
        if not existing:
            return None

        update_values = clinic_data.model_dump(exclude={"id"}, exclude_none=True)

        query = (
            update(clinics)
            .where(clinics.c.id == clinic_id)
            .values(**update_values)
            .returning(clinics)
        )

        result = await db.execute(query)
        updated_clinic = result.mappings().first()

        await db.commit()

        return dict(updated_clinic) if updated_clinic else None

    async def soft_delete_clinic(self, db: AsyncSession, clinic_id: int) -> bool:
        """Soft delete a clinic. Returns False if it does not exist."""
        query = (
            update(clinics)
            .where(clinics.c.id == clinic_id, clinics.c.is_active.is_(True))
            .values(is_active=False)
        )

        result = await db.execute(query)
        await db.commit()

        return result.rowcount > 0
