"""Patient service for registry operations."""

import structlog
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from medagenda.models.patients import patients
from medagenda.schemas.patients import PatientCreate, PatientUpdate

logger = structlog.get_logger(__name__)


class PatientService:
    """Service for patient operations."""

    async def create_patient(self, db: AsyncSession, data: PatientCreate) -> dict:
        """Create a new patient."""
        query = patients.insert().values(**data.model_dump()).returning(patients)
        result = await db.execute(query)
        patient = result.mappings().one()
        await db.commit()

        logger.info("patient_created", patient_id=patient["id"])
        return dict(patient)

    async def get_patient_by_id(self, db: AsyncSession, patient_id: int) -> dict | None:
        """Get an active patient by ID."""
        query = select(patients).where(patients.c.id == patient_id, patients.c.is_active.is_(True))
        result = await db.execute(query)
        patient = result.mappings().first()
        return dict(patient) if patient else None

    async def get_patients(self, db: AsyncSession) -> list[dict]:
        """Get all active patients."""
        query = select(patients).where(patients.c.is_active.is_(True)).order_by(patients.c.name)
        result = await db.execute(query)
        return [dict(p) for p in result.mappings().all()]

    async def update_patient(
        self, db: AsyncSession, patient_id: int, data: PatientUpdate
    ) -> dict | None:
        """Update patient information."""
        if await self.get_patient_by_id(db, patient_id) is None:
            return None

        query = (
            update(patients)
            .where(patients.c.id == patient_id)
            .values(**data.model_dump(exclude={"id"}, exclude_none=True))
            .returning(patients)
        )
        result = await db.execute(query)
        patient = result.mappings().first()
        await db.commit()
        return dict(patient) if patient else None

    async def soft_delete_patient(self, db: AsyncSession, patient_id: int) -> bool:
        """Soft delete a patient. Returns False if it does not exist."""
        query = (
            update(patients)
            .where(patients.c.id == patient_id, patients.c.is_active.is_(True))
            .values(is_active=False)
        )
        result = await db.execute(query)
        await db.commit()
        return result.rowcount > 0
