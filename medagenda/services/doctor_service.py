"""Doctor service for business logic."""

from typing import Any

import structlog
from sqlalchemy import Select, and_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from medagenda.core.exceptions import BadRequestException
from medagenda.models.doctors import doctors
from medagenda.models.specialties import specialties
from medagenda.schemas.doctors import DoctorCreate, DoctorUpdate
from medagenda.services.specialty_service import SpecialtyService

logger = structlog.get_logger(__name__)

_SPECIALTY_PREFIX = "specialty__"


class DoctorService:
    """Service for doctor operations.

    Doctors are always returned with their specialty nested under
    ``specialty``.
    """

    def __init__(self, specialty_service: SpecialtyService | None = None):
        """Initialize service."""
        self.specialty_service = specialty_service or SpecialtyService()

    @staticmethod
    def _doctor_query(active_specialty_only: bool = False) -> Select:
        join_on = doctors.c.specialty_id == specialties.c.id
        if active_specialty_only:
            join_on = and_(join_on, specialties.c.is_active.is_(True))

        return select(
            doctors,
            *(c.label(f"{_SPECIALTY_PREFIX}{c.name}") for c in specialties.c),
        ).select_from(doctors.outerjoin(specialties, join_on))

    @staticmethod
    def _to_doctor(row: Any) -> dict:
        doctor: dict[str, Any] = {}
        specialty: dict[str, Any] = {}
        for key, value in row.items():
            if key.startswith(_SPECIALTY_PREFIX):
                specialty[key.removeprefix(_SPECIALTY_PREFIX)] = value
            else:
                doctor[key] = value
        doctor["specialty"] = specialty if specialty.get("id") is not None else None
        return doctor

    async def _require_active_specialty(self, db: AsyncSession, specialty_id: int) -> None:
        if await self.specialty_service.get_specialty_by_id(db, specialty_id) is None:
            raise BadRequestException(f"Specialty with id {specialty_id} not found or inactive")

    async def create_doctor(self, db: AsyncSession, doctor_data: DoctorCreate) -> dict:
        """
        Create a new doctor.

        Raises:
            BadRequestException: If the specialty does not exist or is inactive
        """
        await self._require_active_specialty(db, doctor_data.specialty_id)

        query = (
            doctors.insert()
            .values(
                name=doctor_data.name,
                specialty_id=doctor_data.specialty_id,
                crm=doctor_data.crm,
            )
            .returning(doctors.c.id)
        )
        result = await db.execute(query)
        doctor_id = result.scalar_one()
        await db.commit()

        logger.info("doctor_created", doctor_id=doctor_id)
        return await self.get_doctor_by_id(db, doctor_id)

    async def get_doctor_by_id(self, db: AsyncSession, doctor_id: int) -> dict | None:
        """Get an active doctor by ID."""
        query = self._doctor_query().where(
            doctors.c.id == doctor_id,
            doctors.c.is_active.is_(True),
        )
        result = await db.execute(query)
        row = result.mappings().first()
        return self._to_doctor(row) if row else None

    async def get_doctors(self, db: AsyncSession) -> list[dict]:
        """Get all active doctors whose specialty is active."""
        query = (
            self._doctor_query(active_specialty_only=True)
            .where(doctors.c.is_active.is_(True), specialties.c.id.is_not(None))
            .order_by(doctors.c.name)
        )
        result = await db.execute(query)
        return [self._to_doctor(row) for row in result.mappings().all()]

    async def get_doctors_by_specialty(self, db: AsyncSession, specialty_id: int) -> list[dict]:
        """Get all active doctors of an active specialty."""
        query = (
            self._doctor_query(active_specialty_only=True)
            .where(
                doctors.c.is_active.is_(True),
                doctors.c.specialty_id == specialty_id,
                specialties.c.id.is_not(None),
            )
            .order_by(doctors.c.name)
        )
        result = await db.execute(query)
        return [self._to_doctor(row) for row in result.mappings().all()]

    async def update_doctor(
        self, db: AsyncSession, doctor_id: int, doctor_data: DoctorUpdate
    ) -> dict | None:
        """
        Update doctor information.

        Raises:
            BadRequestException: If the specialty does not exist or is inactive
        """
        await self._require_active_specialty(db, doctor_data.specialty_id)

        if await self.get_doctor_by_id(db, doctor_id) is None:
            logger.warning("doctor_not_found_for_update", doctor_id=doctor_id)
            return None

        query = (
            update(doctors)
            .where(doctors.c.id == doctor_id)
            .values(**doctor_data.model_dump(exclude={"id"}, exclude_none=True))
        )
        await db.execute(query)
        await db.commit()

        return await self.get_doctor_by_id(db, doctor_id)

    async def soft_delete_doctor(self, db: AsyncSession, doctor_id: int) -> bool:
        """Soft delete a doctor. Returns False if it does not exist."""
        query = (
            update(doctors)
            .where(doctors.c.id == doctor_id, doctors.c.is_active.is_(True))
            .values(is_active=False)
        )
        result = await db.execute(query)
        await db.commit()
        return result.rowcount > 0
