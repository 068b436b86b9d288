"""Appointment repository - database operations for appointments."""

from datetime import datetime, timedelta
from typing import Any

from sqlalchemy import and_, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from medagenda.models.appointments import appointments

DEFAULT_CONFLICT_WINDOW = timedelta(minutes=30)


class AppointmentRepository:
    """Repository for appointment rows.

    Every read is restricted to active rows; inactive (soft-deleted) rows are
    never returned and never take part in conflict detection. Each method
    commits on its own, so multi-step workflows built on top are not atomic.
    """

    def __init__(self, db: AsyncSession):
        """Initialize repository with database session."""
        self.db = db

    async def get_all(self) -> list[dict[str, Any]]:
        """Get all active appointments ordered by id."""
        stmt = (
            select(appointments)
            .where(appointments.c.is_active.is_(True))
            .order_by(appointments.c.id)
        )
        result = await self.db.execute(stmt)
        return [dict(row) for row in result.mappings().all()]

    async def get_by_id(self, appointment_id: int) -> dict[str, Any] | None:
        """Get an active appointment by id."""
        stmt = select(appointments).where(
            and_(
                appointments.c.id == appointment_id,
                appointments.c.is_active.is_(True),
            )
        )
        result = await self.db.execute(stmt)
        row = result.mappings().first()
        return dict(row) if row else None

    async def create(self, values: dict[str, Any]) -> dict[str, Any]:
        """Insert an appointment and return the stored row with its id."""
        stmt = insert(appointments).values(**values).returning(appointments)
        result = await self.db.execute(stmt)
        row = result.mappings().one()
        await self.db.commit()
        return dict(row)

    async def update(self, appointment_id: int, values: dict[str, Any]) -> dict[str, Any] | None:
        """Update an appointment; returns ``None`` if no such row exists."""
        stmt = (
            update(appointments)
            .where(appointments.c.id == appointment_id)
            .values(**values)
            .returning(appointments)
        )
        result = await self.db.execute(stmt)
        row = result.mappings().first()
        await self.db.commit()
        return dict(row) if row else None

    async def soft_delete(self, appointment_id: int) -> bool:
        """Mark an active appointment inactive. Returns False if not found."""
        if await self.get_by_id(appointment_id) is None:
            return False

        updated = await self.update(appointment_id, {"is_active": False})
        return updated is not None

    async def find_conflict(
        self,
        doctor_id: int,
        clinic_id: int,
        at: datetime,
        window: timedelta = DEFAULT_CONFLICT_WINDOW,
    ) -> dict[str, Any] | None:
        """
        Find an active appointment for the same doctor and clinic near ``at``.

        Args:
            doctor_id: Doctor ID
            clinic_id: Clinic ID
            at: Requested appointment time
            window: Half-width of the conflict window; both ends are inclusive

        Returns:
            The first conflicting appointment, or None
        """
        stmt = (
            select(appointments)
            .where(
                and_(
                    appointments.c.doctor_id == doctor_id,
                    appointments.c.clinic_id == clinic_id,
                    appointments.c.is_active.is_(True),
                    appointments.c.scheduled_at.between(at - window, at + window),
                )
            )
            .order_by(appointments.c.scheduled_at)
            .limit(1)
        )
        result = await self.db.execute(stmt)
        row = result.mappings().first()
        return dict(row) if row else None
