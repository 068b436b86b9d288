"""Appointment service for scheduling business logic."""

from datetime import UTC, datetime, timedelta
from typing import Any

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from medagenda.core.exceptions import (
    AppException,
    BadRequestException,
    InvalidStateException,
    NotFoundException,
)
from medagenda.core.registry_client import RegistryClient
from medagenda.repositories.appointment_repository import (
    DEFAULT_CONFLICT_WINDOW,
    AppointmentRepository,
)
from medagenda.schemas.appointments import (
    AppointmentCreate,
    AppointmentFilters,
    AppointmentResponse,
    AppointmentStatus,
)
from medagenda.schemas.references import PatientRef
from medagenda.services.notification_service import NotificationSink

logger = structlog.get_logger(__name__)

CONFLICT_SUBJECT = "Appointment conflict"
CONFLICT_BODY = (
    "Your appointment conflicts with another appointment for the same doctor "
    "and clinic. It has been saved with the status 'awaiting slot'. Change "
    "the time or wait for a slot to be confirmed."
)


class AppointmentService:
    """Service for scheduling appointments.

    Clinics, doctors and patients are resolved through the registry on every
    call. A requested time that falls within the conflict window of another
    active appointment for the same doctor and clinic does not fail: the
    appointment is stored as ``awaiting_slot`` and the patient is notified.

    The conflict check and the insert are separate statements with no lock
    between them; two concurrent requests for the same slot may both be
    scheduled.
    """

    def __init__(
        self,
        db: AsyncSession,
        registry: RegistryClient,
        notifier: NotificationSink,
        conflict_window: timedelta = DEFAULT_CONFLICT_WINDOW,
        allow_past_appointments: bool = True,
        allow_complete_awaiting_slot: bool = True,
    ):
        """Initialize service with its collaborators and scheduling policy."""
        self.repository = AppointmentRepository(db)
        self.registry = registry
        self.notifier = notifier
        self.conflict_window = conflict_window
        self.allow_past_appointments = allow_past_appointments
        self.allow_complete_awaiting_slot = allow_complete_awaiting_slot

    async def create_appointment(self, data: AppointmentCreate) -> AppointmentResponse:
        """
        Create a new appointment.

        Args:
            data: Appointment creation data

        Returns:
            Created appointment with clinic, doctor and patient attached

        Raises:
            NotFoundException: If the clinic, doctor or patient does not exist
            BadRequestException: If past appointments are disallowed and the
                requested time is in the past
        """
        try:
            if not self.allow_past_appointments:
                now = datetime.now(UTC).replace(tzinfo=None)
                if data.scheduled_at < now:
                    raise BadRequestException(
                        f"Appointment time {data.scheduled_at.isoformat()} is in the past"
                    )

            # Lookup order decides which error surfaces first
            clinic = await self.registry.get_clinic(data.clinic_id)
            if clinic is None:
                raise NotFoundException(f"Clinic with id {data.clinic_id} not found")

            doctor = await self.registry.get_doctor(data.doctor_id)
            if doctor is None:
                raise NotFoundException(f"Doctor with id {data.doctor_id} not found")

            patient = await self.registry.get_patient(data.patient_id)
            if patient is None:
                raise NotFoundException(f"Patient with id {data.patient_id} not found")

            conflict = await self.repository.find_conflict(
                data.doctor_id,
                data.clinic_id,
                data.scheduled_at,
                self.conflict_window,
            )
            status = AppointmentStatus.AWAITING_SLOT if conflict else AppointmentStatus.SCHEDULED

            row = await self.repository.create(
                {
                    "patient_id": data.patient_id,
                    "doctor_id": data.doctor_id,
                    "clinic_id": data.clinic_id,
                    "scheduled_at": data.scheduled_at,
                    "status": status.value,
                }
            )
            appointment = AppointmentResponse.model_validate(row).model_copy(
                update={"clinic": clinic, "doctor": doctor, "patient": patient}
            )
        except AppException as e:
            logger.warning(
                "appointment_business_error",
                operation="create",
                error=e.message,
                status_code=e.status_code,
            )
            raise

        if conflict:
            logger.info(
                "appointment_conflict_detected",
                appointment_id=appointment.id,
                conflicting_appointment_id=conflict["id"],
                doctor_id=data.doctor_id,
                clinic_id=data.clinic_id,
            )
            await self._notify_conflict(patient, appointment.id)
        else:
            logger.info("appointment_scheduled", appointment_id=appointment.id)

        return appointment

    async def _notify_conflict(self, patient: PatientRef, appointment_id: int) -> None:
        # Delivery failures never undo the stored appointment
        if not patient.email:
            logger.warning(
                "conflict_notification_skipped",
                appointment_id=appointment_id,
                patient_id=patient.id,
                reason="patient has no email",
            )
            return

        try:
            delivered = await self.notifier.notify(patient.email, CONFLICT_SUBJECT, CONFLICT_BODY)
        except Exception as e:
            logger.warning(
                "conflict_notification_failed",
                appointment_id=appointment_id,
                patient_id=patient.id,
                error=str(e),
            )
            return

        if not delivered:
            logger.warning(
                "conflict_notification_not_delivered",
                appointment_id=appointment_id,
                patient_id=patient.id,
            )

    async def complete_appointment(self, appointment_id: int, notes: str) -> AppointmentResponse:
        """
        Mark an appointment as completed, replacing its notes.

        Args:
            appointment_id: Appointment ID
            notes: Notes taken during the appointment

        Returns:
            Updated appointment

        Raises:
            NotFoundException: If appointment not found
            InvalidStateException: If the appointment cannot be completed
        """
        try:
            row = await self.repository.get_by_id(appointment_id)
            if row is None:
                raise NotFoundException(f"Appointment with id {appointment_id} not found")

            current = AppointmentStatus(row["status"])
            if not current.can_transition_to(AppointmentStatus.COMPLETED):
                raise InvalidStateException(
                    f"Appointment with id {appointment_id} is already completed"
                )

            if current is AppointmentStatus.AWAITING_SLOT and not self.allow_complete_awaiting_slot:
                raise InvalidStateException(
                    f"Appointment with id {appointment_id} is still awaiting a slot"
                )

            updated = await self.repository.update(
                appointment_id,
                {"status": AppointmentStatus.COMPLETED.value, "notes": notes},
            )
            if updated is None:
                raise NotFoundException(f"Appointment with id {appointment_id} not found")
        except AppException as e:
            logger.warning(
                "appointment_business_error",
                operation="complete",
                error=e.message,
                status_code=e.status_code,
            )
            raise

        logger.info(
            "appointment_completed",
            appointment_id=appointment_id,
            previous_status=current.value,
        )
        return AppointmentResponse.model_validate(updated)

    async def filter_appointments(self, filters: AppointmentFilters) -> list[AppointmentResponse]:
        """
        Filter active appointments in memory.

        Predicates are applied in order: date range, completed exclusion,
        status, doctor, patient, clinic. A predicate whose criterion is
        absent is skipped.

        Args:
            filters: Filter criteria

        Returns:
            Matching appointments, without registry data attached
        """
        items = [AppointmentResponse.model_validate(row) for row in await self.repository.get_all()]

        if filters.from_date is not None:
            items = [a for a in items if a.scheduled_at >= filters.from_date]
        if filters.to_date is not None:
            items = [a for a in items if a.scheduled_at <= filters.to_date]
        if not filters.include_completed:
            items = [a for a in items if a.status is not AppointmentStatus.COMPLETED]
        if filters.status is not None:
            items = [a for a in items if a.status is filters.status]
        if filters.doctor_id is not None:
            items = [a for a in items if a.doctor_id == filters.doctor_id]
        if filters.patient_id is not None:
            items = [a for a in items if a.patient_id == filters.patient_id]
        if filters.clinic_id is not None:
            items = [a for a in items if a.clinic_id == filters.clinic_id]

        return items

    async def list_appointments(self) -> list[AppointmentResponse]:
        """List all active appointments with registry data attached."""
        rows = await self.repository.get_all()
        return [await self._with_references(row) for row in rows]

    async def get_appointment(self, appointment_id: int) -> AppointmentResponse:
        """
        Get appointment by ID.

        Raises:
            NotFoundException: If appointment not found or soft-deleted
        """
        row = await self.repository.get_by_id(appointment_id)
        if row is None:
            raise NotFoundException(f"Appointment with id {appointment_id} not found")
        return await self._with_references(row)

    async def delete_appointment(self, appointment_id: int) -> None:
        """
        Soft delete an appointment.

        Raises:
            NotFoundException: If appointment not found or already deleted
        """
        if not await self.repository.soft_delete(appointment_id):
            raise NotFoundException(f"Appointment with id {appointment_id} not found")
        logger.info("appointment_deleted", appointment_id=appointment_id)

    async def _with_references(self, row: dict[str, Any]) -> AppointmentResponse:
        # Missing registry entities are attached as None
        return AppointmentResponse.model_validate(row).model_copy(
            update={
                "clinic": await self.registry.get_clinic(row["clinic_id"]),
                "doctor": await self.registry.get_doctor(row["doctor_id"]),
                "patient": await self.registry.get_patient(row["patient_id"]),
            }
        )
