"""Appointment schemas for request/response validation."""

from datetime import datetime
from enum import Enum

from pydantic import Field, field_validator

from medagenda.schemas.base import CamelModel, to_naive_utc
from medagenda.schemas.references import ClinicRef, DoctorRef, PatientRef


class AppointmentStatus(str, Enum):
    """Appointment status enumeration.

    ``scheduled`` and ``awaiting_slot`` are the two possible initial states;
    ``awaiting_slot`` is only ever assigned at creation, when the requested
    time conflicts with another appointment. ``completed`` is terminal.
    """

    AWAITING_SLOT = "awaiting_slot"
    SCHEDULED = "scheduled"
    COMPLETED = "completed"

    @property
    def is_terminal(self) -> bool:
        """Whether no further transition is possible."""
        return not ALLOWED_TRANSITIONS[self]

    def can_transition_to(self, target: "AppointmentStatus") -> bool:
        """Check whether moving to ``target`` is a legal transition."""
        return target in ALLOWED_TRANSITIONS[self]


ALLOWED_TRANSITIONS: dict[AppointmentStatus, frozenset[AppointmentStatus]] = {
    AppointmentStatus.AWAITING_SLOT: frozenset({AppointmentStatus.COMPLETED}),
    AppointmentStatus.SCHEDULED: frozenset({AppointmentStatus.COMPLETED}),
    AppointmentStatus.COMPLETED: frozenset(),
}


class AppointmentCreate(CamelModel):
    """Schema for creating a new appointment."""

    patient_id: int
    clinic_id: int
    doctor_id: int
    scheduled_at: datetime

    @field_validator("scheduled_at")
    @classmethod
    def normalize_scheduled_at(cls, v: datetime) -> datetime:
        """Store all times as naive UTC."""
        return to_naive_utc(v)


class AppointmentFilters(CamelModel):
    """Schema for appointment filtering.

    Absent criteria are not applied. Completed appointments are excluded
    unless ``include_completed`` is set.
    """

    from_date: datetime | None = Field(None, alias="from")
    to_date: datetime | None = Field(None, alias="to")
    include_completed: bool = False
    status: AppointmentStatus | None = None
    doctor_id: int | None = None
    patient_id: int | None = None
    clinic_id: int | None = None

    @field_validator("from_date", "to_date")
    @classmethod
    def normalize_bounds(cls, v: datetime | None) -> datetime | None:
        """Compare against stored naive UTC times."""
        return to_naive_utc(v) if v is not None else None


class AppointmentResponse(CamelModel):
    """Schema for appointment response.

    ``clinic``, ``doctor`` and ``patient`` are denormalized copies fetched
    from the registry; they are never persisted.
    """

    id: int
    patient_id: int
    doctor_id: int
    clinic_id: int
    scheduled_at: datetime
    notes: str | None = None
    status: AppointmentStatus
    created_at: datetime
    is_active: bool
    clinic: ClinicRef | None = None
    doctor: DoctorRef | None = None
    patient: PatientRef | None = None
