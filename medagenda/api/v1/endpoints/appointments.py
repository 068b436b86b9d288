"""Appointment scheduling endpoints."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Body, Query, status

from medagenda.dependencies import AppointmentServiceDep
from medagenda.schemas.appointments import (
    AppointmentCreate,
    AppointmentFilters,
    AppointmentResponse,
    AppointmentStatus,
)

router = APIRouter()


@router.post("", response_model=AppointmentResponse)
async def create_appointment(
    appointment_data: AppointmentCreate,
    appointment_service: AppointmentServiceDep,
):
    """
    Schedule a new appointment.

    - **patientId**: Patient ID (required)
    - **clinicId**: Clinic ID (required)
    - **doctorId**: Doctor ID (required)
    - **scheduledAt**: Requested date and time (required)

    A time within the conflict window of another active appointment for the
    same doctor and clinic is accepted with status ``awaiting_slot`` and the
    patient is notified.
    """
    return await appointment_service.create_appointment(appointment_data)


@router.post("/Realizar/{appointment_id}", response_model=AppointmentResponse)
async def complete_appointment(
    appointment_id: int,
    notes: Annotated[str, Body()],
    appointment_service: AppointmentServiceDep,
):
    """
    Mark an appointment as completed.

    The request body is a JSON string holding the notes taken during the
    appointment; it replaces any previous notes.
    """
    return await appointment_service.complete_appointment(appointment_id, notes)


@router.get("/Filtro", response_model=list[AppointmentResponse])
async def filter_appointments(
    appointment_service: AppointmentServiceDep,
    from_date: Annotated[datetime | None, Query(alias="from")] = None,
    to_date: Annotated[datetime | None, Query(alias="to")] = None,
    include_completed: Annotated[bool, Query(alias="includeCompleted")] = False,
    status_filter: Annotated[AppointmentStatus | None, Query(alias="status")] = None,
    doctor_id: Annotated[int | None, Query(alias="doctorId")] = None,
    patient_id: Annotated[int | None, Query(alias="patientId")] = None,
    clinic_id: Annotated[int | None, Query(alias="clinicId")] = None,
):
    """
    Filter active appointments.

    Completed appointments are excluded unless **includeCompleted** is true.
    Registry data is not attached to the results.
    """
    filters = AppointmentFilters(
        from_date=from_date,
        to_date=to_date,
        include_completed=include_completed,
        status=status_filter,
        doctor_id=doctor_id,
        patient_id=patient_id,
        clinic_id=clinic_id,
    )
    return await appointment_service.filter_appointments(filters)


@router.get("/GetAll", response_model=list[AppointmentResponse])
async def list_appointments(appointment_service: AppointmentServiceDep):
    """List all active appointments with clinic, doctor and patient attached."""
    return await appointment_service.list_appointments()


@router.get("/Ping")
async def ping():
    """Liveness check."""
    return "Pong"


@router.get("/{appointment_id}", response_model=AppointmentResponse)
async def get_appointment(
    appointment_id: int,
    appointment_service: AppointmentServiceDep,
):
    """Get appointment details by ID."""
    return await appointment_service.get_appointment(appointment_id)


@router.delete("/{appointment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_appointment(
    appointment_id: int,
    appointment_service: AppointmentServiceDep,
):
    """
    Soft delete an appointment.

    Deleted appointments no longer take part in conflict detection.
    """
    await appointment_service.delete_appointment(appointment_id)
