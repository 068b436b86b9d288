"""Appointments table model using SQLAlchemy Core."""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    Index,
    Integer,
    Table,
    Text,
    text,
)

from medagenda.models.base import scheduling_metadata as metadata

appointments = Table(
    "appointments",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    # References owned by the registry service (no FK across databases)
    Column("patient_id", Integer, nullable=False),
    Column("doctor_id", Integer, nullable=False),
    Column("clinic_id", Integer, nullable=False),
    # Appointment details
    Column("scheduled_at", DateTime, nullable=False),
    Column("notes", Text, nullable=True),
    # Status management
    Column("status", Text, nullable=False, server_default="scheduled"),
    # Audit fields
    Column("created_at", DateTime, nullable=False, server_default=text("CURRENT_TIMESTAMP")),
    # Soft delete
    Column("is_active", Boolean, nullable=False, server_default=text("1")),
    # Constraints
    CheckConstraint(
        "status IN ('awaiting_slot', 'scheduled', 'completed')",
        name="appointments_status_check",
    ),
)

# Conflict lookups filter on doctor + clinic + time
Index(
    "idx_appointments_doctor_clinic_time",
    appointments.c.doctor_id,
    appointments.c.clinic_id,
    appointments.c.scheduled_at,
)
