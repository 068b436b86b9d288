"""Clinic model definition using SQLAlchemy Core."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Integer,
    String,
    Table,
    Text,
    text,
)

from medagenda.models.base import registry_metadata as metadata

clinics = Table(
    "clinics",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    # Basic Information
    Column("name", String(255), nullable=False, index=True),
    Column("address", Text),  # Full address as text
    # Metadata
    Column("created_at", DateTime, nullable=False, server_default=text("CURRENT_TIMESTAMP")),
    # Soft delete
    Column("is_active", Boolean, nullable=False, server_default=text("1"), index=True),
)
