"""Specialty model definition using SQLAlchemy Core."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, Table, text

from medagenda.models.base import registry_metadata as metadata

specialties = Table(
    "specialties",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(200), nullable=False),
    Column("created_at", DateTime, nullable=False, server_default=text("CURRENT_TIMESTAMP")),
    Column("is_active", Boolean, nullable=False, server_default=text("1"), index=True),
)
