"""Patient model definition using SQLAlchemy Core."""

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Integer,
    String,
    Table,
    text,
)

from medagenda.models.base import registry_metadata as metadata

patients = Table(
    "patients",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    # Personal information
    Column("name", String(200), nullable=False),
    Column("email", String(255)),
    Column("phone", String(20)),
    Column("birth_date", Date),
    # Metadata
    Column("created_at", DateTime, nullable=False, server_default=text("CURRENT_TIMESTAMP")),
    Column("is_active", Boolean, nullable=False, server_default=text("1"), index=True),
)
