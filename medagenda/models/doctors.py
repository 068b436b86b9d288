"""Doctor model definition using SQLAlchemy Core."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Table,
    text,
)

from medagenda.models.base import registry_metadata as metadata

doctors = Table(
    "doctors",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(200), nullable=False),
    Column(
        "specialty_id",
        Integer,
        ForeignKey("specialties.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    ),
    # Professional credentials (CRM registration number)
    Column("crm", String(50)),
    # Metadata
    Column("created_at", DateTime, nullable=False, server_default=text("CURRENT_TIMESTAMP")),
    Column("is_active", Boolean, nullable=False, server_default=text("1"), index=True),
)
