"""Clinic schemas for request/response validation."""

from datetime import datetime

from pydantic import Field

from medagenda.schemas.base import CamelModel


class ClinicBase(CamelModel):
    """Base schema for clinic."""

    name: str = Field(..., min_length=1, max_length=255)
    address: str | None = Field(None, description="Full address")


class ClinicCreate(ClinicBase):
    """Schema for creating a clinic."""


class ClinicUpdate(ClinicBase):
    """Schema for updating a clinic.

    The id is optional; when sent it must match the id in the path.
    """

    id: int | None = None
    is_active: bool | None = None


class ClinicResponse(ClinicBase):
    """Clinic response schema."""

    id: int
    created_at: datetime
    is_active: bool
