"""Doctor schemas for request/response validation."""

from datetime import datetime

from pydantic import Field

from medagenda.schemas.base import CamelModel
from medagenda.schemas.specialties import SpecialtyResponse


class DoctorBase(CamelModel):
    """Base schema for doctor."""

    name: str = Field(..., min_length=1, max_length=200)
    specialty_id: int
    crm: str | None = Field(None, max_length=50, description="Medical council registration")


class DoctorCreate(DoctorBase):
    """Schema for creating a doctor."""


class DoctorUpdate(DoctorBase):
    """Schema for updating a doctor."""

    id: int | None = None
    is_active: bool | None = None


class DoctorResponse(DoctorBase):
    """Doctor response schema with its specialty."""

    id: int
    created_at: datetime
    is_active: bool
    specialty: SpecialtyResponse | None = None
