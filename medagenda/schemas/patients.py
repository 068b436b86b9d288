"""Patient schemas for request/response validation."""

from datetime import date, datetime

from pydantic import Field

from medagenda.schemas.base import CamelModel


class PatientBase(CamelModel):
    """Base schema for patient."""

    name: str = Field(..., min_length=1, max_length=200)
    email: str | None = Field(None, max_length=255)
    phone: str | None = Field(None, max_length=20)
    birth_date: date | None = None


class PatientCreate(PatientBase):
    """Schema for creating a patient."""


class PatientUpdate(PatientBase):
    """Schema for updating a patient."""

    id: int | None = None
    is_active: bool | None = None


class PatientResponse(PatientBase):
    """Patient response schema."""

    id: int
    created_at: datetime
    is_active: bool
