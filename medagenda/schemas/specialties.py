"""Specialty schemas for request/response validation."""

from datetime import datetime

from pydantic import Field

from medagenda.schemas.base import CamelModel


class SpecialtyBase(CamelModel):
    """Base schema for specialty."""

    name: str = Field(..., min_length=1, max_length=200)


class SpecialtyCreate(SpecialtyBase):
    """Schema for creating a specialty."""


class SpecialtyUpdate(SpecialtyBase):
    """Schema for updating a specialty."""

    id: int | None = None
    is_active: bool | None = None


class SpecialtyResponse(SpecialtyBase):
    """Specialty response schema."""

    id: int
    created_at: datetime
    is_active: bool
