"""Read-only copies of registry entities as seen by the scheduling service.

The registry answers in camelCase, but older clients and hand-written
fixtures use other casings, so keys are matched case-insensitively.
"""

from datetime import date
from typing import Any

from pydantic import model_validator

from medagenda.schemas.base import CamelModel


class RegistryReference(CamelModel):
    """Base for registry entities consumed by the scheduler."""

    @model_validator(mode="before")
    @classmethod
    def match_keys_case_insensitively(cls, data: Any) -> Any:
        """Rename incoming keys to the alias they match ignoring case."""
        if not isinstance(data, dict):
            return data

        known: dict[str, str] = {}
        for name, field in cls.model_fields.items():
            alias = field.alias or name
            known[name.lower()] = alias
            known[alias.lower()] = alias

        return {known.get(str(key).lower(), key): value for key, value in data.items()}


class ClinicRef(RegistryReference):
    """Clinic as returned by the registry."""

    id: int
    name: str
    address: str | None = None
    is_active: bool = True


class SpecialtyRef(RegistryReference):
    """Specialty nested in a doctor."""

    id: int
    name: str


class DoctorRef(RegistryReference):
    """Doctor as returned by the registry."""

    id: int
    name: str
    specialty_id: int | None = None
    crm: str | None = None
    specialty: SpecialtyRef | None = None
    is_active: bool = True


class PatientRef(RegistryReference):
    """Patient as returned by the registry."""

    id: int
    name: str
    email: str | None = None
    phone: str | None = None
    birth_date: date | None = None
    is_active: bool = True
