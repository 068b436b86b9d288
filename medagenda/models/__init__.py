"""Database models."""

from medagenda.models.appointments import appointments
from medagenda.models.base import registry_metadata, scheduling_metadata
from medagenda.models.clinics import clinics
from medagenda.models.doctors import doctors
from medagenda.models.patients import patients
from medagenda.models.specialties import specialties

__all__ = [
    "appointments",
    "clinics",
    "doctors",
    "patients",
    "registry_metadata",
    "scheduling_metadata",
    "specialties",
]
