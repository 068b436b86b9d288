"""API v1 router configuration."""

from fastapi import APIRouter

from medagenda.api.v1.endpoints import (
    appointments,
    clinics,
    doctors,
    health,
    patients,
    specialties,
)

# Scheduling service
scheduling_router = APIRouter()
scheduling_router.include_router(health.router, tags=["Health"])
scheduling_router.include_router(appointments.router, prefix="/Consulta", tags=["Appointments"])

# Registry service
registry_router = APIRouter()
registry_router.include_router(health.router, tags=["Health"])
registry_router.include_router(specialties.router, prefix="/Especialidade", tags=["Specialties"])
registry_router.include_router(clinics.router, prefix="/Clinica", tags=["Clinics"])
registry_router.include_router(patients.router, prefix="/Paciente", tags=["Patients"])
registry_router.include_router(doctors.router, prefix="/Medico", tags=["Doctors"])
