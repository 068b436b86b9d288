"""Clinic management endpoints."""

from fastapi import APIRouter, Depends, status

from medagenda.core.exceptions import BadRequestException, NotFoundException
from medagenda.dependencies import RegistrySession
from medagenda.schemas.clinics import ClinicCreate, ClinicResponse, ClinicUpdate
from medagenda.services.clinic_service import ClinicService

router = APIRouter()


def get_clinic_service() -> ClinicService:
    """Get clinic service instance."""
    return ClinicService()


@router.get("/GetAll", response_model=list[ClinicResponse])
async def list_clinics(
    db: RegistrySession,
    clinic_service: ClinicService = Depends(get_clinic_service),
):
    """List all active clinics."""
    return await clinic_service.get_clinics(db)


@router.get("/{clinic_id}", response_model=ClinicResponse)
async def get_clinic(
    clinic_id: int,
    db: RegistrySession,
    clinic_service: ClinicService = Depends(get_clinic_service),
):
    """
    Get clinic details by ID.

    Inactive clinics are reported as not found.
    """
    clinic = await clinic_service.get_clinic_by_id(db, clinic_id)

    if not clinic:
        raise NotFoundException(f"Clinic with id {clinic_id} not found")

    return clinic


@router.post("", response_model=ClinicResponse, status_code=status.HTTP_201_CREATED)
async def create_clinic(
    clinic_data: ClinicCreate,
    db: RegistrySession,
    clinic_service: ClinicService = Depends(get_clinic_service),
):
    """
    Create a new clinic.

    - **name**: Clinic name (required)
    - **address**: Physical address
    """
    return await clinic_service.create_clinic(db, clinic_data)


@router.put("/{clinic_id}", response_model=ClinicResponse)
async def update_clinic(
    clinic_id: int,
    clinic_data: ClinicUpdate,
    db: RegistrySession,
    clinic_service: ClinicService = Depends(get_clinic_service),
):
    """Update clinic information."""
    if clinic_data.id is not None and clinic_data.id != clinic_id:
        raise BadRequestException("Clinic ID in URL does not match request body")

    clinic = await clinic_service.update_clinic(db, clinic_id, clinic_data)

    if not clinic:
        raise NotFoundException(f"Clinic with id {clinic_id} not found")

    return clinic


@router.delete("/{clinic_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_clinic(
    clinic_id: int,
    db: RegistrySession,
    clinic_service: ClinicService = Depends(get_clinic_service),
):
    """
    Soft delete a clinic.

    The clinic will be marked as inactive but not removed from the database.
    """
    success = await clinic_service.soft_delete_clinic(db, clinic_id)

    if not success:
        raise NotFoundException(f"Clinic with id {clinic_id} not found")
