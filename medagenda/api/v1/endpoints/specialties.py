"""Specialty management endpoints."""

from fastapi import APIRouter, Depends, status

from medagenda.core.exceptions import BadRequestException, NotFoundException
from medagenda.dependencies import RegistrySession
from medagenda.schemas.specialties import SpecialtyCreate, SpecialtyResponse, SpecialtyUpdate
from medagenda.services.specialty_service import SpecialtyService

router = APIRouter()


def get_specialty_service() -> SpecialtyService:
    """Get specialty service instance."""
    return SpecialtyService()


@router.get("/GetAll", response_model=list[SpecialtyResponse])
async def list_specialties(
    db: RegistrySession,
    specialty_service: SpecialtyService = Depends(get_specialty_service),
):
    """List all active specialties."""
    return await specialty_service.get_specialties(db)


@router.get("/{specialty_id}", response_model=SpecialtyResponse)
async def get_specialty(
    specialty_id: int,
    db: RegistrySession,
    specialty_service: SpecialtyService = Depends(get_specialty_service),
):
    """Get specialty by ID."""
    specialty = await specialty_service.get_specialty_by_id(db, specialty_id)

    if not specialty:
        raise NotFoundException(f"Specialty with id {specialty_id} not found")

    return specialty


@router.post("", response_model=SpecialtyResponse, status_code=status.HTTP_201_CREATED)
async def create_specialty(
    specialty_data: SpecialtyCreate,
    db: RegistrySession,
    specialty_service: SpecialtyService = Depends(get_specialty_service),
):
    """Create a new specialty."""
    return await specialty_service.create_specialty(db, specialty_data)


@router.put("/{specialty_id}", response_model=SpecialtyResponse)
async def update_specialty(
    specialty_id: int,
    specialty_data: SpecialtyUpdate,
    db: RegistrySession,
    specialty_service: SpecialtyService = Depends(get_specialty_service),
):
    """Update specialty information."""
    if specialty_data.id is not None and specialty_data.id != specialty_id:
        raise BadRequestException("Specialty ID in URL does not match request body")

    specialty = await specialty_service.update_specialty(db, specialty_id, specialty_data)

    if not specialty:
        raise NotFoundException(f"Specialty with id {specialty_id} not found")

    return specialty


@router.delete("/{specialty_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_specialty(
    specialty_id: int,
    db: RegistrySession,
    specialty_service: SpecialtyService = Depends(get_specialty_service),
):
    """Soft delete a specialty."""
    success = await specialty_service.soft_delete_specialty(db, specialty_id)

    if not success:
        raise NotFoundException(f"Specialty with id {specialty_id} not found")
