"""Patient management endpoints."""

from fastapi import APIRouter, Depends, status

from medagenda.core.exceptions import BadRequestException, NotFoundException
from medagenda.dependencies import RegistrySession
from medagenda.schemas.patients import PatientCreate, PatientResponse, PatientUpdate
from medagenda.services.patient_service import PatientService

router = APIRouter()


def get_patient_service() -> PatientService:
    """Get patient service instance."""
    return PatientService()


@router.get("/GetAll", response_model=list[PatientResponse])
async def list_patients(
    db: RegistrySession,
    patient_service: PatientService = Depends(get_patient_service),
):
    """List all active patients."""
    return await patient_service.get_patients(db)


@router.get("/{patient_id}", response_model=PatientResponse)
async def get_patient(
    patient_id: int,
    db: RegistrySession,
    patient_service: PatientService = Depends(get_patient_service),
):
    """Get patient details by ID."""
    patient = await patient_service.get_patient_by_id(db, patient_id)

    if not patient:
        raise NotFoundException(f"Patient with id {patient_id} not found")

    return patient


@router.post("", response_model=PatientResponse, status_code=status.HTTP_201_CREATED)
async def create_patient(
    patient_data: PatientCreate,
    db: RegistrySession,
    patient_service: PatientService = Depends(get_patient_service),
):
    """Create a new patient."""
    return await patient_service.create_patient(db, patient_data)


@router.put("/{patient_id}", response_model=PatientResponse)
async def update_patient(
    patient_id: int,
    patient_data: PatientUpdate,
    db: RegistrySession,
    patient_service: PatientService = Depends(get_patient_service),
):
    """Update patient information."""
    if patient_data.id is not None and patient_data.id != patient_id:
        raise BadRequestException("Patient ID in URL does not match request body")

    patient = await patient_service.update_patient(db, patient_id, patient_data)

    if not patient:
        raise NotFoundException(f"Patient with id {patient_id} not found")

    return patient


@router.delete("/{patient_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_patient(
    patient_id: int,
    db: RegistrySession,
    patient_service: PatientService = Depends(get_patient_service),
):
    """Soft delete a patient."""
    success = await patient_service.soft_delete_patient(db, patient_id)

    if not success:
        raise NotFoundException(f"Patient with id {patient_id} not found")
