"""Doctor management endpoints."""

from fastapi import APIRouter, Depends, status

from medagenda.core.exceptions import BadRequestException, NotFoundException
from medagenda.dependencies import RegistrySession
from medagenda.schemas.doctors import DoctorCreate, DoctorResponse, DoctorUpdate
from medagenda.services.doctor_service import DoctorService

router = APIRouter()


def get_doctor_service() -> DoctorService:
    """Get doctor service instance."""
    return DoctorService()


@router.get("/GetAll", response_model=list[DoctorResponse])
async def list_doctors(
    db: RegistrySession,
    doctor_service: DoctorService = Depends(get_doctor_service),
):
    """List all active doctors with an active specialty."""
    return await doctor_service.get_doctors(db)


@router.get("/ByEspecialidade/{specialty_id}", response_model=list[DoctorResponse])
async def list_doctors_by_specialty(
    specialty_id: int,
    db: RegistrySession,
    doctor_service: DoctorService = Depends(get_doctor_service),
):
    """List active doctors of a specialty. Unknown specialties yield an empty list."""
    return await doctor_service.get_doctors_by_specialty(db, specialty_id)


@router.get("/{doctor_id}", response_model=DoctorResponse)
async def get_doctor(
    doctor_id: int,
    db: RegistrySession,
    doctor_service: DoctorService = Depends(get_doctor_service),
):
    """Get doctor details by ID, including the specialty."""
    doctor = await doctor_service.get_doctor_by_id(db, doctor_id)

    if not doctor:
        raise NotFoundException(f"Doctor with id {doctor_id} not found")

    return doctor


@router.post("", response_model=DoctorResponse, status_code=status.HTTP_201_CREATED)
async def create_doctor(
    doctor_data: DoctorCreate,
    db: RegistrySession,
    doctor_service: DoctorService = Depends(get_doctor_service),
):
    """
    Create a new doctor.

    - **name**: Doctor name (required)
    - **specialtyId**: An existing, active specialty (required)
    - **crm**: Medical council registration
    """
    return await doctor_service.create_doctor(db, doctor_data)


@router.put("/{doctor_id}", response_model=DoctorResponse)
async def update_doctor(
    doctor_id: int,
    doctor_data: DoctorUpdate,
    db: RegistrySession,
    doctor_service: DoctorService = Depends(get_doctor_service),
):
    """Update doctor information."""
    if doctor_data.id is not None and doctor_data.id != doctor_id:
        raise BadRequestException("Doctor ID in URL does not match request body")

    doctor = await doctor_service.update_doctor(db, doctor_id, doctor_data)

    if not doctor:
        raise NotFoundException(f"Doctor with id {doctor_id} not found")

    return doctor


@router.delete("/{doctor_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_doctor(
    doctor_id: int,
    db: RegistrySession,
    doctor_service: DoctorService = Depends(get_doctor_service),
):
    """Soft delete a doctor."""
    success = await doctor_service.soft_delete_doctor(db, doctor_id)

    if not success:
        raise NotFoundException(f"Doctor with id {doctor_id} not found")
