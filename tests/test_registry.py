"""Tests for registry endpoints."""

import pytest
from httpx import AsyncClient


@pytest.fixture
def sample_clinic_data() -> dict:
    """Sample clinic data for testing."""
    return {"name": "Central Clinic", "address": "1 Main St, Sao Paulo"}


@pytest.fixture
def sample_patient_data() -> dict:
    """Sample patient data for testing."""
    return {
        "name": "Carla Mendes",
        "email": "carla.mendes@example.com",
        "phone": "+5511999990000",
        "birthDate": "1990-04-02",
    }


async def _create_specialty(registry_api: AsyncClient, name: str = "Cardiology") -> dict:
    response = await registry_api.post("/Especialidade", json={"name": name})
    assert response.status_code == 201, response.text
    return response.json()


# ============================================================================
# Clinic Endpoint Tests
# ============================================================================


@pytest.mark.asyncio
async def test_create_clinic(registry_api: AsyncClient, sample_clinic_data: dict) -> None:
    """Test creating a clinic."""
    response = await registry_api.post("/Clinica", json=sample_clinic_data)

    assert response.status_code == 201
    data = response.json()
    assert data["name"] == sample_clinic_data["name"]
    assert data["address"] == sample_clinic_data["address"]
    assert data["isActive"] is True
    assert "id" in data
    assert "createdAt" in data


@pytest.mark.asyncio
async def test_get_clinic(registry_api: AsyncClient, sample_clinic_data: dict) -> None:
    """Test getting a clinic by ID."""
    created = (await registry_api.post("/Clinica", json=sample_clinic_data)).json()

    response = await registry_api.get(f"/Clinica/{created['id']}")

    assert response.status_code == 200
    assert response.json() == created


@pytest.mark.asyncio
async def test_get_clinic_not_found(registry_api: AsyncClient) -> None:
    """Test getting a non-existent clinic."""
    response = await registry_api.get("/Clinica/999")

    assert response.status_code == 404
    data = response.json()
    assert data["error"] == "NotFoundException"
    assert data["message"] == "Clinic with id 999 not found"
    assert data["path"].endswith("/Clinica/999")


@pytest.mark.asyncio
async def test_list_clinics(registry_api: AsyncClient) -> None:
    """Test listing clinics ordered by name."""
    await registry_api.post("/Clinica", json={"name": "Zeta Clinic"})
    await registry_api.post("/Clinica", json={"name": "Alpha Clinic"})

    response = await registry_api.get("/Clinica/GetAll")

    assert response.status_code == 200
    assert [c["name"] for c in response.json()] == ["Alpha Clinic", "Zeta Clinic"]


@pytest.mark.asyncio
async def test_update_clinic(registry_api: AsyncClient, sample_clinic_data: dict) -> None:
    """Test updating a clinic."""
    created = (await registry_api.post("/Clinica", json=sample_clinic_data)).json()

    response = await registry_api.put(
        f"/Clinica/{created['id']}",
        json={"id": created["id"], "name": "Central Clinic II", "address": "2 Main St"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Central Clinic II"
    assert data["address"] == "2 Main St"


@pytest.mark.asyncio
async def test_update_clinic_id_mismatch(
    registry_api: AsyncClient,
    sample_clinic_data: dict,
) -> None:
    """A body id different from the path id is rejected."""
    created = (await registry_api.post("/Clinica", json=sample_clinic_data)).json()

    response = await registry_api.put(
        f"/Clinica/{created['id']}",
        json={"id": created["id"] + 1, "name": "Other"},
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_update_clinic_not_found(registry_api: AsyncClient) -> None:
    """Updating a non-existent clinic is a 404."""
    response = await registry_api.put("/Clinica/999", json={"name": "Ghost Clinic"})

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_clinic(registry_api: AsyncClient, sample_clinic_data: dict) -> None:
    """Test soft deleting a clinic."""
    created = (await registry_api.post("/Clinica", json=sample_clinic_data)).json()

    response = await registry_api.delete(f"/Clinica/{created['id']}")
    assert response.status_code == 204

    response = await registry_api.get(f"/Clinica/{created['id']}")
    assert response.status_code == 404

    response = await registry_api.get("/Clinica/GetAll")
    assert response.json() == []

    response = await registry_api.delete(f"/Clinica/{created['id']}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_create_clinic_without_name(registry_api: AsyncClient) -> None:
    """Missing required fields are a bad request."""
    response = await registry_api.post("/Clinica", json={"address": "Nowhere"})

    assert response.status_code == 400
    assert response.json()["error"] == "ValidationError"


# ============================================================================
# Patient Endpoint Tests
# ============================================================================


@pytest.mark.asyncio
async def test_patient_crud(registry_api: AsyncClient, sample_patient_data: dict) -> None:
    """Test the patient lifecycle."""
    response = await registry_api.post("/Paciente", json=sample_patient_data)
    assert response.status_code == 201
    patient = response.json()
    assert patient["birthDate"] == "1990-04-02"
    assert patient["email"] == sample_patient_data["email"]

    response = await registry_api.put(
        f"/Paciente/{patient['id']}",
        json={**sample_patient_data, "phone": "+5511888880000"},
    )
    assert response.status_code == 200
    assert response.json()["phone"] == "+5511888880000"

    response = await registry_api.get("/Paciente/GetAll")
    assert [p["id"] for p in response.json()] == [patient["id"]]

    response = await registry_api.delete(f"/Paciente/{patient['id']}")
    assert response.status_code == 204

    response = await registry_api.get(f"/Paciente/{patient['id']}")
    assert response.status_code == 404


# ============================================================================
# Specialty Endpoint Tests
# ============================================================================


@pytest.mark.asyncio
async def test_specialty_crud(registry_api: AsyncClient) -> None:
    """Test the specialty lifecycle."""
    specialty = await _create_specialty(registry_api)

    response = await registry_api.get(f"/Especialidade/{specialty['id']}")
    assert response.status_code == 200
    assert response.json()["name"] == "Cardiology"

    response = await registry_api.put(
        f"/Especialidade/{specialty['id']}", json={"name": "Pediatrics"}
    )
    assert response.status_code == 200
    assert response.json()["name"] == "Pediatrics"

    response = await registry_api.delete(f"/Especialidade/{specialty['id']}")
    assert response.status_code == 204

    response = await registry_api.get("/Especialidade/GetAll")
    assert response.json() == []


# ============================================================================
# Doctor Endpoint Tests
# ============================================================================


@pytest.mark.asyncio
async def test_create_doctor(registry_api: AsyncClient) -> None:
    """Doctors are returned with their specialty nested."""
    specialty = await _create_specialty(registry_api)

    response = await registry_api.post(
        "/Medico",
        json={"name": "Dr. Ana Souza", "specialtyId": specialty["id"], "crm": "12345"},
    )

    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Dr. Ana Souza"
    assert data["specialtyId"] == specialty["id"]
    assert data["specialty"]["name"] == "Cardiology"


@pytest.mark.asyncio
async def test_create_doctor_with_unknown_specialty(registry_api: AsyncClient) -> None:
    """A doctor needs an existing specialty."""
    response = await registry_api.post(
        "/Medico", json={"name": "Dr. Nobody", "specialtyId": 999}
    )

    assert response.status_code == 400
    assert "Specialty with id 999" in response.json()["message"]


@pytest.mark.asyncio
async def test_create_doctor_with_inactive_specialty(registry_api: AsyncClient) -> None:
    """A soft-deleted specialty cannot be assigned."""
    specialty = await _create_specialty(registry_api)
    await registry_api.delete(f"/Especialidade/{specialty['id']}")

    response = await registry_api.post(
        "/Medico", json={"name": "Dr. Late", "specialtyId": specialty["id"]}
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_doctors_by_specialty(registry_api: AsyncClient) -> None:
    """Doctors can be listed per specialty."""
    cardiology = await _create_specialty(registry_api, "Cardiology")
    pediatrics = await _create_specialty(registry_api, "Pediatrics")
    await registry_api.post("/Medico", json={"name": "Dr. B", "specialtyId": cardiology["id"]})
    await registry_api.post("/Medico", json={"name": "Dr. A", "specialtyId": cardiology["id"]})
    await registry_api.post("/Medico", json={"name": "Dr. C", "specialtyId": pediatrics["id"]})

    response = await registry_api.get(f"/Medico/ByEspecialidade/{cardiology['id']}")
    assert response.status_code == 200
    assert [d["name"] for d in response.json()] == ["Dr. A", "Dr. B"]

    response = await registry_api.get("/Medico/ByEspecialidade/999")
    assert response.status_code == 200
    assert response.json() == []

    response = await registry_api.get("/Medico/GetAll")
    assert len(response.json()) == 3


@pytest.mark.asyncio
async def test_update_and_delete_doctor(registry_api: AsyncClient) -> None:
    """Doctors can move to another specialty and be soft deleted."""
    cardiology = await _create_specialty(registry_api, "Cardiology")
    pediatrics = await _create_specialty(registry_api, "Pediatrics")
    doctor = (
        await registry_api.post(
            "/Medico", json={"name": "Dr. Ana Souza", "specialtyId": cardiology["id"]}
        )
    ).json()

    response = await registry_api.put(
        f"/Medico/{doctor['id']}",
        json={"name": "Dr. Ana Souza", "specialtyId": pediatrics["id"]},
    )
    assert response.status_code == 200
    assert response.json()["specialty"]["name"] == "Pediatrics"

    response = await registry_api.delete(f"/Medico/{doctor['id']}")
    assert response.status_code == 204

    response = await registry_api.get(f"/Medico/{doctor['id']}")
    assert response.status_code == 404

    response = await registry_api.get(f"/Medico/ByEspecialidade/{pediatrics['id']}")
    assert response.json() == []


# ============================================================================
# Health Endpoint Tests
# ============================================================================


@pytest.mark.asyncio
async def test_ping(registry_api: AsyncClient) -> None:
    """Test ping endpoint."""
    response = await registry_api.get("/Ping")

    assert response.status_code == 200
    assert response.json() == "Pong"


@pytest.mark.asyncio
async def test_health(registry_api: AsyncClient) -> None:
    """Test basic health endpoint."""
    response = await registry_api.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["service"] == "registry"
