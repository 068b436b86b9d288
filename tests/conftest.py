from collections.abc import AsyncGenerator
from datetime import date
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from medagenda.database import (
    create_engine_for,
    create_schema,
    get_registry_db,
    get_scheduling_db,
)
from medagenda.dependencies import get_notification_sink, get_registry_client
from medagenda.main import app as scheduling_app
from medagenda.models import registry_metadata, scheduling_metadata
from medagenda.registry_main import app as registry_app
from medagenda.schemas.references import ClinicRef, DoctorRef, PatientRef, SpecialtyRef


class FakeRegistryClient:
    """In-memory registry used in place of the HTTP client."""

    def __init__(self) -> None:
        self.clinics: dict[int, ClinicRef] = {}
        self.doctors: dict[int, DoctorRef] = {}
        self.patients: dict[int, PatientRef] = {}
        self.error: Exception | None = None
        self.calls: list[str] = []

    def _lookup(self, kind: str, table: dict, key: int):
        self.calls.append(f"{kind}:{key}")
        if self.error is not None:
            raise self.error
        return table.get(key)

    async def get_clinic(self, clinic_id: int) -> ClinicRef | None:
        return self._lookup("clinic", self.clinics, clinic_id)

    async def get_doctor(self, doctor_id: int) -> DoctorRef | None:
        return self._lookup("doctor", self.doctors, doctor_id)

    async def get_patient(self, patient_id: int) -> PatientRef | None:
        return self._lookup("patient", self.patients, patient_id)

    async def get_doctors_by_specialty(self, specialty_id: int) -> list[DoctorRef]:
        return [d for d in self.doctors.values() if d.specialty_id == specialty_id]


class RecordingNotificationSink:
    """Notification sink that keeps messages in memory."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, str, str]] = []
        self.error: Exception | None = None

    async def notify(self, recipient: str, subject: str, body: str) -> bool:
        if self.error is not None:
            raise self.error
        self.sent.append((recipient, subject, body))
        return True


async def _make_engine(path: Path, metadata) -> AsyncEngine:
    engine = create_engine_for(f"sqlite+aiosqlite:///{path}")
    await create_schema(engine, metadata)
    return engine


@pytest_asyncio.fixture
async def scheduling_engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """Scheduling database in a per-test SQLite file."""
    engine = await _make_engine(tmp_path / "scheduling.db", scheduling_metadata)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def registry_engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """Registry database in a per-test SQLite file."""
    engine = await _make_engine(tmp_path / "registry.db", registry_metadata)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(scheduling_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Create a scheduling database session."""
    session_factory = async_sessionmaker(scheduling_engine, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def registry_session(registry_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Create a registry database session."""
    session_factory = async_sessionmaker(registry_engine, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest.fixture
def fake_registry() -> FakeRegistryClient:
    """Registry holding two clinics, two doctors and two patients."""
    registry = FakeRegistryClient()
    cardiology = SpecialtyRef(id=1, name="Cardiology")
    registry.clinics[1] = ClinicRef(id=1, name="Central Clinic", address="1 Main St")
    registry.clinics[2] = ClinicRef(id=2, name="North Clinic", address="9 Hill Rd")
    registry.doctors[1] = DoctorRef(
        id=1, name="Dr. Ana Souza", specialty_id=1, crm="12345", specialty=cardiology
    )
    registry.doctors[2] = DoctorRef(
        id=2, name="Dr. Bruno Lima", specialty_id=1, crm="67890", specialty=cardiology
    )
    registry.patients[1] = PatientRef(
        id=1,
        name="Carla Mendes",
        email="carla.mendes@example.com",
        phone="+5511999990000",
        birth_date=date(1990, 4, 2),
    )
    registry.patients[2] = PatientRef(id=2, name="Davi Rocha")
    return registry


@pytest.fixture
def notifier() -> RecordingNotificationSink:
    """Recording notification sink."""
    return RecordingNotificationSink()


@pytest_asyncio.fixture
async def client(
    scheduling_engine: AsyncEngine,
    fake_registry: FakeRegistryClient,
    notifier: RecordingNotificationSink,
) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client for the scheduling service."""
    session_factory = async_sessionmaker(scheduling_engine, expire_on_commit=False)

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    scheduling_app.dependency_overrides[get_scheduling_db] = override_get_db
    scheduling_app.dependency_overrides[get_registry_client] = lambda: fake_registry
    scheduling_app.dependency_overrides[get_notification_sink] = lambda: notifier

    # Unhandled errors are rendered by the app instead of propagating into the test
    transport = ASGITransport(app=scheduling_app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    scheduling_app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def registry_api(registry_engine: AsyncEngine) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client for the registry service."""
    session_factory = async_sessionmaker(registry_engine, expire_on_commit=False)

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    registry_app.dependency_overrides[get_registry_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=registry_app), base_url="http://registry"
    ) as client:
        yield client

    registry_app.dependency_overrides.clear()


@pytest.fixture
def appointment_data() -> dict:
    """Appointment request for clinic 1, doctor 1 and patient 1."""
    return {
        "patientId": 1,
        "clinicId": 1,
        "doctorId": 1,
        "scheduledAt": "2030-05-10T14:00:00",
    }
