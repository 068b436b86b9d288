"""Client for the registry service.

The scheduling service resolves clinics, doctors and patients through this
client on every request; nothing is cached.
"""

from typing import Any, Protocol

import httpx
import structlog

from medagenda.schemas.references import ClinicRef, DoctorRef, PatientRef

logger = structlog.get_logger(__name__)


class RegistryClient(Protocol):
    """Read-only lookups against the registry."""

    async def get_clinic(self, clinic_id: int) -> ClinicRef | None: ...

    async def get_doctor(self, doctor_id: int) -> DoctorRef | None: ...

    async def get_patient(self, patient_id: int) -> PatientRef | None: ...

    async def get_doctors_by_specialty(self, specialty_id: int) -> list[DoctorRef]: ...


class HttpRegistryClient:
    """Registry client over HTTP/JSON.

    Any non-success response is treated as "not found"; transport errors
    (connection refused, timeouts) propagate to the caller.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize client.

        Args:
            base_url: Registry service root URL.
            timeout: Request timeout in seconds.
            transport: Optional transport, e.g. an ASGI transport in tests.
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout),
            headers={"Accept": "application/json"},
            transport=transport,
        )

    async def close(self) -> None:
        """Close HTTP client."""
        if not self._client.is_closed:
            await self._client.aclose()

    async def _get_json(self, path: str) -> Any | None:
        response = await self._client.get(path)
        if not response.is_success:
            logger.info(
                "registry_lookup_miss",
                path=path,
                status_code=response.status_code,
            )
            return None
        return response.json()

    async def get_clinic(self, clinic_id: int) -> ClinicRef | None:
        """Fetch a clinic by ID."""
        data = await self._get_json(f"/Clinica/{clinic_id}")
        return ClinicRef.model_validate(data) if data else None

    async def get_doctor(self, doctor_id: int) -> DoctorRef | None:
        """Fetch a doctor by ID."""
        data = await self._get_json(f"/Medico/{doctor_id}")
        return DoctorRef.model_validate(data) if data else None

    async def get_patient(self, patient_id: int) -> PatientRef | None:
        """Fetch a patient by ID."""
        data = await self._get_json(f"/Paciente/{patient_id}")
        return PatientRef.model_validate(data) if data else None

    async def get_doctors_by_specialty(self, specialty_id: int) -> list[DoctorRef]:
        """Fetch all active doctors of a specialty."""
        data = await self._get_json(f"/Medico/ByEspecialidade/{specialty_id}")
        return [DoctorRef.model_validate(item) for item in data or []]
