"""FastAPI dependencies."""

from datetime import timedelta
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from medagenda.config import settings
from medagenda.core.registry_client import RegistryClient
from medagenda.database import get_registry_db, get_scheduling_db
from medagenda.services.appointment_service import AppointmentService
from medagenda.services.notification_service import FileNotificationSink, NotificationSink

# Type aliases for dependency injection
SchedulingSession = Annotated[AsyncSession, Depends(get_scheduling_db)]
RegistrySession = Annotated[AsyncSession, Depends(get_registry_db)]


def get_registry_client(request: Request) -> RegistryClient:
    """
    Get the registry client created at application startup.

    Args:
        request: Current request

    Returns:
        Registry client owned by the application
    """
    return request.app.state.registry_client


def get_notification_sink() -> NotificationSink:
    """Get the notification sink configured for this deployment."""
    return FileNotificationSink(settings.notification_dir)


def get_appointment_service(
    db: SchedulingSession,
    registry: Annotated[RegistryClient, Depends(get_registry_client)],
    notifier: Annotated[NotificationSink, Depends(get_notification_sink)],
) -> AppointmentService:
    """Build the appointment service with the configured scheduling policy."""
    return AppointmentService(
        db,
        registry,
        notifier,
        conflict_window=timedelta(minutes=settings.conflict_window_minutes),
        allow_past_appointments=settings.allow_past_appointments,
        allow_complete_awaiting_slot=settings.allow_complete_awaiting_slot,
    )


AppointmentServiceDep = Annotated[AppointmentService, Depends(get_appointment_service)]
