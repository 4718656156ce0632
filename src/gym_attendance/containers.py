"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from gym_attendance.adapters.supabase_attendance_repository import (
    SupabaseAttendanceRepository,
)
from gym_attendance.app_logging import configure_logging
from gym_attendance.config import Settings
from gym_attendance.services.attendance import AttendanceService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    attendance_service: AttendanceService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    configure_logging(resolved_settings.log_level)
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    attendance_repository = SupabaseAttendanceRepository(supabase_client)
    attendance_service = AttendanceService(
        repository=attendance_repository,
        min_year=resolved_settings.attendance_min_year,
        max_year=resolved_settings.attendance_max_year,
    )
    return AppContainer(
        settings=resolved_settings,
        attendance_service=attendance_service,
    )
