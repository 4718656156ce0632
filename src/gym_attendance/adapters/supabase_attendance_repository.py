"""Supabase repository for gym attendance."""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime

from supabase import Client

from gym_attendance.domain.attendance import AttendanceRecord
from gym_attendance.services.attendance import AttendanceRepository

_COLUMNS = "id, user_id, attendance_date, created_at"


@dataclass
class SupabaseAttendanceRepository(AttendanceRepository):
    """Supabase implementation for attendance records."""

    client: Client

    def user_exists(self, user_id: int) -> bool:
        """Return True when a users row has the id."""
        response = (
            self.client.table("users")
            .select("id")
            .eq("id", user_id)
            .limit(1)
            .execute()
        )
        return bool(response.data)

    def insert_one(self, user_id: int, attendance_date: date) -> AttendanceRecord:
        """Create an attendance row and return it."""
        response = (
            self.client.table("gym_attendance")
            .insert(
                {"user_id": user_id, "attendance_date": attendance_date.isoformat()}
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create gym attendance record")
        return _parse_row(response.data[0])

    def insert_many(
        self, user_id: int, attendance_dates: Sequence[date]
    ) -> list[AttendanceRecord]:
        """Create attendance rows with a single insert call."""
        if not attendance_dates:
            return []
        payload = [
            {"user_id": user_id, "attendance_date": value.isoformat()}
            for value in attendance_dates
        ]
        response = self.client.table("gym_attendance").insert(payload).execute()
        rows = response.data or []
        if len(rows) != len(payload):
            raise RuntimeError("Failed to create gym attendance records")
        return [_parse_row(row) for row in rows]

    def find_by_user_and_range(
        self, user_id: int, from_date: date, to_date: date
    ) -> list[AttendanceRecord]:
        """Return attendance rows for a user between two dates inclusive."""
        response = (
            self.client.table("gym_attendance")
            .select(_COLUMNS)
            .eq("user_id", user_id)
            .gte("attendance_date", from_date.isoformat())
            .lte("attendance_date", to_date.isoformat())
            .order("attendance_date", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def find_by_user(self, user_id: int) -> list[AttendanceRecord]:
        """Return all attendance rows for a user, newest first."""
        response = (
            self.client.table("gym_attendance")
            .select(_COLUMNS)
            .eq("user_id", user_id)
            .order("attendance_date", desc=True)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def find_by_id(self, record_id: int) -> AttendanceRecord | None:
        """Return an attendance row by id."""
        response = (
            self.client.table("gym_attendance")
            .select(_COLUMNS)
            .eq("id", record_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def delete_by_id(self, record_id: int) -> bool:
        """Delete an attendance row; the response lists removed rows."""
        response = (
            self.client.table("gym_attendance").delete().eq("id", record_id).execute()
        )
        return bool(response.data)


def _parse_row(row: dict[str, object]) -> AttendanceRecord:
    return AttendanceRecord(
        id=int(row["id"]),
        user_id=int(row["user_id"]),
        attendance_date=date.fromisoformat(str(row["attendance_date"])[:10]),
        created_at=datetime.fromisoformat(str(row["created_at"])),
    )
