"""Gym attendance recording and monthly reporting."""

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol

from gym_attendance.domain.attendance import AttendanceRecord, MonthlyAttendanceSummary
from gym_attendance.domain.errors import InvalidInputError, NotFoundError
from gym_attendance.services.calendar import compute_summary, month_bounds

DEFAULT_MIN_YEAR = 2000
DEFAULT_MAX_YEAR = 3000
DECEMBER = 12
_ISO_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

_logger = logging.getLogger(__name__)


class AttendanceRepository(Protocol):
    """Persistence interface for attendance records and user lookup."""

    def user_exists(self, user_id: int) -> bool:
        """Return True when the user is known."""

    def insert_one(self, user_id: int, attendance_date: date) -> AttendanceRecord:
        """Create a single attendance record."""

    def insert_many(
        self, user_id: int, attendance_dates: Sequence[date]
    ) -> list[AttendanceRecord]:
        """Create one record per date in a single batch, preserving order."""

    def find_by_user_and_range(
        self, user_id: int, from_date: date, to_date: date
    ) -> list[AttendanceRecord]:
        """Return records for a user between two dates, both inclusive."""

    def find_by_user(self, user_id: int) -> list[AttendanceRecord]:
        """Return all records for a user."""

    def find_by_id(self, record_id: int) -> AttendanceRecord | None:
        """Return a record by id, if present."""

    def delete_by_id(self, record_id: int) -> bool:
        """Delete a record and report whether a row was removed."""


def parse_attendance_date(value: object) -> date:
    """Parse a calendar date from a ``date`` or a ``YYYY-MM-DD`` string."""
    if isinstance(value, datetime):
        raise InvalidInputError("date", value, "expected a date without time")
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise InvalidInputError("date", value, "expected an ISO date string")
    if not _ISO_DATE.fullmatch(value):
        raise InvalidInputError("date", value, "expected YYYY-MM-DD")
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise InvalidInputError("date", value, "expected YYYY-MM-DD") from exc


def validate_identifier(name: str, value: object) -> int:
    """Ensure an identifier is a plain integer."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInputError(name, value, "expected an integer")
    return value


def validate_period(
    year: object,
    month: object,
    min_year: int = DEFAULT_MIN_YEAR,
    max_year: int = DEFAULT_MAX_YEAR,
) -> tuple[int, int]:
    """Ensure the requested month lies inside the accepted window."""
    if isinstance(month, bool) or not isinstance(month, int):
        raise InvalidInputError("month", month, "expected an integer")
    if not 1 <= month <= DECEMBER:
        raise InvalidInputError("month", month, "expected a value from 1 to 12")
    if isinstance(year, bool) or not isinstance(year, int):
        raise InvalidInputError("year", year, "expected an integer")
    if not min_year <= year <= max_year:
        raise InvalidInputError(
            "year", year, f"expected a value from {min_year} to {max_year}"
        )
    return year, month


@dataclass
class AttendanceService:
    """Service that records attendance and reports monthly compliance."""

    repository: AttendanceRepository
    min_year: int = DEFAULT_MIN_YEAR
    max_year: int = DEFAULT_MAX_YEAR

    def record_attendance(
        self, user_id: int, attendance_date: object
    ) -> AttendanceRecord:
        """Record one visit for an existing user."""
        user_id = validate_identifier("user_id", user_id)
        parsed = parse_attendance_date(attendance_date)
        self._require_user(user_id)
        record = self.repository.insert_one(user_id, parsed)
        _logger.info(
            "Recorded attendance: user_id=%s date=%s record_id=%s",
            user_id,
            parsed.isoformat(),
            record.id,
        )
        return record

    def record_bulk_attendance(
        self, user_id: int, attendance_dates: Sequence[object]
    ) -> list[AttendanceRecord]:
        """Record many visits at once; any bad date rejects the whole batch."""
        user_id = validate_identifier("user_id", user_id)
        parsed = [parse_attendance_date(value) for value in attendance_dates]
        self._require_user(user_id)
        if not parsed:
            return []
        records = self.repository.insert_many(user_id, parsed)
        _logger.info(
            "Recorded bulk attendance: user_id=%s count=%s", user_id, len(records)
        )
        return records

    def get_monthly_summary(
        self, user_id: int, year: int, month: int
    ) -> MonthlyAttendanceSummary:
        """Return attended, missed and rest days for a month."""
        user_id = validate_identifier("user_id", user_id)
        year, month = validate_period(year, month, self.min_year, self.max_year)
        self._require_user(user_id)
        first_day, last_day = month_bounds(year, month)
        records = self.repository.find_by_user_and_range(user_id, first_day, last_day)
        return compute_summary(
            year, month, [record.attendance_date.isoformat() for record in records]
        )

    def get_history(self, user_id: int) -> list[AttendanceRecord]:
        """Return all records for a user, most recent first."""
        user_id = validate_identifier("user_id", user_id)
        self._require_user(user_id)
        records = self.repository.find_by_user(user_id)
        return sorted(
            records,
            key=lambda record: (record.attendance_date, record.id),
            reverse=True,
        )

    def delete_attendance(self, record_id: int) -> dict[str, bool]:
        """Delete a record; a missing record is an error, even on retry."""
        record_id = validate_identifier("record_id", record_id)
        if self.repository.find_by_id(record_id) is None:
            _logger.warning("Attendance record not found: record_id=%s", record_id)
            raise NotFoundError("record", record_id)
        if not self.repository.delete_by_id(record_id):
            # Another caller removed it between the lookup and the delete.
            raise NotFoundError("record", record_id)
        _logger.info("Deleted attendance record: record_id=%s", record_id)
        return {"success": True}

    def _require_user(self, user_id: int) -> None:
        if not self.repository.user_exists(user_id):
            _logger.warning("Attendance user not found: user_id=%s", user_id)
            raise NotFoundError("user", user_id)


def serialize_record(record: AttendanceRecord) -> dict[str, object]:
    """Return a record with ISO-formatted date fields."""
    return {
        "id": record.id,
        "user_id": record.user_id,
        "attendance_date": record.attendance_date.isoformat(),
        "created_at": record.created_at.isoformat(),
    }


def serialize_summary(summary: MonthlyAttendanceSummary) -> dict[str, object]:
    """Return the summary as a plain mapping."""
    return {
        "year": summary.year,
        "month": summary.month,
        "total_days": summary.total_days,
        "attended_days": summary.attended_days,
        "missed_days": summary.missed_days,
        "attendance_percentage": summary.attendance_percentage,
        "attendance_dates": list(summary.attendance_dates),
        "sundays": list(summary.sundays),
    }
