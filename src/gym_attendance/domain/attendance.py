"""Domain models for gym attendance."""

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class AttendanceRecord:
    """A single day a member attended the gym."""

    id: int
    user_id: int
    attendance_date: date
    created_at: datetime


@dataclass(frozen=True)
class MonthlyAttendanceSummary:
    """Derived attendance figures for one calendar month."""

    year: int
    month: int
    total_days: int
    attended_days: int
    missed_days: int
    attendance_percentage: int
    attendance_dates: list[str]
    sundays: list[str]
