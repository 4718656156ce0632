"""Calendar arithmetic for monthly attendance summaries."""

from collections.abc import Iterable
from datetime import date, timedelta

from gym_attendance.domain.attendance import MonthlyAttendanceSummary

FEBRUARY = 2
SUNDAY = 6
_DAYS_PER_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def is_leap_year(year: int) -> bool:
    """Return True for Gregorian leap years."""
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    """Return the number of days in the month."""
    if month == FEBRUARY and is_leap_year(year):
        return 29
    return _DAYS_PER_MONTH[month - 1]


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """Return the first and last day of the month."""
    return date(year, month, 1), date(year, month, days_in_month(year, month))


def sundays_in_month(year: int, month: int) -> list[date]:
    """Return every Sunday in the month, ascending."""
    first_day, last_day = month_bounds(year, month)
    day = first_day + timedelta(days=(SUNDAY - first_day.weekday()) % 7)
    sundays = []
    while day <= last_day:
        sundays.append(day)
        day += timedelta(days=7)
    return sundays


def attendance_percentage(attended_days: int, working_days: int) -> int:
    """Return attended/working as a whole percentage, rounding halves up."""
    if working_days <= 0:
        return 0
    # floor(x + 1/2) with x = 100 * attended / working, kept in integers
    return (200 * attended_days + working_days) // (2 * working_days)


def compute_summary(
    year: int, month: int, attendance_dates: Iterable[str | date]
) -> MonthlyAttendanceSummary:
    """Build the monthly summary from dates already filtered to the month.

    Sundays are rest days: they never count as missed, and the percentage is
    taken over the remaining working days. Duplicate dates are counted as
    separate visits.
    """
    dates = sorted(
        value.isoformat() if isinstance(value, date) else value
        for value in attendance_dates
    )
    total_days = days_in_month(year, month)
    sundays = [day.isoformat() for day in sundays_in_month(year, month)]
    working_days = total_days - len(sundays)
    attended_days = len(dates)
    return MonthlyAttendanceSummary(
        year=year,
        month=month,
        total_days=total_days,
        attended_days=attended_days,
        missed_days=max(0, working_days - attended_days),
        attendance_percentage=attendance_percentage(attended_days, working_days),
        attendance_dates=dates,
        sundays=sundays,
    )
