"""Behavior point validation and aggregation.

Point entries are plain objects exposing ``date``, ``morning_points``,
``afternoon_points``, ``evening_points`` and ``total_points`` (ORM rows or
schema objects both work).
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Literal, Protocol

from casebook.config import get_settings

settings = get_settings()

MAX_ENTRY_POINTS = settings.max_entry_points
POINT_INCREMENT = settings.point_increment

Trend = Literal["improving", "declining", "stable"]


class PointsValidationError(ValueError):
    """Raised when a point value breaks the card rules."""


class PointEntry(Protocol):
    date: date | None
    total_points: int | None


def validate_point_entry(value, allow_zero: bool = True) -> int:
    """Validate a point value: zero or a positive multiple of 1000, at most 105000."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise PointsValidationError("Points must be a whole number")
    if value < 0:
        raise PointsValidationError("Points cannot be negative")
    if value == 0:
        if not allow_zero:
            raise PointsValidationError("Enter a positive number of points")
        return value
    if value % POINT_INCREMENT != 0:
        raise PointsValidationError(f"Points must be a multiple of {POINT_INCREMENT:,}")
    if value > MAX_ENTRY_POINTS:
        raise PointsValidationError(f"Points cannot exceed {MAX_ENTRY_POINTS:,}")
    return value


def validate_corrected_total(value) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise PointsValidationError("Enter a valid non-negative number")
    return value


def build_daily_total(morning: int, afternoon: int, evening: int) -> int:
    """Validate each shift's points and return the day's total."""
    for shift_points in (morning, afternoon, evening):
        validate_point_entry(shift_points)
    total = morning + afternoon + evening
    if total > MAX_ENTRY_POINTS:
        raise PointsValidationError(f"Daily total cannot exceed {MAX_ENTRY_POINTS:,}")
    return total


def _total(entry: PointEntry) -> int:
    return entry.total_points or 0


def _dated(entries: Iterable[PointEntry]) -> list[PointEntry]:
    return [e for e in entries if e.date is not None]


def filter_entries(
    entries: Iterable[PointEntry],
    start_date: date | None = None,
    end_date: date | None = None,
) -> list[PointEntry]:
    """Entries whose date falls within [start_date, end_date]."""
    result = []
    for entry in _dated(entries):
        if start_date and entry.date < start_date:
            continue
        if end_date and entry.date > end_date:
            continue
        result.append(entry)
    return result


def calculate_total_points(entries: Iterable[PointEntry]) -> int:
    return sum(_total(e) for e in entries)


def calculate_points_for_period(entries: Iterable[PointEntry], start_date: date, end_date: date) -> int:
    return calculate_total_points(filter_entries(entries, start_date, end_date))


def calculate_average_daily_points(entries: Iterable[PointEntry]) -> int:
    entries = list(entries)
    if not entries:
        return 0
    return round(calculate_total_points(entries) / len(entries))


@dataclass
class WeeklyAverage:
    week: str
    average: int
    total: int


def calculate_weekly_averages(
    entries: Iterable[PointEntry],
    weeks: int = 4,
    today: date | None = None,
) -> list[WeeklyAverage]:
    """Trailing 7-day windows ending today; Week 1 is the most recent, returned last."""
    today = today or date.today()
    entries = _dated(entries)
    weekly = []
    for i in range(weeks):
        week_end = today - timedelta(days=i * 7)
        week_start = week_end - timedelta(days=6)
        in_week = [e for e in entries if week_start <= e.date <= week_end]
        total = calculate_total_points(in_week)
        average = round(total / len(in_week)) if in_week else 0
        weekly.append(WeeklyAverage(week=f"Week {i + 1}", average=average, total=total))
    weekly.reverse()
    return weekly


@dataclass
class PointStatistics:
    total_points: int = 0
    average_daily: int = 0
    highest_day: int = 0
    lowest_day: int = 0
    days_above_average: int = 0
    trend: Trend = "stable"


def get_point_statistics(
    entries: Iterable[PointEntry],
    days: int = 30,
    today: date | None = None,
) -> PointStatistics:
    """Summary statistics for the trailing ``days`` window.

    Trend compares the average of the second (newer) half of the window to the
    first half; a difference of more than one point either way counts.
    """
    today = today or date.today()
    cutoff = today - timedelta(days=days)
    recent = sorted((e for e in _dated(entries) if e.date >= cutoff), key=lambda e: e.date)
    if not recent:
        return PointStatistics()

    totals = [_total(e) for e in recent]
    total_points = sum(totals)
    average_daily = round(total_points / len(totals))

    trend: Trend = "stable"
    midpoint = len(totals) // 2
    if midpoint > 0:
        first_half_avg = sum(totals[:midpoint]) / midpoint
        second_half_avg = sum(totals[midpoint:]) / (len(totals) - midpoint)
        difference = second_half_avg - first_half_avg
        if difference > 1:
            trend = "improving"
        elif difference < -1:
            trend = "declining"

    return PointStatistics(
        total_points=total_points,
        average_daily=average_daily,
        highest_day=max(totals),
        lowest_day=min(totals),
        days_above_average=sum(1 for t in totals if t > average_daily),
        trend=trend,
    )


@dataclass
class ShiftAverages:
    average_total: float = 0.0
    average_morning: float = 0.0
    average_afternoon: float = 0.0
    average_evening: float = 0.0
    days_recorded: int = 0


def calculate_shift_averages(entries: Iterable[PointEntry]) -> ShiftAverages:
    entries = list(entries)
    if not entries:
        return ShiftAverages()

    def avg(attr: str) -> float:
        return round(sum(getattr(e, attr) or 0 for e in entries) / len(entries), 2)

    return ShiftAverages(
        average_total=avg("total_points"),
        average_morning=avg("morning_points"),
        average_afternoon=avg("afternoon_points"),
        average_evening=avg("evening_points"),
        days_recorded=len(entries),
    )


def group_by_week(entries: Iterable[PointEntry]) -> dict[date, list[PointEntry]]:
    """Group entries by the Sunday starting their week, in date order."""
    weeks: dict[date, list[PointEntry]] = {}
    for entry in sorted(_dated(entries), key=lambda e: e.date):
        week_start = entry.date - timedelta(days=(entry.date.weekday() + 1) % 7)
        weeks.setdefault(week_start, []).append(entry)
    return weeks
