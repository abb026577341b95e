"""Academic progress helpers: date parsing and per-student summaries."""

import math
import sys
from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable


def parse_ymd(value: str | None) -> date | None:
    """Parse ``yyyy-MM-dd`` (or an ISO timestamp); None when unparseable."""
    if not value:
        return None
    head = value.split("T")[0]
    try:
        year, month, day = (int(part) for part in head.split("-"))
        return date(year, month, day)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(value).date()
    except ValueError:
        return None


def truncate_decimal(num: float, places: int) -> float:
    """Truncate (not round) to ``places`` decimals."""
    factor = 10 ** places
    return math.trunc((num + sys.float_info.epsilon) * factor) / factor


@dataclass
class AcademicSummary:
    student_id: object
    total_credits: float = 0.0
    credit_entries: int = 0
    grade_average: float | None = None
    grade_entries: int = 0
    total_steps: int = 0
    step_entries: int = 0
    last_activity: date | None = None


def summarize_student(student_id, credits: Iterable, grades: Iterable, steps: Iterable) -> AcademicSummary:
    credits, grades, steps = list(credits), list(grades), list(steps)
    summary = AcademicSummary(student_id=student_id)

    summary.total_credits = truncate_decimal(sum(c.credit_value for c in credits), 2)
    summary.credit_entries = len(credits)

    if grades:
        summary.grade_average = round(sum(g.grade_value for g in grades) / len(grades), 1)
    summary.grade_entries = len(grades)

    summary.total_steps = sum(s.steps_count for s in steps)
    summary.step_entries = len(steps)

    dates = (
        [c.date_earned for c in credits]
        + [g.date_entered for g in grades]
        + [s.date_completed for s in steps]
    )
    dates = [d for d in dates if d is not None]
    summary.last_activity = max(dates) if dates else None
    return summary


def credits_by_month(credits: Iterable) -> dict[str, float]:
    """Credit totals keyed by ``yyyy-MM``, in month order."""
    totals: dict[str, float] = {}
    for credit in sorted(credits, key=lambda c: c.date_earned):
        key = credit.date_earned.strftime("%Y-%m")
        totals[key] = truncate_decimal(totals.get(key, 0.0) + credit.credit_value, 2)
    return totals
