"""Shift, weekly-evaluation, and school-day scoring.

Four domains are scored for every shift and weekly evaluation: peer
interaction, adult interaction, investment level, and dealing with
authority. Scores display on 0-4 and persist as integer tenths (0-40).
"""

import calendar
import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable

from casebook.services.trends import Trend, windowed_trend

logger = logging.getLogger(__name__)

DOMAINS = ("peer", "adult", "investment", "authority")
SHIFTS = ("morning", "day", "evening")


def clamp_score(value: float | None) -> float:
    if value is None or value != value:  # NaN
        return 0.0
    return min(max(value, 0.0), 4.0)


def to_storage(score: float | None) -> int:
    return round(clamp_score(score) * 10)


def from_storage(stored: int) -> float:
    """Tenths back to the 0-4 scale.

    Stored values below 5 are legacy unscaled rows and read back as-is, so a
    score under 0.5 does not survive storage: 0.3 stores as 3 and reads as 3.0.
    """
    if stored >= 5:
        return round(stored / 10, 1)
    return float(stored)


def school_from_storage(stored: int) -> float:
    """School scores also carry legacy percentage-style rows (0-100 → 0-4)."""
    if stored > 40:
        return round(stored / 25, 1)
    if stored > 4:
        return round(stored / 10, 1)
    return float(stored)


def week_start(day: date) -> date:
    """Monday of the week containing ``day``."""
    return day - timedelta(days=day.weekday())


@dataclass
class NormalizedScore:
    youth_id: object
    date: date
    peer: float
    adult: float
    investment: float
    authority: float
    overall: float
    shift: str | None = None
    source: str | None = None


def normalize(row, date_attr: str = "date") -> NormalizedScore:
    """Convert a stored score row into display-scale domain scores."""
    values = {domain: from_storage(getattr(row, domain) or 0) for domain in DOMAINS}
    return NormalizedScore(
        youth_id=row.youth_id,
        date=getattr(row, date_attr),
        overall=round(sum(values.values()) / len(DOMAINS), 2),
        shift=getattr(row, "shift", None),
        source=getattr(row, "source", None),
        **values,
    )


def dedupe_weekly(rows: Iterable) -> list:
    """Keep one weekly eval per (youth, Monday); the most recently updated wins."""
    latest: dict[tuple, object] = {}
    for row in rows:
        key = (row.youth_id, week_start(row.week_date))
        current = latest.get(key)
        if (
            current is None
            or current.updated_at is None
            or (row.updated_at is not None and row.updated_at >= current.updated_at)
        ):
            latest[key] = row
    return list(latest.values())


def normalize_weekly(rows: Iterable) -> list[NormalizedScore]:
    """Deduped weekly evals on the display scale, dated by week start."""
    scores = []
    for row in dedupe_weekly(rows):
        score = normalize(row, "week_date")
        score.date = week_start(score.date)
        scores.append(score)
    return sorted(scores, key=lambda s: s.date)


@dataclass
class DomainAverages:
    peer: float | None = None
    adult: float | None = None
    investment: float | None = None
    authority: float | None = None
    overall: float | None = None
    total_entries: int = 0


def _avg(values: list[float]) -> float | None:
    if not values:
        return None
    return round(sum(values) / len(values), 2)


def domain_averages(scores: Iterable[NormalizedScore]) -> DomainAverages:
    scores = list(scores)
    return DomainAverages(
        peer=_avg([s.peer for s in scores]),
        adult=_avg([s.adult for s in scores]),
        investment=_avg([s.investment for s in scores]),
        authority=_avg([s.authority for s in scores]),
        overall=_avg([s.overall for s in scores]),
        total_entries=len(scores),
    )


def in_range(scores: Iterable[NormalizedScore], start: date, end: date) -> list[NormalizedScore]:
    return [s for s in scores if start <= s.date <= end]


def month_bounds(year: int, month: int) -> tuple[date, date]:
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


@dataclass
class ScoreStats:
    youth_id: object
    total: int
    average: float
    highest: float
    lowest: float
    trend: Trend
    recent_average: float
    previous_average: float


def score_stats(youth_id, dated_scores: Iterable[tuple[date, float]]) -> ScoreStats | None:
    """Average, range and trend for one youth's (date, score) pairs."""
    pairs = sorted(dated_scores, key=lambda p: p[0], reverse=True)
    if not pairs:
        return None
    values = [score for _, score in pairs]
    result = windowed_trend(values)
    logger.debug(
        f"Trend for {youth_id}: recent={result.recent_average:.2f} "
        f"previous={result.previous_average:.2f} trend={result.trend}"
    )
    return ScoreStats(
        youth_id=youth_id,
        total=len(values),
        average=round(sum(values) / len(values), 1),
        highest=max(values),
        lowest=min(values),
        trend=result.trend,
        recent_average=round(result.recent_average, 1),
        previous_average=round(result.previous_average, 1),
    )


def recent_average(dated_scores: Iterable[tuple[date, float]], days: int = 30, today: date | None = None) -> float | None:
    cutoff = (today or date.today()) - timedelta(days=days)
    recent = [score for day, score in dated_scores if day >= cutoff]
    if not recent:
        return None
    return sum(recent) / len(recent)
