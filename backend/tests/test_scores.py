from dataclasses import dataclass
import datetime as dt
from datetime import date, datetime, timedelta

from casebook.services.score_service import (
    dedupe_weekly,
    domain_averages,
    from_storage,
    month_bounds,
    normalize,
    normalize_weekly,
    recent_average,
    school_from_storage,
    score_stats,
    to_storage,
    week_start,
)
from casebook.services.trends import classify_trend, window_size, windowed_trend


@dataclass
class Row:
    youth_id: str
    peer: int
    adult: int
    investment: int
    authority: int
    date: dt.date | None = None
    week_date: dt.date | None = None
    shift: str | None = None
    source: str | None = None
    updated_at: dt.datetime | None = None


def test_storage_conversion():
    assert to_storage(3.4) == 34
    assert to_storage(9) == 40
    assert to_storage(None) == 0
    assert from_storage(34) == 3.4
    # legacy unscaled values
    assert from_storage(3) == 3.0


def test_small_scores_read_back_as_legacy_values():
    assert to_storage(0.3) == 3
    assert from_storage(to_storage(0.3)) == 3.0
    assert from_storage(to_storage(0.5)) == 0.5


def test_school_storage_handles_percentages():
    assert school_from_storage(100) == 4.0
    assert school_from_storage(30) == 3.0
    assert school_from_storage(2) == 2.0


def test_normalize_overall():
    score = normalize(Row("y", 40, 30, 20, 10, date=date(2026, 1, 5), shift="day"))
    assert (score.peer, score.adult, score.investment, score.authority) == (4.0, 3.0, 2.0, 1.0)
    assert score.overall == 2.5
    assert score.shift == "day"


def test_week_start_is_monday():
    assert week_start(date(2026, 3, 22)) == date(2026, 3, 16)
    assert week_start(date(2026, 3, 16)) == date(2026, 3, 16)


def test_weekly_dedupe_keeps_latest():
    older = Row("y", 10, 10, 10, 10, week_date=date(2026, 3, 17), updated_at=datetime(2026, 3, 18))
    newer = Row("y", 30, 30, 30, 30, week_date=date(2026, 3, 19), updated_at=datetime(2026, 3, 20))
    kept = dedupe_weekly([older, newer])
    assert kept == [newer]

    scores = normalize_weekly([older, newer])
    assert len(scores) == 1
    assert scores[0].date == date(2026, 3, 16)
    assert scores[0].peer == 3.0


def test_domain_averages():
    scores = [
        normalize(Row("y", 40, 40, 40, 40, date=date(2026, 1, 5))),
        normalize(Row("y", 20, 20, 20, 20, date=date(2026, 1, 6))),
    ]
    averages = domain_averages(scores)
    assert averages.peer == 3.0
    assert averages.overall == 3.0
    assert averages.total_entries == 2
    assert domain_averages([]).peer is None


def test_month_bounds_leap_year():
    assert month_bounds(2028, 2) == (date(2028, 2, 1), date(2028, 2, 29))


def test_classify_trend_threshold():
    assert classify_trend(3.2, 3.0) == "improving"
    assert classify_trend(3.0, 3.1) == "stable"
    assert classify_trend(2.5, 3.0) == "declining"


def test_window_size_bounds():
    assert window_size(4) == 2
    assert window_size(12) == 4
    assert window_size(60) == 7


def test_windowed_trend_long_series():
    result = windowed_trend([4, 4, 2, 2, 2, 2])
    assert result.trend == "improving"
    assert result.recent_average == 4
    assert result.previous_average == 2


def test_windowed_trend_short_series():
    assert windowed_trend([2.0, 2.5]).trend == "declining"
    assert windowed_trend([3.0]).trend == "stable"
    assert windowed_trend([]).recent_average == 0.0


def test_score_stats():
    day = date(2026, 3, 2)
    pairs = [(day + timedelta(days=i), value) for i, value in enumerate([1.0, 1.0, 3.0, 3.0])]
    stats = score_stats("y", pairs)
    assert stats.total == 4
    assert stats.average == 2.0
    assert stats.highest == 3.0
    assert stats.trend == "improving"
    assert score_stats("y", []) is None


def test_recent_average_window():
    today = date(2026, 3, 31)
    pairs = [(today, 4.0), (today - timedelta(days=45), 1.0)]
    assert recent_average(pairs, 30, today) == 4.0
    assert recent_average([(today - timedelta(days=45), 1.0)], 30, today) is None
