"""Trend classification: compare recent averages to the ones before them."""

from dataclasses import dataclass
from typing import Literal, Sequence

Trend = Literal["improving", "declining", "stable"]

WINDOW_THRESHOLD = 0.15
SHORT_SERIES_THRESHOLD = 0.1


def classify_trend(recent: float, previous: float, threshold: float = WINDOW_THRESHOLD) -> Trend:
    diff = recent - previous
    if diff > threshold:
        return "improving"
    if diff < -threshold:
        return "declining"
    return "stable"


def window_size(count: int) -> int:
    """At least 2 values per window, up to a third of the series, at most 7."""
    return max(2, min(count // 3, 7))


@dataclass
class TrendResult:
    trend: Trend
    recent_average: float
    previous_average: float


def windowed_trend(values_newest_first: Sequence[float]) -> TrendResult:
    """Classify a score series ordered newest first.

    Four or more values compare the newest window against the one before it.
    Two or three values compare the newest value against the oldest.
    """
    values = list(values_newest_first)
    if not values:
        return TrendResult("stable", 0.0, 0.0)

    average = sum(values) / len(values)
    result = TrendResult("stable", average, average)

    if len(values) >= 4:
        size = window_size(len(values))
        if len(values) >= size * 2:
            recent = values[:size]
            previous = values[size:size * 2]
            result.recent_average = sum(recent) / len(recent)
            result.previous_average = sum(previous) / len(previous)
            result.trend = classify_trend(result.recent_average, result.previous_average)
    elif len(values) >= 2:
        result.recent_average = values[0]
        result.previous_average = values[-1]
        result.trend = classify_trend(values[0], values[-1], SHORT_SERIES_THRESHOLD)

    return result
