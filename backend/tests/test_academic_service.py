from dataclasses import dataclass
from datetime import date

from casebook.services.academic_service import (
    credits_by_month,
    parse_ymd,
    summarize_student,
    truncate_decimal,
)


@dataclass
class Credit:
    date_earned: date
    credit_value: float


@dataclass
class Grade:
    date_entered: date
    grade_value: float


@dataclass
class Steps:
    date_completed: date
    steps_count: int


def test_parse_ymd():
    assert parse_ymd("2026-03-05") == date(2026, 3, 5)
    assert parse_ymd("2026-03-05T10:00:00Z") == date(2026, 3, 5)
    assert parse_ymd("03/05/2026") is None
    assert parse_ymd(None) is None


def test_truncate_decimal_does_not_round():
    assert truncate_decimal(1.239, 2) == 1.23
    assert truncate_decimal(0.1 + 0.2, 1) == 0.3


def test_summary():
    summary = summarize_student(
        "s1",
        credits=[Credit(date(2026, 1, 10), 0.5), Credit(date(2026, 2, 3), 0.25)],
        grades=[Grade(date(2026, 2, 20), 88), Grade(date(2026, 1, 5), 91)],
        steps=[Steps(date(2026, 1, 12), 3)],
    )
    assert summary.total_credits == 0.75
    assert summary.grade_average == 89.5
    assert summary.total_steps == 3
    assert summary.last_activity == date(2026, 2, 20)


def test_empty_summary():
    summary = summarize_student("s1", [], [], [])
    assert summary.grade_average is None
    assert summary.last_activity is None


def test_credits_by_month():
    credits = [Credit(date(2026, 2, 3), 0.25), Credit(date(2026, 1, 10), 0.5), Credit(date(2026, 1, 30), 0.5)]
    assert credits_by_month(credits) == {"2026-01": 1.0, "2026-02": 0.25}
