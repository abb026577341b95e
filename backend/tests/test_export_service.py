from dataclasses import dataclass
from datetime import date

from casebook.services.export_service import (
    build_report_filename,
    export_behavior_points,
    export_case_notes,
    parse_csv,
)


@dataclass
class Points:
    date: date
    morning_points: int
    afternoon_points: int
    evening_points: int
    total_points: int
    comments: str | None = None


@dataclass
class Note:
    date: date
    note_type: str
    staff: str | None
    label: str | None
    summary: str | None
    note: str | None


def test_behavior_points_csv_sorted_by_date():
    rows = [
        Points(date(2026, 1, 2), 1000, 2000, 3000, 6000, 'Said "thanks", helped out'),
        Points(date(2026, 1, 1), 0, 0, 5000, 5000),
    ]
    text = export_behavior_points(rows)
    lines = text.splitlines()
    assert lines[0] == "date,morning_points,afternoon_points,evening_points,total_points,comments"
    assert lines[1] == "2026-01-01,0,0,5000,5000,"
    assert lines[2] == '2026-01-02,1000,2000,3000,6000,"Said ""thanks"", helped out"'


def test_csv_reads_back_typed():
    rows = [Points(date(2026, 1, 2), 1000, 2000, 3000, 6000, "Line one\nline two")]
    records = parse_csv(export_behavior_points(rows))
    assert records == [
        {
            "date": date(2026, 1, 2),
            "morning_points": 1000,
            "afternoon_points": 2000,
            "evening_points": 3000,
            "total_points": 6000,
            "comments": "Line one\nline two",
        }
    ]


def test_case_notes_csv_blanks_become_none():
    notes = [Note(date(2026, 2, 1), "shift", "Ms. Lane", None, "Calm night", "Calm night overall")]
    records = parse_csv(export_case_notes(notes))
    assert records[0]["label"] is None
    assert records[0]["note_type"] == "shift"


def test_report_filename():
    assert build_report_filename("Marcus", "Reed", "Court Report", on=date(2026, 3, 9)) == "Reed, Marcus, Court Report, 2026-03-09"


def test_report_filename_fallbacks_and_sanitizing():
    name = build_report_filename(None, "O/Brien?", "", on=date(2026, 3, 9))
    assert name == "OBrien, Unknown First, Report, 2026-03-09"
    assert build_report_filename(" ", None, "Summary", on=date(2026, 1, 1)).startswith("Unknown Last, Unknown First")
