"""CSV export of behavior points and case notes, plus report filenames."""

import csv
import io
import re
from datetime import date
from typing import Iterable

BEHAVIOR_POINT_FIELDS = ["date", "morning_points", "afternoon_points", "evening_points", "total_points", "comments"]
CASE_NOTE_FIELDS = ["date", "note_type", "staff", "label", "summary", "note"]

_INT_FIELDS = {"morning_points", "afternoon_points", "evening_points", "total_points"}

_UNSAFE_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')


def _cell(value) -> str:
    if value is None:
        return ""
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def export_csv(rows: Iterable, fields: list[str]) -> str:
    """One CSV row per object, in the order given, under a header row."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(fields)
    for row in rows:
        writer.writerow([_cell(getattr(row, field, None)) for field in fields])
    return buffer.getvalue()


def export_behavior_points(entries: Iterable) -> str:
    return export_csv(sorted(entries, key=lambda e: e.date), BEHAVIOR_POINT_FIELDS)


def export_case_notes(notes: Iterable) -> str:
    return export_csv(sorted(notes, key=lambda n: n.date), CASE_NOTE_FIELDS)


def parse_csv(text: str) -> list[dict]:
    """Read an exported CSV back into dicts; dates and point columns are typed, blanks are None."""
    records = []
    for raw in csv.DictReader(io.StringIO(text)):
        record = {}
        for key, value in raw.items():
            if value == "":
                record[key] = None
            elif key == "date":
                record[key] = date.fromisoformat(value)
            elif key in _INT_FIELDS:
                record[key] = int(value)
            else:
                record[key] = value
        records.append(record)
    return records


def _sanitize(value: str) -> str:
    return re.sub(r"\s+", " ", _UNSAFE_FILENAME_CHARS.sub("", value)).strip()


def _safe_part(value: str | None, fallback: str) -> str:
    return _sanitize(str(value or "")) or fallback


def build_report_filename(first_name: str | None, last_name: str | None, report_type: str | None, on: date | None = None) -> str:
    """``Last, First, Type, yyyy-mm-dd`` with characters unsafe in filenames removed."""
    last = _safe_part(last_name, "Unknown Last")
    first = _safe_part(first_name, "Unknown First")
    kind = _safe_part(report_type, "Report")
    return f"{last}, {first}, {kind}, {(on or date.today()).isoformat()}"
