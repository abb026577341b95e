"""Import weekly evaluation scores from a spreadsheet exported as CSV.

The header row must have a youth name column and a date column; domain
columns are found by name (peer, adult, invest*, auth*/dealing). Scores are on
the 0-4 scale. Each row is filed under the Monday of its week, replacing any
earlier upload for the same youth and week.

Usage:
    python -m scripts.import_weekly_evals weekly_scores.csv
    python -m scripts.import_weekly_evals weekly_scores.csv --dry-run
"""

import argparse
import csv
import sys
from dataclasses import dataclass, field
from datetime import date, timedelta

from sqlalchemy.orm import Session

from casebook.models.base import SyncSessionLocal
from casebook.models.scores import WeeklyEval
from casebook.models.youth import Youth
from casebook.services.academic_service import parse_ymd
from casebook.services.case_note_service import parse_short_date
from casebook.services.score_service import DOMAINS, to_storage, week_start

EXCEL_EPOCH = date(1899, 12, 30)

COLUMN_HINTS = {
    "name": ("name", "youth"),
    "date": ("date",),
    "peer": ("peer",),
    "adult": ("adult",),
    "investment": ("invest",),
    "authority": ("auth", "dealing"),
}


@dataclass
class ImportResult:
    imported: int = 0
    skipped: list[str] = field(default_factory=list)


def normalize_name(value) -> str:
    return " ".join(str(value or "").split()).lower()


def find_columns(header: list[str]) -> dict[str, int]:
    """Index of the first header cell matching each column's hints."""
    lowered = [h.strip().lower() for h in header]
    columns = {}
    for column, hints in COLUMN_HINTS.items():
        for i, cell in enumerate(lowered):
            if any(hint in cell for hint in hints):
                columns[column] = i
                break
    if "name" not in columns or "date" not in columns:
        raise ValueError("Missing required columns: youth name and date")
    return columns


def parse_eval_date(raw) -> date | None:
    """ISO, M/D/YYYY, or an Excel serial day number."""
    text = str(raw or "").strip()
    if not text:
        return None
    try:
        serial = float(text)
    except ValueError:
        return parse_ymd(text) or parse_short_date(text)
    if 10000 < serial < 100000:
        return EXCEL_EPOCH + timedelta(days=int(serial))
    return None


def parse_score(raw) -> int | None:
    try:
        value = float(str(raw).strip())
    except ValueError:
        return None
    return to_storage(value)


def _cell(cells: list[str], columns: dict[str, int], column: str) -> str:
    i = columns.get(column)
    return cells[i] if i is not None and i < len(cells) else ""


def youth_lookup(db: Session) -> dict[str, Youth]:
    """Youth keyed by full name, first name, and last name."""
    lookup = {}
    for youth in db.query(Youth).all():
        for key in (youth.full_name, youth.first_name, youth.last_name):
            if key:
                lookup[normalize_name(key)] = youth
    return lookup


def import_rows(db: Session, rows: list[list[str]]) -> ImportResult:
    if len(rows) < 2:
        raise ValueError("No data rows found")
    columns = find_columns(rows[0])
    youth_by_name = youth_lookup(db)
    result = ImportResult()

    for line_no, cells in enumerate(rows[1:], start=2):
        name = _cell(cells, columns, "name")
        youth = youth_by_name.get(normalize_name(name))
        if youth is None:
            result.skipped.append(f"line {line_no}: unmatched youth '{name}'")
            continue

        raw_date = _cell(cells, columns, "date")
        day = parse_eval_date(raw_date)
        if day is None:
            result.skipped.append(f"line {line_no}: invalid date '{raw_date}'")
            continue

        scores = {domain: parse_score(_cell(cells, columns, domain)) for domain in DOMAINS}
        if all(score is None for score in scores.values()):
            result.skipped.append(f"line {line_no}: no valid domain scores")
            continue

        week = week_start(day)
        row = (
            db.query(WeeklyEval)
            .filter(WeeklyEval.youth_id == youth.id, WeeklyEval.week_date == week, WeeklyEval.source == "uploaded")
            .first()
        )
        if row is None:
            row = WeeklyEval(youth_id=youth.id, week_date=week, source="uploaded")
            db.add(row)
        for domain, score in scores.items():
            setattr(row, domain, score or 0)
        db.flush()
        result.imported += 1

    return result


def run(csv_path: str, dry_run: bool = False) -> int:
    with open(csv_path, encoding="utf-8-sig", newline="") as f:
        rows = [r for r in csv.reader(f) if any(c.strip() for c in r)]
    print(f"Read {max(len(rows) - 1, 0)} rows from {csv_path}")

    db = SyncSessionLocal()
    try:
        try:
            result = import_rows(db, rows)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

        if dry_run:
            db.rollback()
        else:
            db.commit()
        print(f"Imported: {result.imported}{' (dry run)' if dry_run else ''}")
        print(f"Skipped: {len(result.skipped)}")
        for line in result.skipped[:25]:
            print(f"  - {line}")
        if len(result.skipped) > 25:
            print(f"  - ...and {len(result.skipped) - 25} more")
        return 0
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Import weekly evaluation scores from CSV")
    parser.add_argument("csv_path", help="CSV with youth name, date and domain score columns")
    parser.add_argument("--dry-run", action="store_true", help="Validate without saving")
    args = parser.parse_args()
    sys.exit(run(args.csv_path, dry_run=args.dry_run))
