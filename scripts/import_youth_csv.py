"""Import youth profiles from an intake CSV.

Columns named after profile fields (first_name, last_name, dob, admission_date,
legal_status, allergies, ...) fill those fields; any other column is kept in
the youth's ``profile``. Blank, ``N/A`` and ``None`` cells are treated as empty.
Youth already on file (same first name, last name and date of birth) are skipped.

Usage:
    python -m scripts.import_youth_csv intake.csv
    python -m scripts.import_youth_csv intake.csv --dry-run
"""

import argparse
import csv
import re
import sys
from dataclasses import dataclass, field
from datetime import date

from pydantic import ValidationError
from sqlalchemy.orm import Session

from casebook.config import get_settings
from casebook.models.base import SyncSessionLocal
from casebook.models.youth import Youth
from casebook.schemas.youth import YouthCreate
from casebook.services.case_note_service import parse_short_date

settings = get_settings()

EMPTY_VALUES = {"", "n/a", "none"}
DATE_FIELDS = {"dob", "admission_date"}
TRUE_VALUES = {"true", "yes", "y"}
FALSE_VALUES = {"false", "no", "n"}


@dataclass
class ImportResult:
    created: list[str] = field(default_factory=list)
    skipped: int = 0
    errors: list[str] = field(default_factory=list)


def normalize_header(name: str) -> str:
    """'Admission Date' -> 'admission_date'"""
    return re.sub(r"[^a-z0-9]+", "_", name.strip().lower()).strip("_")


def clean(value: str | None) -> str | None:
    if value is None or value.strip().lower() in EMPTY_VALUES:
        return None
    return value.strip()


def parse_flag(value: str):
    lowered = value.lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    return value


def build_youth_fields(row: dict) -> dict:
    """Map one CSV row onto YouthCreate fields plus a ``profile`` dict for the rest."""
    fields = {}
    profile = {}
    for raw_key, raw_value in row.items():
        if raw_key is None:
            continue
        key = normalize_header(raw_key)
        value = clean(raw_value)
        if value is None:
            continue
        if key in DATE_FIELDS:
            fields[key] = parse_short_date(value) or value
        elif key == "trauma_history":
            fields[key] = [item.strip() for item in value.split(",") if item.strip()]
        elif key == "sex":
            fields[key] = value[:1].upper()
        elif key in YouthCreate.model_fields and key != "profile":
            fields[key] = value
        else:
            profile[key] = parse_flag(value)
    if profile:
        fields["profile"] = profile
    return fields


def next_id_number(existing_ids, year: int, prefix: str | None = None) -> str:
    """``PREFIX-YYYY-NNN`` numbered one past the highest number on file, any year."""
    prefix = prefix or settings.youth_id_prefix
    pattern = re.compile(rf"^{re.escape(prefix)}-\d{{4}}-(\d+)$")
    highest = 0
    for id_number in existing_ids:
        match = pattern.match(id_number or "")
        if match:
            highest = max(highest, int(match.group(1)))
    return f"{prefix}-{year}-{highest + 1:03d}"


def import_rows(db: Session, rows: list[dict], today: date | None = None) -> ImportResult:
    result = ImportResult()
    today = today or date.today()
    existing_ids = [row[0] for row in db.query(Youth.id_number).all()]
    on_file = {
        (first.lower(), last.lower(), dob)
        for first, last, dob in db.query(Youth.first_name, Youth.last_name, Youth.dob).all()
    }

    for line_no, row in enumerate(rows, start=2):
        try:
            payload = YouthCreate.model_validate(build_youth_fields(row))
        except ValidationError as e:
            problems = "; ".join(f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in e.errors())
            result.errors.append(f"line {line_no}: {problems}")
            continue

        key = (payload.first_name.lower(), payload.last_name.lower(), payload.dob)
        if key in on_file:
            result.skipped += 1
            continue

        youth = Youth(**payload.model_dump())
        if not youth.id_number:
            year = (payload.admission_date or today).year
            youth.id_number = next_id_number(existing_ids, year)
        existing_ids.append(youth.id_number)
        on_file.add(key)
        db.add(youth)
        result.created.append(f"{youth.first_name} {youth.last_name} ({youth.id_number})")

    return result


def run(csv_path: str, dry_run: bool = False) -> int:
    with open(csv_path, encoding="utf-8-sig", newline="") as f:
        rows = list(csv.DictReader(f))
    print(f"Read {len(rows)} youth records from {csv_path}")

    db = SyncSessionLocal()
    try:
        result = import_rows(db, rows)
        for name in result.created:
            print(f"  {'would import' if dry_run else 'imported'} {name}")
        for error in result.errors:
            print(f"  skipped {error}")

        if dry_run:
            db.rollback()
        else:
            db.commit()
        print(f"\nDone: {len(result.created)} created, {result.skipped} already on file, {len(result.errors)} invalid")
        return 1 if result.errors and not result.created else 0
    except Exception as e:
        db.rollback()
        print(f"Error: {e}", file=sys.stderr)
        raise
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Import youth profiles from an intake CSV")
    parser.add_argument("csv_path", help="CSV with one youth per row")
    parser.add_argument("--dry-run", action="store_true", help="Validate without saving")
    args = parser.parse_args()
    sys.exit(run(args.csv_path, dry_run=args.dry_run))
