"""Import a behavior points CSV (as produced by the export endpoint) for one youth.

Rows are upserted by date; each row's shifts are re-validated and its total
recomputed, so a hand-edited file cannot smuggle in bad totals.

Usage:
    python -m scripts.import_behavior_points <youth-id> points.csv
    python -m scripts.import_behavior_points <youth-id> points.csv --dry-run
"""

import argparse
import sys
import uuid
from dataclasses import dataclass, field

from sqlalchemy.orm import Session

from casebook.models.base import SyncSessionLocal
from casebook.models.behavior_points import BehaviorPoints
from casebook.models.youth import Youth
from casebook.services.export_service import parse_csv
from casebook.services.points import PointsValidationError, build_daily_total


@dataclass
class ImportResult:
    created: int = 0
    updated: int = 0
    errors: list[str] = field(default_factory=list)


def import_rows(db: Session, youth: Youth, records: list[dict]) -> ImportResult:
    result = ImportResult()
    existing = {
        entry.date: entry
        for entry in db.query(BehaviorPoints).filter(BehaviorPoints.youth_id == youth.id).all()
    }

    for line_no, record in enumerate(records, start=2):
        if not record.get("date"):
            result.errors.append(f"line {line_no}: missing date")
            continue
        morning = record.get("morning_points") or 0
        afternoon = record.get("afternoon_points") or 0
        evening = record.get("evening_points") or 0
        try:
            total = build_daily_total(morning, afternoon, evening)
        except PointsValidationError as e:
            result.errors.append(f"line {line_no}: {e}")
            continue

        entry = existing.get(record["date"])
        if entry is None:
            entry = BehaviorPoints(youth_id=youth.id, date=record["date"])
            db.add(entry)
            existing[record["date"]] = entry
            result.created += 1
        else:
            result.updated += 1
        entry.morning_points = morning
        entry.afternoon_points = afternoon
        entry.evening_points = evening
        entry.total_points = total
        entry.comments = record.get("comments")

    return result


def run(youth_id: str, csv_path: str, dry_run: bool = False) -> int:
    with open(csv_path, encoding="utf-8") as f:
        records = parse_csv(f.read())
    print(f"Read {len(records)} rows from {csv_path}")

    db = SyncSessionLocal()
    try:
        youth = db.get(Youth, uuid.UUID(youth_id))
        if youth is None:
            print(f"No youth with id {youth_id}", file=sys.stderr)
            return 1

        result = import_rows(db, youth, records)
        for error in result.errors:
            print(f"  skipped {error}")

        if dry_run:
            db.rollback()
            print(f"Dry run: would create {result.created}, update {result.updated}")
        else:
            db.commit()
            print(f"Imported for {youth.full_name}: {result.created} created, {result.updated} updated")
        return 0
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Import behavior points from CSV")
    parser.add_argument("youth_id", help="Youth UUID")
    parser.add_argument("csv_path", help="CSV file with date and shift point columns")
    parser.add_argument("--dry-run", action="store_true", help="Validate without saving")
    args = parser.parse_args()
    sys.exit(run(args.youth_id, args.csv_path, dry_run=args.dry_run))
