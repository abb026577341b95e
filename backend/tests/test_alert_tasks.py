from datetime import date, datetime, timezone

from casebook.models.alert import Alert
from casebook.models.behavior_points import BehaviorPoints
from casebook.models.school_incident import SchoolIncident
from casebook.models.youth import Youth
from casebook.tasks.alert_tasks import (
    run_completion_scan,
    run_follow_up_scan,
    run_level_up_scan,
    run_low_points_scan,
)


def add_youth(db, **fields) -> Youth:
    youth = Youth(first_name=fields.pop("first_name", "Marcus"), last_name=fields.pop("last_name", "Reed"), **fields)
    db.add(youth)
    db.commit()
    return youth


def titles(db) -> list[str]:
    return sorted(a.title for a in db.query(Alert).all())


def test_level_up_scan_is_idempotent(sync_db):
    add_youth(sync_db, points_in_current_level=500)
    add_youth(sync_db, first_name="Tavon", points_in_current_level=10)
    add_youth(sync_db, first_name="Gone", points_in_current_level=900, status="discharged")

    assert len(run_level_up_scan(sync_db)) == 1
    sync_db.commit()
    assert run_level_up_scan(sync_db) == []
    assert titles(sync_db) == ["Level Up Eligible"]


def test_completion_scan(sync_db):
    add_youth(
        sync_db,
        restriction_level=1,
        restriction_points_required=3000,
        restriction_points_earned=3000,
        subsystem_active=True,
        subsystem_points_required=5000,
        subsystem_points_earned=1000,
    )
    run_completion_scan(sync_db)
    sync_db.commit()
    assert titles(sync_db) == ["Restriction Complete"]


def test_low_points_scan_checks_one_day(sync_db):
    youth = add_youth(sync_db)
    sync_db.add_all([
        BehaviorPoints(youth_id=youth.id, date=date(2026, 3, 1), total_points=4000),
        BehaviorPoints(youth_id=youth.id, date=date(2026, 3, 2), total_points=60000),
    ])
    sync_db.commit()

    assert run_low_points_scan(sync_db, date(2026, 3, 2)) == []
    added = run_low_points_scan(sync_db, date(2026, 3, 1))
    assert [a.youth_id for a in added] == [youth.id]


def test_follow_up_scan(sync_db):
    sync_db.add(SchoolIncident(
        incident_id="HHH-2026-0001",
        date_time=datetime(2026, 3, 1, 9, tzinfo=timezone.utc),
        reported_by={"name": "Ms. Lane"},
        location="Gym",
        incident_type="Disruption",
        severity="Low",
        summary="Refused to leave",
        follow_up={"assigned_to": "Mr. Cruz", "due_date": "2026-03-05"},
    ))
    sync_db.commit()

    assert run_follow_up_scan(sync_db, date(2026, 3, 5)) == []
    added = run_follow_up_scan(sync_db, date(2026, 3, 9))
    assert len(added) == 1
    assert "HHH-2026-0001" in added[0].description
    sync_db.commit()
    assert run_follow_up_scan(sync_db, date(2026, 3, 10)) == []
