"""Periodic alert scans over active youth and open incidents.

Each ``run_*`` function works on a sync session and returns the alerts it
added; the Celery tasks wrap them with session handling.
"""

import logging
from datetime import date, timedelta

from sqlalchemy.orm import Session

from casebook.tasks.celery_app import celery_app
from casebook.config import get_settings
from casebook.models.alert import Alert
from casebook.models.base import SyncSessionLocal
from casebook.models.behavior_points import BehaviorPoints
from casebook.models.school_incident import SchoolIncident
from casebook.models.youth import Youth
from casebook.services import alert_service
from casebook.services.behavior_service import restriction_complete, subsystem_complete
from casebook.services.level_system import can_level_up, get_current_level
from casebook.services.school_incident_service import follow_up_overdue

logger = logging.getLogger(__name__)
settings = get_settings()


def _has_open_alert(db: Session, title: str, youth_id=None, mentions: str | None = None) -> bool:
    query = db.query(Alert.id).filter(Alert.resolved == False, Alert.title == title)
    if youth_id is not None:
        query = query.filter(Alert.youth_id == youth_id)
    if mentions:
        query = query.filter(Alert.description.contains(mentions))
    return query.first() is not None


def _active_youth(db: Session) -> list[Youth]:
    return db.query(Youth).filter(Youth.status == "active").all()


def run_level_up_scan(db: Session) -> list[Alert]:
    added = []
    for youth in _active_youth(db):
        if not can_level_up(youth.level or 0, youth.points_in_current_level or 0):
            continue
        if _has_open_alert(db, "Level Up Eligible", youth.id):
            continue
        alert = alert_service.level_up_eligible(youth.id, youth.full_name, get_current_level(youth.level or 0).name)
        db.add(alert)
        added.append(alert)
    return added


def run_completion_scan(db: Session) -> list[Alert]:
    added = []
    for youth in _active_youth(db):
        if restriction_complete(youth) and not _has_open_alert(db, "Restriction Complete", youth.id):
            alert = alert_service.restriction_complete(youth.id, youth.full_name)
            db.add(alert)
            added.append(alert)
        if subsystem_complete(youth) and not _has_open_alert(db, "Subsystem Complete", youth.id):
            alert = alert_service.subsystem_complete(youth.id, youth.full_name)
            db.add(alert)
            added.append(alert)
    return added


def run_low_points_scan(db: Session, day: date) -> list[Alert]:
    """Flag youth whose point card for ``day`` totals below the threshold."""
    rows = (
        db.query(Youth, BehaviorPoints)
        .join(BehaviorPoints, BehaviorPoints.youth_id == Youth.id)
        .filter(
            Youth.status == "active",
            BehaviorPoints.date == day,
            BehaviorPoints.total_points < settings.low_points_threshold,
        )
        .all()
    )
    added = []
    for youth, entry in rows:
        if _has_open_alert(db, "Low Behavior Points", youth.id):
            continue
        alert = alert_service.low_behavior_points(youth.id, youth.full_name, entry.total_points)
        db.add(alert)
        added.append(alert)
    return added


def run_follow_up_scan(db: Session, today: date) -> list[Alert]:
    incidents = db.query(SchoolIncident).filter(SchoolIncident.deleted_at.is_(None)).all()
    added = []
    for incident in incidents:
        if not follow_up_overdue(incident, today):
            continue
        if _has_open_alert(db, "Incident Follow-Up Overdue", mentions=incident.incident_id):
            continue
        follow_up = incident.follow_up or {}
        alert = alert_service.incident_follow_up_overdue(
            incident.incident_id, follow_up.get("assigned_to"), str(follow_up.get("due_date"))
        )
        db.add(alert)
        added.append(alert)
    return added


def _run_scan(name: str, scan, *args) -> dict:
    db = SyncSessionLocal()
    try:
        added = scan(db, *args)
        db.commit()
        logger.info(f"{name}: {len(added)} alerts raised")
        return {"alerts": len(added)}
    except Exception:
        db.rollback()
        logger.exception(f"{name} failed")
        raise
    finally:
        db.close()


@celery_app.task(name="casebook.tasks.alert_tasks.scan_level_up_eligibility")
def scan_level_up_eligibility():
    """Alert staff about youth with enough points to advance a level."""
    return _run_scan("Level-up scan", run_level_up_scan)


@celery_app.task(name="casebook.tasks.alert_tasks.scan_behavior_completions")
def scan_behavior_completions():
    """Alert staff when restriction or subsystem points are met."""
    return _run_scan("Completion scan", run_completion_scan)


@celery_app.task(name="casebook.tasks.alert_tasks.scan_low_daily_points")
def scan_low_daily_points():
    """Check yesterday's point cards against the low-points threshold."""
    return _run_scan("Low points scan", run_low_points_scan, date.today() - timedelta(days=1))


@celery_app.task(name="casebook.tasks.alert_tasks.scan_overdue_follow_ups")
def scan_overdue_follow_ups():
    return _run_scan("Follow-up scan", run_follow_up_scan, date.today())
