"""Alert builders for application events.

Each builder returns an unsaved ``Alert``; callers add it to their own
session (async in routes, sync in Celery tasks). Creating an alert logs it,
which stands in for the staff notification.
"""

import logging
from datetime import datetime, timezone

from casebook.models.alert import Alert

logger = logging.getLogger(__name__)

ALERT_TYPES = ("warning", "info", "urgent")
PRIORITIES = ("high", "medium", "low")


def _create(
    alert_type: str,
    title: str,
    description: str,
    priority: str,
    category: str,
    youth_id=None,
    youth_name: str | None = None,
) -> Alert:
    alert = Alert(
        alert_type=alert_type,
        title=title,
        description=description,
        priority=priority,
        category=category,
        youth_id=youth_id,
        youth_name=youth_name,
        resolved=False,
    )
    log = logger.warning if alert_type == "urgent" else logger.info
    log("Alert: %s - %s", title, description)
    return alert


def manual_alert(
    alert_type: str,
    title: str,
    description: str,
    priority: str = "medium",
    category: str = "General",
    youth_id=None,
    youth_name: str | None = None,
) -> Alert:
    if alert_type not in ALERT_TYPES:
        raise ValueError(f"Alert type must be one of {', '.join(ALERT_TYPES)}")
    if priority not in PRIORITIES:
        raise ValueError(f"Priority must be one of {', '.join(PRIORITIES)}")
    return _create(alert_type, title, description, priority, category, youth_id, youth_name)


# Behavior

def low_behavior_points(youth_id, youth_name: str, current_points: int) -> Alert:
    return _create(
        "warning", "Low Behavior Points",
        f"{youth_name} has low behavior points ({current_points}). Consider intervention strategies.",
        "medium", "Behavior", youth_id, youth_name,
    )


def behavior_incident(youth_id, youth_name: str, incident_type: str) -> Alert:
    return _create(
        "urgent", "Behavior Incident",
        f"{youth_name} had a {incident_type} incident requiring immediate attention.",
        "high", "Behavior", youth_id, youth_name,
    )


def level_up_eligible(youth_id, youth_name: str, level_name: str) -> Alert:
    return _create(
        "info", "Level Up Eligible",
        f"{youth_name} has earned enough points to advance from {level_name}.",
        "medium", "Behavior", youth_id, youth_name,
    )


def restriction_complete(youth_id, youth_name: str) -> Alert:
    return _create(
        "info", "Restriction Complete",
        f"{youth_name} has earned the points required to come off restriction.",
        "medium", "Behavior", youth_id, youth_name,
    )


def subsystem_complete(youth_id, youth_name: str) -> Alert:
    return _create(
        "info", "Subsystem Complete",
        f"{youth_name} has earned the points required to leave subsystem.",
        "medium", "Behavior", youth_id, youth_name,
    )


# Medical

def medication_reminder(youth_id, youth_name: str, medication: str) -> Alert:
    return _create(
        "info", "Medication Due",
        f"{youth_name} is due for {medication} administration.",
        "medium", "Medical", youth_id, youth_name,
    )


def medical_concern(youth_id, youth_name: str, concern: str) -> Alert:
    return _create(
        "urgent", "Medical Attention Required",
        f"{youth_name} requires medical attention: {concern}",
        "high", "Medical", youth_id, youth_name,
    )


# Safety, education, legal, therapy

def safety_concern(youth_id, youth_name: str, safety_issue: str) -> Alert:
    return _create(
        "urgent", "Safety Concern",
        f"Safety concern for {youth_name}: {safety_issue}",
        "high", "Safety", youth_id, youth_name,
    )


def educational_concern(youth_id, youth_name: str, issue: str) -> Alert:
    return _create(
        "warning", "Educational Concern",
        f"Educational issue for {youth_name}: {issue}",
        "medium", "Education", youth_id, youth_name,
    )


def incident_follow_up_overdue(incident_id: str, assigned_to: str | None, due_date: str) -> Alert:
    return _create(
        "warning", "Incident Follow-Up Overdue",
        f"Follow-up for incident {incident_id} was due {due_date}"
        + (f" (assigned to {assigned_to})." if assigned_to else "."),
        "medium", "Education",
    )


def court_date(youth_id, youth_name: str, court_date_text: str) -> Alert:
    return _create(
        "warning", "Court Date Reminder",
        f"{youth_name} has a court appearance scheduled for {court_date_text}.",
        "high", "Legal", youth_id, youth_name,
    )


def therapy_session(youth_id, youth_name: str, session_type: str, session_date: str) -> Alert:
    return _create(
        "info", "Therapy Session",
        f"{youth_name} has a {session_type} session scheduled for {session_date}.",
        "medium", "Therapy", youth_id, youth_name,
    )


# System

def system_alert(title: str, description: str, priority: str = "medium") -> Alert:
    return _create("info", title, description, priority, "System")


def data_migration(status: str, message: str) -> Alert:
    """status is success, warning, or error."""
    alert_type = {"error": "urgent", "warning": "warning"}.get(status, "info")
    priority = "high" if status == "error" else "medium"
    return _create(alert_type, "Data Migration", message, priority, "System")


def point_sync(youth_count: int, succeeded: bool) -> Alert:
    if succeeded:
        return _create(
            "info", "Points Synchronized",
            f"Successfully synchronized behavior points for {youth_count} youth profiles.",
            "low", "System",
        )
    return _create(
        "warning", "Point Sync Failed",
        "Failed to synchronize behavior points. Manual intervention may be required.",
        "medium", "System",
    )


def resolve(alert: Alert) -> None:
    alert.resolved = True
    alert.resolved_at = datetime.now(timezone.utc)
