"""School incident service: id allocation, validation, and soft delete."""

import logging
import re
from datetime import date, datetime, timezone
from typing import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from casebook.config import get_settings
from casebook.models.school_incident import SchoolIncident

logger = logging.getLogger(__name__)
settings = get_settings()

SEVERITIES = ("Low", "Medium", "High", "Critical")
URGENT_SEVERITIES = ("High", "Critical")
RESIDENT_ROLES = ("aggressor", "victim", "witness", "bystander")
INCIDENT_TYPES = (
    "Aggression",
    "Disruption",
    "Property Damage",
    "Verbal Altercation",
    "Physical Altercation",
    "Refusal to Follow Directions",
    "Inappropriate Language",
    "Tardy/Absence",
    "Academic Dishonesty",
    "Other",
)

TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class IncidentValidationError(ValueError):
    """Raised when an incident report is missing required details."""


def next_incident_id(existing_ids: Iterable[str], year: int, prefix: str | None = None) -> str:
    """``PREFIX-YYYY-####`` numbered one past the highest id issued this year.

    Hard-deleted incidents leave gaps; their numbers are not reused.
    """
    prefix = prefix or settings.incident_id_prefix
    year_prefix = f"{prefix}-{year}-"
    highest = 0
    for incident_id in existing_ids:
        if not incident_id.startswith(year_prefix):
            continue
        suffix = incident_id[len(year_prefix):]
        if suffix.isdigit():
            highest = max(highest, int(suffix))
    return f"{year_prefix}{highest + 1:04d}"


async def allocate_incident_id(db: AsyncSession, year: int) -> str:
    prefix = f"{settings.incident_id_prefix}-{year}"
    result = await db.execute(
        select(SchoolIncident.incident_id).where(SchoolIncident.incident_id.like(f"{prefix}%"))
    )
    return next_incident_id(result.scalars().all(), year)


def validate_incident(
    summary: str | None,
    location: str | None,
    involved_residents: list,
    timeline: list | None = None,
    medical_needed: bool = False,
    medical_details: str | None = None,
    severity: str | None = None,
) -> None:
    """Check a report before it is saved. Raises IncidentValidationError."""
    if not summary or not summary.strip():
        raise IncidentValidationError("Summary is required")
    if not location or not location.strip():
        raise IncidentValidationError("Location is required")
    if not involved_residents:
        raise IncidentValidationError("At least one involved resident is required")
    if severity is not None and severity not in SEVERITIES:
        raise IncidentValidationError(f"Severity must be one of {', '.join(SEVERITIES)}")

    for resident in involved_residents:
        role = resident.get("role_in_incident") if isinstance(resident, dict) else resident.role_in_incident
        if role not in RESIDENT_ROLES:
            raise IncidentValidationError(f"Unknown role in incident: {role}")

    for item in timeline or []:
        time_value = item.get("time") if isinstance(item, dict) else item.time
        if not TIME_RE.match(time_value or ""):
            raise IncidentValidationError(f"Timeline time must be HH:mm, got {time_value!r}")

    if medical_needed and not (medical_details or "").strip():
        raise IncidentValidationError("Medical details are required when medical attention was needed")


def needs_urgent_alert(severity: str) -> bool:
    return severity in URGENT_SEVERITIES


def soft_delete(incident: SchoolIncident, deleted_by: str | None = None) -> None:
    incident.deleted_at = datetime.now(timezone.utc)
    incident.deleted_by = deleted_by or "system"
    logger.info(f"Soft-deleted incident {incident.incident_id}")


def follow_up_overdue(incident: SchoolIncident, today: date | None = None) -> bool:
    """True when an open follow-up is past its due date (plus the configured grace days)."""
    follow_up = incident.follow_up or {}
    if not follow_up.get("due_date") or follow_up.get("completed"):
        return False
    try:
        due = date.fromisoformat(str(follow_up["due_date"])[:10])
    except ValueError:
        logger.warning(f"Incident {incident.incident_id} has an unreadable follow-up due date")
        return False
    today = today or date.today()
    return (today - due).days > settings.incident_follow_up_grace_days
