"""School incident API endpoints."""

import logging
from datetime import date, datetime, time, timezone
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from casebook.models.base import get_db
from casebook.models.school_incident import SchoolIncident, SchoolIncidentInvolved
from casebook.models.youth import Youth
from casebook.schemas.school_incident import (
    SchoolIncidentCreate,
    SchoolIncidentRead,
    SchoolIncidentSummary,
)
from casebook.services import alert_service
from casebook.services.school_incident_service import (
    IncidentValidationError,
    allocate_incident_id,
    needs_urgent_alert,
    soft_delete,
    validate_incident,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/school-incidents", tags=["school-incidents"])


def _validate(payload: SchoolIncidentCreate) -> None:
    try:
        validate_incident(
            summary=payload.summary,
            location=payload.location,
            involved_residents=payload.involved_residents,
            timeline=payload.timeline,
            medical_needed=payload.medical_needed,
            medical_details=payload.medical_details,
            severity=payload.severity,
        )
    except IncidentValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _apply(incident: SchoolIncident, payload: SchoolIncidentCreate) -> None:
    data = payload.model_dump(mode="json", exclude={"involved_residents", "date_time"})
    for key, value in data.items():
        setattr(incident, key, value)
    incident.date_time = payload.date_time
    incident.involved_residents = [
        SchoolIncidentInvolved(
            resident_id=resident.resident_id,
            name=resident.name,
            role_in_incident=resident.role_in_incident,
        )
        for resident in payload.involved_residents
    ]


async def _get_incident(db: AsyncSession, incident_id: str, include_deleted: bool = False) -> SchoolIncident:
    query = select(SchoolIncident).where(SchoolIncident.incident_id == incident_id)
    if not include_deleted:
        query = query.where(SchoolIncident.deleted_at.is_(None))
    result = await db.execute(query)
    incident = result.scalar_one_or_none()
    if not incident:
        raise HTTPException(status_code=404, detail="Incident not found")
    return incident


async def _raise_urgent_alerts(db: AsyncSession, incident: SchoolIncident) -> None:
    resident_ids = [r.resident_id for r in incident.involved_residents if r.resident_id]
    names = {}
    if resident_ids:
        result = await db.execute(select(Youth).where(Youth.id.in_(resident_ids)))
        names = {youth.id: youth.full_name for youth in result.scalars().all()}

    for resident in incident.involved_residents:
        name = names.get(resident.resident_id) or resident.name or "Unknown resident"
        db.add(alert_service.behavior_incident(
            resident.resident_id if resident.resident_id in names else None,
            name,
            f"{incident.severity.lower()} severity {incident.incident_type}",
        ))


@router.get("", response_model=list[SchoolIncidentSummary])
async def list_incidents(
    db: AsyncSession = Depends(get_db),
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=200),
    severity: str | None = Query(None, pattern="^(Low|Medium|High|Critical)$"),
    resident_id: UUID | None = Query(None, description="Only incidents involving this youth"),
    start_date: date | None = Query(None),
    end_date: date | None = Query(None),
):
    """Active incidents, newest first."""
    query = select(SchoolIncident).where(SchoolIncident.deleted_at.is_(None))
    if severity:
        query = query.where(SchoolIncident.severity == severity)
    if resident_id:
        query = query.where(
            SchoolIncident.involved_residents.any(SchoolIncidentInvolved.resident_id == resident_id)
        )
    if start_date:
        query = query.where(SchoolIncident.date_time >= datetime.combine(start_date, time.min, tzinfo=timezone.utc))
    if end_date:
        query = query.where(SchoolIncident.date_time <= datetime.combine(end_date, time.max, tzinfo=timezone.utc))
    query = query.order_by(SchoolIncident.date_time.desc()).offset(skip).limit(limit)
    result = await db.execute(query)
    return result.scalars().all()


@router.post("", response_model=SchoolIncidentRead, status_code=201)
async def create_incident(
    payload: SchoolIncidentCreate,
    db: AsyncSession = Depends(get_db),
):
    """File a report; the id is allocated from this year's sequence."""
    _validate(payload)
    incident = SchoolIncident(incident_id=await allocate_incident_id(db, payload.date_time.year))
    _apply(incident, payload)
    db.add(incident)

    if needs_urgent_alert(incident.severity):
        await _raise_urgent_alerts(db, incident)

    await db.commit()
    await db.refresh(incident)
    logger.info(f"Created incident {incident.incident_id} ({incident.severity})")
    return incident


@router.get("/{incident_id}", response_model=SchoolIncidentRead)
async def get_incident(
    incident_id: str,
    db: AsyncSession = Depends(get_db),
):
    return await _get_incident(db, incident_id)


@router.put("/{incident_id}", response_model=SchoolIncidentRead)
async def update_incident(
    incident_id: str,
    payload: SchoolIncidentCreate,
    db: AsyncSession = Depends(get_db),
):
    _validate(payload)
    incident = await _get_incident(db, incident_id)
    was_urgent = needs_urgent_alert(incident.severity)
    _apply(incident, payload)

    if needs_urgent_alert(incident.severity) and not was_urgent:
        await _raise_urgent_alerts(db, incident)

    await db.commit()
    await db.refresh(incident)
    return incident


@router.delete("/{incident_id}", status_code=204)
async def delete_incident(
    incident_id: str,
    db: AsyncSession = Depends(get_db),
    deleted_by: str | None = Query(None),
    hard: bool = Query(False, description="Remove the row instead of marking it deleted"),
):
    incident = await _get_incident(db, incident_id, include_deleted=hard)
    if hard:
        await db.delete(incident)
        logger.info(f"Hard-deleted incident {incident_id}")
    else:
        soft_delete(incident, deleted_by)
    await db.commit()
    return Response(status_code=204)
