"""Alert API endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from casebook.dependencies.lookups import get_row_or_404, get_youth_or_404
from casebook.models.alert import Alert
from casebook.models.base import get_db
from casebook.schemas.alert import AlertCreate, AlertRead
from casebook.services import alert_service

router = APIRouter(prefix="/alerts", tags=["alerts"])


@router.get("", response_model=list[AlertRead])
async def list_alerts(
    db: AsyncSession = Depends(get_db),
    unresolved: bool = Query(False, description="Only open alerts"),
    youth_id: UUID | None = Query(None),
    category: str | None = Query(None),
    limit: int = Query(100, ge=1, le=500),
):
    """Alerts, newest first."""
    query = select(Alert)
    if unresolved:
        query = query.where(Alert.resolved == False)
    if youth_id:
        query = query.where(Alert.youth_id == youth_id)
    if category:
        query = query.where(Alert.category == category)
    result = await db.execute(query.order_by(Alert.created_at.desc()).limit(limit))
    return result.scalars().all()


@router.post("", response_model=AlertRead, status_code=201)
async def create_alert(
    payload: AlertCreate,
    db: AsyncSession = Depends(get_db),
):
    youth_name = None
    if payload.youth_id:
        youth_name = (await get_youth_or_404(db, payload.youth_id)).full_name
    alert = alert_service.manual_alert(
        payload.alert_type,
        payload.title,
        payload.description,
        priority=payload.priority,
        category=payload.category,
        youth_id=payload.youth_id,
        youth_name=youth_name,
    )
    db.add(alert)
    await db.commit()
    await db.refresh(alert)
    return alert


@router.post("/{alert_id}/resolve", response_model=AlertRead)
async def resolve_alert(
    alert_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    alert = await get_row_or_404(db, Alert, alert_id, "Alert")
    alert_service.resolve(alert)
    await db.commit()
    await db.refresh(alert)
    return alert


@router.delete("/{alert_id}", status_code=204)
async def delete_alert(
    alert_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    alert = await get_row_or_404(db, Alert, alert_id, "Alert")
    await db.delete(alert)
    await db.commit()
    return Response(status_code=204)
