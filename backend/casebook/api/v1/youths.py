"""Youth API endpoints: profiles, level system, restriction, subsystem, discharge."""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from casebook.dependencies.lookups import get_youth_or_404
from casebook.models.base import get_db
from casebook.models.behavior_points import BehaviorPoints
from casebook.models.youth import Youth
from casebook.schemas.youth import (
    CardPointsRequest,
    CorrectedTotalRequest,
    DischargeRequest,
    LevelChangeResponse,
    RestrictionRequest,
    SubsystemRequest,
    YouthCreate,
    YouthRead,
    YouthUpdate,
    YouthWithProgress,
)
from casebook.services import alert_service, behavior_service
from casebook.services.behavior_service import LevelTransitionError
from casebook.services.level_system import (
    can_level_up,
    get_current_level,
    get_next_level,
    level_progress,
)
from casebook.services.points import PointsValidationError, calculate_total_points

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/youths", tags=["youths"])


def to_progress(youth: Youth) -> YouthWithProgress:
    """Youth output with level name, progress and completion flags filled in."""
    level = youth.level or 0
    points = youth.points_in_current_level or 0
    current = get_current_level(level)
    next_level = get_next_level(level)
    return YouthWithProgress(
        **YouthRead.model_validate(youth).model_dump(),
        level_name=current.name,
        next_level_name=next_level.name if next_level else None,
        points_required=current.cumulative_points_required if next_level else None,
        level_progress=level_progress(level, points),
        can_level_up=can_level_up(level, points),
        restriction_complete=behavior_service.restriction_complete(youth),
        subsystem_complete=behavior_service.subsystem_complete(youth),
    )


async def _save(db: AsyncSession, youth: Youth) -> YouthWithProgress:
    await db.commit()
    await db.refresh(youth)
    return to_progress(youth)


@router.get("", response_model=list[YouthWithProgress])
async def list_youths(
    db: AsyncSession = Depends(get_db),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    status: str | None = Query(None, pattern="^(active|discharged)$", description="Filter by status"),
    search: str | None = Query(None, min_length=1, description="Search by first or last name"),
):
    """List youth, alphabetically by last name."""
    query = select(Youth)
    if status:
        query = query.where(Youth.status == status)
    if search:
        query = query.where(
            or_(Youth.first_name.ilike(f"%{search}%"), Youth.last_name.ilike(f"%{search}%"))
        )
    query = query.order_by(Youth.last_name, Youth.first_name).offset(skip).limit(limit)
    result = await db.execute(query)
    return [to_progress(youth) for youth in result.scalars().all()]


@router.post("", response_model=YouthWithProgress, status_code=201)
async def create_youth(
    payload: YouthCreate,
    db: AsyncSession = Depends(get_db),
):
    """Admit a youth at Orientation with zero points."""
    youth = Youth(**payload.model_dump())
    db.add(youth)
    logger.info(f"Admitted youth {youth.first_name} {youth.last_name}")
    return await _save(db, youth)


@router.get("/{youth_id}", response_model=YouthWithProgress)
async def get_youth(
    youth_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    return to_progress(await get_youth_or_404(db, youth_id))


@router.patch("/{youth_id}", response_model=YouthWithProgress)
async def update_youth(
    youth_id: UUID,
    payload: YouthUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Update profile fields. Only fields present in the request change."""
    youth = await get_youth_or_404(db, youth_id)
    for key, value in payload.model_dump(exclude_unset=True).items():
        setattr(youth, key, value)
    return await _save(db, youth)


@router.delete("/{youth_id}", status_code=204)
async def delete_youth(
    youth_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """Delete a youth and every record attached to them."""
    youth = await get_youth_or_404(db, youth_id)
    await db.delete(youth)
    await db.commit()
    logger.info(f"Deleted youth {youth_id}")
    return Response(status_code=204)


@router.post("/{youth_id}/card-points", response_model=YouthWithProgress)
async def add_card_points(
    youth_id: UUID,
    payload: CardPointsRequest,
    db: AsyncSession = Depends(get_db),
):
    """Add points from a physical behavior card."""
    youth = await get_youth_or_404(db, youth_id)
    try:
        behavior_service.add_card_points(youth, payload.points)
    except PointsValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return await _save(db, youth)


@router.put("/{youth_id}/point-total", response_model=YouthWithProgress)
async def set_point_total(
    youth_id: UUID,
    payload: CorrectedTotalRequest,
    db: AsyncSession = Depends(get_db),
):
    """Overwrite the running total after a manual correction."""
    youth = await get_youth_or_404(db, youth_id)
    try:
        behavior_service.set_corrected_total(youth, payload.point_total)
    except PointsValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    logger.info(f"Corrected point total for youth {youth_id} to {youth.point_total}")
    return await _save(db, youth)


@router.post("/{youth_id}/sync-points", response_model=YouthWithProgress)
async def sync_point_total(
    youth_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """Reset the running total to the sum of recorded daily entries."""
    youth = await get_youth_or_404(db, youth_id)
    result = await db.execute(select(BehaviorPoints).where(BehaviorPoints.youth_id == youth_id))
    calculated = calculate_total_points(result.scalars().all())
    if calculated != youth.point_total:
        logger.info(f"Syncing points for youth {youth_id}: {youth.point_total} -> {calculated}")
        youth.point_total = calculated
        db.add(alert_service.point_sync(1, succeeded=True))
    return await _save(db, youth)


@router.post("/{youth_id}/level-up", response_model=LevelChangeResponse)
async def level_up(
    youth_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    youth = await get_youth_or_404(db, youth_id)
    previous = youth.level
    try:
        change = behavior_service.level_up(youth)
    except LevelTransitionError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return LevelChangeResponse(
        youth=await _save(db, youth),
        previous_level=previous,
        new_level=change.new_level_index,
        points_in_new_level=change.points_in_new_level,
        points_earned_on_completed_level=change.points_earned_on_completed_level,
    )


@router.post("/{youth_id}/demote", response_model=LevelChangeResponse)
async def demote(
    youth_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    youth = await get_youth_or_404(db, youth_id)
    previous = youth.level
    try:
        change = behavior_service.demote(youth)
    except LevelTransitionError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return LevelChangeResponse(
        youth=await _save(db, youth),
        previous_level=previous,
        new_level=change.new_level_index,
        points_in_new_level=change.points_in_new_level,
    )


@router.post("/{youth_id}/restriction", response_model=YouthWithProgress)
async def place_on_restriction(
    youth_id: UUID,
    payload: RestrictionRequest,
    db: AsyncSession = Depends(get_db),
):
    youth = await get_youth_or_404(db, youth_id)
    try:
        behavior_service.place_on_restriction(
            youth, payload.restriction_level, payload.reason, payload.points_required
        )
    except LevelTransitionError as e:
        raise HTTPException(status_code=400, detail=str(e))
    logger.info(f"Youth {youth_id} placed on restriction level {payload.restriction_level}")
    return await _save(db, youth)


@router.delete("/{youth_id}/restriction", response_model=YouthWithProgress)
async def remove_restriction(
    youth_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    youth = await get_youth_or_404(db, youth_id)
    behavior_service.remove_restriction(youth)
    return await _save(db, youth)


@router.post("/{youth_id}/subsystem", response_model=YouthWithProgress)
async def place_on_subsystem(
    youth_id: UUID,
    payload: SubsystemRequest,
    db: AsyncSession = Depends(get_db),
):
    youth = await get_youth_or_404(db, youth_id)
    behavior_service.place_on_subsystem(youth, payload.reason, payload.points_required)
    logger.info(f"Youth {youth_id} placed on subsystem")
    return await _save(db, youth)


@router.delete("/{youth_id}/subsystem", response_model=YouthWithProgress)
async def remove_subsystem(
    youth_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    youth = await get_youth_or_404(db, youth_id)
    behavior_service.remove_subsystem(youth)
    return await _save(db, youth)


@router.post("/{youth_id}/discharge", response_model=YouthWithProgress)
async def discharge_youth(
    youth_id: UUID,
    payload: DischargeRequest,
    db: AsyncSession = Depends(get_db),
):
    youth = await get_youth_or_404(db, youth_id)
    try:
        behavior_service.discharge(
            youth,
            payload.category,
            reason=payload.reason,
            notes=payload.notes,
            discharged_by=payload.discharged_by,
            today=payload.discharge_date,
        )
    except LevelTransitionError as e:
        raise HTTPException(status_code=400, detail=str(e))
    logger.info(f"Discharged youth {youth_id} ({payload.category})")
    return await _save(db, youth)
