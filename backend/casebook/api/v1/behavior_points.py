"""Behavior points API endpoints: daily point cards, statistics, CSV export."""

import logging
from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from casebook.config import get_settings
from casebook.dependencies.lookups import get_row_or_404, get_youth_or_404
from casebook.models.base import get_db
from casebook.models.behavior_points import BehaviorPoints
from casebook.schemas.behavior_points import (
    BehaviorPointsCreate,
    BehaviorPointsRead,
    PointStatisticsRead,
    PointSummary,
    ShiftAveragesRead,
    WeeklyAverageRead,
)
from casebook.services import alert_service, export_service
from casebook.services.points import (
    PointsValidationError,
    build_daily_total,
    calculate_average_daily_points,
    calculate_shift_averages,
    calculate_total_points,
    calculate_weekly_averages,
    get_point_statistics,
)

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(prefix="/behavior-points", tags=["behavior-points"])


async def _entries(
    db: AsyncSession,
    youth_id: UUID,
    start_date: date | None = None,
    end_date: date | None = None,
) -> list[BehaviorPoints]:
    query = select(BehaviorPoints).where(BehaviorPoints.youth_id == youth_id)
    if start_date:
        query = query.where(BehaviorPoints.date >= start_date)
    if end_date:
        query = query.where(BehaviorPoints.date <= end_date)
    result = await db.execute(query.order_by(BehaviorPoints.date.desc()))
    return list(result.scalars().all())


@router.post("", response_model=BehaviorPointsRead)
async def save_daily_points(
    payload: BehaviorPointsCreate,
    db: AsyncSession = Depends(get_db),
):
    """Create or replace the point card for a youth and date."""
    youth = await get_youth_or_404(db, payload.youth_id)
    try:
        total = build_daily_total(payload.morning_points, payload.afternoon_points, payload.evening_points)
    except PointsValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    result = await db.execute(
        select(BehaviorPoints).where(
            BehaviorPoints.youth_id == payload.youth_id,
            BehaviorPoints.date == payload.date,
        )
    )
    entry = result.scalar_one_or_none()
    if entry is None:
        entry = BehaviorPoints(youth_id=payload.youth_id, date=payload.date)
        db.add(entry)

    entry.morning_points = payload.morning_points
    entry.afternoon_points = payload.afternoon_points
    entry.evening_points = payload.evening_points
    entry.total_points = total
    entry.comments = payload.comments

    if total < settings.low_points_threshold:
        db.add(alert_service.low_behavior_points(youth.id, youth.full_name, total))

    await db.commit()
    await db.refresh(entry)
    logger.info(f"Saved {total} points for youth {payload.youth_id} on {payload.date}")
    return entry


@router.get("", response_model=list[BehaviorPointsRead])
async def list_points(
    youth_id: UUID,
    db: AsyncSession = Depends(get_db),
    start_date: date | None = Query(None),
    end_date: date | None = Query(None),
):
    """Point cards for a youth, newest first."""
    return await _entries(db, youth_id, start_date, end_date)


@router.get("/summary", response_model=PointSummary)
async def points_summary(
    youth_id: UUID,
    db: AsyncSession = Depends(get_db),
    start_date: date | None = Query(None),
    end_date: date | None = Query(None),
):
    entries = await _entries(db, youth_id, start_date, end_date)
    shift_averages = calculate_shift_averages(entries)
    return PointSummary(
        youth_id=youth_id,
        start_date=start_date,
        end_date=end_date,
        total_points=calculate_total_points(entries),
        average_daily=calculate_average_daily_points(entries),
        days_recorded=len(entries),
        shift_averages=ShiftAveragesRead.model_validate(shift_averages),
    )


@router.get("/statistics", response_model=PointStatisticsRead)
async def points_statistics(
    youth_id: UUID,
    db: AsyncSession = Depends(get_db),
    days: int = Query(30, ge=1, le=365),
):
    """Totals, extremes and trend over the trailing window."""
    return PointStatisticsRead.model_validate(get_point_statistics(await _entries(db, youth_id), days))


@router.get("/weekly", response_model=list[WeeklyAverageRead])
async def weekly_averages(
    youth_id: UUID,
    db: AsyncSession = Depends(get_db),
    weeks: int = Query(4, ge=1, le=52),
):
    """Trailing seven-day windows, oldest first."""
    averages = calculate_weekly_averages(await _entries(db, youth_id), weeks)
    return [WeeklyAverageRead.model_validate(week) for week in averages]


@router.get("/export")
async def export_points(
    youth_id: UUID,
    db: AsyncSession = Depends(get_db),
    start_date: date | None = Query(None),
    end_date: date | None = Query(None),
):
    """CSV of the point cards matching the filter."""
    youth = await get_youth_or_404(db, youth_id)
    entries = await _entries(db, youth_id, start_date, end_date)
    filename = export_service.build_report_filename(youth.first_name, youth.last_name, "Behavior Points")
    return Response(
        content=export_service.export_behavior_points(entries),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}.csv"'},
    )


@router.delete("/{entry_id}", status_code=204)
async def delete_points(
    entry_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    entry = await get_row_or_404(db, BehaviorPoints, entry_id, "Behavior points entry")
    await db.delete(entry)
    await db.commit()
    return Response(status_code=204)
