"""School day score API endpoints."""

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from casebook.dependencies.lookups import get_youth_or_404
from casebook.models.base import get_db
from casebook.models.scores import SchoolScore
from casebook.models.youth import Youth
from casebook.schemas.scores import SchoolScoreCreate, SchoolScoreRead, ScoreStatsRead
from casebook.services.score_service import school_from_storage, score_stats, to_storage

router = APIRouter(prefix="/school-scores", tags=["school-scores"])


def _read(row: SchoolScore) -> SchoolScoreRead:
    return SchoolScoreRead(
        youth_id=row.youth_id,
        date=row.date,
        weekday=row.weekday,
        score=school_from_storage(row.score),
        updated_at=row.updated_at,
    )


async def _scores(db: AsyncSession, youth_id: UUID | None = None, start: date | None = None, end: date | None = None) -> list[SchoolScore]:
    query = select(SchoolScore)
    if youth_id:
        query = query.where(SchoolScore.youth_id == youth_id)
    if start:
        query = query.where(SchoolScore.date >= start)
    if end:
        query = query.where(SchoolScore.date <= end)
    result = await db.execute(query.order_by(SchoolScore.date))
    return list(result.scalars().all())


@router.post("", response_model=SchoolScoreRead)
async def save_school_score(
    payload: SchoolScoreCreate,
    db: AsyncSession = Depends(get_db),
):
    """Create or replace a youth's score for a school day (Monday-Friday)."""
    weekday = payload.date.isoweekday()
    if weekday > 5:
        raise HTTPException(status_code=400, detail="School scores are recorded Monday through Friday")
    await get_youth_or_404(db, payload.youth_id)

    result = await db.execute(
        select(SchoolScore).where(SchoolScore.youth_id == payload.youth_id, SchoolScore.date == payload.date)
    )
    row = result.scalar_one_or_none()
    if row is None:
        row = SchoolScore(youth_id=payload.youth_id, date=payload.date)
        db.add(row)
    row.weekday = weekday
    row.score = to_storage(payload.score)
    await db.commit()
    await db.refresh(row)
    return _read(row)


@router.get("", response_model=list[SchoolScoreRead])
async def list_school_scores(
    db: AsyncSession = Depends(get_db),
    youth_id: UUID | None = Query(None),
    start_date: date | None = Query(None),
    end_date: date | None = Query(None),
):
    return [_read(row) for row in await _scores(db, youth_id, start_date, end_date)]


@router.get("/stats", response_model=list[ScoreStatsRead])
async def all_school_stats(db: AsyncSession = Depends(get_db)):
    """Stats for every active youth that has scores."""
    result = await db.execute(select(Youth.id).where(Youth.status == "active"))
    active = set(result.scalars().all())
    by_youth: dict[UUID, list[tuple[date, float]]] = {}
    for row in await _scores(db):
        if row.youth_id in active:
            by_youth.setdefault(row.youth_id, []).append((row.date, school_from_storage(row.score)))
    return [
        ScoreStatsRead.model_validate(score_stats(youth_id, pairs))
        for youth_id, pairs in by_youth.items()
    ]


@router.get("/stats/{youth_id}", response_model=ScoreStatsRead)
async def youth_school_stats(
    youth_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    rows = await _scores(db, youth_id)
    stats = score_stats(youth_id, [(row.date, school_from_storage(row.score)) for row in rows])
    if stats is None:
        raise HTTPException(status_code=404, detail="No school scores recorded")
    return ScoreStatsRead.model_validate(stats)
