"""Shift score and weekly evaluation API endpoints."""

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from casebook.dependencies.lookups import get_youth_or_404
from casebook.models.base import get_db
from casebook.models.scores import DailyShiftScore, WeeklyEval
from casebook.schemas.scores import (
    DomainAveragesRead,
    NormalizedScoreRead,
    ScoreAveragesResponse,
    ShiftScoreCreate,
    WeeklyEvalCreate,
)
from casebook.services.score_service import (
    DOMAINS,
    domain_averages,
    in_range,
    month_bounds,
    normalize,
    normalize_weekly,
    to_storage,
)

router = APIRouter(prefix="/shift-scores", tags=["shift-scores"])


async def _daily(db: AsyncSession, youth_id: UUID) -> list:
    result = await db.execute(
        select(DailyShiftScore)
        .where(DailyShiftScore.youth_id == youth_id)
        .order_by(DailyShiftScore.date, DailyShiftScore.shift)
    )
    return [normalize(row) for row in result.scalars().all()]


async def _weekly(db: AsyncSession, youth_id: UUID) -> list:
    result = await db.execute(select(WeeklyEval).where(WeeklyEval.youth_id == youth_id))
    return normalize_weekly(result.scalars().all())


async def _averages(db: AsyncSession, youth_id: UUID, start: date | None, end: date | None) -> ScoreAveragesResponse:
    daily = await _daily(db, youth_id)
    weekly = await _weekly(db, youth_id)
    if start or end:
        daily = in_range(daily, start or date.min, end or date.max)
        weekly = in_range(weekly, start or date.min, end or date.max)
    return ScoreAveragesResponse(
        youth_id=youth_id,
        start_date=start,
        end_date=end,
        daily=DomainAveragesRead.model_validate(domain_averages(daily)),
        weekly=DomainAveragesRead.model_validate(domain_averages(weekly)),
        combined=DomainAveragesRead.model_validate(domain_averages(daily + weekly)),
    )


@router.post("", response_model=NormalizedScoreRead)
async def save_shift_score(
    payload: ShiftScoreCreate,
    db: AsyncSession = Depends(get_db),
):
    """Create or replace the score for a youth, date and shift."""
    await get_youth_or_404(db, payload.youth_id)
    result = await db.execute(
        select(DailyShiftScore).where(
            DailyShiftScore.youth_id == payload.youth_id,
            DailyShiftScore.date == payload.date,
            DailyShiftScore.shift == payload.shift,
        )
    )
    row = result.scalar_one_or_none()
    if row is None:
        row = DailyShiftScore(youth_id=payload.youth_id, date=payload.date, shift=payload.shift)
        db.add(row)
    for domain in DOMAINS:
        setattr(row, domain, to_storage(getattr(payload, domain)))
    row.staff = payload.staff
    await db.commit()
    await db.refresh(row)
    return NormalizedScoreRead.model_validate(normalize(row))


@router.get("", response_model=list[NormalizedScoreRead])
async def list_shift_scores(
    youth_id: UUID,
    db: AsyncSession = Depends(get_db),
    start_date: date | None = Query(None),
    end_date: date | None = Query(None),
):
    scores = await _daily(db, youth_id)
    if start_date or end_date:
        scores = in_range(scores, start_date or date.min, end_date or date.max)
    return [NormalizedScoreRead.model_validate(s) for s in scores]


@router.post("/weekly", response_model=NormalizedScoreRead, status_code=201)
async def save_weekly_eval(
    payload: WeeklyEvalCreate,
    db: AsyncSession = Depends(get_db),
):
    """Record a weekly evaluation. Later evaluations for the same week supersede earlier ones."""
    await get_youth_or_404(db, payload.youth_id)
    row = WeeklyEval(
        youth_id=payload.youth_id,
        week_date=payload.week_date,
        source=payload.source,
        **{domain: to_storage(getattr(payload, domain)) for domain in DOMAINS},
    )
    db.add(row)
    await db.commit()
    await db.refresh(row)
    return NormalizedScoreRead.model_validate(normalize(row, "week_date"))


@router.get("/weekly", response_model=list[NormalizedScoreRead])
async def list_weekly_evals(
    youth_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """One evaluation per week, dated by the Monday starting it."""
    return [NormalizedScoreRead.model_validate(s) for s in await _weekly(db, youth_id)]


@router.get("/averages", response_model=ScoreAveragesResponse)
async def score_averages(
    youth_id: UUID,
    db: AsyncSession = Depends(get_db),
    start_date: date | None = Query(None),
    end_date: date | None = Query(None),
):
    return await _averages(db, youth_id, start_date, end_date)


@router.get("/averages/monthly", response_model=ScoreAveragesResponse)
async def monthly_averages(
    youth_id: UUID,
    year: int = Query(..., ge=2000, le=2100),
    month: int = Query(..., ge=1, le=12),
    db: AsyncSession = Depends(get_db),
):
    start, end = month_bounds(year, month)
    return await _averages(db, youth_id, start, end)


@router.get("/averages/stay", response_model=ScoreAveragesResponse)
async def stay_averages(
    youth_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """Averages from admission through discharge (or today)."""
    youth = await get_youth_or_404(db, youth_id)
    if not youth.admission_date:
        raise HTTPException(status_code=400, detail="Youth has no admission date")
    return await _averages(db, youth_id, youth.admission_date, youth.discharge_date or date.today())
