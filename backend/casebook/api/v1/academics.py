"""Academic tracking API endpoints: credits, grades, steps, summaries."""

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from casebook.dependencies.lookups import get_row_or_404, get_youth_or_404
from casebook.models.academics import CreditEarned, Grade, StepsCompleted
from casebook.models.base import get_db
from casebook.models.youth import Youth
from casebook.schemas.academics import (
    AcademicSummaryRead,
    CreditCreate,
    CreditRead,
    GradeCreate,
    GradeRead,
    StepsCreate,
    StepsRead,
)
from casebook.services.academic_service import credits_by_month, summarize_student

router = APIRouter(prefix="/academics", tags=["academics"])


async def _rows(db: AsyncSession, model, date_column, student_id: UUID | None, start_date: date | None, end_date: date | None):
    query = select(model)
    if student_id:
        query = query.where(model.student_id == student_id)
    if start_date:
        query = query.where(date_column >= start_date)
    if end_date:
        query = query.where(date_column <= end_date)
    result = await db.execute(query.order_by(date_column.desc()))
    return list(result.scalars().all())


async def _create(db: AsyncSession, row):
    await get_youth_or_404(db, row.student_id)
    db.add(row)
    await db.commit()
    await db.refresh(row)
    return row


async def _delete(db: AsyncSession, model, row_id: UUID, label: str) -> Response:
    row = await get_row_or_404(db, model, row_id, label)
    await db.delete(row)
    await db.commit()
    return Response(status_code=204)


# Credits

@router.get("/credits", response_model=list[CreditRead])
async def list_credits(
    db: AsyncSession = Depends(get_db),
    student_id: UUID | None = Query(None),
    start_date: date | None = Query(None),
    end_date: date | None = Query(None),
):
    return await _rows(db, CreditEarned, CreditEarned.date_earned, student_id, start_date, end_date)


@router.post("/credits", response_model=CreditRead, status_code=201)
async def add_credit(payload: CreditCreate, db: AsyncSession = Depends(get_db)):
    return await _create(db, CreditEarned(**payload.model_dump()))


@router.delete("/credits/{row_id}", status_code=204)
async def delete_credit(row_id: UUID, db: AsyncSession = Depends(get_db)):
    return await _delete(db, CreditEarned, row_id, "Credit")


# Grades

@router.get("/grades", response_model=list[GradeRead])
async def list_grades(
    db: AsyncSession = Depends(get_db),
    student_id: UUID | None = Query(None),
    start_date: date | None = Query(None),
    end_date: date | None = Query(None),
):
    return await _rows(db, Grade, Grade.date_entered, student_id, start_date, end_date)


@router.post("/grades", response_model=GradeRead, status_code=201)
async def add_grade(payload: GradeCreate, db: AsyncSession = Depends(get_db)):
    return await _create(db, Grade(**payload.model_dump()))


@router.delete("/grades/{row_id}", status_code=204)
async def delete_grade(row_id: UUID, db: AsyncSession = Depends(get_db)):
    return await _delete(db, Grade, row_id, "Grade")


# Steps

@router.get("/steps", response_model=list[StepsRead])
async def list_steps(
    db: AsyncSession = Depends(get_db),
    student_id: UUID | None = Query(None),
    start_date: date | None = Query(None),
    end_date: date | None = Query(None),
):
    return await _rows(db, StepsCompleted, StepsCompleted.date_completed, student_id, start_date, end_date)


@router.post("/steps", response_model=StepsRead, status_code=201)
async def add_steps(payload: StepsCreate, db: AsyncSession = Depends(get_db)):
    return await _create(db, StepsCompleted(**payload.model_dump()))


@router.delete("/steps/{row_id}", status_code=204)
async def delete_steps(row_id: UUID, db: AsyncSession = Depends(get_db)):
    return await _delete(db, StepsCompleted, row_id, "Steps entry")


# Summaries

async def _summary(db: AsyncSession, student_id: UUID, start_date: date | None, end_date: date | None) -> AcademicSummaryRead:
    credits = await _rows(db, CreditEarned, CreditEarned.date_earned, student_id, start_date, end_date)
    grades = await _rows(db, Grade, Grade.date_entered, student_id, start_date, end_date)
    steps = await _rows(db, StepsCompleted, StepsCompleted.date_completed, student_id, start_date, end_date)
    summary = summarize_student(student_id, credits, grades, steps)
    return AcademicSummaryRead(
        **AcademicSummaryRead.model_validate(summary).model_dump(exclude={"credits_by_month"}),
        credits_by_month=credits_by_month(credits),
    )


@router.get("/summary", response_model=list[AcademicSummaryRead])
async def academic_summaries(
    db: AsyncSession = Depends(get_db),
    start_date: date | None = Query(None),
    end_date: date | None = Query(None),
):
    """One summary per active youth."""
    result = await db.execute(
        select(Youth.id).where(Youth.status == "active").order_by(Youth.last_name, Youth.first_name)
    )
    return [await _summary(db, youth_id, start_date, end_date) for youth_id in result.scalars().all()]


@router.get("/summary/{student_id}", response_model=AcademicSummaryRead)
async def academic_summary(
    student_id: UUID,
    db: AsyncSession = Depends(get_db),
    start_date: date | None = Query(None),
    end_date: date | None = Query(None),
):
    await get_youth_or_404(db, student_id)
    return await _summary(db, student_id, start_date, end_date)
