"""Pydantic schemas for academic credits, grades, and steps."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class CreditCreate(BaseModel):
    student_id: UUID
    date_earned: date
    credit_value: float = Field(gt=0)


class CreditRead(CreditCreate):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    created_at: datetime


class GradeCreate(BaseModel):
    student_id: UUID
    date_entered: date
    grade_value: float = Field(ge=0, le=100)
    course_name: str | None = None


class GradeRead(GradeCreate):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    created_at: datetime


class StepsCreate(BaseModel):
    student_id: UUID
    date_completed: date
    steps_count: int = Field(ge=0)


class StepsRead(StepsCreate):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    created_at: datetime


class AcademicSummaryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    student_id: UUID
    total_credits: float = 0.0
    credit_entries: int = 0
    grade_average: float | None = None
    grade_entries: int = 0
    total_steps: int = 0
    step_entries: int = 0
    last_activity: date | None = None
    credits_by_month: dict[str, float] = {}
