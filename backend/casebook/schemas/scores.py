"""Pydantic schemas for shift, weekly, and school scores.

Inputs and outputs use the 0-4 display scale; storage conversion happens in
score_service.
"""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class DomainScores(BaseModel):
    peer: float = Field(default=0, ge=0, le=4)
    adult: float = Field(default=0, ge=0, le=4)
    investment: float = Field(default=0, ge=0, le=4)
    authority: float = Field(default=0, ge=0, le=4)


class ShiftScoreCreate(DomainScores):
    youth_id: UUID
    date: date
    shift: str = Field(pattern="^(morning|day|evening)$")
    staff: str | None = None


class WeeklyEvalCreate(DomainScores):
    youth_id: UUID
    week_date: date
    source: str = "manual"


class NormalizedScoreRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    youth_id: UUID
    date: date
    peer: float
    adult: float
    investment: float
    authority: float
    overall: float
    shift: str | None = None
    source: str | None = None


class DomainAveragesRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    peer: float | None = None
    adult: float | None = None
    investment: float | None = None
    authority: float | None = None
    overall: float | None = None
    total_entries: int = 0


class ScoreAveragesResponse(BaseModel):
    """Daily, weekly, and combined averages for one window."""

    youth_id: UUID
    start_date: date | None = None
    end_date: date | None = None
    daily: DomainAveragesRead
    weekly: DomainAveragesRead
    combined: DomainAveragesRead


class SchoolScoreCreate(BaseModel):
    youth_id: UUID
    date: date
    score: float = Field(ge=0, le=4)


class SchoolScoreRead(BaseModel):
    youth_id: UUID
    date: date
    weekday: int
    score: float
    updated_at: datetime | None = None


class ScoreStatsRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    youth_id: UUID
    total: int
    average: float
    highest: float
    lowest: float
    trend: str
    recent_average: float
    previous_average: float
