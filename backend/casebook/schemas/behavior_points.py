"""Pydantic schemas for BehaviorPoints model and point statistics."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class BehaviorPointsBase(BaseModel):
    """One day's point card; each shift is validated against the card rules."""

    date: date
    morning_points: int = 0
    afternoon_points: int = 0
    evening_points: int = 0
    comments: str | None = None


class BehaviorPointsCreate(BehaviorPointsBase):
    youth_id: UUID


class BehaviorPointsRead(BehaviorPointsBase):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    youth_id: UUID
    total_points: int
    created_at: datetime
    updated_at: datetime


class WeeklyAverageRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    week: str
    average: int
    total: int


class PointStatisticsRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_points: int = 0
    average_daily: int = 0
    highest_day: int = 0
    lowest_day: int = 0
    days_above_average: int = 0
    trend: str = "stable"


class ShiftAveragesRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    average_total: float = 0.0
    average_morning: float = 0.0
    average_afternoon: float = 0.0
    average_evening: float = 0.0
    days_recorded: int = 0


class PointSummary(BaseModel):
    """Totals for a youth over an optional date window."""

    youth_id: UUID
    start_date: date | None = None
    end_date: date | None = None
    total_points: int
    average_daily: int
    days_recorded: int
    shift_averages: ShiftAveragesRead
