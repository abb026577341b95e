"""Pydantic schemas for report generation and report drafts."""

from datetime import date, datetime
from typing import Any, Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict

ReportTypeField = Literal[
    "comprehensive", "summary", "progress", "progressMonthly",
    "court", "dpnWeekly", "dpnBiWeekly", "dpnMonthly",
]
ReportPeriodField = Literal["allTime", "last7", "last30", "last90", "custom"]


class IncludeOptions(BaseModel):
    profile: bool = True
    points: bool = True
    notes: bool = True


class ReportRequest(BaseModel):
    youth_id: UUID
    report_type: ReportTypeField = "comprehensive"
    period: ReportPeriodField = "last30"
    custom_start_date: date | None = None
    custom_end_date: date | None = None
    include: IncludeOptions = IncludeOptions()
    use_ai: bool = False


class ReportResponse(BaseModel):
    youth_id: UUID
    report_type: str
    start_date: date
    end_date: date
    filename: str
    content: str


class EnhanceRequest(BaseModel):
    text: str
    context: str = "case note"


class EnhanceResponse(BaseModel):
    text: str
    enhanced: bool


class DraftWrite(BaseModel):
    data: dict[str, Any]


class DraftRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    youth_id: UUID | None = None
    draft_type: str
    author_id: str | None = None
    data: dict[str, Any]
    updated_at: datetime
