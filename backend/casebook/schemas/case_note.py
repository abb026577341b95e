"""Pydantic schemas for CaseNote model."""

import datetime as dt
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

NOTE_TYPE_PATTERN = "^(session|general|shift|school)$"


class CaseNoteBase(BaseModel):
    """Base fields for a case note."""

    date: dt.date
    note_type: str = Field(default="general", pattern=NOTE_TYPE_PATTERN)
    summary: str | None = None
    note: str | None = None
    staff: str | None = None


class CaseNoteCreate(CaseNoteBase):
    youth_id: UUID
    classify: bool = True


class CaseNoteUpdate(BaseModel):
    date: dt.date | None = None
    note_type: str | None = Field(default=None, pattern=NOTE_TYPE_PATTERN)
    summary: str | None = None
    note: str | None = None
    staff: str | None = None


class CaseNoteRead(CaseNoteBase):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    youth_id: UUID
    label: str | None = None
    tags: list[str] | None = None
    confidence: float | None = None
    created_at: dt.datetime
    updated_at: dt.datetime


class BulkNotesRequest(BaseModel):
    """Pasted notes for one youth; see case_note_service.parse_bulk_notes."""

    youth_id: UUID
    text: str = Field(min_length=1)
    staff: str | None = None
    note_type: str | None = Field(default=None, pattern=NOTE_TYPE_PATTERN)
    split_entries: bool = False


class BulkNotesResponse(BaseModel):
    created: int
    notes: list[CaseNoteRead]


class ClassificationRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    note_type: str
    label: str
    tags: list[str]
    confidence: float


class ClassifyRequest(BaseModel):
    text: str


class NoteStatisticsRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_notes: int = 0
    type_counts: dict[str, int] = {}
    staff_counts: dict[str, int] = {}
