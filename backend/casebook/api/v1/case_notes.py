"""Case note API endpoints."""

import logging
from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from casebook.dependencies.lookups import get_row_or_404, get_youth_or_404
from casebook.models.base import get_db
from casebook.models.case_note import CaseNote
from casebook.schemas.case_note import (
    BulkNotesRequest,
    BulkNotesResponse,
    CaseNoteCreate,
    CaseNoteRead,
    CaseNoteUpdate,
    ClassificationRead,
    ClassifyRequest,
    NoteStatisticsRead,
)
from casebook.services import export_service
from casebook.services.case_note_service import (
    classify_entry,
    note_statistics,
    parse_bulk_notes,
    search_notes,
    split_combined_entries,
    truncate_for_summary,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/case-notes", tags=["case-notes"])

CLASSIFIED_TYPES = ("general", "shift")


def _apply_classification(note: CaseNote, text: str, keep_type: bool = False) -> None:
    result = classify_entry(text)
    if not keep_type:
        note.note_type = result.note_type
    note.label = result.label
    note.tags = result.tags
    note.confidence = result.confidence


async def _query_notes(
    db: AsyncSession,
    youth_id: UUID,
    note_type: str | None = None,
    staff: str | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
    search: str | None = None,
) -> list[CaseNote]:
    query = select(CaseNote).where(CaseNote.youth_id == youth_id)
    if note_type:
        query = query.where(CaseNote.note_type == note_type)
    if staff:
        query = query.where(CaseNote.staff.ilike(f"%{staff}%"))
    if start_date:
        query = query.where(CaseNote.date >= start_date)
    if end_date:
        query = query.where(CaseNote.date <= end_date)
    result = await db.execute(query.order_by(CaseNote.date.desc(), CaseNote.created_at.desc()))
    notes = list(result.scalars().all())
    if search:
        notes = search_notes(notes, search)
    return notes


@router.get("", response_model=list[CaseNoteRead])
async def list_notes(
    youth_id: UUID,
    db: AsyncSession = Depends(get_db),
    note_type: str | None = Query(None, pattern="^(session|general|shift|school)$"),
    staff: str | None = Query(None),
    start_date: date | None = Query(None),
    end_date: date | None = Query(None),
    search: str | None = Query(None, description="Case-insensitive text search"),
):
    """Notes for a youth, newest first, with optional filters."""
    return await _query_notes(db, youth_id, note_type, staff, start_date, end_date, search)


@router.post("", response_model=CaseNoteRead, status_code=201)
async def create_note(
    payload: CaseNoteCreate,
    db: AsyncSession = Depends(get_db),
):
    await get_youth_or_404(db, payload.youth_id)
    note = CaseNote(**payload.model_dump(exclude={"classify"}))
    if not note.summary and note.note:
        note.summary = truncate_for_summary(note.note)
    if payload.classify and note.note_type in CLASSIFIED_TYPES and note.note:
        _apply_classification(note, note.note, keep_type=True)
    db.add(note)
    await db.commit()
    await db.refresh(note)
    return note


@router.post("/bulk", response_model=BulkNotesResponse, status_code=201)
async def bulk_import_notes(
    payload: BulkNotesRequest,
    db: AsyncSession = Depends(get_db),
):
    """Create notes from pasted text; each dated block becomes one note."""
    await get_youth_or_404(db, payload.youth_id)

    notes = []
    for parsed in parse_bulk_notes(payload.text):
        chunks = split_combined_entries(parsed.content) if payload.split_entries else [parsed.content]
        for chunk in chunks:
            note = CaseNote(
                youth_id=payload.youth_id,
                date=parsed.date,
                note=chunk,
                summary=truncate_for_summary(chunk),
                staff=payload.staff,
            )
            _apply_classification(note, chunk)
            if payload.note_type:
                note.note_type = payload.note_type
            db.add(note)
            notes.append(note)

    await db.commit()
    for note in notes:
        await db.refresh(note)
    logger.info(f"Imported {len(notes)} notes for youth {payload.youth_id}")
    return BulkNotesResponse(
        created=len(notes),
        notes=[CaseNoteRead.model_validate(note) for note in notes],
    )


@router.post("/classify", response_model=ClassificationRead)
async def classify_note(payload: ClassifyRequest):
    """Preview the label a note would get."""
    return ClassificationRead.model_validate(classify_entry(payload.text))


@router.get("/statistics", response_model=NoteStatisticsRead)
async def notes_statistics(
    youth_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    return NoteStatisticsRead.model_validate(note_statistics(await _query_notes(db, youth_id)))


@router.get("/export")
async def export_notes(
    youth_id: UUID,
    db: AsyncSession = Depends(get_db),
    note_type: str | None = Query(None, pattern="^(session|general|shift|school)$"),
    staff: str | None = Query(None),
    start_date: date | None = Query(None),
    end_date: date | None = Query(None),
    search: str | None = Query(None, description="Case-insensitive text search"),
):
    """CSV of the notes matching the filter."""
    youth = await get_youth_or_404(db, youth_id)
    notes = await _query_notes(db, youth_id, note_type, staff, start_date, end_date, search)
    filename = export_service.build_report_filename(youth.first_name, youth.last_name, "Case Notes")
    return Response(
        content=export_service.export_case_notes(notes),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}.csv"'},
    )


@router.get("/{note_id}", response_model=CaseNoteRead)
async def get_note(
    note_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    return await get_row_or_404(db, CaseNote, note_id, "Case note")


@router.patch("/{note_id}", response_model=CaseNoteRead)
async def update_note(
    note_id: UUID,
    payload: CaseNoteUpdate,
    db: AsyncSession = Depends(get_db),
):
    note = await get_row_or_404(db, CaseNote, note_id, "Case note")
    changes = payload.model_dump(exclude_unset=True)
    for key, value in changes.items():
        setattr(note, key, value)
    if "note" in changes and note.note_type in CLASSIFIED_TYPES and note.note:
        _apply_classification(note, note.note, keep_type=True)
    await db.commit()
    await db.refresh(note)
    return note


@router.delete("/{note_id}", status_code=204)
async def delete_note(
    note_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    note = await get_row_or_404(db, CaseNote, note_id, "Case note")
    await db.delete(note)
    await db.commit()
    return Response(status_code=204)
