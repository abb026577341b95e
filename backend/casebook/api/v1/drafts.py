"""Report draft endpoints: autosaved form state, one per youth, type and author."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from casebook.dependencies.lookups import get_youth_or_404
from casebook.models.base import get_db
from casebook.models.report_draft import ReportDraft
from casebook.schemas.report import DraftRead, DraftWrite

router = APIRouter(prefix="/drafts", tags=["drafts"])


async def _find(db: AsyncSession, youth_id: UUID, draft_type: str, author_id: str | None) -> ReportDraft | None:
    query = select(ReportDraft).where(
        ReportDraft.youth_id == youth_id,
        ReportDraft.draft_type == draft_type,
    )
    if author_id is None:
        query = query.where(ReportDraft.author_id.is_(None))
    else:
        query = query.where(ReportDraft.author_id == author_id)
    result = await db.execute(query)
    return result.scalar_one_or_none()


@router.get("/{youth_id}/{draft_type}", response_model=DraftRead)
async def get_draft(
    youth_id: UUID,
    draft_type: str,
    db: AsyncSession = Depends(get_db),
    author_id: str | None = Query(None),
):
    draft = await _find(db, youth_id, draft_type, author_id)
    if not draft:
        raise HTTPException(status_code=404, detail="Draft not found")
    return draft


@router.put("/{youth_id}/{draft_type}", response_model=DraftRead)
async def save_draft(
    youth_id: UUID,
    draft_type: str,
    payload: DraftWrite,
    db: AsyncSession = Depends(get_db),
    author_id: str | None = Query(None),
):
    """Replace the stored draft with the submitted form state."""
    await get_youth_or_404(db, youth_id)
    draft = await _find(db, youth_id, draft_type, author_id)
    if draft is None:
        draft = ReportDraft(youth_id=youth_id, draft_type=draft_type, author_id=author_id)
        db.add(draft)
    draft.data = payload.data
    await db.commit()
    await db.refresh(draft)
    return draft


@router.delete("/{youth_id}/{draft_type}", status_code=204)
async def delete_draft(
    youth_id: UUID,
    draft_type: str,
    db: AsyncSession = Depends(get_db),
    author_id: str | None = Query(None),
):
    draft = await _find(db, youth_id, draft_type, author_id)
    if draft:
        await db.delete(draft)
        await db.commit()
    return Response(status_code=204)
