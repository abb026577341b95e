"""Shared row lookups for route handlers."""

from uuid import UUID

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from casebook.models.youth import Youth


async def get_youth_or_404(db: AsyncSession, youth_id: UUID) -> Youth:
    result = await db.execute(select(Youth).where(Youth.id == youth_id))
    youth = result.scalar_one_or_none()
    if not youth:
        raise HTTPException(status_code=404, detail="Youth not found")
    return youth


async def get_row_or_404(db: AsyncSession, model, row_id: UUID, label: str):
    result = await db.execute(select(model).where(model.id == row_id))
    row = result.scalar_one_or_none()
    if not row:
        raise HTTPException(status_code=404, detail=f"{label} not found")
    return row
