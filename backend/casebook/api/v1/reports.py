"""Report generation endpoints: text reports, downloads, AI text enhancement."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.ext.asyncio import AsyncSession

from casebook.dependencies.lookups import get_youth_or_404
from casebook.models.base import get_db
from casebook.schemas.report import EnhanceRequest, EnhanceResponse, ReportRequest, ReportResponse
from casebook.services.ai_client import AIClient, AIServiceError, get_ai_client
from casebook.services.export_service import build_report_filename
from casebook.services.report_service import (
    REPORT_TITLES,
    ReportError,
    ReportOptions,
    generate_report,
    get_date_range,
    load_report_data,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reports", tags=["reports"])


def options_from_request(payload: ReportRequest) -> ReportOptions:
    return ReportOptions(
        report_type=payload.report_type,
        period=payload.period,
        custom_start_date=payload.custom_start_date,
        custom_end_date=payload.custom_end_date,
        include_profile=payload.include.profile,
        include_points=payload.include.points,
        include_notes=payload.include.notes,
        use_ai=payload.use_ai,
    )


async def build_report(db: AsyncSession, payload: ReportRequest, ai_client: AIClient) -> ReportResponse:
    youth = await get_youth_or_404(db, payload.youth_id)
    options = options_from_request(payload)
    try:
        start, end = get_date_range(options)
    except ReportError as e:
        raise HTTPException(status_code=400, detail=str(e))

    data = await load_report_data(db, youth, options, start, end)
    content = await generate_report(youth, data, options, start, end, ai_client)
    logger.info(f"Generated {options.report_type} report for youth {youth.id}")
    return ReportResponse(
        youth_id=youth.id,
        report_type=options.report_type,
        start_date=start,
        end_date=end,
        filename=build_report_filename(youth.first_name, youth.last_name, REPORT_TITLES[options.report_type]),
        content=content,
    )


@router.post("", response_model=ReportResponse)
async def create_report(
    payload: ReportRequest,
    db: AsyncSession = Depends(get_db),
    ai_client: AIClient = Depends(get_ai_client),
):
    """Generate a plain-text report for one youth."""
    return await build_report(db, payload, ai_client)


@router.post("/download")
async def download_report(
    payload: ReportRequest,
    db: AsyncSession = Depends(get_db),
    ai_client: AIClient = Depends(get_ai_client),
):
    """Same report as a text file attachment."""
    report = await build_report(db, payload, ai_client)
    return Response(
        content=report.content,
        media_type="text/plain; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{report.filename}.txt"'},
    )


@router.post("/enhance", response_model=EnhanceResponse)
async def enhance_text(
    payload: EnhanceRequest,
    ai_client: AIClient = Depends(get_ai_client),
):
    """Rewrite staff text professionally; returns the input unchanged when AI is off."""
    try:
        enhanced = await ai_client.enhance_text(payload.text, payload.context)
    except AIServiceError as e:
        logger.warning(f"Text enhancement failed: {e}")
        raise HTTPException(status_code=502, detail="AI service unavailable")
    if enhanced is None:
        return EnhanceResponse(text=payload.text, enhanced=False)
    return EnhanceResponse(text=enhanced, enhanced=True)
