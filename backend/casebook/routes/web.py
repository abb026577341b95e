"""Printable HTML views. The browser's print dialog produces the paper copy."""

from datetime import date, datetime
from pathlib import Path
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from casebook.config import get_settings
from casebook.dependencies.lookups import get_youth_or_404
from casebook.models.base import get_db
from casebook.models.school_incident import SchoolIncident
from casebook.services.export_service import build_report_filename
from casebook.services.level_system import get_current_level
from casebook.services.report_service import (
    REPORT_TITLES,
    ReportError,
    ReportOptions,
    build_report_text,
    fmt_date,
    get_date_range,
    load_report_data,
)

settings = get_settings()

router = APIRouter(prefix="/print", tags=["print"])
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))
templates.env.filters["us_date"] = fmt_date


def _ctx(**extra) -> dict:
    return {
        "facility_name": settings.facility_name,
        "printed_at": datetime.now(),
        **extra,
    }


@router.get("/reports/{youth_id}", response_class=HTMLResponse)
async def print_report(
    request: Request,
    youth_id: UUID,
    db: AsyncSession = Depends(get_db),
    report_type: str = Query("comprehensive"),
    period: str = Query("last30"),
    start_date: date | None = Query(None),
    end_date: date | None = Query(None),
    include_profile: bool = Query(True),
    include_points: bool = Query(True),
    include_notes: bool = Query(True),
):
    """Report text laid out for printing."""
    if report_type not in REPORT_TITLES:
        raise HTTPException(status_code=400, detail=f"Unknown report type: {report_type}")
    youth = await get_youth_or_404(db, youth_id)
    options = ReportOptions(
        report_type=report_type,
        period=period,
        custom_start_date=start_date,
        custom_end_date=end_date,
        include_profile=include_profile,
        include_points=include_points,
        include_notes=include_notes,
    )
    try:
        start, end = get_date_range(options)
    except ReportError as e:
        raise HTTPException(status_code=400, detail=str(e))

    data = await load_report_data(db, youth, options, start, end)
    title = REPORT_TITLES[report_type]
    return templates.TemplateResponse(
        request,
        "print/report.html",
        _ctx(
            title=title,
            filename=build_report_filename(youth.first_name, youth.last_name, title),
            youth=youth,
            level_name=get_current_level(youth.level or 0).name,
            start=start,
            end=end,
            content=build_report_text(youth, data, options, start, end),
        ),
    )


@router.get("/incidents/{incident_id}", response_class=HTMLResponse)
async def print_incident(
    request: Request,
    incident_id: str,
    db: AsyncSession = Depends(get_db),
):
    """School incident report laid out for printing and signature."""
    result = await db.execute(
        select(SchoolIncident).where(
            SchoolIncident.incident_id == incident_id,
            SchoolIncident.deleted_at.is_(None),
        )
    )
    incident = result.scalar_one_or_none()
    if not incident:
        raise HTTPException(status_code=404, detail="Incident not found")

    return templates.TemplateResponse(
        request,
        "print/incident.html",
        _ctx(title=f"School Incident Report {incident.incident_id}", incident=incident),
    )
