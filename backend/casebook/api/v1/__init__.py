"""API v1 router aggregation."""

from fastapi import APIRouter

from casebook.api.v1.youths import router as youths_router
from casebook.api.v1.behavior_points import router as behavior_points_router
from casebook.api.v1.case_notes import router as case_notes_router
from casebook.api.v1.academics import router as academics_router
from casebook.api.v1.school_incidents import router as school_incidents_router
from casebook.api.v1.shift_scores import router as shift_scores_router
from casebook.api.v1.school_scores import router as school_scores_router
from casebook.api.v1.alerts import router as alerts_router
from casebook.api.v1.drafts import router as drafts_router
from casebook.api.v1.reports import router as reports_router

router = APIRouter(prefix="/api/v1")

router.include_router(youths_router)
router.include_router(behavior_points_router)
router.include_router(case_notes_router)
router.include_router(academics_router)
router.include_router(school_incidents_router)
router.include_router(shift_scores_router)
router.include_router(school_scores_router)
router.include_router(alerts_router)
router.include_router(drafts_router)
router.include_router(reports_router)
