"""Pydantic schemas for Youth model."""

from datetime import date, datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class YouthBase(BaseModel):
    """Profile fields staff can edit directly."""

    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    dob: date | None = None
    sex: str | None = Field(default=None, pattern="^[MF]$")
    id_number: str | None = None
    admission_date: date | None = None

    referral_source: str | None = None
    referral_reason: str | None = None
    education_info: str | None = None
    medical_info: str | None = None
    mental_health_info: str | None = None
    legal_status: str | None = None
    current_diagnoses: str | None = None
    current_medications: str | None = None
    allergies: str | None = None
    legal_guardian: str | None = None
    guardian_relationship: str | None = None
    probation_officer: str | None = None
    placement_authority: str | None = None
    estimated_stay: str | None = None
    trauma_history: list[str] = []
    profile: dict[str, Any] = {}


class YouthCreate(YouthBase):
    """Fields for admitting a youth. Level and points start at zero."""


class YouthUpdate(BaseModel):
    """Partial profile update; level and point fields have their own endpoints."""

    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    last_name: str | None = Field(default=None, min_length=1, max_length=100)
    dob: date | None = None
    sex: str | None = Field(default=None, pattern="^[MF]$")
    id_number: str | None = None
    admission_date: date | None = None
    referral_source: str | None = None
    referral_reason: str | None = None
    education_info: str | None = None
    medical_info: str | None = None
    mental_health_info: str | None = None
    legal_status: str | None = None
    current_diagnoses: str | None = None
    current_medications: str | None = None
    allergies: str | None = None
    legal_guardian: str | None = None
    guardian_relationship: str | None = None
    probation_officer: str | None = None
    placement_authority: str | None = None
    estimated_stay: str | None = None
    trauma_history: list[str] | None = None
    profile: dict[str, Any] | None = None


class YouthRead(YouthBase):
    """Full youth output."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    status: str
    discharge_date: date | None = None
    discharge_category: str | None = None
    discharge_reason: str | None = None
    discharge_notes: str | None = None
    discharged_by: str | None = None

    level: int
    point_total: int
    points_in_current_level: int

    restriction_level: int | None = None
    restriction_reason: str | None = None
    restriction_start_date: date | None = None
    restriction_points_required: int | None = None
    restriction_points_earned: int = 0

    subsystem_active: bool = False
    subsystem_reason: str | None = None
    subsystem_start_date: date | None = None
    subsystem_points_required: int | None = None
    subsystem_points_earned: int = 0

    created_at: datetime
    updated_at: datetime

    trauma_history: list[str] | None = None
    profile: dict[str, Any] | None = None


class YouthWithProgress(YouthRead):
    """Youth plus derived level information."""

    level_name: str
    next_level_name: str | None = None
    points_required: int | None = None
    level_progress: float = 0.0
    can_level_up: bool = False
    restriction_complete: bool = False
    subsystem_complete: bool = False


class YouthSummary(BaseModel):
    """Minimal youth info for lists and nested responses."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    first_name: str
    last_name: str
    status: str
    level: int
    point_total: int


class CardPointsRequest(BaseModel):
    points: int


class CorrectedTotalRequest(BaseModel):
    point_total: int


class RestrictionRequest(BaseModel):
    restriction_level: int | None = None
    reason: str | None = None
    points_required: int | None = Field(default=None, ge=0)


class SubsystemRequest(BaseModel):
    reason: str | None = None
    points_required: int | None = Field(default=None, ge=0)


class DischargeRequest(BaseModel):
    category: str
    reason: str | None = None
    notes: str | None = None
    discharged_by: str | None = None
    discharge_date: date | None = None


class LevelChangeResponse(BaseModel):
    """Result of a level-up or demotion."""

    youth: YouthWithProgress
    previous_level: int
    new_level: int
    points_in_new_level: int
    points_earned_on_completed_level: int = 0
