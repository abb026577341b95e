"""Pydantic schemas for SchoolIncident model."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class StaffMember(BaseModel):
    staff_id: str | None = None
    name: str
    role: str | None = None


class InvolvedResident(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    resident_id: UUID | None = None
    name: str | None = None
    role_in_incident: str


class Witness(BaseModel):
    name: str
    role: str = "other"  # peer, staff, teacher, other
    statement: str | None = None


class TimelineEntry(BaseModel):
    time: str  # HH:mm
    entry: str


class StaffSignature(BaseModel):
    staff_id: str | None = None
    name: str
    signed_at: datetime


class Attachment(BaseModel):
    filename: str
    url: str | None = None
    uploaded_at: datetime | None = None


class FollowUp(BaseModel):
    assigned_to: str
    due_date: str  # ISO date
    follow_up_notes: str | None = None
    completed: bool = False
    completed_at: str | None = None


class SchoolIncidentBase(BaseModel):
    """Fields staff fill out on the incident form."""

    date_time: datetime
    reported_by: StaffMember
    location: str
    incident_type: str
    severity: str
    involved_residents: list[InvolvedResident] = []
    witnesses: list[Witness] = []
    summary: str
    timeline: list[TimelineEntry] = []
    actions_taken: str | None = None
    medical_needed: bool = False
    medical_details: str | None = None
    attachments: list[Attachment] = []
    staff_signatures: list[StaffSignature] = []
    follow_up: FollowUp | None = None
    confidential_notes: str | None = None


class SchoolIncidentCreate(SchoolIncidentBase):
    """Incident ids are assigned by the server."""


class SchoolIncidentRead(SchoolIncidentBase):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    incident_id: str
    deleted_at: datetime | None = None
    deleted_by: str | None = None
    created_at: datetime
    updated_at: datetime


class SchoolIncidentSummary(BaseModel):
    """List view without the long narrative fields."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    incident_id: str
    date_time: datetime
    location: str
    incident_type: str
    severity: str
    summary: str
