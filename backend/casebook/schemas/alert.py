"""Pydantic schemas for Alert model."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class AlertCreate(BaseModel):
    """Manually raised alert."""

    alert_type: str = Field(pattern="^(warning|info|urgent)$")
    priority: str = Field(default="medium", pattern="^(high|medium|low)$")
    category: str = "General"
    title: str = Field(min_length=1, max_length=255)
    description: str
    youth_id: UUID | None = None


class AlertRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    alert_type: str
    priority: str
    category: str
    title: str
    description: str
    youth_id: UUID | None = None
    youth_name: str | None = None
    resolved: bool
    resolved_at: datetime | None = None
    created_at: datetime
