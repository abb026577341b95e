"""School incident report models: structured incident plus involved residents."""

from sqlalchemy import Column, String, Boolean, DateTime, Text, ForeignKey, Index, Uuid
from sqlalchemy.orm import relationship

from casebook.models.base import Base, JSONType, TimestampMixin, UUIDMixin


class SchoolIncident(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "school_incidents"

    incident_id = Column(String(20), unique=True, nullable=False, index=True)  # HHH-YYYY-####

    # Basic information
    date_time = Column(DateTime(timezone=True), nullable=False, index=True)
    reported_by = Column(JSONType, nullable=False)  # {staff_id, name, role}
    location = Column(String(255), nullable=False)

    # Classification
    incident_type = Column(String(50), nullable=False)
    severity = Column(String(20), nullable=False, index=True)  # Low, Medium, High, Critical

    # Details
    summary = Column(Text, nullable=False)
    timeline = Column(JSONType, default=list)  # [{time: "HH:mm", entry}]
    actions_taken = Column(Text)
    witnesses = Column(JSONType, default=list)

    # Medical & safety
    medical_needed = Column(Boolean, default=False, nullable=False)
    medical_details = Column(Text)

    # Documentation & sign-off
    attachments = Column(JSONType, default=list)
    staff_signatures = Column(JSONType, default=list)
    follow_up = Column(JSONType)  # {assigned_to, due_date, follow_up_notes, completed, completed_at}
    confidential_notes = Column(Text)

    # Soft delete
    deleted_at = Column(DateTime(timezone=True))
    deleted_by = Column(String(100))

    involved_residents = relationship(
        "SchoolIncidentInvolved",
        back_populates="incident",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    __table_args__ = (
        Index("idx_school_incidents_active", "deleted_at", "date_time"),
    )


class SchoolIncidentInvolved(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "school_incident_involved"

    incident_pk = Column(Uuid(as_uuid=True), ForeignKey("school_incidents.id", ondelete="CASCADE"), nullable=False, index=True)
    resident_id = Column(Uuid(as_uuid=True), ForeignKey("youths.id", ondelete="SET NULL"), index=True)
    name = Column(String(200))
    role_in_incident = Column(String(20), nullable=False)  # aggressor, victim, witness, bystander

    incident = relationship("SchoolIncident", back_populates="involved_residents")
