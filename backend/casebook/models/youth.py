"""Youth model: a resident in the care program."""

from sqlalchemy import Column, String, Integer, Boolean, Date, Text, Index
from sqlalchemy.orm import relationship

from casebook.models.base import Base, JSONType, TimestampMixin, UUIDMixin


class Youth(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "youths"

    # Identity
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False, index=True)
    dob = Column(Date)
    sex = Column(String(1))  # M, F
    id_number = Column(String(50))

    # Admission / discharge
    admission_date = Column(Date)
    discharge_date = Column(Date)
    status = Column(String(20), default="active", nullable=False, index=True)  # active, discharged
    discharge_category = Column(String(50))  # successful, maximum_benefit, unsuccessful
    discharge_reason = Column(String(255))
    discharge_notes = Column(Text)
    discharged_by = Column(String(100))

    # Level system
    level = Column(Integer, default=0, nullable=False)
    point_total = Column(Integer, default=0, nullable=False)
    points_in_current_level = Column(Integer, default=0, nullable=False)

    # Restriction tracking
    restriction_level = Column(Integer)  # 1 or 2
    restriction_reason = Column(Text)
    restriction_start_date = Column(Date)
    restriction_points_required = Column(Integer)
    restriction_points_earned = Column(Integer, default=0, nullable=False)

    # Subsystem tracking
    subsystem_active = Column(Boolean, default=False, nullable=False)
    subsystem_reason = Column(Text)
    subsystem_start_date = Column(Date)
    subsystem_points_required = Column(Integer)
    subsystem_points_earned = Column(Integer, default=0, nullable=False)

    # Narrative fields used in reports
    referral_source = Column(String(255))
    referral_reason = Column(Text)
    education_info = Column(Text)
    medical_info = Column(Text)
    mental_health_info = Column(Text)
    legal_status = Column(String(255))
    current_diagnoses = Column(Text)
    current_medications = Column(Text)
    allergies = Column(Text)
    legal_guardian = Column(String(255))
    guardian_relationship = Column(String(100))
    probation_officer = Column(String(255))
    placement_authority = Column(String(255))
    estimated_stay = Column(String(100))
    trauma_history = Column(JSONType, default=list)

    # Remaining intake form fields (address, contacts, treatment focus, ...)
    profile = Column(JSONType, default=dict)

    # Relationships
    behavior_points = relationship("BehaviorPoints", back_populates="youth", cascade="all, delete-orphan")
    case_notes = relationship("CaseNote", back_populates="youth", cascade="all, delete-orphan")

    __table_args__ = (
        Index("idx_youth_name", "last_name", "first_name"),
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
