"""Case note model: free-text notes tagged by type."""

from sqlalchemy import Column, Date, Float, ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import relationship

from casebook.models.base import Base, JSONType, TimestampMixin, UUIDMixin


class CaseNote(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "case_notes"

    youth_id = Column(Uuid(as_uuid=True), ForeignKey("youths.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    note_type = Column(String(20), default="general", nullable=False)  # session, general, shift, school
    summary = Column(Text)
    note = Column(Text)
    staff = Column(String(100), index=True)

    # Keyword classification for general/shift notes
    label = Column(String(50))
    tags = Column(JSONType, default=list)
    confidence = Column(Float)

    youth = relationship("Youth", back_populates="case_notes")

    __table_args__ = (
        Index("idx_case_notes_youth_date", "youth_id", "date"),
    )
