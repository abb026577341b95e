"""Alert model: automatic and manual staff alerts."""

from sqlalchemy import Column, String, Boolean, DateTime, Text, ForeignKey, Index, Uuid

from casebook.models.base import Base, TimestampMixin, UUIDMixin


class Alert(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "alerts"

    alert_type = Column(String(20), nullable=False)  # warning, info, urgent
    priority = Column(String(10), nullable=False)  # high, medium, low
    category = Column(String(50), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    youth_id = Column(Uuid(as_uuid=True), ForeignKey("youths.id", ondelete="CASCADE"), index=True)
    youth_name = Column(String(200))
    resolved = Column(Boolean, default=False, nullable=False)
    resolved_at = Column(DateTime(timezone=True))

    __table_args__ = (
        Index("idx_alerts_resolved_created", "resolved", "created_at"),
    )
