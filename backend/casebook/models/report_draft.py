"""Report draft model: autosaved form state for long reports."""

from sqlalchemy import Column, String, ForeignKey, UniqueConstraint, Uuid

from casebook.models.base import Base, JSONType, TimestampMixin, UUIDMixin


class ReportDraft(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "report_drafts"

    youth_id = Column(Uuid(as_uuid=True), ForeignKey("youths.id", ondelete="CASCADE"), index=True)
    draft_type = Column(String(50), nullable=False)
    author_id = Column(String(100))
    data = Column(JSONType, nullable=False, default=dict)

    __table_args__ = (
        UniqueConstraint("youth_id", "draft_type", "author_id", name="uq_report_drafts_owner"),
    )
