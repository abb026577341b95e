"""Behavior points model: one point card per youth per day."""

from sqlalchemy import Column, Date, ForeignKey, Integer, Text, Uuid, UniqueConstraint
from sqlalchemy.orm import relationship

from casebook.models.base import Base, TimestampMixin, UUIDMixin


class BehaviorPoints(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "behavior_points"

    youth_id = Column(Uuid(as_uuid=True), ForeignKey("youths.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    morning_points = Column(Integer, default=0, nullable=False)
    afternoon_points = Column(Integer, default=0, nullable=False)
    evening_points = Column(Integer, default=0, nullable=False)
    total_points = Column(Integer, default=0, nullable=False)
    comments = Column(Text)

    youth = relationship("Youth", back_populates="behavior_points")

    __table_args__ = (
        UniqueConstraint("youth_id", "date", name="uq_behavior_points_youth_date"),
    )
