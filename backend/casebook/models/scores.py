"""Score models: shift/weekly domain evaluations and school day scores.

Scores are displayed on a 0-4 scale but stored as integer tenths (0-40).
"""

from sqlalchemy import Column, Date, ForeignKey, Index, Integer, String, UniqueConstraint, Uuid

from casebook.models.base import Base, TimestampMixin, UUIDMixin


class DailyShiftScore(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "daily_shift_scores"

    youth_id = Column(Uuid(as_uuid=True), ForeignKey("youths.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    shift = Column(String(10), nullable=False)  # morning, day, evening
    peer = Column(Integer, default=0, nullable=False)
    adult = Column(Integer, default=0, nullable=False)
    investment = Column(Integer, default=0, nullable=False)
    authority = Column(Integer, default=0, nullable=False)
    staff = Column(String(100))

    __table_args__ = (
        UniqueConstraint("youth_id", "date", "shift", name="uq_daily_shift_youth_date_shift"),
    )


class WeeklyEval(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "weekly_evals"

    youth_id = Column(Uuid(as_uuid=True), ForeignKey("youths.id", ondelete="CASCADE"), nullable=False, index=True)
    week_date = Column(Date, nullable=False)  # Monday of the evaluated week
    peer = Column(Integer, default=0, nullable=False)
    adult = Column(Integer, default=0, nullable=False)
    investment = Column(Integer, default=0, nullable=False)
    authority = Column(Integer, default=0, nullable=False)
    source = Column(String(20), default="manual", nullable=False)  # manual, uploaded

    __table_args__ = (
        Index("idx_weekly_evals_youth_week", "youth_id", "week_date"),
    )


class SchoolScore(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "school_scores"

    youth_id = Column(Uuid(as_uuid=True), ForeignKey("youths.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    weekday = Column(Integer, nullable=False)  # 1=Mon ... 5=Fri
    score = Column(Integer, nullable=False)

    __table_args__ = (
        UniqueConstraint("youth_id", "date", name="uq_school_scores_youth_date"),
    )
