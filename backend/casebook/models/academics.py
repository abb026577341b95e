"""Academic tracking models: credits, grades, and steps per student."""

from sqlalchemy import Column, Date, Float, ForeignKey, Integer, String, Uuid

from casebook.models.base import Base, TimestampMixin, UUIDMixin


class CreditEarned(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "academic_credits"

    student_id = Column(Uuid(as_uuid=True), ForeignKey("youths.id", ondelete="CASCADE"), nullable=False, index=True)
    date_earned = Column(Date, nullable=False)
    credit_value = Column(Float, nullable=False)


class Grade(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "academic_grades"

    student_id = Column(Uuid(as_uuid=True), ForeignKey("youths.id", ondelete="CASCADE"), nullable=False, index=True)
    date_entered = Column(Date, nullable=False)
    grade_value = Column(Float, nullable=False)  # percentage 0-100
    course_name = Column(String(255))


class StepsCompleted(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "academic_steps"

    student_id = Column(Uuid(as_uuid=True), ForeignKey("youths.id", ondelete="CASCADE"), nullable=False, index=True)
    date_completed = Column(Date, nullable=False)
    steps_count = Column(Integer, nullable=False)
