"""Initial schema: youths, behavior points, case notes, academics, scores, incidents, alerts, drafts.

Revision ID: 001
Revises:
Create Date: 2026-10-18
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def _youth_fk(name: str = "youth_id", nullable: bool = False) -> sa.Column:
    return sa.Column(
        name, postgresql.UUID(as_uuid=True),
        sa.ForeignKey("youths.id", ondelete="CASCADE"), nullable=nullable, index=True,
    )


def upgrade() -> None:
    # Youths
    op.create_table(
        "youths",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False, index=True),
        sa.Column("dob", sa.Date),
        sa.Column("sex", sa.String(1)),
        sa.Column("id_number", sa.String(50)),
        sa.Column("admission_date", sa.Date),
        sa.Column("discharge_date", sa.Date),
        sa.Column("status", sa.String(20), nullable=False, server_default="active", index=True),
        sa.Column("discharge_category", sa.String(50)),
        sa.Column("discharge_reason", sa.String(255)),
        sa.Column("discharge_notes", sa.Text),
        sa.Column("discharged_by", sa.String(100)),
        sa.Column("level", sa.Integer, nullable=False, server_default=sa.text("0")),
        sa.Column("point_total", sa.Integer, nullable=False, server_default=sa.text("0")),
        sa.Column("points_in_current_level", sa.Integer, nullable=False, server_default=sa.text("0")),
        sa.Column("restriction_level", sa.Integer),
        sa.Column("restriction_reason", sa.Text),
        sa.Column("restriction_start_date", sa.Date),
        sa.Column("restriction_points_required", sa.Integer),
        sa.Column("restriction_points_earned", sa.Integer, nullable=False, server_default=sa.text("0")),
        sa.Column("subsystem_active", sa.Boolean, nullable=False, server_default=sa.text("false")),
        sa.Column("subsystem_reason", sa.Text),
        sa.Column("subsystem_start_date", sa.Date),
        sa.Column("subsystem_points_required", sa.Integer),
        sa.Column("subsystem_points_earned", sa.Integer, nullable=False, server_default=sa.text("0")),
        sa.Column("referral_source", sa.String(255)),
        sa.Column("referral_reason", sa.Text),
        sa.Column("education_info", sa.Text),
        sa.Column("medical_info", sa.Text),
        sa.Column("mental_health_info", sa.Text),
        sa.Column("legal_status", sa.String(255)),
        sa.Column("current_diagnoses", sa.Text),
        sa.Column("current_medications", sa.Text),
        sa.Column("allergies", sa.Text),
        sa.Column("legal_guardian", sa.String(255)),
        sa.Column("guardian_relationship", sa.String(100)),
        sa.Column("probation_officer", sa.String(255)),
        sa.Column("placement_authority", sa.String(255)),
        sa.Column("estimated_stay", sa.String(100)),
        sa.Column("trauma_history", postgresql.JSONB, server_default=sa.text("'[]'::jsonb")),
        sa.Column("profile", postgresql.JSONB, server_default=sa.text("'{}'::jsonb")),
        *_timestamps(),
    )
    op.create_index("idx_youth_name", "youths", ["last_name", "first_name"])

    # Behavior points
    op.create_table(
        "behavior_points",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        _youth_fk(),
        sa.Column("date", sa.Date, nullable=False, index=True),
        sa.Column("morning_points", sa.Integer, nullable=False, server_default=sa.text("0")),
        sa.Column("afternoon_points", sa.Integer, nullable=False, server_default=sa.text("0")),
        sa.Column("evening_points", sa.Integer, nullable=False, server_default=sa.text("0")),
        sa.Column("total_points", sa.Integer, nullable=False, server_default=sa.text("0")),
        sa.Column("comments", sa.Text),
        *_timestamps(),
        sa.UniqueConstraint("youth_id", "date", name="uq_behavior_points_youth_date"),
    )

    # Case notes
    op.create_table(
        "case_notes",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        _youth_fk(),
        sa.Column("date", sa.Date, nullable=False, index=True),
        sa.Column("note_type", sa.String(20), nullable=False, server_default="general"),
        sa.Column("summary", sa.Text),
        sa.Column("note", sa.Text),
        sa.Column("staff", sa.String(100), index=True),
        sa.Column("label", sa.String(50)),
        sa.Column("tags", postgresql.JSONB, server_default=sa.text("'[]'::jsonb")),
        sa.Column("confidence", sa.Float),
        *_timestamps(),
    )
    op.create_index("idx_case_notes_youth_date", "case_notes", ["youth_id", "date"])

    # Academics
    op.create_table(
        "academic_credits",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        _youth_fk("student_id"),
        sa.Column("date_earned", sa.Date, nullable=False),
        sa.Column("credit_value", sa.Float, nullable=False),
        *_timestamps(),
    )
    op.create_table(
        "academic_grades",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        _youth_fk("student_id"),
        sa.Column("date_entered", sa.Date, nullable=False),
        sa.Column("grade_value", sa.Float, nullable=False),
        sa.Column("course_name", sa.String(255)),
        *_timestamps(),
    )
    op.create_table(
        "academic_steps",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        _youth_fk("student_id"),
        sa.Column("date_completed", sa.Date, nullable=False),
        sa.Column("steps_count", sa.Integer, nullable=False),
        *_timestamps(),
    )

    # Domain scores
    op.create_table(
        "daily_shift_scores",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        _youth_fk(),
        sa.Column("date", sa.Date, nullable=False),
        sa.Column("shift", sa.String(10), nullable=False),
        sa.Column("peer", sa.Integer, nullable=False, server_default=sa.text("0")),
        sa.Column("adult", sa.Integer, nullable=False, server_default=sa.text("0")),
        sa.Column("investment", sa.Integer, nullable=False, server_default=sa.text("0")),
        sa.Column("authority", sa.Integer, nullable=False, server_default=sa.text("0")),
        sa.Column("staff", sa.String(100)),
        *_timestamps(),
        sa.UniqueConstraint("youth_id", "date", "shift", name="uq_daily_shift_youth_date_shift"),
    )
    op.create_table(
        "weekly_evals",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        _youth_fk(),
        sa.Column("week_date", sa.Date, nullable=False),
        sa.Column("peer", sa.Integer, nullable=False, server_default=sa.text("0")),
        sa.Column("adult", sa.Integer, nullable=False, server_default=sa.text("0")),
        sa.Column("investment", sa.Integer, nullable=False, server_default=sa.text("0")),
        sa.Column("authority", sa.Integer, nullable=False, server_default=sa.text("0")),
        sa.Column("source", sa.String(20), nullable=False, server_default="manual"),
        *_timestamps(),
    )
    op.create_index("idx_weekly_evals_youth_week", "weekly_evals", ["youth_id", "week_date"])
    op.create_table(
        "school_scores",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        _youth_fk(),
        sa.Column("date", sa.Date, nullable=False, index=True),
        sa.Column("weekday", sa.Integer, nullable=False),
        sa.Column("score", sa.Integer, nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("youth_id", "date", name="uq_school_scores_youth_date"),
    )

    # School incidents
    op.create_table(
        "school_incidents",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("incident_id", sa.String(20), unique=True, nullable=False, index=True),
        sa.Column("date_time", sa.DateTime(timezone=True), nullable=False, index=True),
        sa.Column("reported_by", postgresql.JSONB, nullable=False),
        sa.Column("location", sa.String(255), nullable=False),
        sa.Column("incident_type", sa.String(50), nullable=False),
        sa.Column("severity", sa.String(20), nullable=False, index=True),
        sa.Column("summary", sa.Text, nullable=False),
        sa.Column("timeline", postgresql.JSONB, server_default=sa.text("'[]'::jsonb")),
        sa.Column("actions_taken", sa.Text),
        sa.Column("witnesses", postgresql.JSONB, server_default=sa.text("'[]'::jsonb")),
        sa.Column("medical_needed", sa.Boolean, nullable=False, server_default=sa.text("false")),
        sa.Column("medical_details", sa.Text),
        sa.Column("attachments", postgresql.JSONB, server_default=sa.text("'[]'::jsonb")),
        sa.Column("staff_signatures", postgresql.JSONB, server_default=sa.text("'[]'::jsonb")),
        sa.Column("follow_up", postgresql.JSONB),
        sa.Column("confidential_notes", sa.Text),
        sa.Column("deleted_at", sa.DateTime(timezone=True)),
        sa.Column("deleted_by", sa.String(100)),
        *_timestamps(),
    )
    op.create_index("idx_school_incidents_active", "school_incidents", ["deleted_at", "date_time"])
    op.create_table(
        "school_incident_involved",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "incident_pk", postgresql.UUID(as_uuid=True),
            sa.ForeignKey("school_incidents.id", ondelete="CASCADE"), nullable=False, index=True,
        ),
        sa.Column(
            "resident_id", postgresql.UUID(as_uuid=True),
            sa.ForeignKey("youths.id", ondelete="SET NULL"), index=True,
        ),
        sa.Column("name", sa.String(200)),
        sa.Column("role_in_incident", sa.String(20), nullable=False),
        *_timestamps(),
    )

    # Alerts
    op.create_table(
        "alerts",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("alert_type", sa.String(20), nullable=False),
        sa.Column("priority", sa.String(10), nullable=False),
        sa.Column("category", sa.String(50), nullable=False, index=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        _youth_fk(nullable=True),
        sa.Column("youth_name", sa.String(200)),
        sa.Column("resolved", sa.Boolean, nullable=False, server_default=sa.text("false")),
        sa.Column("resolved_at", sa.DateTime(timezone=True)),
        *_timestamps(),
    )
    op.create_index("idx_alerts_resolved_created", "alerts", ["resolved", "created_at"])

    # Report drafts
    op.create_table(
        "report_drafts",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        _youth_fk(nullable=True),
        sa.Column("draft_type", sa.String(50), nullable=False),
        sa.Column("author_id", sa.String(100)),
        sa.Column("data", postgresql.JSONB, nullable=False, server_default=sa.text("'{}'::jsonb")),
        *_timestamps(),
        sa.UniqueConstraint("youth_id", "draft_type", "author_id", name="uq_report_drafts_owner"),
    )


def downgrade() -> None:
    op.drop_table("report_drafts")
    op.drop_table("alerts")
    op.drop_table("school_incident_involved")
    op.drop_table("school_incidents")
    op.drop_table("school_scores")
    op.drop_table("weekly_evals")
    op.drop_table("daily_shift_scores")
    op.drop_table("academic_steps")
    op.drop_table("academic_grades")
    op.drop_table("academic_credits")
    op.drop_table("case_notes")
    op.drop_table("behavior_points")
    op.drop_table("youths")
