"""Initial schema: exercises, templates, plans, sessions, session_exercises, session_sets.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB


revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

json_list = sa.JSON().with_variant(JSONB(), "postgresql")
exercise_type = sa.Enum("COMPOUND", "ISOLATION", "CARDIO", "OTHER", name="exercisetype")
plan_mode = sa.Enum("TEMPLATE", "FOCUS", "SUGGESTED", "QUICKPICK", name="planmode")
body_focus = sa.Enum("UPPER", "LOWER", name="bodyfocus")
row_status = sa.Enum("PENDING", "COMPLETED", "SKIPPED", name="sessionexercisestatus")


def upgrade() -> None:
    op.create_table(
        "exercises",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("aliases", json_list, nullable=False),
        sa.Column("normalized_name", sa.String(length=255), nullable=False),
        sa.Column("normalized_aliases", json_list, nullable=False),
        sa.Column("category", sa.String(length=100), nullable=True),
        sa.Column("type", exercise_type, nullable=False),
        sa.Column("primary_muscles", json_list, nullable=False),
        sa.Column("secondary_muscles", json_list, nullable=False),
        sa.Column("equipment", json_list, nullable=False),
        sa.Column("instructions", sa.Text(), nullable=True),
        sa.Column("image_urls", json_list, nullable=False),
        sa.Column("video_urls", json_list, nullable=False),
        sa.Column("is_custom", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_exercises"),
    )
    op.create_index("ix_exercises_normalized_name", "exercises", ["normalized_name"], unique=False)
    op.create_index("ix_exercises_created_at", "exercises", ["created_at"], unique=False)

    op.create_table(
        "workout_templates",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_workout_templates"),
    )
    op.create_index("ix_workout_templates_name", "workout_templates", ["name"], unique=False)
    op.create_index("ix_workout_templates_updated_at", "workout_templates", ["updated_at"], unique=False)

    op.create_table(
        "template_exercises",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("template_id", sa.Uuid(), nullable=False),
        sa.Column("exercise_id", sa.Uuid(), nullable=False),
        sa.Column("order_in_template", sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(["exercise_id"], ["exercises.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["template_id"], ["workout_templates.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id", name="pk_template_exercises"),
    )
    op.create_index("ix_template_exercises_template_id", "template_exercises", ["template_id"], unique=False)

    op.create_table(
        "plans",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("mode", plan_mode, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("template_id", sa.Uuid(), nullable=True),
        sa.Column("focus", body_focus, nullable=True),
        sa.Column("exercise_ids", json_list, nullable=False),
        sa.ForeignKeyConstraint(["template_id"], ["workout_templates.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id", name="pk_plans"),
    )
    op.create_index("ix_plans_created_at", "plans", ["created_at"], unique=False)
    op.create_index("ix_plans_mode", "plans", ["mode"], unique=False)

    op.create_table(
        "sessions",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("ended_at", sa.DateTime(timezone=True), nullable=True),
        # 1 while active, NULL once ended: at most one active session
        sa.Column("active_slot", sa.Integer(), nullable=True),
        sa.Column("mode", plan_mode, nullable=False),
        sa.Column("template_id", sa.Uuid(), nullable=True),
        sa.Column("focus", body_focus, nullable=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("planned_exercise_ids", json_list, nullable=False),
        sa.ForeignKeyConstraint(["template_id"], ["workout_templates.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id", name="pk_sessions"),
        sa.UniqueConstraint("active_slot", name="uq_sessions_active_slot"),
    )
    op.create_index("ix_sessions_started_at", "sessions", ["started_at"], unique=False)
    op.create_index("ix_sessions_ended_at", "sessions", ["ended_at"], unique=False)
    op.create_index("ix_sessions_template_id", "sessions", ["template_id"], unique=False)

    op.create_table(
        "session_exercises",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("session_id", sa.Uuid(), nullable=False),
        sa.Column("exercise_id", sa.Uuid(), nullable=False),
        sa.Column("order_index", sa.Integer(), nullable=False),
        sa.Column("status", row_status, nullable=False),
        sa.Column("deferred_count", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["exercise_id"], ["exercises.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["session_id"], ["sessions.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id", name="pk_session_exercises"),
    )
    op.create_index("ix_session_exercises_session_order", "session_exercises", ["session_id", "order_index"])
    op.create_index("ix_session_exercises_session_exercise", "session_exercises", ["session_id", "exercise_id"])
    op.create_index("ix_session_exercises_status", "session_exercises", ["status"], unique=False)

    op.create_table(
        "session_sets",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("session_id", sa.Uuid(), nullable=False),
        sa.Column("exercise_id", sa.Uuid(), nullable=False),
        sa.Column("set_index", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("reps_completed", sa.Integer(), nullable=False),
        sa.Column("weight", sa.Float(), nullable=False),
        sa.Column("missed_reps", sa.Integer(), nullable=False),
        sa.Column("intentional_miss", sa.Boolean(), nullable=True),
        sa.Column("rest_seconds_before", sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(["exercise_id"], ["exercises.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["session_id"], ["sessions.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id", name="pk_session_sets"),
    )
    op.create_index("ix_session_sets_session_exercise", "session_sets", ["session_id", "exercise_id"])
    op.create_index("ix_session_sets_exercise_completed", "session_sets", ["exercise_id", "completed_at"])
    op.create_index("ix_session_sets_completed_at", "session_sets", ["completed_at"], unique=False)


def downgrade() -> None:
    op.drop_table("session_sets")
    op.drop_table("session_exercises")
    op.drop_table("sessions")
    op.drop_table("plans")
    op.drop_table("template_exercises")
    op.drop_table("workout_templates")
    op.drop_table("exercises")
    for enum in (row_status, body_focus, plan_mode, exercise_type):
        enum.drop(op.get_bind(), checkfirst=True)
