"""initial schema

Reports, extraction jobs, parameters, assessments and everything derived from them,
plus safety, chat, daily tracking and the error log. Every table carries session_id.

"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


revision: str = "0001_initial_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _base_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("session_id", sa.String(), nullable=False, server_default="default"),
    ]


def _session_index(table: str) -> None:
    op.create_index(f"ix_{table}_session_id", table, ["session_id"])


def upgrade() -> None:
    op.create_table(
        "medical_reports",
        *_base_columns(),
        sa.Column("file_name", sa.String(), nullable=False),
        sa.Column("file_url", sa.String(), nullable=False),
        sa.Column("file_type", sa.String(), nullable=False),
        sa.Column("uploaded_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("extracted_data", sa.JSON(), nullable=True),
        sa.Column("analysis_complete", sa.Integer(), nullable=False, server_default="0"),
    )
    _session_index("medical_reports")
    op.create_index("ix_medical_reports_uploaded_at", "medical_reports", ["uploaded_at"])

    op.create_table(
        "extraction_jobs",
        *_base_columns(),
        sa.Column("report_id", sa.Integer(), sa.ForeignKey("medical_reports.id"), nullable=False),
        sa.Column("status", sa.String(), nullable=False, server_default="pending"),
        sa.Column("attempts", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("duration_ms", sa.Integer(), nullable=True),
        sa.Column("error_message", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    _session_index("extraction_jobs")
    op.create_index("ix_extraction_jobs_report_id", "extraction_jobs", ["report_id"])
    op.create_index("ix_extraction_jobs_status", "extraction_jobs", ["status"])

    op.create_table(
        "medical_parameters",
        *_base_columns(),
        sa.Column("report_id", sa.Integer(), sa.ForeignKey("medical_reports.id"), nullable=False),
        sa.Column("parameter_name", sa.String(), nullable=False),
        sa.Column("value", sa.String(), nullable=False),
        sa.Column("unit", sa.String(), nullable=True),
        sa.Column("reference_range", sa.String(), nullable=True),
        sa.Column("status", sa.String(), nullable=True),
        sa.Column("extracted_at", sa.DateTime(timezone=True), nullable=False),
    )
    _session_index("medical_parameters")
    op.create_index("ix_medical_parameters_report_id", "medical_parameters", ["report_id"])

    op.create_table(
        "assessments",
        *_base_columns(),
        sa.Column("report_id", sa.Integer(), sa.ForeignKey("medical_reports.id"), nullable=True),
        sa.Column("answers", sa.JSON(), nullable=False),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=False),
    )
    _session_index("assessments")
    op.create_index("ix_assessments_report_id", "assessments", ["report_id"])

    op.create_table(
        "risk_scores",
        *_base_columns(),
        sa.Column("report_id", sa.Integer(), sa.ForeignKey("medical_reports.id"), nullable=True),
        sa.Column("assessment_id", sa.Integer(), sa.ForeignKey("assessments.id"), nullable=True),
        sa.Column("score", sa.Integer(), nullable=False),
        sa.Column("risk_level", sa.String(), nullable=False),
        sa.Column("interpretation", sa.String(), nullable=False),
        sa.Column("calculated_at", sa.DateTime(timezone=True), nullable=False),
    )
    _session_index("risk_scores")
    op.create_index("ix_risk_scores_report_id", "risk_scores", ["report_id"])
    op.create_index("ix_risk_scores_assessment_id", "risk_scores", ["assessment_id"])
    op.create_index("ix_risk_scores_calculated_at", "risk_scores", ["calculated_at"])

    for table, columns in (
        (
            "daily_tasks",
            [
                sa.Column("task_type", sa.String(), nullable=False),
                sa.Column("description", sa.String(), nullable=False),
                sa.Column("target", sa.String(), nullable=True),
                sa.Column("completed", sa.Integer(), nullable=False, server_default="0"),
            ],
        ),
        (
            "insights",
            [
                sa.Column("category", sa.String(), nullable=False),
                sa.Column("title", sa.String(), nullable=False),
                sa.Column("content", sa.String(), nullable=False),
                sa.Column("severity", sa.String(), nullable=True),
            ],
        ),
    ):
        op.create_table(
            table,
            *_base_columns(),
            sa.Column("report_id", sa.Integer(), sa.ForeignKey("medical_reports.id"), nullable=True),
            *columns,
            sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        )
        _session_index(table)
        op.create_index(f"ix_{table}_report_id", table, ["report_id"])

    op.create_table(
        "emergency_contacts",
        *_base_columns(),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("phone", sa.String(), nullable=False),
        sa.Column("relationship", sa.String(), nullable=True),
        sa.Column("is_primary", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    _session_index("emergency_contacts")

    op.create_table(
        "sos_alerts",
        *_base_columns(),
        sa.Column("location", sa.String(), nullable=True),
        sa.Column("severity", sa.String(), nullable=False, server_default="high"),
        sa.Column("status", sa.String(), nullable=False, server_default="pending"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("resolved_at", sa.DateTime(timezone=True), nullable=True),
    )
    _session_index("sos_alerts")

    op.create_table(
        "chat_messages",
        *_base_columns(),
        sa.Column("role", sa.String(), nullable=False),
        sa.Column("content", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    _session_index("chat_messages")

    op.create_table(
        "period_cycles",
        *_base_columns(),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("flow_intensity", sa.String(), nullable=True),
        sa.Column("symptoms", sa.String(), nullable=True),
        sa.Column("notes", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    _session_index("period_cycles")

    op.create_table(
        "water_intake",
        *_base_columns(),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("amount_ml", sa.Integer(), nullable=False),
        sa.Column("time", sa.String(), nullable=True),
        sa.Column("notes", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    _session_index("water_intake")
    op.create_index("ix_water_intake_date", "water_intake", ["date"])

    op.create_table(
        "steps_tracker",
        *_base_columns(),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("steps", sa.Integer(), nullable=False),
        sa.Column("distance", sa.Float(), nullable=True),
        sa.Column("calories_burned", sa.Float(), nullable=True),
        sa.Column("duration", sa.Integer(), nullable=True),
        sa.Column("notes", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    _session_index("steps_tracker")
    op.create_index("ix_steps_tracker_date", "steps_tracker", ["date"])

    op.create_table(
        "error_logs",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("session_id", sa.String(), nullable=True),
        sa.Column("endpoint", sa.String(), nullable=True),
        sa.Column("method", sa.String(), nullable=True),
        sa.Column("error_message", sa.String(), nullable=True),
        sa.Column("stack_trace", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    _session_index("error_logs")


def downgrade() -> None:
    for table in (
        "error_logs",
        "steps_tracker",
        "water_intake",
        "period_cycles",
        "chat_messages",
        "sos_alerts",
        "emergency_contacts",
        "insights",
        "daily_tasks",
        "risk_scores",
        "assessments",
        "medical_parameters",
        "extraction_jobs",
        "medical_reports",
    ):
        op.drop_table(table)
